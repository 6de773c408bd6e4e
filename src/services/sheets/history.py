"""History cells: a field's content is the ' | '-joined log of every value written to it."""

from src.config.config import HISTORY_DELIMITER


def append_history(existing_value: str, new_value: str) -> str:
    """Appends new_value to a history cell.

    Reminder timestamps arrive as fragments already ending with the
    delimiter and go through this same rule.
    """
    if not existing_value:
        return new_value
    return f"{existing_value}{HISTORY_DELIMITER}{new_value}"
