"""Column addressing helpers (1-based index <-> letter label)."""

import logging

logger = logging.getLogger(__name__)

_ALPHABET_SIZE = 26


def column_to_letter(column: int) -> str:
    """Converts a 1-based column index to its letter label (1 -> 'A', 27 -> 'AA').

    Raises:
        ValueError: If column is not an integer >= 1.
    """
    if isinstance(column, bool) or not isinstance(column, int) or column < 1:
        raise ValueError(f"Column index must be an integer >= 1, got {column!r}")

    letters = []
    while column > 0:
        column, remainder = divmod(column - 1, _ALPHABET_SIZE)
        letters.append(chr(ord('A') + remainder))
    return ''.join(reversed(letters))


def letter_to_column(label: str) -> int:
    """Converts a column letter label to its 1-based index ('A' -> 1, 'AZ' -> 52).

    Raises:
        ValueError: If label is empty or contains anything but letters A-Z.
    """
    if not isinstance(label, str) or not label or not label.isascii():
        raise ValueError(f"Column label must be a non-empty ASCII string, got {label!r}")

    column = 0
    for char in label.upper():
        if not 'A' <= char <= 'Z':
            raise ValueError(f"Invalid column label: {label!r}")
        column = column * _ALPHABET_SIZE + (ord(char) - ord('A') + 1)
    return column


def cell_a1(row_index_0based: int, col_index_0based: int) -> str:
    """A1 notation for a single cell given 0-based row and column indices."""
    return f"{column_to_letter(col_index_0based + 1)}{row_index_0based + 1}"
