"""Functions for locating records in fetched sheet rows."""

import logging
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


def cell_value(row: Sequence, col_idx: int) -> str:
    """Returns the cell at col_idx, or an empty string past the end of a short row."""
    if col_idx < len(row) and row[col_idx] is not None:
        return row[col_idx]
    return ""


def find_row_index(rows: Sequence[Sequence], key_col_idx: int, key: str) -> Optional[int]:
    """Finds the 0-based index of the first row whose key column equals key.

    The comparison is exact: no trimming and no case folding.
    Returns None when no row matches.
    """
    for i, row in enumerate(rows):
        if key_col_idx < len(row) and row[key_col_idx] == key:
            logger.debug(f"Key '{key}' found at 0-based row index {i}")
            return i

    logger.debug(f"Key '{key}' not found in column index {key_col_idx}")
    return None
