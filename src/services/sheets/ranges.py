"""Range expressions for reading and writing a worksheet."""

import logging
import gspread

from src.config.config import WRITE_LAST_COLUMN

from .columns import column_to_letter

logger = logging.getLogger(__name__)

HEADER_RANGE = "1:1"

# The write path scans a fixed extent regardless of the sheet's real width.
# Columns past AZ are never seen by field updates.
WRITE_RANGE = f"A:{column_to_letter(WRITE_LAST_COLUMN)}"


def header_width(header_rows: list) -> int:
    """Number of columns in the header row, never less than 1."""
    if not header_rows or not header_rows[0]:
        return 1
    return max(len(header_rows[0]), 1)


def resolve_read_range(worksheet: gspread.Worksheet) -> str:
    """Builds an "A:<last header column>" range covering every data column.

    Only the header row is fetched to size the range.
    """
    header_rows = worksheet.get(HEADER_RANGE)
    last_column = column_to_letter(header_width(header_rows))
    read_range = f"A:{last_column}"
    logger.debug(f"Resolved read range for '{worksheet.title}': {read_range}")
    return read_range
