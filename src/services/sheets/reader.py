"""Functions for reading data from Google Sheets."""

import logging
from typing import List
import gspread

# Local imports
from .ranges import resolve_read_range, WRITE_RANGE

logger = logging.getLogger(__name__)


def _as_rows(values) -> List[List[str]]:
    # gspread returns a ValueRange (list subclass) or an empty result
    if not values:
        return []
    return [list(row) for row in values]


def read_all_rows(worksheet: gspread.Worksheet) -> List[List[str]]:
    """Reads every row of the worksheet, header included, over its header width."""
    read_range = resolve_read_range(worksheet)
    logger.debug(f"Reading all rows from range: {read_range} in {worksheet.title}")
    rows = _as_rows(worksheet.get(read_range))
    logger.info(f"Read {len(rows)} row(s) from '{worksheet.title}'.")
    return rows


def read_range_rows(worksheet: gspread.Worksheet, range_a1: str) -> List[List[str]]:
    """Reads the rows of an explicit column range such as 'A:L'."""
    logger.debug(f"Reading rows from range: {range_a1} in {worksheet.title}")
    return _as_rows(worksheet.get(range_a1))


def read_write_extent(worksheet: gspread.Worksheet) -> List[List[str]]:
    """Reads the fixed extent scanned by field updates (columns A through AZ)."""
    return read_range_rows(worksheet, WRITE_RANGE)
