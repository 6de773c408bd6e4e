"""Functions for writing data to Google Sheets (history cells, new rows, row replacement)."""

import logging
from typing import List
import gspread

from src.config.config import VALUE_INPUT_OPTION
from src.exceptions import RecordNotFoundError

# Local imports
from .columns import cell_a1, column_to_letter
from .history import append_history
from .reader import read_write_extent, read_range_rows
from .rows import find_row_index, cell_value

logger = logging.getLogger(__name__)


def update_history_cell(worksheet: gspread.Worksheet, key: str, col_idx: int, value: str, key_col_idx: int) -> dict:
    """Appends value to the history cell of the row whose key column equals key.

    The row is read and the single cell written back in two separate calls;
    nothing guards against another writer updating the same cell in between.

    Args:
        worksheet: The worksheet holding the record.
        key: Exact value of the record's key column.
        col_idx: 0-based column of the field to update.
        value: The value (or pre-delimited fragment) to append.
        key_col_idx: 0-based key column.

    Returns:
        The update response from the Sheets API.

    Raises:
        RecordNotFoundError: If no row holds key.
    """
    rows = read_write_extent(worksheet)
    row_index_0based = find_row_index(rows, key_col_idx, key)
    if row_index_0based is None:
        raise RecordNotFoundError(key, worksheet.title, column_to_letter(key_col_idx + 1))

    existing_value = cell_value(rows[row_index_0based], col_idx)
    new_value = append_history(existing_value, value)

    target_cell = cell_a1(row_index_0based, col_idx)
    logger.debug(f"Preparing update for cell {target_cell} in {worksheet.title} with value: {new_value}")
    response = worksheet.update(
        values=[[new_value]],
        range_name=target_cell,
        value_input_option=VALUE_INPUT_OPTION,
    )
    logger.info(f"Updated cell {target_cell} in {worksheet.title}.")
    return response


def append_row_values(worksheet: gspread.Worksheet, values: List[str]) -> dict:
    """Appends a new row after the last row of the worksheet's table."""
    logger.debug(f"Appending row with {len(values)} value(s) to {worksheet.title}")
    response = worksheet.append_row(
        values,
        value_input_option=VALUE_INPUT_OPTION,
        insert_data_option='INSERT_ROWS',
        table_range='A1',
    )
    logger.info(f"Appended new row to {worksheet.title}.")
    return response


def replace_row_values(worksheet: gspread.Worksheet, key: str, values: List[str], key_col_idx: int) -> dict:
    """Overwrites the leading columns of the row whose key column equals key.

    Only as many columns as len(values) are read and written.

    Raises:
        RecordNotFoundError: If no row holds key.
    """
    last_column = column_to_letter(len(values))
    rows = read_range_rows(worksheet, f"A:{last_column}")
    row_index_0based = find_row_index(rows, key_col_idx, key)
    if row_index_0based is None:
        raise RecordNotFoundError(key, worksheet.title, column_to_letter(key_col_idx + 1))

    row_num_1based = row_index_0based + 1
    target_range = f"A{row_num_1based}:{last_column}{row_num_1based}"
    response = worksheet.update(
        values=[values],
        range_name=target_range,
        value_input_option=VALUE_INPUT_OPTION,
    )
    logger.info(f"Replaced range {target_range} in {worksheet.title}.")
    return response
