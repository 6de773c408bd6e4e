"""Sheet-backed record store: the only entry point the API layer uses for sheet data."""

import logging
from contextlib import contextmanager
from typing import Callable, List, Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException, WorksheetNotFound

from src.config.config import KEY_COL_IDX
from src.exceptions import RemoteServiceError

# Local imports
from .client import get_spreadsheet
from .reader import read_all_rows
from .rows import find_row_index
from .updater import update_history_cell, append_row_values, replace_row_values

logger = logging.getLogger(__name__)

# Failures of the remote service, as raised by gspread and the libraries under it
REMOTE_ERRORS = (GSpreadException, requests.exceptions.RequestException, GoogleAuthError)


@contextmanager
def _remote_call(action: str):
    try:
        yield
    except REMOTE_ERRORS as e:
        logger.error(f"Error {action}: {e}", exc_info=True)
        raise RemoteServiceError(f"Error {action}: {e}") from e


class SheetRecordStore:
    """Reads and mutates rows of the worksheets of one spreadsheet.

    The spreadsheet is opened on first use, so building a store makes no
    remote call. Every operation fetches fresh data; row positions found by
    one call are never reused by another.
    """

    def __init__(self, open_spreadsheet: Callable[[], gspread.Spreadsheet], key_col_idx: int = KEY_COL_IDX):
        self._open_spreadsheet = open_spreadsheet
        self.key_col_idx = key_col_idx

    def _worksheet(self, sheet_name: str) -> gspread.Worksheet:
        return self._open_spreadsheet().worksheet(sheet_name)

    def list_all(self, sheet_name: str) -> List[List[str]]:
        """All rows of the sheet (header first). A missing sheet yields an empty list."""
        with _remote_call(f"reading sheet '{sheet_name}'"):
            try:
                worksheet = self._worksheet(sheet_name)
            except WorksheetNotFound:
                logger.warning(f"Worksheet '{sheet_name}' not found, returning no rows.")
                return []
            return read_all_rows(worksheet)

    def find(self, sheet_name: str, key: str) -> Optional[List[str]]:
        """The first row whose key column equals key exactly, or None."""
        rows = self.list_all(sheet_name)
        row_index = find_row_index(rows, self.key_col_idx, key)
        if row_index is None:
            return None
        return rows[row_index]

    def update_field(self, sheet_name: str, key: str, col_idx: int, value: str) -> dict:
        """Appends value to the history cell at col_idx of the record identified by key.

        Raises:
            RecordNotFoundError: If no row holds key.
            RemoteServiceError: If reading or writing the sheet fails.
        """
        with _remote_call(f"updating sheet '{sheet_name}'"):
            worksheet = self._worksheet(sheet_name)
            return update_history_cell(worksheet, key, col_idx, value, self.key_col_idx)

    def append_record(self, sheet_name: str, values: List[str]) -> dict:
        """Appends a new row at the end of the sheet.

        Raises:
            RemoteServiceError: If the append fails.
        """
        with _remote_call(f"appending to sheet '{sheet_name}'"):
            worksheet = self._worksheet(sheet_name)
            return append_row_values(worksheet, values)

    def replace_record(self, sheet_name: str, key: str, values: List[str]) -> dict:
        """Overwrites the leading len(values) columns of the record identified by key.

        Raises:
            RecordNotFoundError: If no row holds key.
            RemoteServiceError: If reading or writing the sheet fails.
        """
        with _remote_call(f"replacing record in sheet '{sheet_name}'"):
            worksheet = self._worksheet(sheet_name)
            return replace_row_values(worksheet, key, values, self.key_col_idx)


def get_record_store() -> SheetRecordStore:
    """Dependency provider: a store bound to the configured spreadsheet."""
    return SheetRecordStore(get_spreadsheet)
