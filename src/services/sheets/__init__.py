"""Module for interacting with Google Sheets.

Provides:
- Column addressing between indices and letter labels.
- Read/write range resolution.
- Record lookup by key column.
- History-cell updates and row appends through SheetRecordStore.
"""

# Public API for the sheets service

from .columns import column_to_letter, letter_to_column
from .history import append_history
from .ranges import resolve_read_range, WRITE_RANGE
from .rows import find_row_index, cell_value
from .store import SheetRecordStore, get_record_store

__all__ = [
    'column_to_letter',
    'letter_to_column',
    'append_history',
    'resolve_read_range',
    'WRITE_RANGE',
    'find_row_index',
    'cell_value',
    'SheetRecordStore',
    'get_record_store',
]
