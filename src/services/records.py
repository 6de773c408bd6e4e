"""Patient record operations on the Medical sheet, built on SheetRecordStore."""

import logging
from typing import Any, Dict, List, Optional

from src.config.config import (
    MEDICAL_SHEET_NAME, FIELD_COLUMN_MAP, DEMOGRAPHIC_LAYOUT, HISTORY_DELIMITER,
    KEY_COL_IDX, SEARCH_COLUMN_COUNT, SURNAME_COL_IDX, FIRSTNAME_COL_IDX,
    MIDDLE_COL_IDX, BIRTHDAY_COL_IDX,
)
from src.services.sheets import SheetRecordStore, cell_value

logger = logging.getLogger(__name__)


def _data_rows(rows: List[List[str]]) -> List[List[str]]:
    # First row is the header
    return rows[1:]


def build_demographic_row(fields: Dict[str, Any]) -> List[str]:
    """Orders demographic fields into the A-L layout; blank positions stay empty."""
    row = []
    for field_name in DEMOGRAPHIC_LAYOUT:
        if field_name is None:
            row.append("")
            continue
        value = fields.get(field_name)
        row.append("" if value is None else str(value))
    return row


def update_patient_field(store: SheetRecordStore, name: str, field_key: str, value: str) -> dict:
    """Appends value to the history of one tracked field of the named patient."""
    col_idx = FIELD_COLUMN_MAP[field_key]
    logger.info(f"Updating field '{field_key}' (column index {col_idx}) for '{name}'")
    return store.update_field(MEDICAL_SHEET_NAME, name, col_idx, value)


def update_reminder_datetime(store: SheetRecordStore, name: str,
                             local_datetime: Optional[str], utc_datetime: Optional[str]) -> int:
    """Records a reminder time in both the local (AA) and UTC (AB) columns.

    Each value is written as a fragment that already carries the delimiter.
    A missing value leaves its column untouched.

    Returns:
        The number of columns written.
    """
    written = 0
    for field_key, value in (('reminderDateLocal', local_datetime), ('reminderDateUtc', utc_datetime)):
        if not value:
            logger.debug(f"No value for '{field_key}', skipping.")
            continue
        update_patient_field(store, name, field_key, f"{value}{HISTORY_DELIMITER}")
        written += 1
    return written


def add_patient(store: SheetRecordStore, fields: Dict[str, Any]) -> dict:
    return store.append_record(MEDICAL_SHEET_NAME, build_demographic_row(fields))


def replace_patient(store: SheetRecordStore, search: str, fields: Dict[str, Any]) -> dict:
    """Overwrites columns A-L of the patient whose full name equals search."""
    return store.replace_record(MEDICAL_SHEET_NAME, search, build_demographic_row(fields))


def patient_exists(store: SheetRecordStore, surname: str, firstname: str, middle: str, birthday: str) -> bool:
    """True if a patient matches all names (case-insensitive) and the birthday (exact)."""
    wanted = (surname.lower(), firstname.lower(), middle.lower())
    for row in _data_rows(store.list_all(MEDICAL_SHEET_NAME)):
        names = (
            cell_value(row, SURNAME_COL_IDX).lower(),
            cell_value(row, FIRSTNAME_COL_IDX).lower(),
            cell_value(row, MIDDLE_COL_IDX).lower(),
        )
        if names == wanted and cell_value(row, BIRTHDAY_COL_IDX) == birthday:
            return True
    return False


def search_patients(store: SheetRecordStore, term: str) -> List[List[str]]:
    """Rows whose surname, first name, middle name or full name contains term."""
    needle = term.lower()
    return [
        row for row in _data_rows(store.list_all(MEDICAL_SHEET_NAME))
        if any(cell and needle in cell.lower() for cell in row[:SEARCH_COLUMN_COUNT])
    ]


def health_summary(store: SheetRecordStore, search: Optional[str] = None) -> List[List[str]]:
    """All Medical rows, or only those whose surname contains search."""
    rows = store.list_all(MEDICAL_SHEET_NAME)
    if not search:
        return rows
    needle = search.lower()
    return [row for row in _data_rows(rows) if needle in cell_value(row, SURNAME_COL_IDX).lower()]


def patient_names(store: SheetRecordStore) -> List[str]:
    """Non-empty full names (column D) of all patients."""
    names = [cell_value(row, KEY_COL_IDX) for row in _data_rows(store.list_all(MEDICAL_SHEET_NAME))]
    return [name for name in names if name]
