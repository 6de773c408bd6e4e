"""
Tests for SheetRecordStore against the in-memory worksheet.
"""
import threading
from unittest.mock import MagicMock

import gspread
import pytest
import requests

from src.exceptions import RecordNotFoundError, RemoteServiceError
from src.services.sheets import SheetRecordStore


def test_list_all_returns_header_and_rows(store, medical_sheet):
    rows = store.list_all("Medical")

    assert rows[0][0] == "Surname"
    assert [r[3] for r in rows[1:]] == ["John Smith", "Jane Doe", "Ann Brown"]
    assert medical_sheet.get_calls == ["1:1", "A:AC"]


def test_list_all_missing_sheet_is_empty(store):
    assert store.list_all("No Such Sheet") == []


def test_find_returns_row(store):
    row = store.find("Medical", "Jane Doe")
    assert row[:4] == ["Doe", "Jane", "M", "Jane Doe"]


def test_find_not_found(store):
    assert store.find("Medical", "Nobody") is None


def test_update_field_appends_to_history(store, medical_sheet):
    store.update_field("Medical", "John Smith", 12, "72kg")
    store.update_field("Medical", "John Smith", 12, "71kg")

    assert medical_sheet.cell(2, 13) == "70kg | 72kg | 71kg"
    assert medical_sheet.update_calls[-1]["value_input_option"] == "USER_ENTERED"


def test_update_field_first_write(store, medical_sheet):
    store.update_field("Medical", "Ann Brown", 15, "120/80")

    assert medical_sheet.cell(4, 16) == "120/80"
    assert medical_sheet.update_calls[0]["range_name"] == "P4"


def test_update_field_scans_fixed_extent(store, medical_sheet):
    store.update_field("Medical", "Jane Doe", 13, "165cm")

    assert medical_sheet.get_calls == ["A:AZ"]


def test_update_field_not_found(store, medical_sheet):
    with pytest.raises(RecordNotFoundError):
        store.update_field("Medical", "Nobody", 12, "70kg")

    assert medical_sheet.update_calls == []


def test_update_field_does_not_cache_row_positions(store, medical_sheet):
    """A row moved between calls is found at its new position."""
    store.update_field("Medical", "Ann Brown", 12, "60kg")
    ann = medical_sheet.rows.pop(3)
    medical_sheet.rows.insert(1, ann)

    store.update_field("Medical", "Ann Brown", 12, "61kg")

    assert medical_sheet.update_calls[-1]["range_name"] == "M2"
    assert medical_sheet.cell(2, 13) == "60kg | 61kg"


def test_columns_past_az_are_invisible_to_updates(make_store, worksheet_factory):
    """A 60-column sheet is only scanned through column 52."""
    header = [f"h{i}" for i in range(60)]
    row = ["Smith", "John", "A", "John Smith"] + [""] * 50 + ["old-value"] + [""] * 4
    worksheet = worksheet_factory("Wide", [header, row])
    store = make_store(worksheet)

    store.update_field("Wide", "John Smith", 54, "new-value")

    assert worksheet.get_calls == ["A:AZ"]
    # The existing value in column 55 was never read, so it is overwritten rather than appended to
    assert worksheet.cell(2, 55) == "new-value"
    assert worksheet.update_calls[0]["range_name"] == "BC2"


def test_read_path_covers_full_header_width(make_store, worksheet_factory):
    header = [f"h{i}" for i in range(60)]
    row = ["Smith", "John", "A", "John Smith"] + [""] * 55 + ["last"]
    worksheet = worksheet_factory("Wide", [header, row])
    store = make_store(worksheet)

    rows = store.list_all("Wide")

    assert worksheet.get_calls == ["1:1", "A:BH"]
    assert rows[1][59] == "last"


def test_concurrent_updates_lose_one_value(store, medical_sheet):
    """Two updates that both read before either writes keep only one value."""
    medical_sheet.update_barrier = threading.Barrier(2)
    errors = []

    def update(value):
        try:
            store.update_field("Medical", "Jane Doe", 16, value)
        except Exception as e:  # surfaced through the errors list
            errors.append(e)

    threads = [threading.Thread(target=update, args=(v,)) for v in ("A", "B")]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert errors == []
    assert medical_sheet.cell(3, 17) in ("A", "B")
    assert medical_sheet.cell(3, 17) != "A | B"
    assert len(medical_sheet.update_calls) == 2


def test_append_record(store, medical_sheet):
    store.append_record("Medical", ["Lee", "Sam", "", "", "Grp2"])

    assert medical_sheet.rows[-1] == ["Lee", "Sam", "", "", "Grp2"]
    assert medical_sheet.append_calls[0]["insert_data_option"] == "INSERT_ROWS"


def test_replace_record(store, medical_sheet):
    values = ["Doe", "Janet", "M", "", "Grp1", "2000-01-01", "", "F", "Active", "Resident", "1 Rd", "555"]

    store.replace_record("Medical", "Jane Doe", values)

    assert medical_sheet.update_calls[0]["range_name"] == "A3:L3"
    assert medical_sheet.rows[2][:12] == values


def test_api_error_becomes_remote_error():
    mock_response = MagicMock(spec=requests.Response)
    mock_response.json.return_value = {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
    worksheet = MagicMock()
    worksheet.title = "Medical"
    worksheet.get.side_effect = gspread.exceptions.APIError(mock_response)
    spreadsheet = MagicMock()
    spreadsheet.worksheet.return_value = worksheet
    store = SheetRecordStore(lambda: spreadsheet)

    with pytest.raises(RemoteServiceError) as excinfo:
        store.update_field("Medical", "John Smith", 12, "70kg")

    assert "Quota exceeded" in excinfo.value.detail
    worksheet.update.assert_not_called()


def test_transport_error_on_read_becomes_remote_error():
    spreadsheet = MagicMock()
    spreadsheet.worksheet.side_effect = requests.exceptions.ConnectionError("connection reset")
    store = SheetRecordStore(lambda: spreadsheet)

    with pytest.raises(RemoteServiceError):
        store.list_all("Medical")


def test_missing_sheet_on_write_is_remote_error(store):
    with pytest.raises(RemoteServiceError):
        store.update_field("No Such Sheet", "John Smith", 12, "70kg")
