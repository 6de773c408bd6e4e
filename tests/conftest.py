"""
Shared fixtures: an in-memory stand-in for gspread worksheets and a
TestClient wired to a store built on it.
"""
import re
import threading

import pytest
from fastapi.testclient import TestClient
from gspread.exceptions import WorksheetNotFound

from src.app import app
from src.services.sheets import SheetRecordStore, get_record_store
from src.services.sms import get_sms_sender

MEDICAL_HEADER = [
    "Surname", "Firstname", "Middle", "Full Name", "Locale Group", "Birthday", "Age",
    "Gender", "Status", "Visa Status", "Address", "Contact No", "Weight", "Height", "BMI",
    "Blood Pressure", "Pulse Rate", "Oxygen", "Temperature", "Blood Sugar", "GP", "Allergy",
    "Alert", "Condition", "Remarks", "Medication", "Date To Remind", "Time To Remind", "Message Text",
]

_CELL_RE = re.compile(r"^([A-Z]+)(\d+)$")
_COLUMNS_RE = re.compile(r"^([A-Z]+):([A-Z]+)$")
_ROWS_RE = re.compile(r"^(\d+):(\d+)$")


def _col(label):
    n = 0
    for char in label:
        n = n * 26 + ord(char) - 64
    return n


class FakeWorksheet:
    """Keeps rows in memory and answers the gspread calls the store makes.

    Reads drop trailing empty cells and rows, like the Sheets API does.
    If update_barrier is set, every update waits on it before writing.
    """

    def __init__(self, title, rows=None):
        self.title = title
        self.rows = [list(r) for r in (rows or [])]
        self.get_calls = []
        self.update_calls = []
        self.append_calls = []
        self.update_barrier = None
        self._lock = threading.Lock()

    def _window(self, first_row, last_row, first_col, last_col):
        out = []
        for row in self.rows[first_row - 1:last_row]:
            cells = [str(c) for c in row[first_col - 1:last_col]]
            while cells and cells[-1] == "":
                cells.pop()
            out.append(cells)
        while out and not out[-1]:
            out.pop()
        return out

    def get(self, range_name, **kwargs):
        self.get_calls.append(range_name)
        with self._lock:
            match = _COLUMNS_RE.match(range_name)
            if match:
                return self._window(1, len(self.rows), _col(match.group(1)), _col(match.group(2)))
            match = _ROWS_RE.match(range_name)
            if match:
                return self._window(int(match.group(1)), int(match.group(2)), 1, 10_000)
        raise ValueError(f"Unsupported range in fake: {range_name}")

    def _set(self, row_num, col_num, value):
        while len(self.rows) < row_num:
            self.rows.append([])
        row = self.rows[row_num - 1]
        if len(row) < col_num:
            row.extend([""] * (col_num - len(row)))
        row[col_num - 1] = value

    def update(self, values=None, range_name=None, **kwargs):
        if self.update_barrier is not None:
            self.update_barrier.wait(timeout=5)
        self.update_calls.append({"range_name": range_name, "values": values, **kwargs})
        start = range_name.split(":")[0]
        match = _CELL_RE.match(start)
        row_num, col_num = int(match.group(2)), _col(match.group(1))
        with self._lock:
            for r, row_values in enumerate(values):
                for c, value in enumerate(row_values):
                    self._set(row_num + r, col_num + c, value)
        return {"updatedRange": f"{self.title}!{range_name}", "updatedCells": sum(len(v) for v in values)}

    def append_row(self, values, **kwargs):
        self.append_calls.append({"values": list(values), **kwargs})
        with self._lock:
            self.rows.append(list(values))
        return {"updates": {"updatedRows": 1}}

    def cell(self, row_num, col_num):
        row = self.rows[row_num - 1] if row_num <= len(self.rows) else []
        return row[col_num - 1] if col_num <= len(row) else ""


class FakeSpreadsheet:
    def __init__(self, worksheets):
        self._worksheets = {ws.title: ws for ws in worksheets}

    def worksheet(self, title):
        if title not in self._worksheets:
            raise WorksheetNotFound(title)
        return self._worksheets[title]


def patient_row(surname, firstname, middle, full_name, **columns):
    """A Medical row with names in A-D and any other cells given by 0-based index."""
    row = [surname, firstname, middle, full_name]
    for key, value in columns.items():
        idx = int(key.lstrip("c"))
        if len(row) <= idx:
            row.extend([""] * (idx + 1 - len(row)))
        row[idx] = value
    return row


@pytest.fixture
def medical_sheet():
    return FakeWorksheet("Medical", [
        MEDICAL_HEADER,
        patient_row("Smith", "John", "A", "John Smith", c5="1980-02-03", c12="70kg"),
        patient_row("Doe", "Jane", "M", "Jane Doe", c5="2000-01-01"),
        patient_row("Brown", "Ann", "K", "Ann Brown"),
    ])


@pytest.fixture
def users_sheet():
    return FakeWorksheet("Users", [["Username", "Password", "Church ID"]])


@pytest.fixture
def blood_pressure_sheet():
    return FakeWorksheet("Blood Pressure", [
        ["Name", "Date", "Systolic", "Diastolic"],
        ["John Smith", "2024-05-01", "120", "80"],
    ])


@pytest.fixture
def spreadsheet(medical_sheet, users_sheet, blood_pressure_sheet):
    return FakeSpreadsheet([medical_sheet, users_sheet, blood_pressure_sheet])


@pytest.fixture
def store(spreadsheet):
    return SheetRecordStore(lambda: spreadsheet)


@pytest.fixture
def sms_sender():
    class RecordingSender:
        def __init__(self):
            self.sent = []

        def send(self, to, body):
            self.sent.append((to, body))
            return "SM123"

    return RecordingSender()


@pytest.fixture
def client(store, sms_sender):
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_sms_sender] = lambda: sms_sender
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_store():
    """Builds a store over fresh worksheets: make_store(FakeWorksheet(...), ...)."""
    def _make(*worksheets):
        spreadsheet = FakeSpreadsheet(list(worksheets))
        return SheetRecordStore(lambda: spreadsheet)
    return _make


@pytest.fixture
def worksheet_factory():
    return FakeWorksheet
