"""
In-memory tabular backend.

Keeps workbooks as plain Python lists so the service and router can be
exercised without a spreadsheet engine. Used by the test suite and by
``SHEETS_API_BACKEND=memory`` for local experiments; nothing survives a
process restart.

Example:
    backend = InMemoryBackend()
    workbook = backend.add_workbook("demo")
    workbook.insert_sheet("Users", rows=[["name", "email"], ["Ann", "a@x.com"]])
"""

from typing import Any

from sheets_api.adapters.base import (
    TabularBackend,
    WorkbookHandle,
    WorksheetHandle,
    is_blank,
    pad_row,
)
from sheets_api.exceptions.sheets_exceptions import BackendError


class InMemoryWorksheet(WorksheetHandle):
    """
    A sheet stored as a list of ragged rows.

    Attributes:
        styled_cells: (row, column) pairs that received the header style.
    """

    def __init__(self, workbook: "InMemoryWorkbook", name: str) -> None:
        self._workbook = workbook
        self._name = name
        self._rows: list[list[Any]] = []
        self.styled_cells: set[tuple[int, int]] = set()

    @property
    def name(self) -> str:
        return self._name

    @property
    def index(self) -> int:
        return self._workbook._sheets.index(self) + 1

    def last_row(self) -> int:
        for position in range(len(self._rows), 0, -1):
            if any(not is_blank(cell) for cell in self._rows[position - 1]):
                return position
        return 0

    def last_column(self) -> int:
        width = 0
        for row in self._rows:
            for position in range(len(row), width, -1):
                if not is_blank(row[position - 1]):
                    width = position
                    break
        return width

    def get_values(self) -> list[list[Any]]:
        width = self.last_column()
        return [pad_row(row, width) for row in self._rows[: self.last_row()]]

    def _ensure_cell(self, row: int, column: int) -> None:
        while len(self._rows) < row:
            self._rows.append([])
        cells = self._rows[row - 1]
        if len(cells) < column:
            cells.extend([""] * (column - len(cells)))

    def write_row(self, row: int, values: list[Any]) -> None:
        for column, value in enumerate(values, start=1):
            self.set_value(row, column, value)

    def append_row(self, values: list[Any]) -> int:
        row = self.last_row() + 1
        del self._rows[row - 1 :]
        self._rows.append([])
        self.write_row(row, values)
        return row

    def delete_row(self, row: int) -> None:
        if 0 < row <= len(self._rows):
            del self._rows[row - 1]
        self.styled_cells = {
            (r - 1 if r > row else r, c) for r, c in self.styled_cells if r != row
        }

    def insert_column(self, column: int) -> None:
        for cells in self._rows:
            if len(cells) >= column:
                cells.insert(column - 1, "")
        self.styled_cells = {
            (r, c + 1 if c >= column else c) for r, c in self.styled_cells
        }

    def set_value(self, row: int, column: int, value: Any) -> None:
        self._ensure_cell(row, column)
        self._rows[row - 1][column - 1] = "" if value is None else value

    def style_header(self, row: int, first_column: int, count: int) -> None:
        for column in range(first_column, first_column + count):
            self.styled_cells.add((row, column))


class InMemoryWorkbook(WorkbookHandle):
    """A workbook whose sheets live in memory; save() is a no-op."""

    def __init__(self, workbook_id: str) -> None:
        self.workbook_id = workbook_id
        self._sheets: list[InMemoryWorksheet] = []

    def sheets(self) -> list[WorksheetHandle]:
        return list(self._sheets)

    def get_sheet(self, name: str) -> InMemoryWorksheet | None:
        for sheet in self._sheets:
            if sheet.name == name:
                return sheet
        return None

    def insert_sheet(
        self,
        name: str,
        rows: list[list[Any]] | None = None,
    ) -> InMemoryWorksheet:
        """
        Create a sheet, optionally pre-filled with ``rows``.

        Args:
            name: Sheet name.
            rows: Initial rows, row 1 first.
        """
        sheet = InMemoryWorksheet(self, name)
        self._sheets.append(sheet)
        for row_number, values in enumerate(rows or [], start=1):
            sheet.write_row(row_number, values)
        return sheet


class InMemoryBackend(TabularBackend):
    """
    Registry of in-memory workbooks keyed by identifier.

    Opening an identifier that was never registered fails the same way an
    unreachable remote workbook does.
    """

    def __init__(self) -> None:
        self.workbooks: dict[str, InMemoryWorkbook] = {}

    def add_workbook(self, workbook_id: str) -> InMemoryWorkbook:
        workbook = InMemoryWorkbook(workbook_id)
        self.workbooks[workbook_id] = workbook
        return workbook

    def open(self, workbook_id: str) -> InMemoryWorkbook:
        try:
            return self.workbooks[workbook_id]
        except KeyError:
            raise BackendError(
                workbook_id=workbook_id,
                operation="open",
                reason="Workbook does not exist",
            ) from None
