"""
Tabular backend contract for the Sheets gateway.

The service layer never talks to a spreadsheet engine directly. It opens
a workbook through a TabularBackend and works on WorksheetHandle objects
that expose the handful of grid operations the gateway needs: read the
used range, read/write a row, append a row, delete a row, insert a
column and style header cells.

All row and column numbers are 1-based, matching spreadsheet addressing.
Empty cells are reported as "" rather than None.

Example:
    with backend.open("/data/crm.xlsx") as workbook:
        sheet = workbook.get_sheet("Users")
        headers = sheet.read_row(1, sheet.last_column())
        sheet.append_row(["Ann", "a@x.com"])
        workbook.save()
"""

from abc import ABC, abstractmethod
from typing import Any

HEADER_BACKGROUND = "4CAF50"
HEADER_FONT_COLOR = "FFFFFF"


def is_blank(value: Any) -> bool:
    """Return True for cells that hold nothing (None or empty text)."""
    return value is None or (isinstance(value, str) and value == "")


def pad_row(values: list[Any], width: int) -> list[Any]:
    """
    Pad or truncate a row to exactly ``width`` cells.

    Args:
        values: Positional cell values.
        width: Target number of cells.

    Returns:
        A new list of length ``width``; missing cells become "".
    """
    row = ["" if value is None else value for value in values[:width]]
    row.extend([""] * (width - len(row)))
    return row


class WorksheetHandle(ABC):
    """A single named grid inside an open workbook."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The sheet name."""

    @property
    @abstractmethod
    def index(self) -> int:
        """1-based position of the sheet in the workbook."""

    @abstractmethod
    def get_values(self) -> list[list[Any]]:
        """
        Read the used range.

        Returns:
            Rows 1..last_row, each padded to last_column with "".
            An empty sheet yields an empty list.
        """

    def last_row(self) -> int:
        """Return the last row that holds content (0 for an empty sheet)."""
        return len(self.get_values())

    def last_column(self) -> int:
        """Return the last column that holds content (0 for an empty sheet)."""
        values = self.get_values()
        return len(values[0]) if values else 0

    def read_row(self, row: int, width: int) -> list[Any]:
        """
        Read one row padded or truncated to ``width`` cells.

        Args:
            row: 1-based row number.
            width: Number of cells to return.
        """
        values = self.get_values()
        cells = values[row - 1] if 0 < row <= len(values) else []
        return pad_row(cells, width)

    @abstractmethod
    def write_row(self, row: int, values: list[Any]) -> None:
        """Overwrite cells of ``row`` starting at column 1."""

    @abstractmethod
    def append_row(self, values: list[Any]) -> int:
        """
        Write ``values`` into the row after the last populated row.

        Returns:
            The 1-based index of the appended row.
        """

    @abstractmethod
    def delete_row(self, row: int) -> None:
        """Remove ``row`` and shift the rows below it up by one."""

    @abstractmethod
    def insert_column(self, column: int) -> None:
        """Insert an empty column at ``column``, shifting later columns right."""

    @abstractmethod
    def set_value(self, row: int, column: int, value: Any) -> None:
        """Write a single cell."""

    @abstractmethod
    def style_header(self, row: int, first_column: int, count: int) -> None:
        """Apply the header style (green fill, bold white text) to a run of cells."""


class WorkbookHandle(ABC):
    """
    An open workbook.

    Handles are context managers; leaving the ``with`` block releases the
    workbook. Mutations are only persisted by an explicit ``save()``.
    """

    @abstractmethod
    def sheets(self) -> list[WorksheetHandle]:
        """Return all sheets in backend-native order."""

    @abstractmethod
    def get_sheet(self, name: str) -> WorksheetHandle | None:
        """Return the sheet called ``name`` (case-sensitive) or None."""

    @abstractmethod
    def insert_sheet(self, name: str) -> WorksheetHandle:
        """Create an empty sheet called ``name``."""

    def save(self) -> None:
        """Persist pending mutations."""

    def close(self) -> None:
        """Release the workbook."""

    def __enter__(self) -> "WorkbookHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TabularBackend(ABC):
    """Factory for workbook handles."""

    @abstractmethod
    def open(self, workbook_id: str) -> WorkbookHandle:
        """
        Open the workbook identified by ``workbook_id``.

        Raises:
            BackendError: If the workbook cannot be reached or parsed.
        """
