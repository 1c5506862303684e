"""
Openpyxl backend for file-based workbooks.

This module provides the OpenpyxlBackend class that serves a local Excel
file as the gateway's tabular store. The workbook identifier is the path
of the file. Openpyxl is used because it can modify existing workbooks in
place while preserving the other sheets, styles and formulas.

Every open() loads the file fresh; mutations are written back by save()
before the handle is closed.

Supported formats:
    - .xlsx (Excel 2007+)
    - .xlsm (Excel Macro-Enabled)

Example:
    backend = OpenpyxlBackend()
    with backend.open("/data/crm.xlsx") as workbook:
        sheet = workbook.get_sheet("Users")
        print(sheet.get_values())
"""

import json
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from sheets_api.adapters.base import (
    HEADER_BACKGROUND,
    HEADER_FONT_COLOR,
    TabularBackend,
    WorkbookHandle,
    WorksheetHandle,
    is_blank,
    pad_row,
)
from sheets_api.exceptions.sheets_exceptions import BackendError

logger = logging.getLogger(__name__)


def _normalize_cell_value(value: Any) -> Any:
    """
    Normalize a cell value from openpyxl to JSON-friendly Python types.

    Integral floats become ints and empty cells become "".
    """
    if value is None:
        return ""

    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        return value

    if isinstance(value, (str, int, bool, datetime, date, time)):
        return value

    return str(value)


def _to_cell_value(value: Any) -> Any:
    """
    Convert a request value to something openpyxl can store.

    Empty text clears the cell; nested JSON values are stored as JSON text.
    """
    if is_blank(value):
        return None
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


class OpenpyxlWorksheet(WorksheetHandle):
    """Worksheet handle over an openpyxl Worksheet."""

    def __init__(self, worksheet: Worksheet, index: int) -> None:
        self._worksheet = worksheet
        self._index = index

    @property
    def name(self) -> str:
        return self._worksheet.title

    @property
    def index(self) -> int:
        return self._index

    def _extent(self) -> tuple[int, int]:
        """
        Compute the content extent of the sheet.

        openpyxl's max_row/max_column also count styled or touched empty
        cells, so the used range is derived from cell values instead.

        Returns:
            Tuple of (last_row, last_column), both 0 for an empty sheet.
        """
        last_row = 0
        last_column = 0
        for row_number, row in enumerate(self._worksheet.iter_rows(values_only=True), start=1):
            for column_number in range(len(row), 0, -1):
                if not is_blank(row[column_number - 1]):
                    last_row = row_number
                    last_column = max(last_column, column_number)
                    break
        return last_row, last_column

    def last_row(self) -> int:
        return self._extent()[0]

    def last_column(self) -> int:
        return self._extent()[1]

    def get_values(self) -> list[list[Any]]:
        last_row, last_column = self._extent()
        if last_row == 0:
            return []

        rows: list[list[Any]] = []
        for row in self._worksheet.iter_rows(
            min_row=1,
            max_row=last_row,
            max_col=last_column,
            values_only=True,
        ):
            rows.append(pad_row([_normalize_cell_value(value) for value in row], last_column))
        return rows

    def read_row(self, row: int, width: int) -> list[Any]:
        if width <= 0:
            return []
        cells = next(
            self._worksheet.iter_rows(min_row=row, max_row=row, max_col=width, values_only=True),
            (),
        )
        return pad_row([_normalize_cell_value(value) for value in cells], width)

    def write_row(self, row: int, values: list[Any]) -> None:
        for column, value in enumerate(values, start=1):
            self.set_value(row, column, value)

    def append_row(self, values: list[Any]) -> int:
        # Worksheet.append() tracks its own cursor, which does not move back
        # after delete_rows(), so the target row is computed from content.
        row = self.last_row() + 1
        self.write_row(row, values)
        return row

    def delete_row(self, row: int) -> None:
        self._worksheet.delete_rows(row)

    def insert_column(self, column: int) -> None:
        self._worksheet.insert_cols(column)

    def set_value(self, row: int, column: int, value: Any) -> None:
        self._worksheet.cell(row=row, column=column).value = _to_cell_value(value)

    def style_header(self, row: int, first_column: int, count: int) -> None:
        header_font = Font(bold=True, color=HEADER_FONT_COLOR)
        header_fill = PatternFill(
            start_color=HEADER_BACKGROUND,
            end_color=HEADER_BACKGROUND,
            fill_type="solid",
        )
        for column in range(first_column, first_column + count):
            cell = self._worksheet.cell(row=row, column=column)
            cell.font = header_font
            cell.fill = header_fill


class OpenpyxlWorkbook(WorkbookHandle):
    """
    An openpyxl workbook loaded from disk.

    Attributes:
        path: Location of the workbook file.
    """

    def __init__(self, workbook: Workbook, path: Path) -> None:
        self._workbook = workbook
        self.path = path

    def sheets(self) -> list[WorksheetHandle]:
        return [
            OpenpyxlWorksheet(worksheet, index)
            for index, worksheet in enumerate(self._workbook.worksheets, start=1)
        ]

    def get_sheet(self, name: str) -> OpenpyxlWorksheet | None:
        for index, worksheet in enumerate(self._workbook.worksheets, start=1):
            if worksheet.title == name:
                return OpenpyxlWorksheet(worksheet, index)
        return None

    def insert_sheet(self, name: str) -> OpenpyxlWorksheet:
        worksheet = self._workbook.create_sheet(title=name)
        return OpenpyxlWorksheet(worksheet, len(self._workbook.worksheets))

    def save(self) -> None:
        try:
            self._workbook.save(str(self.path))
        except Exception as e:
            raise BackendError(
                workbook_id=str(self.path),
                operation="save",
                reason=str(e),
            ) from e

    def close(self) -> None:
        self._workbook.close()


class OpenpyxlBackend(TabularBackend):
    """
    Backend serving an .xlsx/.xlsm file through openpyxl.

    Attributes:
        SUPPORTED_EXTENSIONS: Tuple of supported file extensions.
    """

    SUPPORTED_EXTENSIONS = (".xlsx", ".xlsm")

    def _validate_file_path(self, workbook_id: str) -> Path:
        """
        Validate that the workbook file exists and has a supported extension.

        Raises:
            BackendError: If the file is missing or not an Excel workbook.
        """
        path = Path(workbook_id)

        if not path.exists():
            raise BackendError(
                workbook_id=workbook_id,
                operation="open",
                reason="File does not exist",
            )

        if path.suffix.lower() not in self.SUPPORTED_EXTENSIONS:
            raise BackendError(
                workbook_id=workbook_id,
                operation="open",
                reason=f"Unsupported file extension: {path.suffix}",
            )

        return path

    def open(self, workbook_id: str) -> OpenpyxlWorkbook:
        path = self._validate_file_path(workbook_id)
        logger.debug("Opening workbook %s", path)

        try:
            workbook = load_workbook(str(path), keep_vba=path.suffix.lower() == ".xlsm")
        except Exception as e:
            raise BackendError(
                workbook_id=workbook_id,
                operation="open",
                reason=str(e),
            ) from e

        return OpenpyxlWorkbook(workbook, path)
