"""
Google Sheets backend using gspread.

The workbook identifier is the spreadsheet key (the ``/d/<key>/`` part of
the sheet URL). Authentication uses a service-account JSON file; share
the spreadsheet with the service account's e-mail address.

Every gspread call is a network round-trip. The used range is fetched
once per handle and invalidated after each mutation.

Example:
    backend = GspreadBackend(credentials_file="/secrets/sa.json")
    with backend.open("1bmQFvpZyVMvGkUA...") as workbook:
        print([sheet.name for sheet in workbook.sheets()])
"""

import logging
from typing import Any

import gspread
from google.oauth2.service_account import Credentials
from gspread.utils import rowcol_to_a1

from sheets_api.adapters.base import (
    TabularBackend,
    WorkbookHandle,
    WorksheetHandle,
    is_blank,
    pad_row,
)
from sheets_api.exceptions.sheets_exceptions import BackendError

logger = logging.getLogger(__name__)

# Sheets API colors are RGB floats in [0, 1]; this is #4CAF50.
HEADER_FORMAT = {
    "backgroundColor": {"red": 0.298, "green": 0.686, "blue": 0.314},
    "textFormat": {
        "bold": True,
        "foregroundColor": {"red": 1.0, "green": 1.0, "blue": 1.0},
    },
}


class GspreadWorksheet(WorksheetHandle):
    """Worksheet handle over a gspread Worksheet."""

    def __init__(self, worksheet: gspread.Worksheet) -> None:
        self._worksheet = worksheet
        self._values: list[list[Any]] | None = None

    @property
    def name(self) -> str:
        return self._worksheet.title

    @property
    def index(self) -> int:
        return self._worksheet.index + 1

    def get_values(self) -> list[list[Any]]:
        if self._values is None:
            raw = [
                list(row)
                for row in self._worksheet.get_all_values(value_render_option="UNFORMATTED_VALUE")
            ]
            while raw and all(is_blank(cell) for cell in raw[-1]):
                raw.pop()
            width = max((len(row) for row in raw), default=0)
            self._values = [pad_row(row, width) for row in raw]
        return self._values

    def _invalidate(self) -> None:
        self._values = None

    def write_row(self, row: int, values: list[Any]) -> None:
        if not values:
            return
        self._worksheet.update(
            range_name=f"{rowcol_to_a1(row, 1)}:{rowcol_to_a1(row, len(values))}",
            values=[values],
            value_input_option="RAW",
        )
        self._invalidate()

    def append_row(self, values: list[Any]) -> int:
        row = self.last_row() + 1
        if values:
            self._worksheet.append_row(values, value_input_option="RAW", table_range="A1")
            self._invalidate()
        return row

    def delete_row(self, row: int) -> None:
        self._worksheet.delete_rows(row)
        self._invalidate()

    def insert_column(self, column: int) -> None:
        if column > self._worksheet.col_count:
            self._worksheet.add_cols(column - self._worksheet.col_count)
        else:
            self._worksheet.insert_cols([[""]], col=column)
        self._invalidate()

    def set_value(self, row: int, column: int, value: Any) -> None:
        self._worksheet.update_cell(row, column, value)
        self._invalidate()

    def style_header(self, row: int, first_column: int, count: int) -> None:
        if count <= 0:
            return
        cell_range = f"{rowcol_to_a1(row, first_column)}:{rowcol_to_a1(row, first_column + count - 1)}"
        self._worksheet.format(cell_range, HEADER_FORMAT)


class GspreadWorkbook(WorkbookHandle):
    """An opened Google spreadsheet. Writes are immediate, so save() is a no-op."""

    DEFAULT_ROWS = 1000
    DEFAULT_COLS = 26

    def __init__(self, spreadsheet: gspread.Spreadsheet) -> None:
        self._spreadsheet = spreadsheet

    def sheets(self) -> list[WorksheetHandle]:
        return [GspreadWorksheet(worksheet) for worksheet in self._spreadsheet.worksheets()]

    def get_sheet(self, name: str) -> GspreadWorksheet | None:
        try:
            return GspreadWorksheet(self._spreadsheet.worksheet(name))
        except gspread.exceptions.WorksheetNotFound:
            return None

    def insert_sheet(self, name: str) -> GspreadWorksheet:
        worksheet = self._spreadsheet.add_worksheet(
            title=name,
            rows=self.DEFAULT_ROWS,
            cols=self.DEFAULT_COLS,
        )
        return GspreadWorksheet(worksheet)


class GspreadBackend(TabularBackend):
    """
    Backend serving a Google spreadsheet through gspread.

    Attributes:
        SCOPES: OAuth scopes requested for the service account.
    """

    SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

    def __init__(
        self,
        credentials_file: str = "",
        client: gspread.Client | None = None,
    ) -> None:
        """
        Initialize the GspreadBackend.

        Args:
            credentials_file: Path to a service-account JSON file.
            client: Optional pre-authorized gspread client. If None, one is
                created from ``credentials_file`` on first use.
        """
        self.credentials_file = credentials_file
        self._client = client

    def _get_client(self) -> gspread.Client:
        if self._client is None:
            credentials = Credentials.from_service_account_file(
                self.credentials_file,
                scopes=self.SCOPES,
            )
            self._client = gspread.authorize(credentials)
        return self._client

    def open(self, workbook_id: str) -> GspreadWorkbook:
        logger.debug("Opening spreadsheet %s", workbook_id)
        try:
            spreadsheet = self._get_client().open_by_key(workbook_id)
        except Exception as e:
            raise BackendError(
                workbook_id=workbook_id,
                operation="open",
                reason=str(e),
            ) from e
        return GspreadWorkbook(spreadsheet)
