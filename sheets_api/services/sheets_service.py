"""
Core service layer for the Sheets gateway.

This module provides the SheetsService class which implements the seven
gateway operations against a TabularBackend. It is transport-agnostic:
the HTTP endpoint and the MCP server both reach it through the
RequestRouter.

Each operation opens the configured workbook, performs one logical read
or write, saves if it mutated anything, and closes the workbook. Backend
failures are re-raised as BackendError; NotFound and validation failures
propagate as their own SheetsServiceError subclasses.

Example:
    service = SheetsService(OpenpyxlBackend(), workbook_id="/data/crm.xlsx")

    service.create_sheet("Users", ["name", "email"])
    service.create_record("Users", {"name": "Ann", "email": "a@x.com"})
    data = service.get_data("Users")
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sheets_api.adapters.base import TabularBackend, WorkbookHandle, WorksheetHandle
from sheets_api.exceptions.sheets_exceptions import (
    BackendError,
    DuplicateSheetError,
    RowIndexError,
    SheetNotFoundError,
    SheetsServiceError,
)
from sheets_api.models.sheets_models import (
    ColumnAddedResult,
    ColumnPosition,
    DataRow,
    RecordCreatedResult,
    RecordDeletedResult,
    RecordUpdatedResult,
    SheetCreatedResult,
    SheetDataResponse,
    SheetSummary,
)
from sheets_api.services.record_mapper import record_to_row, row_to_record

logger = logging.getLogger(__name__)

FIRST_DATA_ROW = 2


class SheetsService:
    """
    Row-oriented CRUD over the sheets of one workbook.

    Attributes:
        backend: The tabular backend used to open the workbook.
        workbook_id: Identifier of the workbook, fixed at construction.
    """

    def __init__(self, backend: TabularBackend, workbook_id: str) -> None:
        """
        Initialize the SheetsService.

        Args:
            backend: Backend that opens workbooks.
            workbook_id: Identifier of the workbook every operation targets.
        """
        self.backend = backend
        self.workbook_id = workbook_id

    @contextmanager
    def _workbook(self, operation: str) -> Iterator[WorkbookHandle]:
        """
        Open the workbook for one operation.

        Any non-gateway exception raised by the backend while the workbook
        is open is wrapped in BackendError.
        """
        try:
            with self.backend.open(self.workbook_id) as workbook:
                yield workbook
        except SheetsServiceError:
            raise
        except Exception as e:
            raise BackendError(
                workbook_id=self.workbook_id,
                operation=operation,
                reason=str(e),
            ) from e

    @staticmethod
    def _require_sheet(workbook: WorkbookHandle, sheet_name: str) -> WorksheetHandle:
        sheet = workbook.get_sheet(sheet_name)
        if sheet is None:
            raise SheetNotFoundError(sheet_name)
        return sheet

    @staticmethod
    def _read_headers(sheet: WorksheetHandle) -> list[Any]:
        width = sheet.last_column()
        return sheet.read_row(1, width) if width else []

    @staticmethod
    def _check_row_index(sheet: WorksheetHandle, row_index: int) -> None:
        last_row = sheet.last_row()
        if row_index < FIRST_DATA_ROW or row_index > last_row:
            raise RowIndexError(row_index, last_row)

    def get_sheets(self) -> list[SheetSummary]:
        """
        List the sheets of the workbook.

        Returns:
            One SheetSummary per sheet in backend order. An empty workbook
            yields an empty list.

        Raises:
            BackendError: If the workbook is unreachable.
        """
        with self._workbook("list sheets") as workbook:
            return [SheetSummary(name=sheet.name, index=sheet.index) for sheet in workbook.sheets()]

    def get_data(self, sheet_name: str) -> SheetDataResponse:
        """
        Read every row of a sheet.

        Row 1 becomes ``headers``; each later row becomes a DataRow holding
        its raw values and its header-mapped record.

        Args:
            sheet_name: Name of the sheet to read.

        Returns:
            SheetDataResponse; empty headers/data for an empty sheet.

        Raises:
            SheetNotFoundError: If the sheet does not exist.
            BackendError: If the workbook is unreachable.
        """
        with self._workbook("read") as workbook:
            sheet = self._require_sheet(workbook, sheet_name)
            values = sheet.get_values()

        if not values:
            return SheetDataResponse(headers=[], data=[], total_rows=0)

        headers = values[0]
        data_rows = values[1:]

        return SheetDataResponse(
            headers=headers,
            data=[
                DataRow(
                    row_index=position + FIRST_DATA_ROW,
                    values=row,
                    record=row_to_record(headers, row),
                )
                for position, row in enumerate(data_rows)
            ],
            total_rows=len(data_rows),
        )

    def create_record(self, sheet_name: str, record: dict[str, Any]) -> RecordCreatedResult:
        """
        Append a record as the new last row of a sheet.

        Args:
            sheet_name: Name of the target sheet.
            record: Field values keyed by header. Unknown fields are ignored.

        Returns:
            RecordCreatedResult carrying the new row's 1-based index.

        Raises:
            SheetNotFoundError: If the sheet does not exist.
            BackendError: If the write fails.
        """
        with self._workbook("append to") as workbook:
            sheet = self._require_sheet(workbook, sheet_name)
            headers = self._read_headers(sheet)
            row_index = sheet.append_row(record_to_row(headers, record))
            workbook.save()

        logger.info("Appended row %d to sheet %s", row_index, sheet_name)
        return RecordCreatedResult(message="Record created successfully", row_index=row_index)

    def update_record(
        self,
        sheet_name: str,
        row_index: int,
        record: dict[str, Any],
    ) -> RecordUpdatedResult:
        """
        Overwrite a data row with a record.

        Every header column is rewritten; fields missing from ``record``
        become "" rather than keeping their previous value.

        Args:
            sheet_name: Name of the target sheet.
            row_index: 1-based row to overwrite, between 2 and the last row.
            record: Field values keyed by header.

        Returns:
            RecordUpdatedResult echoing the row index.

        Raises:
            SheetNotFoundError: If the sheet does not exist.
            RowIndexError: If the row index is outside the data rows.
            BackendError: If the write fails.
        """
        with self._workbook("update") as workbook:
            sheet = self._require_sheet(workbook, sheet_name)
            self._check_row_index(sheet, row_index)
            headers = self._read_headers(sheet)
            sheet.write_row(row_index, record_to_row(headers, record))
            workbook.save()

        logger.info("Updated row %d of sheet %s", row_index, sheet_name)
        return RecordUpdatedResult(message="Record updated successfully", row_index=row_index)

    def delete_record(self, sheet_name: str, row_index: int) -> RecordDeletedResult:
        """
        Delete a data row, shifting the rows below it up by one.

        Args:
            sheet_name: Name of the target sheet.
            row_index: 1-based row to delete, between 2 and the last row.

        Raises:
            SheetNotFoundError: If the sheet does not exist.
            RowIndexError: If the row index is outside the data rows.
            BackendError: If the delete fails.
        """
        with self._workbook("delete from") as workbook:
            sheet = self._require_sheet(workbook, sheet_name)
            self._check_row_index(sheet, row_index)
            sheet.delete_row(row_index)
            workbook.save()

        logger.info("Deleted row %d of sheet %s", row_index, sheet_name)
        return RecordDeletedResult(message="Record deleted successfully", deleted_row_index=row_index)

    def create_sheet(self, sheet_name: str, headers: list[Any]) -> SheetCreatedResult:
        """
        Create a sheet and write its header row.

        Args:
            sheet_name: Name of the new sheet.
            headers: Header values for row 1. An empty list leaves the sheet
                empty.

        Raises:
            DuplicateSheetError: If a sheet with this name already exists.
            BackendError: If the sheet cannot be created.
        """
        with self._workbook("create sheet in") as workbook:
            if workbook.get_sheet(sheet_name) is not None:
                raise DuplicateSheetError(sheet_name)

            sheet = workbook.insert_sheet(sheet_name)
            if headers:
                sheet.write_row(1, headers)
                sheet.style_header(1, 1, len(headers))
            workbook.save()

        logger.info("Created sheet %s with %d headers", sheet_name, len(headers))
        return SheetCreatedResult(
            message=f'Sheet "{sheet_name}" created successfully',
            sheet_name=sheet_name,
            headers=headers,
        )

    def add_column(
        self,
        sheet_name: str,
        column_name: str,
        position: ColumnPosition = ColumnPosition.END,
    ) -> ColumnAddedResult:
        """
        Insert a named column at the start or end of a sheet.

        Args:
            sheet_name: Name of the target sheet.
            column_name: Header text for the new column.
            position: START inserts before column 1; END after the last column.

        Returns:
            ColumnAddedResult carrying the new column's 1-based index.

        Raises:
            SheetNotFoundError: If the sheet does not exist.
            BackendError: If the insert fails.
        """
        with self._workbook("add column to") as workbook:
            sheet = self._require_sheet(workbook, sheet_name)

            if position == ColumnPosition.START:
                column_index = 1
            else:
                column_index = sheet.last_column() + 1

            sheet.insert_column(column_index)
            sheet.set_value(1, column_index, column_name)
            sheet.style_header(1, column_index, 1)
            workbook.save()

        logger.info("Added column %s to sheet %s at %d", column_name, sheet_name, column_index)
        return ColumnAddedResult(
            message=f'Column "{column_name}" added successfully',
            column_name=column_name,
            position=position,
            column_index=column_index,
        )
