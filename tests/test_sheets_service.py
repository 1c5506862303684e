"""
Tests for the SheetsService.

Tests the seven gateway operations against the in-memory backend.
"""

import pytest

from sheets_api.adapters.memory_adapter import InMemoryBackend, InMemoryWorkbook
from sheets_api.exceptions.sheets_exceptions import (
    BackendError,
    DuplicateSheetError,
    RowIndexError,
    SheetNotFoundError,
)
from sheets_api.models.sheets_models import ColumnPosition
from sheets_api.services.sheets_service import SheetsService


class TestGetSheets:
    """Tests for listing sheets."""

    def test_lists_sheets_in_order(self, sheets_service: SheetsService) -> None:
        sheets = sheets_service.get_sheets()

        assert [(s.name, s.index) for s in sheets] == [("Users", 1), ("Empty", 2)]

    def test_empty_workbook_returns_empty_list(self) -> None:
        backend = InMemoryBackend()
        backend.add_workbook("blank")

        assert SheetsService(backend, "blank").get_sheets() == []

    def test_unreachable_workbook(self, memory_backend: InMemoryBackend) -> None:
        service = SheetsService(memory_backend, "does-not-exist")

        with pytest.raises(BackendError):
            service.get_sheets()


class TestGetData:
    """Tests for reading sheet contents."""

    def test_reads_headers_and_records(self, sheets_service: SheetsService) -> None:
        data = sheets_service.get_data("Users")

        assert data.headers == ["name", "email"]
        assert data.total_rows == 2
        assert [row.row_index for row in data.data] == [2, 3]
        assert data.data[0].values == ["Ann", "a@x.com"]
        assert data.data[1].record == {"name": "Bob", "email": "b@x.com"}

    def test_empty_sheet(self, sheets_service: SheetsService) -> None:
        data = sheets_service.get_data("Empty")

        assert data.headers == []
        assert data.data == []
        assert data.total_rows == 0

    def test_sheet_not_found(self, sheets_service: SheetsService) -> None:
        with pytest.raises(SheetNotFoundError) as exc_info:
            sheets_service.get_data("Orders")

        assert exc_info.value.message == "Sheet not found: Orders"

    def test_sheet_names_are_case_sensitive(self, sheets_service: SheetsService) -> None:
        with pytest.raises(SheetNotFoundError):
            sheets_service.get_data("users")

    def test_short_rows_are_padded(
        self,
        sheets_service: SheetsService,
        memory_workbook: InMemoryWorkbook,
    ) -> None:
        memory_workbook.insert_sheet("Partial", rows=[["a", "b", "c"], ["1"]])

        data = sheets_service.get_data("Partial")

        assert data.data[0].values == ["1", "", ""]
        assert data.data[0].record == {"a": "1", "b": "", "c": ""}


class TestCreateRecord:
    """Tests for appending records."""

    def test_appends_after_last_row(self, sheets_service: SheetsService) -> None:
        result = sheets_service.create_record("Users", {"name": "Cid", "email": "c@x.com"})

        assert result.success is True
        assert result.row_index == 4

        data = sheets_service.get_data("Users")
        assert data.total_rows == 3
        assert data.data[-1].record == {"name": "Cid", "email": "c@x.com"}

    def test_missing_fields_become_empty(self, sheets_service: SheetsService) -> None:
        sheets_service.create_record("Users", {"name": "Cid", "phone": "555"})

        data = sheets_service.get_data("Users")
        assert data.data[-1].record == {"name": "Cid", "email": ""}
        assert "phone" not in data.headers

    def test_first_record_lands_on_row_two(
        self,
        sheets_service: SheetsService,
    ) -> None:
        sheets_service.create_sheet("People", ["name", "email"])

        result = sheets_service.create_record("People", {"name": "Ann", "email": "a@x.com"})

        assert result.row_index == 2
        data = sheets_service.get_data("People")
        assert data.data[0].row_index == 2
        assert data.data[0].record == {"name": "Ann", "email": "a@x.com"}

    def test_headerless_sheet_accepts_empty_row(self, sheets_service: SheetsService) -> None:
        result = sheets_service.create_record("Empty", {"name": "Ann"})

        assert result.success is True
        assert sheets_service.get_data("Empty").total_rows == 0

    def test_sheet_not_found(self, sheets_service: SheetsService) -> None:
        with pytest.raises(SheetNotFoundError):
            sheets_service.create_record("Orders", {"id": 1})


class TestUpdateRecord:
    """Tests for overwriting records."""

    def test_full_overwrite(self, sheets_service: SheetsService) -> None:
        result = sheets_service.update_record("Users", 2, {"name": "Ann B"})

        assert result.row_index == 2

        data = sheets_service.get_data("Users")
        assert data.data[0].record == {"name": "Ann B", "email": ""}
        assert data.data[1].record == {"name": "Bob", "email": "b@x.com"}

    @pytest.mark.parametrize("row_index", [1, 4, -1])
    def test_out_of_range(self, sheets_service: SheetsService, row_index: int) -> None:
        with pytest.raises(RowIndexError) as exc_info:
            sheets_service.update_record("Users", row_index, {"name": "X"})

        assert exc_info.value.message == f"Invalid row index: {row_index}"

    def test_sheet_not_found(self, sheets_service: SheetsService) -> None:
        with pytest.raises(SheetNotFoundError):
            sheets_service.update_record("Orders", 2, {"id": 1})


class TestDeleteRecord:
    """Tests for deleting records."""

    def test_rows_shift_up(self, sheets_service: SheetsService) -> None:
        result = sheets_service.delete_record("Users", 2)

        assert result.deleted_row_index == 2

        data = sheets_service.get_data("Users")
        assert data.total_rows == 1
        assert data.data[0].row_index == 2
        assert data.data[0].record == {"name": "Bob", "email": "b@x.com"}

    @pytest.mark.parametrize("row_index", [1, 4])
    def test_out_of_range(self, sheets_service: SheetsService, row_index: int) -> None:
        with pytest.raises(RowIndexError):
            sheets_service.delete_record("Users", row_index)

    def test_backend_failure_is_wrapped(
        self,
        sheets_service: SheetsService,
        memory_workbook: InMemoryWorkbook,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def fail(row: int) -> None:
            raise RuntimeError("quota exceeded")

        monkeypatch.setattr(memory_workbook.get_sheet("Users"), "delete_row", fail)

        with pytest.raises(BackendError) as exc_info:
            sheets_service.delete_record("Users", 2)

        assert "quota exceeded" in exc_info.value.message


class TestCreateSheet:
    """Tests for creating sheets."""

    def test_round_trip(self, sheets_service: SheetsService) -> None:
        result = sheets_service.create_sheet("Orders", ["id", "item"])

        assert result.sheet_name == "Orders"
        assert result.message == 'Sheet "Orders" created successfully'

        data = sheets_service.get_data("Orders")
        assert data.headers == ["id", "item"]
        assert data.data == []
        assert data.total_rows == 0

    def test_header_row_is_styled(
        self,
        sheets_service: SheetsService,
        memory_workbook: InMemoryWorkbook,
    ) -> None:
        sheets_service.create_sheet("Orders", ["id", "item"])

        assert memory_workbook.get_sheet("Orders").styled_cells == {(1, 1), (1, 2)}

    def test_empty_headers(self, sheets_service: SheetsService) -> None:
        sheets_service.create_sheet("Blank", [])

        assert sheets_service.get_data("Blank").headers == []
        assert sheets_service.get_sheets()[-1].name == "Blank"

    def test_duplicate_name(self, sheets_service: SheetsService) -> None:
        with pytest.raises(DuplicateSheetError) as exc_info:
            sheets_service.create_sheet("Users", ["a"])

        assert exc_info.value.message == 'Sheet with name "Users" already exists'


class TestAddColumn:
    """Tests for adding columns."""

    def test_add_at_end(self, sheets_service: SheetsService) -> None:
        result = sheets_service.add_column("Users", "phone")

        assert result.column_index == 3
        assert result.position == ColumnPosition.END

        data = sheets_service.get_data("Users")
        assert data.headers == ["name", "email", "phone"]
        assert data.data[0].record == {"name": "Ann", "email": "a@x.com", "phone": ""}

    def test_add_at_start(self, sheets_service: SheetsService) -> None:
        result = sheets_service.add_column("Users", "id", ColumnPosition.START)

        assert result.column_index == 1

        data = sheets_service.get_data("Users")
        assert data.headers == ["id", "name", "email"]
        assert data.data[0].values == ["", "Ann", "a@x.com"]

    def test_new_column_header_is_styled(
        self,
        sheets_service: SheetsService,
        memory_workbook: InMemoryWorkbook,
    ) -> None:
        sheets_service.add_column("Users", "phone")

        assert (1, 3) in memory_workbook.get_sheet("Users").styled_cells

    def test_add_to_empty_sheet(self, sheets_service: SheetsService) -> None:
        result = sheets_service.add_column("Empty", "first")

        assert result.column_index == 1
        assert sheets_service.get_data("Empty").headers == ["first"]

    def test_sheet_not_found(self, sheets_service: SheetsService) -> None:
        with pytest.raises(SheetNotFoundError):
            sheets_service.add_column("Orders", "x")
