"""
Pydantic models for the Sheets CRUD gateway.

This module contains the result payloads returned by each action and the
uniform response envelope wrapped around them. Field names are snake_case
in Python and serialized in camelCase (``rowIndex``, ``totalRows``) to
match the wire format browser clients expect.

All models use Pydantic v2 for validation and serialization.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Action(str, Enum):
    """Actions understood by the request router."""

    GET_SHEETS = "getSheets"
    GET_DATA = "getData"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_SHEET = "createSheet"
    ADD_COLUMN = "addColumn"


class ColumnPosition(str, Enum):
    """Where addColumn places the new column."""

    START = "start"
    END = "end"


class WireModel(BaseModel):
    """Base model serializing field names in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump to JSON-compatible primitives using wire field names."""
        return self.model_dump(mode="json", by_alias=True)


class SheetSummary(WireModel):
    """
    Name and position of one sheet in the workbook.

    Attributes:
        name: The sheet name.
        index: 1-based position of the sheet, in backend-native order.
    """

    name: str = Field(description="The name of the sheet")
    index: int = Field(ge=1, description="1-based position of the sheet in the workbook")


class DataRow(WireModel):
    """
    One data row of a sheet in both positional and record form.

    Attributes:
        row_index: 1-based sheet row of this record (2 is the first data row).
        values: Raw positional cell values.
        record: Header-name to value mapping.
    """

    row_index: int = Field(ge=2, description="1-based row position, header row excluded")
    values: list[Any] = Field(default_factory=list, description="Raw positional row values")
    record: dict[str, Any] = Field(default_factory=dict, description="Header-mapped record")


class SheetDataResponse(WireModel):
    """
    Contents of a sheet split into headers and records.

    Attributes:
        headers: Values of the header row.
        data: Data rows, in sheet order.
        total_rows: Number of data rows (header row excluded).
    """

    headers: list[Any] = Field(default_factory=list, description="Header row values")
    data: list[DataRow] = Field(default_factory=list, description="Data rows in sheet order")
    total_rows: int = Field(default=0, ge=0, description="Number of data rows")


class OperationResult(WireModel):
    """Common fields of every mutating action's result."""

    success: bool = Field(default=True, description="Whether the operation succeeded")
    message: str = Field(description="Human-readable outcome")


class RecordCreatedResult(OperationResult):
    row_index: int = Field(ge=1, description="1-based row index of the appended row")


class RecordUpdatedResult(OperationResult):
    row_index: int = Field(ge=2, description="1-based row index that was overwritten")


class RecordDeletedResult(OperationResult):
    deleted_row_index: int = Field(ge=2, description="1-based row index that was removed")


class SheetCreatedResult(OperationResult):
    sheet_name: str = Field(description="Name of the new sheet")
    headers: list[Any] = Field(default_factory=list, description="Headers written to row 1")


class ColumnAddedResult(OperationResult):
    column_name: str = Field(description="Header text of the new column")
    position: ColumnPosition = Field(description="Where the column was inserted")
    column_index: int = Field(ge=1, description="1-based index of the inserted column")


class ErrorPayload(BaseModel):
    """Body of a failed response: the error message only."""

    error: str = Field(description="Human-readable error description")


class ResponseEnvelope(BaseModel):
    """
    Uniform response wrapper for every request.

    Attributes:
        status: 200 on success, 500 on any failure.
        data: The action result, or an ErrorPayload on failure.
    """

    status: int = Field(description="200 on success, 500 on failure")
    data: Any = Field(default=None, description="Action result or error payload")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"status": 200, "data": [{"name": "Users", "index": 1}]},
                {"status": 500, "data": {"error": "Sheet not found: Orders"}},
            ]
        }
    }
