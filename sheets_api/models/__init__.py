"""
Data models for the Sheets gateway.

Contains Pydantic models for action results and the response envelope.
"""

from sheets_api.models.sheets_models import (
    Action,
    ColumnAddedResult,
    ColumnPosition,
    DataRow,
    ErrorPayload,
    OperationResult,
    RecordCreatedResult,
    RecordDeletedResult,
    RecordUpdatedResult,
    ResponseEnvelope,
    SheetCreatedResult,
    SheetDataResponse,
    SheetSummary,
)

__all__ = [
    "Action",
    "ColumnPosition",
    "SheetSummary",
    "DataRow",
    "SheetDataResponse",
    "OperationResult",
    "RecordCreatedResult",
    "RecordUpdatedResult",
    "RecordDeletedResult",
    "SheetCreatedResult",
    "ColumnAddedResult",
    "ErrorPayload",
    "ResponseEnvelope",
]
