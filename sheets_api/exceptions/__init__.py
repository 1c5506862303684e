"""
Custom exceptions for the Sheets gateway.

Provides type-safe, descriptive exceptions for error handling throughout
the application.
"""

from sheets_api.exceptions.sheets_exceptions import (
    BackendError,
    DuplicateSheetError,
    InvalidActionError,
    ParameterParseError,
    RowIndexError,
    SheetNotFoundError,
    SheetsServiceError,
    ValidationError,
)

__all__ = [
    "SheetsServiceError",
    "SheetNotFoundError",
    "ValidationError",
    "ParameterParseError",
    "RowIndexError",
    "DuplicateSheetError",
    "InvalidActionError",
    "BackendError",
]
