"""
Custom exceptions for the Sheets CRUD gateway.

This module defines a hierarchy of exceptions for the error conditions
that can occur while routing a request to the tabular backend. All
exceptions inherit from SheetsServiceError so the router can catch every
operation-level failure with a single except clause.

Taxonomy:
    - SheetNotFoundError: the referenced sheet does not exist.
    - ValidationError: a required parameter is missing, a row index is
      out of bounds or non-numeric, a sheet name is already taken, or
      the action is unknown.
    - BackendError: the underlying workbook is unreachable or rejects
      an operation.

Example:
    try:
        service.get_data("Users")
    except SheetNotFoundError as e:
        logger.error("Sheet error: %s", e.sheet_name)
    except SheetsServiceError as e:
        logger.error("General error: %s", e)
"""


class SheetsServiceError(Exception):
    """
    Base exception for all Sheets gateway errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code, used in logs and by the
            MCP surface.
        details: Optional additional context about the error.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "SHEETS_ERROR",
        details: dict | None = None,
    ) -> None:
        """
        Initialize the SheetsServiceError.

        Args:
            message: Human-readable error description.
            error_code: Machine-readable error code.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """
        Convert exception to a dictionary for logging and tool responses.

        Returns:
            Dictionary containing error_code, message, and details.
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class SheetNotFoundError(SheetsServiceError):
    """
    Raised when the specified sheet does not exist in the workbook.

    Attributes:
        sheet_name: Name of the sheet that was not found.
    """

    def __init__(self, sheet_name: str) -> None:
        self.sheet_name = sheet_name
        super().__init__(
            message=f"Sheet not found: {sheet_name}",
            error_code="SHEET_NOT_FOUND",
            details={"sheet_name": sheet_name},
        )


class ValidationError(SheetsServiceError):
    """
    Raised when request parameters fail presence or range checks.

    Subclasses narrow the error code; the message is always suitable for
    returning to the caller verbatim.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "VALIDATION_ERROR",
        details: dict | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class ParameterParseError(ValidationError):
    """
    Raised when a JSON-typed parameter cannot be decoded.

    Attributes:
        parameter: Name of the query parameter (e.g. "record").
        reason: Decoder message describing the failure.
    """

    def __init__(self, parameter: str, reason: str) -> None:
        self.parameter = parameter
        self.reason = reason
        super().__init__(
            message=f"Invalid JSON for parameter '{parameter}': {reason}",
            error_code="INVALID_JSON",
            details={"parameter": parameter, "reason": reason},
        )


class RowIndexError(ValidationError):
    """
    Raised when a row index is non-numeric or outside the data rows.

    Attributes:
        row_index: The offending value, as received.
        last_row: Last populated row of the sheet, if known.
    """

    def __init__(self, row_index: object, last_row: int | None = None) -> None:
        self.row_index = row_index
        self.last_row = last_row
        super().__init__(
            message=f"Invalid row index: {row_index}",
            error_code="INVALID_ROW_INDEX",
            details={"row_index": row_index, "last_row": last_row},
        )


class DuplicateSheetError(ValidationError):
    """Raised when creating a sheet whose name is already taken."""

    def __init__(self, sheet_name: str) -> None:
        self.sheet_name = sheet_name
        super().__init__(
            message=f'Sheet with name "{sheet_name}" already exists',
            error_code="DUPLICATE_SHEET",
            details={"sheet_name": sheet_name},
        )


class InvalidActionError(ValidationError):
    """Raised when the request names an action the router does not know."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(
            message=f"Invalid action: {action}",
            error_code="INVALID_ACTION",
            details={"action": action},
        )


class BackendError(SheetsServiceError):
    """
    Raised when the tabular backend is unreachable or rejects an operation.

    Attributes:
        workbook_id: Identifier of the workbook being accessed.
        operation: The backend operation that failed.
        reason: Specific reason for the failure.
    """

    def __init__(
        self,
        workbook_id: str,
        operation: str,
        reason: str | None = None,
    ) -> None:
        self.workbook_id = workbook_id
        self.operation = operation
        self.reason = reason

        message = f"Failed to {operation} workbook {workbook_id}"
        if reason:
            message += f": {reason}"

        super().__init__(
            message=message,
            error_code="BACKEND_ERROR",
            details={
                "workbook_id": workbook_id,
                "operation": operation,
                "reason": reason,
            },
        )
