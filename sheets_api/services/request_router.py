"""
Request routing for the Sheets gateway.

The RequestRouter turns a flat mapping of request parameters into one
SheetsService call and wraps the outcome in the uniform envelope::

    {"status": 200, "data": <result>}
    {"status": 500, "data": {"error": "<message>"}}

Parameters are normalized at the boundary before any operation runs:
JSON-typed parameters (``record``, ``headers``) are decoded when they
arrive as text, and ``rowIndex`` is converted to an integer. Presence
checks use truthiness: an absent parameter, an empty string and a zero
row index are all "missing".

When a ``callback`` parameter is given, the rendered body is the JSON
envelope wrapped in a call to that function, for script-tag (JSONP)
consumers.

Example:
    router = RequestRouter(SheetsService(backend, "/data/crm.xlsx"))
    body, media_type = router.respond({"action": "getData", "sheet": "Users"})
"""

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from sheets_api.exceptions.sheets_exceptions import (
    InvalidActionError,
    ParameterParseError,
    RowIndexError,
    SheetsServiceError,
    ValidationError,
)
from sheets_api.models.sheets_models import (
    Action,
    ColumnPosition,
    ErrorPayload,
    ResponseEnvelope,
    WireModel,
)
from sheets_api.services.sheets_service import SheetsService

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
SCRIPT_MEDIA_TYPE = "application/javascript"


def is_missing(value: Any) -> bool:
    """
    Truthiness check used for required parameters.

    None, "", 0 and False count as missing. Parsed containers count as
    present even when empty, like any object reference would.
    """
    if value is None:
        return True
    if isinstance(value, (str, bool, int, float)):
        return not value
    return False


def parse_json_param(name: str, raw: Any, expected: type) -> Any:
    """
    Normalize a JSON-typed parameter.

    Args:
        name: Parameter name, used in error messages.
        raw: JSON text, or an already-decoded structure.
        expected: ``dict`` for objects, ``list`` for arrays.

    Returns:
        The decoded value.

    Raises:
        ParameterParseError: If ``raw`` is text that is not valid JSON.
        ValidationError: If the decoded value has the wrong shape.
    """
    value = raw
    if isinstance(raw, (str, bytes)):
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParameterParseError(name, e.msg) from e

    if not isinstance(value, expected):
        kind = "object" if expected is dict else "array"
        raise ValidationError(
            f"Parameter '{name}' must be a JSON {kind}",
            details={"parameter": name},
        )
    return value


def parse_row_index(raw: Any) -> int | None:
    """
    Convert a raw row index parameter to an integer.

    Returns:
        The integer, or None when the parameter is absent or empty.

    Raises:
        RowIndexError: If the value is not an integer.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise RowIndexError(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            raise RowIndexError(raw) from None
    raise RowIndexError(raw)


def format_response(envelope: ResponseEnvelope, callback: str | None = None) -> tuple[str, str]:
    """
    Render an envelope as a response body.

    Args:
        envelope: The envelope to serialize.
        callback: Optional JavaScript function name for JSONP wrapping.

    Returns:
        Tuple of (body, media_type).
    """
    payload = envelope.model_dump_json()
    if callback:
        return f"{callback}({payload});", SCRIPT_MEDIA_TYPE
    return payload, JSON_MEDIA_TYPE


def _to_payload(result: Any) -> Any:
    if isinstance(result, WireModel):
        return result.to_wire()
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, list):
        return [_to_payload(item) for item in result]
    return result


class RequestRouter:
    """
    Dispatches actions to the SheetsService and builds envelopes.

    Attributes:
        DEFAULT_ACTION: Action used when the request names none.
        service: The SheetsService operations are dispatched to.
    """

    DEFAULT_ACTION = Action.GET_SHEETS

    def __init__(self, service: SheetsService) -> None:
        """
        Initialize the RequestRouter.

        Args:
            service: Service bound to the configured workbook.
        """
        self.service = service
        self._handlers: dict[Action, Callable[[Mapping[str, Any]], Any]] = {
            Action.GET_SHEETS: self._get_sheets,
            Action.GET_DATA: self._get_data,
            Action.CREATE: self._create,
            Action.UPDATE: self._update,
            Action.DELETE: self._delete,
            Action.CREATE_SHEET: self._create_sheet,
            Action.ADD_COLUMN: self._add_column,
        }

    def dispatch(self, params: Mapping[str, Any]) -> Any:
        """
        Run the action named in ``params``.

        Returns:
            The operation's result model (or list of models).

        Raises:
            SheetsServiceError: For any validation, NotFound or backend failure.
        """
        action_name = params.get("action") or self.DEFAULT_ACTION.value
        try:
            action = Action(action_name)
        except ValueError:
            raise InvalidActionError(str(action_name)) from None
        return self._handlers[action](params)

    def handle(self, params: Mapping[str, Any]) -> ResponseEnvelope:
        """
        Run a request and wrap the outcome in an envelope.

        Failures never escape: they are logged with the request context and
        returned as a status 500 envelope carrying only the message.
        """
        try:
            result = self.dispatch(params)
        except SheetsServiceError as e:
            logger.error(
                "Error handling action=%s sheet=%s rowIndex=%s: [%s] %s",
                params.get("action") or self.DEFAULT_ACTION.value,
                params.get("sheet") or params.get("sheetName"),
                params.get("rowIndex"),
                e.error_code,
                e.message,
            )
            return ResponseEnvelope(status=500, data=ErrorPayload(error=e.message).model_dump())
        except Exception as e:
            logger.exception(
                "Unexpected error handling action=%s sheet=%s rowIndex=%s",
                params.get("action") or self.DEFAULT_ACTION.value,
                params.get("sheet") or params.get("sheetName"),
                params.get("rowIndex"),
            )
            message = str(e) or type(e).__name__
            return ResponseEnvelope(status=500, data=ErrorPayload(error=message).model_dump())

        return ResponseEnvelope(status=200, data=_to_payload(result))

    def respond(self, params: Mapping[str, Any]) -> tuple[str, str]:
        """
        Handle a request and render it, honoring the ``callback`` parameter.

        Returns:
            Tuple of (body, media_type).
        """
        envelope = self.handle(params)
        callback = params.get("callback")
        return format_response(envelope, str(callback) if callback else None)

    # ==================== ACTION HANDLERS ====================

    def _get_sheets(self, params: Mapping[str, Any]) -> Any:
        return self.service.get_sheets()

    def _get_data(self, params: Mapping[str, Any]) -> Any:
        sheet = params.get("sheet")
        if is_missing(sheet):
            raise ValidationError("Sheet name is required")
        return self.service.get_data(str(sheet))

    def _create(self, params: Mapping[str, Any]) -> Any:
        sheet = params.get("sheet")
        raw_record = params.get("record")
        if is_missing(sheet) or is_missing(raw_record):
            raise ValidationError("Sheet name and record data are required")
        record = parse_json_param("record", raw_record, dict)
        return self.service.create_record(str(sheet), record)

    def _update(self, params: Mapping[str, Any]) -> Any:
        sheet = params.get("sheet")
        row_index = parse_row_index(params.get("rowIndex"))
        raw_record = params.get("record")
        if is_missing(sheet) or is_missing(row_index) or is_missing(raw_record):
            raise ValidationError("Sheet name, row index, and record data are required")
        record = parse_json_param("record", raw_record, dict)
        return self.service.update_record(str(sheet), row_index, record)

    def _delete(self, params: Mapping[str, Any]) -> Any:
        sheet = params.get("sheet")
        row_index = parse_row_index(params.get("rowIndex"))
        if is_missing(sheet) or is_missing(row_index):
            raise ValidationError("Sheet name and row index are required")
        return self.service.delete_record(str(sheet), row_index)

    def _create_sheet(self, params: Mapping[str, Any]) -> Any:
        sheet_name = params.get("sheetName")
        raw_headers = params.get("headers")
        if is_missing(sheet_name) or is_missing(raw_headers):
            raise ValidationError("Sheet name and headers are required")
        headers = parse_json_param("headers", raw_headers, list)
        return self.service.create_sheet(str(sheet_name), headers)

    def _add_column(self, params: Mapping[str, Any]) -> Any:
        sheet = params.get("sheet")
        column_name = params.get("columnName")
        if is_missing(sheet) or is_missing(column_name):
            raise ValidationError("Sheet name and column name are required")
        position = (
            ColumnPosition.START
            if params.get("position") == ColumnPosition.START.value
            else ColumnPosition.END
        )
        return self.service.add_column(str(sheet), str(column_name), position)
