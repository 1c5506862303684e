"""
Service layer for the Sheets gateway.

Contains the record mapping, the seven sheet operations and the request
router, decoupled from transport layers (HTTP/MCP).
"""

from sheets_api.services.request_router import RequestRouter, format_response
from sheets_api.services.sheets_service import SheetsService

__all__ = [
    "RequestRouter",
    "SheetsService",
    "format_response",
]
