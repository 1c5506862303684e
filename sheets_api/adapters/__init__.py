"""
Adapters for tabular backends.

Implements the adapter pattern for different spreadsheet engines:
- OpenpyxlBackend: local .xlsx/.xlsm workbook files
- GspreadBackend: Google spreadsheets through the Sheets API
- InMemoryBackend: in-process workbooks for tests and experiments
"""

from sheets_api.adapters.base import TabularBackend, WorkbookHandle, WorksheetHandle
from sheets_api.adapters.factory import create_backend
from sheets_api.adapters.gspread_adapter import GspreadBackend
from sheets_api.adapters.memory_adapter import InMemoryBackend
from sheets_api.adapters.openpyxl_adapter import OpenpyxlBackend

__all__ = [
    "TabularBackend",
    "WorkbookHandle",
    "WorksheetHandle",
    "OpenpyxlBackend",
    "GspreadBackend",
    "InMemoryBackend",
    "create_backend",
]
