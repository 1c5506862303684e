"""
sheets-api: spreadsheet CRUD gateway.

Exposes the sheets of one workbook as row-oriented records over plain
HTTP GET requests, with a JSONP mode for static web pages, and as MCP
tools for agents.

Architecture:
    - Service layer with a request router, decoupled from transport
    - Pluggable tabular backends: openpyxl files, Google Sheets via
      gspread, or in-memory workbooks
    - Dual protocol: the same router behind FastAPI and MCP
"""

__version__ = "0.1.0"
