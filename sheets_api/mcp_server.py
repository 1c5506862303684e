"""
MCP (Model Context Protocol) server for the Sheets gateway.

This module exposes the gateway actions as MCP tools so AI agents can
read and edit the configured workbook. It provides the same behavior as
the HTTP entry point: each tool call is routed through the RequestRouter
and returns the same ``{"status", "data"}`` envelope.

MCP Tools:
    - getSheets: List sheets in the workbook
    - getData: Read all rows of a sheet as records
    - create: Append a record
    - update: Overwrite a record by row index
    - delete: Delete a record by row index
    - createSheet: Create a sheet with headers
    - addColumn: Add a named column

Example:
    To run the MCP server:
        SHEETS_API_WORKBOOK_ID=/data/crm.xlsx python -m sheets_api.mcp_server

    Or programmatically:
        from sheets_api.mcp_server import run_mcp_server
        run_mcp_server()
"""

import asyncio
import json
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    TextContent,
    Tool,
)

from sheets_api.config import configure_logging, get_settings
from sheets_api.models.sheets_models import Action
from sheets_api.services.request_router import RequestRouter

SHEET_PROPERTY = {
    "type": "string",
    "description": "Name of the sheet (case-sensitive)",
}
ROW_INDEX_PROPERTY = {
    "type": "integer",
    "minimum": 2,
    "description": "1-based row number; row 1 is the header row",
}
RECORD_PROPERTY = {
    "type": "object",
    "description": "Field values keyed by header name",
}


class MCPSheetsServer:
    """
    MCP server implementation for the Sheets gateway.

    Attributes:
        router: The RequestRouter every tool call is dispatched through.
        server: The MCP Server instance.

    Example:
        mcp_server = MCPSheetsServer(router)
        await mcp_server.run()
    """

    def __init__(self, router: RequestRouter) -> None:
        """
        Initialize the MCP Sheets Server.

        Args:
            router: Router bound to the configured workbook.
        """
        self.router = router
        self.server = Server("sheets-mcp-server")
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Set up MCP request handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """Return the list of available gateway tools."""
            return self._get_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Execute a tool and return the envelope as JSON text."""
            result = await self._execute_tool(name, arguments)
            return [TextContent(type="text", text=json.dumps(result, default=str, indent=2))]

    def _get_tools(self) -> list[Tool]:
        """
        Get the list of available gateway tools.

        Returns:
            List of MCP Tool definitions, one per action.
        """
        return [
            Tool(
                name=Action.GET_SHEETS.value,
                description="List the sheets in the workbook with their 1-based positions.",
                inputSchema={
                    "type": "object",
                    "properties": {},
                    "required": [],
                },
            ),
            Tool(
                name=Action.GET_DATA.value,
                description=(
                    "Read all rows of a sheet. Row 1 is returned as headers; each "
                    "later row is returned with its rowIndex, raw values and a "
                    "record keyed by header."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {"sheet": SHEET_PROPERTY},
                    "required": ["sheet"],
                },
            ),
            Tool(
                name=Action.CREATE.value,
                description=(
                    "Append a record as the last row of a sheet. Fields that are "
                    "not headers are ignored; missing headers are left empty."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "sheet": SHEET_PROPERTY,
                        "record": RECORD_PROPERTY,
                    },
                    "required": ["sheet", "record"],
                },
            ),
            Tool(
                name=Action.UPDATE.value,
                description=(
                    "Overwrite the row at rowIndex with a record. Every column is "
                    "rewritten; omitted fields become empty. Row indexes shift "
                    "after deletes, so re-read the sheet first."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "sheet": SHEET_PROPERTY,
                        "rowIndex": ROW_INDEX_PROPERTY,
                        "record": RECORD_PROPERTY,
                    },
                    "required": ["sheet", "rowIndex", "record"],
                },
            ),
            Tool(
                name=Action.DELETE.value,
                description="Delete the row at rowIndex; rows below move up by one.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "sheet": SHEET_PROPERTY,
                        "rowIndex": ROW_INDEX_PROPERTY,
                    },
                    "required": ["sheet", "rowIndex"],
                },
            ),
            Tool(
                name=Action.CREATE_SHEET.value,
                description="Create a new sheet and write its header row.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "sheetName": {
                            "type": "string",
                            "description": "Name of the new sheet",
                        },
                        "headers": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Column headers for row 1",
                        },
                    },
                    "required": ["sheetName", "headers"],
                },
            ),
            Tool(
                name=Action.ADD_COLUMN.value,
                description="Insert a named column at the start or end of a sheet.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "sheet": SHEET_PROPERTY,
                        "columnName": {
                            "type": "string",
                            "description": "Header text of the new column",
                        },
                        "position": {
                            "type": "string",
                            "enum": ["start", "end"],
                            "default": "end",
                            "description": "Where to insert the column",
                        },
                    },
                    "required": ["sheet", "columnName"],
                },
            ),
        ]

    async def _execute_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Execute a gateway tool.

        Args:
            name: The action name.
            arguments: The tool arguments, using the gateway parameter names.

        Returns:
            The response envelope as a dictionary. Unknown tool names yield
            the ``Invalid action`` error envelope.
        """
        params = {**(arguments or {}), "action": name}
        envelope = await asyncio.to_thread(self.router.handle, params)
        return envelope.model_dump(mode="json")

    async def run(self) -> None:
        """
        Run the MCP server using stdio transport.

        This method starts the server and blocks until it is terminated.
        It uses stdin/stdout for communication with the MCP client.
        """
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def run_mcp_server() -> None:
    """
    Run the MCP Sheets server.

    Builds the router from settings and serves it over stdio.

    Example:
        python -m sheets_api.mcp_server
    """
    from sheets_api.main import build_router

    settings = get_settings()
    configure_logging(settings.log_level)
    server = MCPSheetsServer(build_router(settings))
    asyncio.run(server.run())


if __name__ == "__main__":
    run_mcp_server()
