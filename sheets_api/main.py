"""
FastAPI application for the Sheets gateway.

This module exposes the gateway over HTTP. Every operation goes through
a single GET entry point whose query parameters select the action, so
the API can be called from a static page with a plain ``<script>`` tag
(JSONP) as well as with ``fetch``.

API Endpoints:
    - GET /health: Health check
    - GET /exec: Gateway entry point (also served at /)

Query parameters:
    - action: getSheets (default), getData, create, update, delete,
      createSheet, addColumn
    - callback: optional JSONP function name
    - sheet, record, rowIndex, sheetName, headers, columnName, position

Example:
    To run the server:
        SHEETS_API_WORKBOOK_ID=/data/crm.xlsx uvicorn sheets_api.main:app --reload

    Or programmatically:
        from sheets_api.main import run_server
        run_server()
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from sheets_api import __version__
from sheets_api.adapters.factory import create_backend
from sheets_api.config import Settings, configure_logging, get_settings
from sheets_api.models.sheets_models import ResponseEnvelope
from sheets_api.services.request_router import RequestRouter
from sheets_api.services.sheets_service import SheetsService

logger = logging.getLogger(__name__)

request_router: RequestRouter | None = None


def build_router(settings: Settings) -> RequestRouter:
    """
    Wire the backend, service and router from settings.

    Args:
        settings: Loaded application settings.

    Returns:
        A RequestRouter bound to the configured workbook.
    """
    backend = create_backend(settings)
    return RequestRouter(SheetsService(backend, workbook_id=settings.workbook_id))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the request router on startup and drops it on shutdown.

    Args:
        app: The FastAPI application instance.
    """
    global request_router
    settings = get_settings()
    request_router = build_router(settings)
    logger.info("Serving workbook %s with %s backend", settings.workbook_id, settings.backend)
    yield
    request_router = None


app = FastAPI(
    title="Sheets CRUD Gateway",
    description="""
    Row-oriented CRUD over the sheets of a spreadsheet workbook.

    ## Features

    - **Records**: read, append, overwrite and delete rows as header-keyed records
    - **Sheets**: list sheets, create a sheet with a styled header row, add columns
    - **JSONP**: pass `callback` to receive `callback(<json>);` for script-tag use

    ## Architecture

    - **Router**: normalizes flat query parameters and builds the response envelope
    - **Service Layer**: the seven sheet operations, independent of transport
    - **Adapters**: openpyxl files, Google Sheets via gspread, or in-memory workbooks
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().get_origins_list(),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def get_router() -> RequestRouter:
    """
    Get the request router instance.

    Returns:
        The global RequestRouter instance.

    Raises:
        HTTPException: If the router is not initialized.
    """
    if request_router is None:
        raise HTTPException(
            status_code=503,
            detail="Sheets gateway is not initialized",
        )
    return request_router


@app.get(
    "/health",
    tags=["System"],
    summary="Health check",
    response_model=dict,
)
async def health_check() -> dict[str, Any]:
    """
    Check the health status of the service.

    Returns:
        Dictionary containing status and timestamp.
    """
    return {
        "status": "healthy",
        "service": "Sheets CRUD Gateway",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get(
    "/exec",
    tags=["Gateway"],
    summary="Run a gateway action",
    response_class=Response,
    responses={
        200: {
            "model": ResponseEnvelope,
            "description": "Envelope with status 200 or 500; JSONP-wrapped when callback is set",
        },
    },
)
@app.get("/", include_in_schema=False, response_class=Response)
def gateway(request: Request) -> Response:
    """
    Run the action named by the ``action`` query parameter.

    The HTTP status is always 200; success or failure is reported in the
    envelope's ``status`` field so that script-tag consumers receive it.

    Args:
        request: The incoming request; all query parameters are forwarded.

    Returns:
        JSON envelope, or a JavaScript callback invocation when
        ``callback`` is given.
    """
    router = get_router()
    body, media_type = router.respond(dict(request.query_params))
    return Response(content=body, media_type=media_type)


def run_server(
    host: str | None = None,
    port: int | None = None,
    reload: bool = False,
) -> None:
    """
    Run the FastAPI server.

    Args:
        host: Host to bind to. Defaults to the configured host.
        port: Port to listen on. Defaults to the configured port.
        reload: Whether to enable auto-reload. Defaults to False.

    Example:
        from sheets_api.main import run_server
        run_server(host="127.0.0.1", port=8080)
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "sheets_api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


if __name__ == "__main__":
    run_server()
