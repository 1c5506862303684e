"""
Test fixtures and utilities for the Sheets gateway tests.

This module provides shared fixtures including an in-memory workbook,
temporary workbook files, and service/router instances.
"""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from openpyxl import Workbook

from sheets_api.adapters.memory_adapter import InMemoryBackend, InMemoryWorkbook
from sheets_api.services.request_router import RequestRouter
from sheets_api.services.sheets_service import SheetsService

WORKBOOK_ID = "test-workbook"


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    """
    Create an in-memory backend holding one seeded workbook.

    The workbook has a "Users" sheet (headers plus two records) and an
    "Empty" sheet.

    Returns:
        InMemoryBackend instance.
    """
    backend = InMemoryBackend()
    workbook = backend.add_workbook(WORKBOOK_ID)
    workbook.insert_sheet(
        "Users",
        rows=[
            ["name", "email"],
            ["Ann", "a@x.com"],
            ["Bob", "b@x.com"],
        ],
    )
    workbook.insert_sheet("Empty")
    return backend


@pytest.fixture
def memory_workbook(memory_backend: InMemoryBackend) -> InMemoryWorkbook:
    """Return the seeded in-memory workbook."""
    return memory_backend.workbooks[WORKBOOK_ID]


@pytest.fixture
def sheets_service(memory_backend: InMemoryBackend) -> SheetsService:
    """
    Create a SheetsService bound to the seeded in-memory workbook.

    Returns:
        SheetsService instance.
    """
    return SheetsService(memory_backend, workbook_id=WORKBOOK_ID)


@pytest.fixture
def request_router(sheets_service: SheetsService) -> RequestRouter:
    """Create a RequestRouter over the in-memory service."""
    return RequestRouter(sheets_service)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_workbook_file(temp_dir: Path) -> Path:
    """
    Create a sample .xlsx workbook for testing.

    Args:
        temp_dir: Temporary directory path.

    Returns:
        Path to the workbook with a "Users" sheet and an empty "Empty" sheet.
    """
    file_path = temp_dir / "sample.xlsx"

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Users"
    worksheet.append(["name", "email", "age"])
    worksheet.append(["Ann", "a@x.com", 30])
    worksheet.append(["Bob", "b@x.com", 25])
    workbook.create_sheet("Empty")
    workbook.save(str(file_path))
    workbook.close()

    return file_path
