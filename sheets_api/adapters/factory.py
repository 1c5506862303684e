"""
Backend selection from settings.
"""

from sheets_api.adapters.base import TabularBackend
from sheets_api.adapters.gspread_adapter import GspreadBackend
from sheets_api.adapters.memory_adapter import InMemoryBackend
from sheets_api.adapters.openpyxl_adapter import OpenpyxlBackend
from sheets_api.config import Settings


def create_backend(settings: Settings) -> TabularBackend:
    """
    Build the tabular backend named by ``settings.backend``.

    The memory backend is pre-seeded with an empty workbook registered
    under ``settings.workbook_id`` so the service can open it.

    Args:
        settings: Loaded application settings.

    Returns:
        A TabularBackend instance.
    """
    if settings.backend == "gspread":
        return GspreadBackend(credentials_file=settings.google_credentials_file)

    if settings.backend == "memory":
        backend = InMemoryBackend()
        backend.add_workbook(settings.workbook_id)
        return backend

    return OpenpyxlBackend()
