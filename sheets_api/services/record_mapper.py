"""
Mapping between positional rows and header-keyed records.

A sheet's first row holds the field names. A data row becomes a record by
pairing each header with the cell beneath it; a record becomes a row by
looking up every header in order. Both directions are fitted to the
header width: short rows read as "", extra record fields are dropped.
"""

from typing import Any

from sheets_api.adapters.base import is_blank


def header_key(header: Any) -> str:
    """Return the record key for a header cell (headers may be numbers)."""
    if header is None:
        return ""
    return header if isinstance(header, str) else str(header)


def row_to_record(headers: list[Any], row: list[Any]) -> dict[str, Any]:
    """
    Build a record from a data row.

    Args:
        headers: Header row values.
        row: Positional data row values.

    Returns:
        Mapping of header key to cell value, in header order. Cells that are
        missing or blank map to "".
    """
    record: dict[str, Any] = {}
    for position, header in enumerate(headers):
        value = row[position] if position < len(row) else None
        record[header_key(header)] = "" if is_blank(value) else value
    return record


def record_to_row(headers: list[Any], record: dict[str, Any]) -> list[Any]:
    """
    Build a positional row from a record.

    Args:
        headers: Header row values.
        record: Field values keyed by header.

    Returns:
        One value per header; headers absent from the record become "".
    """
    row: list[Any] = []
    for header in headers:
        value = record.get(header_key(header))
        row.append("" if is_blank(value) else value)
    return row
