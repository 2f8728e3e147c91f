"""Conversion of typed worksheet cell values into text and amounts."""

from datetime import date, datetime
from decimal import Decimal

from insurance_summary.parsers.base import RawRow
from insurance_summary.utils.decimal_utils import ZERO, safe_decimal


def safe_get(row: RawRow, idx: int) -> object | None:
    """Safely get a value from a row.

    Args:
        row: Worksheet row.
        idx: 0-based column index.

    Returns:
        Value at index, or None when the row is too short.
    """
    if idx < 0 or idx >= len(row):
        return None
    return row[idx]


def cell_text(value: object | None, date_format: str = "%Y-%m-%d") -> str:
    """Render a cell value as a trimmed label.

    Date cells use ``date_format``; whole numbers lose their decimal part
    so an employee ID stored as 1042.0 reads "1042".

    Args:
        value: Cell value.
        date_format: strftime format for date cells.

    Returns:
        Text value, or "" for blanks and unsupported types.
    """
    if value is None or isinstance(value, bool):
        return ""

    if isinstance(value, str):
        return value.strip()

    if isinstance(value, (datetime, date)):
        return value.strftime(date_format)

    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)

    if isinstance(value, (int, Decimal)):
        return str(value)

    return ""


def cell_amount(value: object | None) -> Decimal:
    """Read a monetary amount from a cell.

    Unparseable and blank cells read as zero so the row is dropped by the
    zero-amount rule instead of failing the whole report.

    Args:
        value: Cell value.

    Returns:
        Amount as Decimal.
    """
    if isinstance(value, (datetime, date)):
        return ZERO
    return safe_decimal(value)
