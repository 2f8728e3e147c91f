"""Sanitization utilities for safe workbook output."""

import re
from typing import Optional


# Characters that trigger formula execution in spreadsheet applications
# when they appear at the start of a cell value
# Includes | for DDE (Dynamic Data Exchange) attack prevention
_FORMULA_CHARS = ("=", "+", "-", "@", "\t", "\r", "\n", "|")

# Characters Excel refuses in worksheet titles
_FORBIDDEN_SHEET_CHARS = re.compile(r"[\\/*?\[\]:]")

# Excel's hard limit on worksheet title length
MAX_SHEET_NAME_LENGTH = 31


def sanitize_cell_text(value: Optional[str]) -> Optional[str]:
    """Sanitize a string value for safe spreadsheet output.

    Prevents formula injection by prefixing values that start with
    formula-triggering characters (=, +, -, @, tab, etc.) with a
    single quote. This is the standard mitigation recommended by
    OWASP for CSV injection.

    Args:
        value: String value to sanitize, or None.

    Returns:
        Sanitized string, or None if input was None.
    """
    if value is None:
        return None

    if not value:
        return value

    if value.startswith(_FORMULA_CHARS):
        return "'" + value

    return value


def sanitize_sheet_name(name: str) -> str:
    """Make a category name usable as a worksheet title.

    Forbidden characters (\\ / * ? [ ] :) are stripped first, then the
    result is truncated to 31 characters. Two names that collapse to the
    same title are not deduplicated.

    Args:
        name: Proposed sheet name.

    Returns:
        Sanitized sheet name.
    """
    return _FORBIDDEN_SHEET_CHARS.sub("", name)[:MAX_SHEET_NAME_LENGTH]
