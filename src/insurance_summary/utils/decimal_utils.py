"""Decimal utilities for payroll amounts.

All monetary calculations must use Decimal to avoid floating-point precision issues.
"""

import re
from decimal import Decimal, InvalidOperation


# Currency symbols to strip
CURRENCY_SYMBOLS = {"$", "€", "£"}

# Regex for parentheses-enclosed negatives: ($1,234.56) or (1234.56)
PARENS_NEGATIVE_PATTERN = re.compile(r"^\s*\(\s*([^)]+)\s*\)\s*$")

ZERO = Decimal("0")


def parse_amount(raw_amount: str) -> Decimal:
    """Parse a raw amount string into a signed Decimal.

    Handles various formats:
    - Standard: 1234.56, -1234.56
    - With currency: $1,234.56, -$1,234.56
    - Parentheses for negative: ($1,234.56), (1234.56)

    Commas are always treated as thousands separators.

    Args:
        raw_amount: The raw amount string to parse.

    Returns:
        Parsed amount as Decimal.

    Raises:
        ValueError: If the amount cannot be parsed.
    """
    if not raw_amount or not raw_amount.strip():
        raise ValueError("Empty amount string")

    amount_str = raw_amount.strip()
    is_negative = False

    parens_match = PARENS_NEGATIVE_PATTERN.match(amount_str)
    if parens_match:
        amount_str = parens_match.group(1).strip()
        is_negative = True

    if amount_str.startswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[1:].strip()

    for symbol in CURRENCY_SYMBOLS:
        amount_str = amount_str.replace(symbol, "")
    amount_str = amount_str.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Cannot parse amount '{raw_amount}': {e}") from e

    if not amount.is_finite():
        raise ValueError(f"Cannot parse amount '{raw_amount}': not a finite number")

    return -amount if is_negative else amount


def safe_decimal(value: object, default: Decimal = ZERO) -> Decimal:
    """Safely convert a cell value to Decimal.

    Args:
        value: Value to convert (Decimal, int, float, string, or None).
        default: Default value if conversion fails.

    Returns:
        Decimal value or default.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, Decimal):
        return value if value.is_finite() else default

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        # Convert float to string first for precision
        converted = Decimal(str(value))
        return converted if converted.is_finite() else default

    if isinstance(value, str):
        try:
            return parse_amount(value)
        except ValueError:
            return default

    return default


def format_term(amount: Decimal) -> str:
    """Render an amount as a plain numeric literal for a formula.

    Whole numbers keep one decimal place, so a report cell holding 100
    reads "100.0" in the formula; other values keep their own digits.

    Args:
        amount: Amount to render.

    Returns:
        Fixed-point string without exponent, e.g. "100.0", "12.50" or "-12.5".
    """
    text = format(amount, "f")
    if "." not in text:
        text += ".0"
    return text


def sum_amounts(amounts: list[Decimal]) -> Decimal:
    """Sum a list of Decimal amounts.

    Args:
        amounts: List of Decimal amounts.

    Returns:
        Sum as Decimal.
    """
    total = ZERO
    for amount in amounts:
        total += amount
    return total
