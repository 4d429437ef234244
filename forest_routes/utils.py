"""Shared numeric helpers for the forest route statistics pipeline.

Contains the canonical implementations of segment-length parsing, mileage
rounding and mileage formatting.  All callsites import from here rather
than maintaining local copies.
"""

import math
from decimal import ROUND_HALF_UP, Decimal


def safe_float(value, default: float = 0.0) -> float:
    """Convert a value to float, returning default for empty/None/non-numeric.

    Segment lengths arrive as JSON numbers or as strings from CSV exports.
    Anything unparseable (lists, objects, booleans, NaN, infinities) and any
    negative length counts as the default so a bad row still contributes to
    record counts without breaking the non-negative mileage fields.

    Args:
        value: The raw SEG_LENGTH (str, int, float, None or any JSON value).
        default: Fallback value if conversion fails.

    Returns:
        Float value or default.
    """
    if value is None or isinstance(value, bool):
        return default
    if not isinstance(value, (int, float, str)):
        return default
    try:
        result = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return default
    if math.isnan(result) or math.isinf(result) or result < 0:
        return default
    return result


def round_mileage(value: float, decimals: int) -> float:
    """Round to ``decimals`` places, halves away from zero.

    Rounds the shortest decimal representation of the float rather than its
    binary expansion, so 3.005 becomes 3.01 (binary round() gives 3.0).

    Args:
        value: Accumulated mileage.
        decimals: Number of decimal places to keep.

    Returns:
        Rounded float.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def format_miles(miles: float) -> str:
    """Format a mileage with thousands separators and two decimals.

    Produces output like "1,234.50 mi" for log lines and reports.
    """
    return f"{miles:,.2f} mi"
