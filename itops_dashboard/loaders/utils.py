"""
Shared utilities for sheet ingestion: date normalisation and lenient number
coercion of spreadsheet cell text.
"""

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"^[+-]?\d+")


def parse_sheet_date(val: Any) -> str | None:
    """Convert a sheet date like "11/25/2025" to "2025-11-25".

    Month and day may be unpadded. Returns None for missing values, values
    without exactly three slash-separated parts, or non-numeric parts.
    """
    if val is None:
        return None
    text = str(val).strip()
    if not text:
        return None

    parts = [p.strip() for p in text.split("/")]
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        logger.debug("Could not parse sheet date: %r", val)
        return None

    month, day, year = parts
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def safe_float(val: Any) -> float | None:
    """Coerce cell text to float, returning None for non-numeric values.

    The leading number is used, so "12.5 GB" gives 12.5 and "78%" gives 78.0.
    """
    if val is None:
        return None
    if isinstance(val, (int, float)):
        return float(val)
    match = _LEADING_NUMBER.match(str(val).strip())
    if match is None:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def safe_int(val: Any) -> int | None:
    """Coerce cell text to int, truncating at the first non-digit."""
    if val is None:
        return None
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        return int(val)
    match = _LEADING_INT.match(str(val).strip())
    if match is None:
        return None
    return int(match.group(0))
