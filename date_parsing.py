"""
date_parsing.py

Parsers for the two date formats the dashboard deals with:

* display dates from the folio (``DD/MM/YYYY``)
* date-range inputs (``YYYY-MM-DD``)

Both return ``None`` on malformed input instead of raising.
"""

from __future__ import annotations

import re
from datetime import date
from typing import List, Optional

_DIGITS = re.compile(r"[0-9]+")


def _split_numeric(value: Optional[str], separator: str) -> Optional[List[int]]:
    if not value or not isinstance(value, str):
        return None
    parts = value.strip().split(separator)
    if len(parts) != 3:
        return None
    numbers = []
    for part in parts:
        part = part.strip()
        if not _DIGITS.fullmatch(part):
            return None
        numbers.append(int(part))
    return numbers


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None


def parse_display_date(value: Optional[str]) -> Optional[date]:
    """Parse a folio date such as ``19/01/2026``."""
    parts = _split_numeric(value, "/")
    if parts is None:
        return None
    day, month, year = parts
    return _build_date(year, month, day)


def parse_input_date(value: Optional[str]) -> Optional[date]:
    """Parse a date-range input such as ``2026-01-19``."""
    parts = _split_numeric(value, "-")
    if parts is None:
        return None
    year, month, day = parts
    return _build_date(year, month, day)
