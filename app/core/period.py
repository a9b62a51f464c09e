"""Normalize loose billing period expressions to a canonical YYYY-MM key."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

DEFAULT_PERIOD = "2025-01"

# Keyed by the three-letter prefix every English month name starts with.
MONTHS = {
    "jan": "01",
    "feb": "02",
    "mar": "03",
    "apr": "04",
    "may": "05",
    "jun": "06",
    "jul": "07",
    "aug": "08",
    "sep": "09",
    "oct": "10",
    "nov": "11",
    "dec": "12",
}

_CANONICAL_RE = re.compile(r"^\d{4}-\d{2}$")
_MONTH_NAME_RE = re.compile(r"\b(" + "|".join(MONTHS) + r")")
_YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")
_NUMERIC_RE = re.compile(r"(?<!\d)(\d{1,2})[/-](\d{4})(?!\d)")


def normalize_period(raw: Optional[str], today: Optional[date] = None) -> str:
    """
    Map a period expression to YYYY-MM. Never raises.

    Order: canonical passthrough, month name (with an explicit year or the
    current one), MM/YYYY or MM-YYYY, else DEFAULT_PERIOD.
    """
    if raw is None:
        return DEFAULT_PERIOD
    text = str(raw).strip().lower()
    if not text:
        return DEFAULT_PERIOD

    if _CANONICAL_RE.match(text):
        return text

    name_match = _MONTH_NAME_RE.search(text)
    if name_match:
        month = MONTHS[name_match.group(1)]
        year_match = _YEAR_RE.search(text)
        if year_match:
            year = year_match.group(1)
        else:
            year = str((today or date.today()).year)
        return f"{year}-{month}"

    numeric_match = _NUMERIC_RE.search(text)
    if numeric_match:
        month, year = numeric_match.groups()
        return f"{year}-{month.zfill(2)}"

    return DEFAULT_PERIOD
