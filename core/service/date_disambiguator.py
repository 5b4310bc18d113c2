from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

# Two-digit years up to this value are read as 20YY, the rest as 19YY.
TWO_DIGIT_YEAR_PIVOT = 25
MIN_YEAR = 1900

_SEPARATOR_RE = re.compile(r"[/-]")


@dataclass(frozen=True)
class DateRejected:
    reason: str


DateResolution = Union[date, DateRejected]


def resolve_year(year: int) -> int:
    if year < 100:
        return 2000 + year if year <= TWO_DIGIT_YEAR_PIVOT else 1900 + year
    return year


def disambiguate_date(token: str, today: Optional[date] = None) -> DateResolution:
    """Turn ``M/D/YY``-style tokens into a date, or say why not.

    The token is split on ``/`` or ``-`` into month, day and year. Anything
    outside 1..12 / 1..31 / 1900..current year is rejected even when all
    three parts are numeric. A day the month does not have (02/31) is also
    rejected.
    """
    today = today or date.today()
    parts = _SEPARATOR_RE.split(token.strip())
    if len(parts) != 3 or not all(p.isdecimal() for p in parts):
        return DateRejected(f"unparseable date token {token!r}")

    month, day, year = (int(p) for p in parts)
    year = resolve_year(year)

    if not 1 <= month <= 12:
        return DateRejected(f"month out of range: {month}")
    if not 1 <= day <= 31:
        return DateRejected(f"day out of range: {day}")
    if not MIN_YEAR <= year <= today.year:
        return DateRejected(f"year out of range: {year}")
    try:
        return date(year, month, day)
    except ValueError as e:
        return DateRejected(str(e))


def parse_date(token: str, today: Optional[date] = None) -> Optional[date]:
    resolved = disambiguate_date(token, today=today)
    return resolved if isinstance(resolved, date) else None
