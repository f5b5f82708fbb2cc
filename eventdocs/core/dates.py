"""
Calendar-date normalization for document codes.

Event dates arrive either as date-only strings ("2025-06-14") or as full
timestamps ("2025-06-14T18:30:00Z"). Date-only strings are read straight from
their components so no timezone can shift them to the previous or next day.
Timestamps are instants and are converted to the display timezone before the
calendar date is taken.

parse_date_input never raises. It returns a ParsedDate whose status tells
"no date" (empty, defaulted to today) apart from "malformed date" (invalid).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Literal, Optional

from dateutil import parser as date_parser

DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateStatus = Literal["ok", "empty", "invalid"]


@dataclass(frozen=True)
class ParsedDate:
    raw: Any
    value: Optional[date]
    status: DateStatus

    @property
    def ok(self) -> bool:
        return self.value is not None

    @property
    def is_invalid(self) -> bool:
        return self.status == "invalid"


def _today(tz: Optional[tzinfo]) -> date:
    if tz is None:
        return datetime.now().date()
    return datetime.now(tz).date()


def _datetime_to_date(value: datetime, tz: Optional[tzinfo]) -> date:
    if value.tzinfo is None:
        return value.date()
    # astimezone(None) = system local time
    return value.astimezone(tz).date()


def _date_from_components(year: int, month: int, day: int) -> Optional[date]:
    """
    Build a calendar date the way the event screens enter it: month/day 0
    read as 1, overflow rolls into the following month or year
    (2025-02-30 → 2025-03-02, 2025-13-01 → 2026-01-01).
    """
    month_index = (month or 1) - 1
    try:
        first = date(year + month_index // 12, month_index % 12 + 1, 1)
        return first + timedelta(days=(day or 1) - 1)
    except (ValueError, OverflowError):
        return None


def _parse_timestamp(text: str) -> Optional[datetime]:
    """
    ISO-8601 first, then a general parser for the other forms rows arrive
    in ("2025/06/14", "June 14, 2025", "Sat, 14 Jun 2025 18:30:00 GMT").
    """
    candidate = text.strip()
    if not candidate:
        return None
    iso = candidate[:-1] + "+00:00" if candidate.endswith(("Z", "z")) else candidate
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    try:
        return date_parser.parse(candidate)
    except (ValueError, OverflowError):
        return None


def parse_date_input(value: Any, tz: Optional[tzinfo] = None) -> ParsedDate:
    """
    Normalize value to a calendar date.

    - None / "" → today (status "empty")
    - "YYYY-MM-DD" → date from the components, month/day "00" read as 1,
      out-of-range values rolled over
    - other strings → ISO-8601 or general date-time parsing, converted to
      tz when aware
    - date / datetime objects → used directly (same tz rule)
    - anything unparsable → status "invalid", value None
    """
    if value is None or value == "":
        return ParsedDate(raw=value, value=_today(tz), status="empty")

    if isinstance(value, datetime):
        return ParsedDate(raw=value, value=_datetime_to_date(value, tz), status="ok")

    if isinstance(value, date):
        return ParsedDate(raw=value, value=value, status="ok")

    if not isinstance(value, str):
        return ParsedDate(raw=value, value=None, status="invalid")

    if DATE_ONLY_PATTERN.match(value):
        year, month, day = (int(part) for part in value.split("-"))
        built = _date_from_components(year, month, day)
        if built is None:
            return ParsedDate(raw=value, value=None, status="invalid")
        return ParsedDate(raw=value, value=built, status="ok")

    parsed = _parse_timestamp(value)
    if parsed is None:
        return ParsedDate(raw=value, value=None, status="invalid")
    return ParsedDate(raw=value, value=_datetime_to_date(parsed, tz), status="ok")


def calendar_key(value: Any, tz: Optional[tzinfo] = None) -> Optional[str]:
    """
    "YYYY-MM-DD" key for grouping by calendar day. Empty or invalid → None.
    """
    if value is None or value == "":
        return None
    parsed = parse_date_input(value, tz)
    if not parsed.ok:
        return None
    return parsed.value.isoformat()


def timestamp_sort_key(value: Any) -> tuple:
    """
    Sort key for created_at values. Naive timestamps are read as UTC;
    missing or unparsable values sort last.
    """
    moment: Optional[datetime] = None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        moment = _parse_timestamp(value)

    if moment is None:
        return (1, 0.0)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (0, moment.timestamp())
