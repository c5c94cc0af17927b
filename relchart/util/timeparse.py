# relchart/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Any, Optional

from relchart.errors import DateParseFailure

DAY_MS = 86_400_000

_YM_RE = re.compile(r"^(\d{4})-(\d{2})$")
_YMD_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


def _utc_ms(d: dt.datetime) -> int:
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    delta = d - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def parse_date_ms_strict(value: Any) -> int:
    """Parse a record date into UTC epoch milliseconds.

    Accepted:
      - "YYYY-MM-DD"
      - "YYYY-MM" (normalized to the first of the month)
      - ISO datetimes ("2024-05-13T10:00:00Z"); naive values are taken as UTC
      - datetime.date / datetime.datetime objects

    Raises DateParseFailure for anything else.
    """
    if isinstance(value, dt.datetime):
        return _utc_ms(value)
    if isinstance(value, dt.date):
        return _utc_ms(dt.datetime(value.year, value.month, value.day))
    if value is None:
        raise DateParseFailure("missing date")

    s = str(value).strip()
    if not s:
        raise DateParseFailure("empty date")

    m = _YM_RE.match(s)
    if m:
        s = f"{m.group(1)}-{m.group(2)}-01"

    m = _YMD_RE.match(s)
    try:
        if m:
            d = dt.datetime(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        else:
            d = dt.datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError as ex:
        raise DateParseFailure(f"unparseable date {s!r}: {ex}") from ex
    return _utc_ms(d)


def parse_date_ms(value: Any) -> Optional[int]:
    """Like parse_date_ms_strict but returns None for unparseable input."""
    try:
        return parse_date_ms_strict(value)
    except DateParseFailure:
        return None


def utc_from_ms(ms: int) -> dt.datetime:
    return _EPOCH + dt.timedelta(milliseconds=int(ms))


def day_key(ms: int) -> int:
    """UTC midnight (epoch ms) of the calendar day containing `ms`."""
    return (int(ms) // DAY_MS) * DAY_MS


def month_start_ms(year: int, month: int) -> int:
    return _utc_ms(dt.datetime(year, month, 1))


def format_ymd(ms: int) -> str:
    return utc_from_ms(ms).strftime("%Y-%m-%d")
