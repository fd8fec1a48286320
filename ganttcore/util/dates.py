from __future__ import annotations

import calendar
import datetime as dt
import re
from typing import Any, Optional

try:
    from zoneinfo import ZoneInfo
except Exception:  # pragma: no cover
    ZoneInfo = None  # type: ignore

_COMPACT_UTC_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})T(\d{2})(\d{2})(\d{2})Z$")  # e.g. 20240105T083000Z
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def normalize_tz_name(name: Optional[str]) -> str:
    """Canonical timezone identifier: "local", "UTC", an IANA name or a fixed offset."""
    s = "" if name is None else str(name).strip()
    if not s:
        return "local"
    low = s.lower()
    if low in {"local", "system"}:
        return "local"
    if low in {"utc", "z", "gmt"}:
        return "UTC"
    return s


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone identifier; raises ValueError when it is not recognised."""
    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc
    if tz_name == "local":
        return dt.datetime.now().astimezone().tzinfo or dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        off_min = (hh * 60 + mm) * (1 if sign_s == "+" else -1)
        return dt.timezone(dt.timedelta(minutes=off_min))

    if ZoneInfo is None:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r} (zoneinfo unavailable)")
    try:
        return ZoneInfo(tz_name)
    except Exception as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def today_date(tz: Optional[dt.tzinfo] = None) -> dt.date:
    if tz is None:
        return dt.date.today()
    return dt.datetime.now(tz=tz).date()


def parse_date(value: Any, tz: Optional[dt.tzinfo] = None) -> Optional[dt.date]:
    """Coerce a collaborator date value to a calendar date.

    Accepted:
      - dt.date / dt.datetime (aware datetimes are converted to `tz` first)
      - ISO-8601 strings: "2024-01-05", "2024-01-05T10:00:00Z", "...+02:00"
      - compact UTC: "20240105T083000Z"

    Anything else (None, "", garbage, out-of-range fields) -> None.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return _datetime_to_date(value, tz)
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None

    s = value.strip()
    if not s:
        return None

    m = _COMPACT_UTC_RE.match(s)
    if m:
        try:
            y, mo, d, hh, mi, ss = (int(x) for x in m.groups())
            aware = dt.datetime(y, mo, d, hh, mi, ss, tzinfo=dt.timezone.utc)
        except ValueError:
            return None
        return _datetime_to_date(aware, tz)

    if len(s) == 10:
        try:
            return dt.date.fromisoformat(s)
        except ValueError:
            return None

    try:
        parsed = dt.datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _datetime_to_date(parsed, tz)


def _datetime_to_date(value: dt.datetime, tz: Optional[dt.tzinfo]) -> dt.date:
    if value.tzinfo is not None and tz is not None:
        return value.astimezone(tz).date()
    return value.date()


def days_between(start: dt.date, end: dt.date) -> int:
    """Whole days from `start` to `end` (negative when `end` is earlier)."""
    return (end - start).days


def add_days(d: dt.date, days: int) -> dt.date:
    """`d` moved by whole days, clamped to date.min .. date.max."""
    n = int(days)
    try:
        return d + dt.timedelta(days=n)
    except OverflowError:
        return dt.date.max if n > 0 else dt.date.min


def start_of_week(d: dt.date, week_start: int = 6) -> dt.date:
    """First day of the week containing `d`; `week_start` uses date.weekday() numbering (6 = Sunday)."""
    back = (d.weekday() - int(week_start) % 7) % 7
    return add_days(d, -back)


def start_of_month(d: dt.date) -> dt.date:
    return d.replace(day=1)


def end_of_month(d: dt.date) -> dt.date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])
