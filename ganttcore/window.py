from __future__ import annotations

import datetime as dt
from typing import Any, Optional, Tuple

from .model import DEFAULT_GRANULARITY, DEFAULT_WEEK_START, GRANULARITIES, AxisTick, ViewWindow
from .util.dates import add_days, days_between, end_of_month, parse_date, start_of_month, start_of_week, today_date

# Quarter view spans from the anchor's month to the month holding anchor+90d.
QUARTER_LOOKAHEAD_DAYS = 90


def resolve_window(
    granularity: str,
    anchor: Any,
    *,
    week_start: int = DEFAULT_WEEK_START,
    today: Optional[dt.date] = None,
) -> ViewWindow:
    """
    Inclusive display window for a granularity and anchor date.

      week    -> start of the anchor's week .. start + 6 days
      month   -> first .. last day of the anchor's month
      quarter -> first day of the anchor's month .. last day of the month containing anchor + 90 days

    Unknown granularity behaves like month; an unparseable anchor is today.
    """
    gran = str(granularity or "").strip().lower()
    if gran not in GRANULARITIES:
        gran = DEFAULT_GRANULARITY

    anchor_d = parse_date(anchor)
    if anchor_d is None:
        anchor_d = today if today is not None else today_date()

    if gran == "week":
        start = start_of_week(anchor_d, week_start)
        end = add_days(start, 6)
    elif gran == "quarter":
        start = start_of_month(anchor_d)
        end = end_of_month(add_days(anchor_d, QUARTER_LOOKAHEAD_DAYS))
    else:
        start = start_of_month(anchor_d)
        end = end_of_month(anchor_d)

    total_days = max(1, days_between(start, end) + 1)
    return ViewWindow(granularity=gran, anchor=anchor_d, start=start, end=end, total_days=int(total_days))


def window_dates(window: ViewWindow) -> Tuple[dt.date, ...]:
    return tuple(add_days(window.start, i) for i in range(window.total_days))


def axis_ticks(window: ViewWindow, *, today: Optional[dt.date] = None) -> Tuple[AxisTick, ...]:
    """One header tick per day; week view labels weekdays, other views label day numbers with a month line."""
    today_d = today if today is not None else today_date()
    weekly = window.granularity == "week"
    out = []
    for d in window_dates(window):
        out.append(
            AxisTick(
                date=d,
                label=d.strftime("%a") if weekly else str(d.day),
                month_label="" if weekly else d.strftime("%b"),
                is_today=d == today_d,
            )
        )
    return tuple(out)


def today_offset_percent(window: ViewWindow, today: Optional[dt.date] = None) -> Optional[float]:
    """Left offset of the today indicator, or None when today is outside the window."""
    today_d = today if today is not None else today_date()
    offset = days_between(window.start, today_d)
    if offset < 0 or offset >= window.total_days:
        return None
    return (offset / window.total_days) * 100


def shift_anchor(anchor: Optional[dt.date], window: ViewWindow, steps: int) -> dt.date:
    """Previous/next navigation: move the anchor by whole window lengths."""
    base = anchor if anchor is not None else window.anchor
    return add_days(base, int(steps) * window.total_days)
