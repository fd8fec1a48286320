from __future__ import annotations

import datetime as dt
from typing import Optional, Tuple

from .model import Placement, Task, ViewWindow
from .util.dates import add_days, days_between, today_date


def effective_interval(task: Task, today: Optional[dt.date] = None) -> Tuple[dt.date, dt.date]:
    """(start, end) with defaults: missing start -> today, missing due -> start + 1 day."""
    start = task.start
    if start is None:
        start = today if today is not None else today_date()
    end = task.due if task.due is not None else add_days(start, 1)
    return start, end


def effective_duration_days(task: Task, today: Optional[dt.date] = None) -> int:
    """Inclusive day count, floored at 1 (inverted ranges count as one day)."""
    start, end = effective_interval(task, today)
    return max(1, days_between(start, end) + 1)


def project_task(task: Task, window: ViewWindow, *, today: Optional[dt.date] = None) -> Placement:
    """
    Map a task onto 0..100% of the window.

    Rules:
      - start offset clamps at 0 (tasks starting before the window begin at the left edge)
      - width never runs past the right edge (width <= 100 - left)
      - visible while the start offset is inside the window
    """
    start, _end = effective_interval(task, today)
    total = window.total_days

    start_offset = max(0, days_between(window.start, start))
    duration = effective_duration_days(task, today)

    left = (start_offset / total) * 100
    width = min((duration / total) * 100, 100 - left)

    return Placement(
        left_percent=left,
        width_percent=width,
        visible=start_offset < total,
        duration_days=int(duration),
    )


def is_overdue(task: Task, today: Optional[dt.date] = None) -> bool:
    if task.completed:
        return False
    today_d = today if today is not None else today_date()
    _start, end = effective_interval(task, today_d)
    return end < today_d
