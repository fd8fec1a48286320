"""Host intents: opaque signals forwarded to the host application, never interpreted here."""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from .model import HostIntent, ViewConfig, ViewWindow
from .util.dates import parse_date
from .window import shift_anchor

VIEW_CHANGE = "view_change"
NAVIGATE = "navigate"
CREATE_TASK = "create_task"
EDIT_TASK = "edit_task"


def view_change(granularity: str, anchor: Any = None) -> HostIntent:
    d = parse_date(anchor)
    return HostIntent(
        kind=VIEW_CHANGE,
        data={"granularity": str(granularity), "anchor": d.isoformat() if d else None},
    )


def navigate(config: ViewConfig, window: ViewWindow, steps: int) -> HostIntent:
    """Previous (steps < 0) / next (steps > 0) page; carries the shifted anchor."""
    new_anchor = shift_anchor(config.anchor, window, steps)
    return HostIntent(
        kind=NAVIGATE,
        data={"granularity": window.granularity, "anchor": new_anchor.isoformat(), "steps": int(steps)},
    )


def create_task(anchor: Optional[dt.date] = None) -> HostIntent:
    return HostIntent(kind=CREATE_TASK, data={"anchor": anchor.isoformat() if anchor else None})


def edit_task(task_id: str) -> HostIntent:
    return HostIntent(kind=EDIT_TASK, data={"task_id": str(task_id)})
