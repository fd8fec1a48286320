from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional, Sequence

from .model import DEFAULT_GRANULARITY, DEFAULT_WEEK_START, GRANULARITIES, Milestone, Task, ViewConfig
from .util.console import eprint, obs_enabled
from .util.dates import parse_date


def _first(raw: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return None


def _ident(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip()


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on", "completed", "done"}
    return bool(value)


def _date_field(raw: Dict[str, Any], keys: Sequence[str], *, label: str, ident: str, tz: Optional[dt.tzinfo]) -> Optional[dt.date]:
    value = _first(raw, *keys)
    out = parse_date(value, tz)
    if out is None and value not in (None, "") and obs_enabled():
        eprint(f"[ganttcore.normalize] WARN: invalid {label} date id={ident!r} value={value!r}")
    return out


def _progress(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        p = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, min(100, p))


def normalize_task(raw: Dict[str, Any], *, tz: Optional[dt.tzinfo] = None) -> Optional[Task]:
    """Build a Task from a collaborator dict (camelCase or snake_case keys).

    Returns None when the dict has no usable id.
    """
    if not isinstance(raw, dict):
        return None
    ident = _ident(_first(raw, "id", "Id", "task_id"))
    if not ident:
        return None

    deps_raw = _first(raw, "dependencies", "depends", "predecessors") or []
    if isinstance(deps_raw, (str, int)) and not isinstance(deps_raw, bool):
        deps_raw = [deps_raw]
    if not isinstance(deps_raw, (list, tuple)):
        deps_raw = []
    deps = tuple(d for d in (_ident(x) for x in deps_raw) if d)

    assignee = _first(raw, "assignee", "assigned_to")

    return Task(
        id=ident,
        title=str(_first(raw, "title", "name", "description") or ""),
        start=_date_field(raw, ("start", "startDate", "start_date"), label="start", ident=ident, tz=tz),
        due=_date_field(raw, ("due", "dueDate", "due_date"), label="due", ident=ident, tz=tz),
        completed=_flag(_first(raw, "completed", "isCompleted")),
        priority=str(_first(raw, "priority") or "Medium").strip(),
        progress=_progress(_first(raw, "progress")),
        dependencies=deps,
        assignee=None if assignee is None else str(assignee),
        description=str(_first(raw, "description") or ""),
    )


def normalize_milestone(raw: Dict[str, Any], *, tz: Optional[dt.tzinfo] = None) -> Optional[Milestone]:
    if not isinstance(raw, dict):
        return None
    ident = _ident(_first(raw, "id", "Id", "milestone_id"))
    if not ident:
        return None
    return Milestone(
        id=ident,
        title=str(_first(raw, "title", "name") or ""),
        due=_date_field(raw, ("due", "dueDate", "due_date"), label="due", ident=ident, tz=tz),
        completed=_flag(_first(raw, "completed", "isCompleted")),
    )


def normalize_tasks(raw_tasks: Any, *, tz: Optional[dt.tzinfo] = None) -> List[Task]:
    if not isinstance(raw_tasks, list):
        return []
    out: List[Task] = []
    for raw in raw_tasks:
        t = normalize_task(raw, tz=tz)
        if t is not None:
            out.append(t)
    return out


def normalize_milestones(raw_milestones: Any, *, tz: Optional[dt.tzinfo] = None) -> List[Milestone]:
    if not isinstance(raw_milestones, list):
        return []
    out: List[Milestone] = []
    for raw in raw_milestones:
        m = normalize_milestone(raw, tz=tz)
        if m is not None:
            out.append(m)
    return out


def normalize_view(raw: Any, *, tz: Optional[dt.tzinfo] = None) -> ViewConfig:
    """View dict -> ViewConfig. Unknown granularity falls back to month; bad anchor to None (today)."""
    if not isinstance(raw, dict):
        return ViewConfig()

    gran = str(_first(raw, "granularity", "view") or DEFAULT_GRANULARITY).strip().lower()
    if gran not in GRANULARITIES:
        if obs_enabled():
            eprint(f"[ganttcore.normalize] WARN: unknown granularity {gran!r}; using {DEFAULT_GRANULARITY}")
        gran = DEFAULT_GRANULARITY

    anchor_raw = _first(raw, "anchor", "anchorDate", "anchor_date", "startDate")
    anchor = parse_date(anchor_raw, tz)
    if anchor is None and anchor_raw not in (None, "") and obs_enabled():
        eprint(f"[ganttcore.normalize] WARN: invalid anchor date value={anchor_raw!r}; using today")

    show = _first(raw, "show_dependencies", "showDependencies")
    week_start = _first(raw, "week_start", "weekStart")
    if not isinstance(week_start, int) or isinstance(week_start, bool):
        week_start = DEFAULT_WEEK_START

    return ViewConfig(
        granularity=gran,
        anchor=anchor,
        show_dependencies=True if show is None else _flag(show),
        week_start=int(week_start) % 7,
    )
