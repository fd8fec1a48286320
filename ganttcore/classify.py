from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional, Tuple

from .model import CriticalPath, Milestone, Task
from .util.dates import days_between, today_date

COMPLETED_CRITICAL = "completed-critical"
COMPLETED = "completed"
CRITICAL = "critical"
PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"

TONES: Dict[str, str] = {
    COMPLETED_CRITICAL: "positive-strong",
    COMPLETED: "positive",
    CRITICAL: "alert",
    PRIORITY_HIGH: "warning",
    PRIORITY_MEDIUM: "info",
    PRIORITY_LOW: "muted",
}

LEGEND: Tuple[Tuple[str, str], ...] = (
    (CRITICAL, "Critical Path"),
    (PRIORITY_HIGH, "High Priority"),
    (PRIORITY_MEDIUM, "Medium Priority"),
    (PRIORITY_LOW, "Low Priority"),
    (COMPLETED, "Completed"),
)

_PRIORITY_ALIASES = {
    "high": PRIORITY_HIGH,
    "h": PRIORITY_HIGH,
    "medium": PRIORITY_MEDIUM,
    "m": PRIORITY_MEDIUM,
    "low": PRIORITY_LOW,
    "l": PRIORITY_LOW,
}

MILESTONE_OVERDUE = "overdue"
MILESTONE_PENDING = "pending"
MILESTONE_COMPLETED = "completed"
DUE_SOON_DAYS = 7


def priority_tier(priority: Optional[str]) -> str:
    """High/Medium/Low (or H/M/L, any case); anything else reads as medium."""
    key = str(priority or "").strip().lower()
    return _PRIORITY_ALIASES.get(key, PRIORITY_MEDIUM)


def classify_task(task: Task, critical_path: CriticalPath) -> str:
    critical = task.id in critical_path
    if task.completed:
        return COMPLETED_CRITICAL if critical else COMPLETED
    if critical:
        return CRITICAL
    return priority_tier(task.priority)


def tone_for(classification: str) -> str:
    return TONES.get(classification, TONES[PRIORITY_MEDIUM])


def classify_tasks(tasks: List[Task], critical_path: CriticalPath) -> Dict[str, str]:
    return {t.id: classify_task(t, critical_path) for t in tasks}


def milestone_status(milestone: Milestone, today: Optional[dt.date] = None) -> str:
    if milestone.completed:
        return MILESTONE_COMPLETED
    today_d = today if today is not None else today_date()
    if milestone.due is not None and milestone.due < today_d:
        return MILESTONE_OVERDUE
    return MILESTONE_PENDING


def milestone_due_soon(milestone: Milestone, today: Optional[dt.date] = None, days: int = DUE_SOON_DAYS) -> bool:
    if milestone.completed or milestone.due is None:
        return False
    today_d = today if today is not None else today_date()
    remaining = days_between(today_d, milestone.due)
    return 0 <= remaining <= int(days)
