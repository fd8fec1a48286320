from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

GRANULARITIES = ("week", "month", "quarter")
DEFAULT_GRANULARITY = "month"
DEFAULT_WEEK_START = 6  # Sunday, date.weekday() numbering


@dataclass(frozen=True)
class Task:
    id: str
    title: str = ""
    start: Optional[dt.date] = None
    due: Optional[dt.date] = None
    completed: bool = False
    priority: str = "Medium"
    progress: int = 0
    dependencies: Tuple[str, ...] = ()
    assignee: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class Milestone:
    id: str
    title: str = ""
    due: Optional[dt.date] = None
    completed: bool = False


@dataclass(frozen=True)
class ViewConfig:
    """Caller-owned view state, passed into every evaluation."""

    granularity: str = DEFAULT_GRANULARITY
    anchor: Optional[dt.date] = None
    show_dependencies: bool = True
    week_start: int = DEFAULT_WEEK_START


@dataclass(frozen=True)
class ViewWindow:
    granularity: str
    anchor: dt.date
    start: dt.date
    end: dt.date
    total_days: int

    def contains(self, d: dt.date) -> bool:
        return self.start <= d <= self.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "granularity": self.granularity,
            "anchor": self.anchor.isoformat(),
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "total_days": self.total_days,
        }


@dataclass(frozen=True)
class AxisTick:
    date: dt.date
    label: str
    month_label: str
    is_today: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "label": self.label,
            "month_label": self.month_label,
            "is_today": self.is_today,
        }


@dataclass(frozen=True)
class Placement:
    left_percent: float
    width_percent: float
    visible: bool
    duration_days: int


@dataclass(frozen=True)
class CriticalPath:
    """Ordered task ids of the longest chain (end task first, then its predecessors)."""

    ids: Tuple[str, ...] = ()
    strategy: str = "fast"
    weight: int = 0

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.ids

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

    def to_dict(self) -> Dict[str, Any]:
        return {"ids": list(self.ids), "strategy": self.strategy, "weight": self.weight}


@dataclass(frozen=True)
class LayoutRecord:
    task_id: str
    row: int
    left_percent: float
    width_percent: float
    visible: bool
    classification: str
    tone: str
    critical: bool = False
    progress_percent: int = 0
    overdue: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "row": self.row,
            "left_percent": self.left_percent,
            "width_percent": self.width_percent,
            "visible": self.visible,
            "classification": self.classification,
            "tone": self.tone,
            "critical": self.critical,
            "progress_percent": self.progress_percent,
            "overdue": self.overdue,
        }


@dataclass(frozen=True)
class Connector:
    predecessor_id: str
    successor_id: str
    from_row: int
    to_row: int
    from_percent: float
    to_percent: float
    width_percent: float
    critical: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predecessor_id": self.predecessor_id,
            "successor_id": self.successor_id,
            "from_row": self.from_row,
            "to_row": self.to_row,
            "from_percent": self.from_percent,
            "to_percent": self.to_percent,
            "width_percent": self.width_percent,
            "critical": self.critical,
        }


@dataclass(frozen=True)
class MilestoneMarker:
    milestone_id: str
    offset_percent: float
    status: str  # "overdue" | "pending" | "completed"
    due_soon: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "milestone_id": self.milestone_id,
            "offset_percent": self.offset_percent,
            "status": self.status,
            "due_soon": self.due_soon,
        }


@dataclass(frozen=True)
class RescheduleRequest:
    task_id: str
    start: dt.date
    due: dt.date

    def to_dict(self) -> Dict[str, Any]:
        return {"task_id": self.task_id, "start": self.start.isoformat(), "due": self.due.isoformat()}


@dataclass(frozen=True)
class HostIntent:
    kind: str  # "view_change" | "navigate" | "create_task" | "edit_task"
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "data": dict(self.data)}


@dataclass(frozen=True)
class TimelineLayout:
    window: ViewWindow
    records: Tuple[LayoutRecord, ...]
    critical_path: CriticalPath
    connectors: Tuple[Connector, ...]
    markers: Tuple[MilestoneMarker, ...]
    axis: Tuple[AxisTick, ...]
    today_percent: Optional[float]

    def record_for(self, task_id: str) -> Optional[LayoutRecord]:
        for r in self.records:
            if r.task_id == task_id:
                return r
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "window": self.window.to_dict(),
            "records": [r.to_dict() for r in self.records],
            "critical_path": self.critical_path.to_dict(),
            "connectors": [c.to_dict() for c in self.connectors],
            "markers": [m.to_dict() for m in self.markers],
            "axis": [t.to_dict() for t in self.axis],
            "today_percent": self.today_percent,
        }


__all__ = [
    "GRANULARITIES",
    "Task",
    "Milestone",
    "ViewConfig",
    "ViewWindow",
    "AxisTick",
    "Placement",
    "CriticalPath",
    "LayoutRecord",
    "Connector",
    "MilestoneMarker",
    "RescheduleRequest",
    "HostIntent",
    "TimelineLayout",
]
