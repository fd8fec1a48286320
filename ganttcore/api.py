"""ganttcore.api

Stable *library* entrypoint for ganttcore.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from ganttcore.classify import classify_task, milestone_status, priority_tier
from ganttcore.critical_path import (
    FastHeuristicPath,
    LongestDurationPath,
    available_strategies,
    compute_critical_path,
    get_strategy,
)
from ganttcore.geometry import build_connectors, build_markers
from ganttcore.graph import DependencyGraph
from ganttcore.intents import create_task, edit_task, navigate, view_change
from ganttcore.layout import effective_duration_days, project_task
from ganttcore.model import (
    Connector,
    CriticalPath,
    HostIntent,
    LayoutRecord,
    Milestone,
    MilestoneMarker,
    RescheduleRequest,
    Task,
    TimelineLayout,
    ViewConfig,
    ViewWindow,
)
from ganttcore.normalize import normalize_milestone, normalize_task, normalize_view
from ganttcore.planner import build_timeline, build_timeline_from_payload
from ganttcore.reschedule import build_reschedule, cascade_reschedule
from ganttcore.validate import PayloadValidationError, assert_valid_payload, validate_payload
from ganttcore.window import axis_ticks, resolve_window, shift_anchor, today_offset_percent

__all__ = [
    # model
    "Task",
    "Milestone",
    "ViewConfig",
    "ViewWindow",
    "CriticalPath",
    "LayoutRecord",
    "Connector",
    "MilestoneMarker",
    "RescheduleRequest",
    "HostIntent",
    "TimelineLayout",
    # input
    "normalize_task",
    "normalize_milestone",
    "normalize_view",
    "validate_payload",
    "assert_valid_payload",
    "PayloadValidationError",
    # engine
    "resolve_window",
    "axis_ticks",
    "today_offset_percent",
    "shift_anchor",
    "project_task",
    "effective_duration_days",
    "DependencyGraph",
    "FastHeuristicPath",
    "LongestDurationPath",
    "available_strategies",
    "get_strategy",
    "compute_critical_path",
    "classify_task",
    "priority_tier",
    "milestone_status",
    "build_reschedule",
    "cascade_reschedule",
    "build_connectors",
    "build_markers",
    "build_timeline",
    "build_timeline_from_payload",
    # host intents
    "view_change",
    "navigate",
    "create_task",
    "edit_task",
]
