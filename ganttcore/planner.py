from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Iterable, List, Optional, Union

from .classify import classify_task, tone_for
from .critical_path import CriticalPathStrategy, get_strategy
from .geometry import build_connectors, build_markers
from .graph import DependencyGraph
from .layout import is_overdue, project_task
from .model import Connector, LayoutRecord, Milestone, Task, TimelineLayout, ViewConfig
from .normalize import normalize_milestones, normalize_tasks, normalize_view
from .util.dates import today_date
from .window import axis_ticks, resolve_window, today_offset_percent


def build_timeline(
    tasks: Iterable[Task],
    milestones: Iterable[Milestone] = (),
    config: Optional[ViewConfig] = None,
    *,
    strategy: Union[str, CriticalPathStrategy, None] = None,
    today: Optional[dt.date] = None,
) -> TimelineLayout:
    """
    Run the whole pipeline for one render pass. Deterministic for a fixed `today`.

    Every input task gets a LayoutRecord, row = input position. Tasks that
    repeat an earlier id still get their own bar, but the dependency graph,
    critical path and connectors use the first task with that id.
    """
    cfg = config if config is not None else ViewConfig()
    today_d = today if today is not None else today_date()
    task_list = list(tasks)

    window = resolve_window(cfg.granularity, cfg.anchor, week_start=cfg.week_start, today=today_d)
    graph = DependencyGraph.build(task_list)
    path = get_strategy(strategy).compute(graph, today=today_d)

    placements = [project_task(t, window, today=today_d) for t in task_list]

    records: List[LayoutRecord] = []
    for row, (task, placement) in enumerate(zip(task_list, placements)):
        cls = classify_task(task, path)
        records.append(
            LayoutRecord(
                task_id=task.id,
                row=row,
                left_percent=placement.left_percent,
                width_percent=placement.width_percent,
                visible=placement.visible,
                classification=cls,
                tone=tone_for(cls),
                critical=task.id in path,
                progress_percent=0 if task.completed else int(task.progress),
                overdue=is_overdue(task, today_d),
            )
        )

    connectors: List[Connector] = []
    if cfg.show_dependencies:
        first_row: Dict[str, int] = {}
        for row, task in enumerate(task_list):
            first_row.setdefault(task.id, row)
        rows = [first_row[t.id] for t in graph.tasks]
        connectors = build_connectors(graph, [placements[r] for r in rows], path, rows=rows)
    markers = build_markers(milestones, window, today=today_d)

    return TimelineLayout(
        window=window,
        records=tuple(records),
        critical_path=path,
        connectors=tuple(connectors),
        markers=tuple(markers),
        axis=axis_ticks(window, today=today_d),
        today_percent=today_offset_percent(window, today_d),
    )


def build_timeline_from_payload(
    payload: Dict[str, Any],
    *,
    strategy: Union[str, CriticalPathStrategy, None] = None,
    today: Optional[dt.date] = None,
    tz: Optional[dt.tzinfo] = None,
) -> TimelineLayout:
    """
    Payload shape:
      {
        "view": {"granularity": "month", "anchorDate": "2024-03-01", "showDependencies": true},
        "tasks": [...],
        "milestones": [...],
        "critical_path": "fast"      (optional; `strategy` argument wins)
      }
    """
    data = payload if isinstance(payload, dict) else {}
    tasks = normalize_tasks(data.get("tasks"), tz=tz)
    milestones = normalize_milestones(data.get("milestones"), tz=tz)
    config = normalize_view(data.get("view"), tz=tz)

    chosen = strategy
    if chosen is None and isinstance(data.get("critical_path"), str):
        chosen = data["critical_path"]

    return build_timeline(tasks, milestones, config, strategy=chosen, today=today)
