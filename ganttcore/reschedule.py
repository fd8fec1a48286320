from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

from .graph import DependencyGraph
from .layout import effective_interval
from .model import RescheduleRequest, Task
from .util.dates import add_days, days_between, parse_date, today_date

CASCADE_MODES = ("shift", "push")


def build_reschedule(task: Task, new_start, *, today: Optional[dt.date] = None) -> RescheduleRequest:
    """
    Drag gesture -> update request for the external task store.

    The duration (due - start, in whole days) is taken from the task before the
    move and re-applied from the new start. No validation: past dates, conflicts
    and predecessor violations are all accepted, and dependents are left alone.
    """
    today_d = today if today is not None else today_date()
    start, due = effective_interval(task, today_d)
    duration = days_between(start, due)

    new_start_d = parse_date(new_start)
    if new_start_d is None:
        new_start_d = today_d

    return RescheduleRequest(task_id=task.id, start=new_start_d, due=add_days(new_start_d, duration))


def cascade_reschedule(
    graph: DependencyGraph,
    request: RescheduleRequest,
    *,
    mode: str = "shift",
    today: Optional[dt.date] = None,
) -> List[RescheduleRequest]:
    """
    Opt-in pass after build_reschedule: one request per affected transitive successor.

    Modes:
      shift  every transitive successor moves by the same day delta as the moved task
      push   a successor moves only when it starts on/before the latest due of its
             predecessors; it is placed the day after, keeping its duration

    The moved task's own request is not repeated. Successors caught in a cycle
    with the moved task are visited once.
    """
    if mode not in CASCADE_MODES:
        raise ValueError(f"Unknown cascade mode: {mode!r} (choose from {', '.join(CASCADE_MODES)})")

    root = graph.index_of(request.task_id)
    if root is None:
        return []

    today_d = today if today is not None else today_date()
    reachable = graph.reachable_from(root)
    affected = set(reachable)
    if not affected:
        return []

    intervals: Dict[int, tuple[dt.date, dt.date]] = {
        i: effective_interval(graph.task(i), today_d) for i in affected
    }
    intervals[root] = (request.start, request.due)

    old_root_start, _ = effective_interval(graph.task(root), today_d)
    delta = days_between(old_root_start, request.start)

    ordered = [i for i in graph.topological_order() if i in affected]
    # successors on or behind a cycle never reach the topological order; keep them in BFS order
    in_order = set(ordered)
    ordered += [i for i in reachable if i not in in_order]

    out: List[RescheduleRequest] = []
    for i in ordered:
        start, due = intervals[i]
        if mode == "shift":
            if delta == 0:
                continue
            new_start = add_days(start, delta)
            new_due = add_days(due, delta)
        else:
            latest: Optional[dt.date] = None
            for p in graph.predecessors(i):
                if p not in intervals:
                    intervals[p] = effective_interval(graph.task(p), today_d)
                p_due = intervals[p][1]
                if latest is None or p_due > latest:
                    latest = p_due
            if latest is None or start > latest:
                continue
            new_start = add_days(latest, 1)
            new_due = add_days(new_start, days_between(start, due))
        intervals[i] = (new_start, new_due)
        out.append(RescheduleRequest(task_id=graph.task(i).id, start=new_start, due=new_due))
    return out
