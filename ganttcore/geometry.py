from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Sequence

from .classify import milestone_due_soon, milestone_status
from .graph import DependencyGraph
from .model import Connector, CriticalPath, Milestone, MilestoneMarker, Placement, ViewWindow
from .util.dates import days_between, today_date


def build_connectors(
    graph: DependencyGraph,
    placements: Sequence[Placement],
    critical_path: Optional[CriticalPath] = None,
    rows: Optional[Sequence[int]] = None,
) -> List[Connector]:
    """
    Dependency lines from the predecessor bar's right edge to the successor bar's left edge.

    `placements` is indexed like graph.tasks. Overlapping bars give a zero or
    negative width; those connectors are still emitted.
    `rows` maps graph indices to display rows (default: the graph index itself).
    """
    path = critical_path if critical_path is not None else CriticalPath()
    # path runs end task first, so each (predecessor, successor) link is (ids[k+1], ids[k])
    on_path = set(zip(path.ids[1:], path.ids[:-1]))
    out: List[Connector] = []
    for pred, succ in graph.edges():
        src = placements[pred]
        dst = placements[succ]
        from_pct = src.left_percent + src.width_percent
        to_pct = dst.left_percent
        pred_id = graph.task(pred).id
        succ_id = graph.task(succ).id
        out.append(
            Connector(
                predecessor_id=pred_id,
                successor_id=succ_id,
                from_row=rows[pred] if rows is not None else pred,
                to_row=rows[succ] if rows is not None else succ,
                from_percent=from_pct,
                to_percent=to_pct,
                width_percent=to_pct - from_pct,
                critical=(pred_id, succ_id) in on_path,
            )
        )
    return out


def milestone_offset_percent(milestone: Milestone, window: ViewWindow) -> Optional[float]:
    if milestone.due is None or not window.contains(milestone.due):
        return None
    return (days_between(window.start, milestone.due) / window.total_days) * 100


def build_markers(
    milestones: Iterable[Milestone],
    window: ViewWindow,
    *,
    today: Optional[dt.date] = None,
) -> List[MilestoneMarker]:
    """Markers for milestones due inside the window; the rest are omitted entirely."""
    today_d = today if today is not None else today_date()
    out: List[MilestoneMarker] = []
    for m in milestones:
        offset = milestone_offset_percent(m, window)
        if offset is None:
            continue
        out.append(
            MilestoneMarker(
                milestone_id=m.id,
                offset_percent=offset,
                status=milestone_status(m, today_d),
                due_soon=milestone_due_soon(m, today_d),
            )
        )
    return out
