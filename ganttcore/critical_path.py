"""Critical path strategies.

The path is for visual emphasis only. Two strategies share one interface:

  fast      FastHeuristicPath: node-count DFS with a run-wide visited set.
            Cheap and stable, but a task reachable from two branches is only
            explored once, so diamond-shaped graphs can come out shorter than
            the true longest chain.
  duration  LongestDurationPath: longest path in the DAG weighted by
            effective duration days (topological order + DP).

Both return ids ordered end task first, then its predecessors.
"""

from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List, Optional, Protocol, Tuple, Union

from .graph import DependencyGraph
from .layout import effective_duration_days
from .model import CriticalPath, Task
from .util.console import eprint, obs_enabled
from .util.dates import today_date

DEFAULT_STRATEGY = "fast"


class CriticalPathStrategy(Protocol):
    name: str

    def compute(self, graph: DependencyGraph, *, today: Optional[dt.date] = None) -> CriticalPath:
        """Return the critical path for the graph."""


class FastHeuristicPath:
    name = "fast"

    def compute(self, graph: DependencyGraph, *, today: Optional[dt.date] = None) -> CriticalPath:
        visited: set[int] = set()

        def descend(root: int) -> List[int]:
            # explicit stack of [node, next predecessor position, longest chain found below node]
            visited.add(root)
            path = [root]
            frames: List[list] = [[root, 0, None]]
            while True:
                frame = frames[-1]
                preds = graph.predecessors(frame[0])
                if frame[1] < len(preds):
                    pred = preds[frame[1]]
                    frame[1] += 1
                    if pred in visited:
                        continue
                    visited.add(pred)
                    path.append(pred)
                    frames.append([pred, 0, None])
                    continue

                frames.pop()
                longest = frame[2] if frame[2] is not None else list(path)
                path.pop()
                if not frames:
                    return longest
                parent = frames[-1]
                baseline = len(parent[2]) if parent[2] is not None else len(path)
                if len(longest) > baseline:
                    parent[2] = longest

        best: List[int] = []
        for root in range(len(graph)):
            if root in visited:
                continue
            candidate = descend(root)
            if len(candidate) > len(best):
                best = candidate

        return CriticalPath(ids=graph.ids(best), strategy=self.name, weight=len(best))


class LongestDurationPath:
    name = "duration"

    def compute(self, graph: DependencyGraph, *, today: Optional[dt.date] = None) -> CriticalPath:
        today_d = today if today is not None else today_date()
        order = graph.topological_order()

        if obs_enabled() and len(order) < len(graph):
            skipped = graph.ids(graph.cyclic())
            eprint(f"[ganttcore.critical_path] WARN: dependency cycle; ignoring tasks {list(skipped)!r}")

        placed = set(order)
        weight: Dict[int, int] = {}
        via: Dict[int, Optional[int]] = {}
        for node in order:
            own = effective_duration_days(graph.task(node), today_d)
            best_pred: Optional[int] = None
            best_w = 0
            for pred in graph.predecessors(node):
                if weight[pred] > best_w:
                    best_w = weight[pred]
                    best_pred = pred
            weight[node] = own + best_w
            via[node] = best_pred

        end: Optional[int] = None
        for node in sorted(placed):
            if end is None or weight[node] > weight[end]:
                end = node
        if end is None:
            return CriticalPath(ids=(), strategy=self.name, weight=0)

        chain: List[int] = []
        cur: Optional[int] = end
        while cur is not None:
            chain.append(cur)
            cur = via[cur]
        return CriticalPath(ids=graph.ids(chain), strategy=self.name, weight=int(weight[end]))


_STRATEGIES: Dict[str, CriticalPathStrategy] = {
    FastHeuristicPath.name: FastHeuristicPath(),
    LongestDurationPath.name: LongestDurationPath(),
}


def available_strategies() -> Tuple[str, ...]:
    return tuple(_STRATEGIES)


def get_strategy(name: Union[str, CriticalPathStrategy, None] = None) -> CriticalPathStrategy:
    if name is None:
        return _STRATEGIES[DEFAULT_STRATEGY]
    if not isinstance(name, str):
        return name
    key = name.strip().lower() or DEFAULT_STRATEGY
    try:
        return _STRATEGIES[key]
    except KeyError:
        raise ValueError(f"Unknown critical path strategy: {name!r} (choose from {', '.join(_STRATEGIES)})") from None


def compute_critical_path(
    tasks: Union[DependencyGraph, Iterable[Task]],
    *,
    strategy: Union[str, CriticalPathStrategy, None] = None,
    today: Optional[dt.date] = None,
) -> CriticalPath:
    graph = tasks if isinstance(tasks, DependencyGraph) else DependencyGraph.build(tasks)
    return get_strategy(strategy).compute(graph, today=today)
