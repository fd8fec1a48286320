from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .model import Task
from .util.console import eprint, obs_enabled


@dataclass(frozen=True)
class DependencyGraph:
    """Dense task arena with predecessor/successor index lists.

    Built once per evaluation. Edges only exist between known tasks; predecessor
    ids that do not resolve are kept in `dangling` as (task_id, missing_id).
    """

    tasks: Tuple[Task, ...]
    index: Dict[str, int]
    preds: Tuple[Tuple[int, ...], ...]
    succs: Tuple[Tuple[int, ...], ...]
    dangling: Tuple[Tuple[str, str], ...] = ()
    duplicates: Tuple[str, ...] = ()

    @classmethod
    def build(cls, tasks: Iterable[Task]) -> "DependencyGraph":
        arena: List[Task] = []
        index: Dict[str, int] = {}
        duplicates: List[str] = []
        for t in tasks:
            if t.id in index:
                duplicates.append(t.id)
                continue
            index[t.id] = len(arena)
            arena.append(t)

        preds: List[Tuple[int, ...]] = []
        succs: List[List[int]] = [[] for _ in arena]
        dangling: List[Tuple[str, str]] = []
        for i, t in enumerate(arena):
            seen: set[int] = set()
            row: List[int] = []
            for dep_id in t.dependencies:
                j = index.get(dep_id)
                if j is None:
                    dangling.append((t.id, dep_id))
                    continue
                if j in seen:
                    continue
                seen.add(j)
                row.append(j)
                succs[j].append(i)
            preds.append(tuple(row))

        if obs_enabled():
            for task_id, missing in dangling:
                eprint(f"[ganttcore.graph] WARN: dangling dependency task={task_id!r} predecessor={missing!r}")
            for dup in duplicates:
                eprint(f"[ganttcore.graph] WARN: duplicate task id {dup!r}; keeping first occurrence")

        return cls(
            tasks=tuple(arena),
            index=index,
            preds=tuple(preds),
            succs=tuple(tuple(s) for s in succs),
            dangling=tuple(dangling),
            duplicates=tuple(duplicates),
        )

    def __len__(self) -> int:
        return len(self.tasks)

    def index_of(self, task_id: str) -> Optional[int]:
        return self.index.get(task_id)

    def task(self, i: int) -> Task:
        return self.tasks[i]

    def predecessors(self, i: int) -> Tuple[int, ...]:
        return self.preds[i]

    def successors(self, i: int) -> Tuple[int, ...]:
        return self.succs[i]

    def edges(self) -> List[Tuple[int, int]]:
        """(predecessor, successor) pairs, grouped by successor in input order."""
        return [(p, i) for i in range(len(self.tasks)) for p in self.preds[i]]

    def topological_order(self) -> List[int]:
        """Kahn's algorithm; ties resolve in input order. Nodes on (or behind) cycles are left out."""
        in_degree = [len(p) for p in self.preds]
        ready = [i for i, d in enumerate(in_degree) if d == 0]
        order: List[int] = []
        pos = 0
        while pos < len(ready):
            node = ready[pos]
            pos += 1
            order.append(node)
            for succ in self.succs[node]:
                in_degree[succ] -= 1
                if in_degree[succ] == 0:
                    ready.append(succ)
        return order

    def cyclic(self) -> List[int]:
        placed = set(self.topological_order())
        return [i for i in range(len(self.tasks)) if i not in placed]

    def reachable_from(self, i: int) -> List[int]:
        """Transitive successors of i (excluding i), breadth-first."""
        seen = {i}
        out: List[int] = []
        queue: List[int] = [i]
        pos = 0
        while pos < len(queue):
            node = queue[pos]
            pos += 1
            for succ in self.succs[node]:
                if succ in seen:
                    continue
                seen.add(succ)
                out.append(succ)
                queue.append(succ)
        return out

    def ids(self, indices: Sequence[int]) -> Tuple[str, ...]:
        return tuple(self.tasks[i].id for i in indices)
