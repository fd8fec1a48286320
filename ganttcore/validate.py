"""Payload validation helpers (library-facing).

The engine itself tolerates bad data; these checks are for tools that accept
payload files and want to fail loudly on structural problems.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .critical_path import available_strategies
from .model import GRANULARITIES


class PayloadValidationError(ValueError):
    """Raised when a payload fails validation."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _has_id(item: Dict[str, Any]) -> bool:
    for k in ("id", "Id"):
        v = item.get(k)
        if v is not None and not isinstance(v, bool) and str(v).strip():
            return True
    return False


def validate_payload(payload: Any) -> List[str]:
    """Return a list of problems (empty when the payload is usable)."""
    errs: List[str] = []
    if not isinstance(payload, dict):
        return [f"payload must be dict; got {type(payload).__name__}"]

    tasks = payload.get("tasks", [])
    milestones = payload.get("milestones", [])
    strategy = payload.get("critical_path")
    view = payload.get("view")

    _require(isinstance(tasks, list), "tasks must be list", errs)
    _require(isinstance(milestones, list), "milestones must be list", errs)
    if view is not None:
        _require(isinstance(view, dict), "view must be dict", errs)

    if strategy is not None:
        _require(
            isinstance(strategy, str) and strategy.strip().lower() in available_strategies(),
            f"critical_path must be one of {', '.join(available_strategies())}",
            errs,
        )

    if isinstance(view, dict):
        gran = view.get("granularity")
        if gran is not None:
            _require(
                isinstance(gran, str) and gran.strip().lower() in GRANULARITIES,
                f"view.granularity must be one of {', '.join(GRANULARITIES)}",
                errs,
            )

    if isinstance(tasks, list):
        for i, t in enumerate(tasks):
            if not isinstance(t, dict):
                errs.append(f"tasks[{i}] must be dict")
                continue
            _require(_has_id(t), f"tasks[{i}].id must be non-empty", errs)
            deps = t.get("dependencies")
            if deps is not None:
                _require(isinstance(deps, list), f"tasks[{i}].dependencies must be list", errs)

    if isinstance(milestones, list):
        for i, m in enumerate(milestones):
            if not isinstance(m, dict):
                errs.append(f"milestones[{i}] must be dict")
                continue
            _require(_has_id(m), f"milestones[{i}].id must be non-empty", errs)

    return errs


def assert_valid_payload(payload: Any) -> None:
    errs = validate_payload(payload)
    if errs:
        raise PayloadValidationError("; ".join(errs[:10]))
