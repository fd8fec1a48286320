#!/usr/bin/env python3
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List

from ganttcore.graph import DependencyGraph
from ganttcore.normalize import normalize_tasks
from ganttcore.reschedule import CASCADE_MODES, build_reschedule, cascade_reschedule
from ganttcore.util.dates import normalize_tz_name, parse_date, resolve_tz, today_date
from ganttcore.util.jsonio import dumps_json, read_json_object
from ganttcore.validate import validate_payload


def _die(msg: str, rc: int = 2) -> int:
    print(f"[ganttcore-reschedule] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="ganttcore-reschedule",
        description="Turn a drag (task id + new start date) into duration-preserving update request(s).",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Input payload JSON path ({tasks: [...]})")
    ap.add_argument("--task", required=True, help="Id of the task being moved")
    ap.add_argument("--start", required=True, help="New start date YYYY-MM-DD")
    ap.add_argument(
        "--cascade",
        default=None,
        choices=CASCADE_MODES,
        help="Also emit requests for dependent tasks (opt-in; default: dependents are not moved)",
    )
    ap.add_argument("--today", default=None, help="Pin 'today' to YYYY-MM-DD (used for tasks without dates)")
    ap.add_argument("--tz", default=os.getenv("GANTTCORE_TZ", "local"), help="Timezone for 'today' (default: env GANTTCORE_TZ or 'local')")
    ap.add_argument("--pretty", action="store_true", help="Pretty JSON output")
    ns = ap.parse_args(argv)

    in_path = Path(ns.in_json)
    if not in_path.exists():
        return _die(f"Missing input JSON: {in_path}")
    try:
        payload = read_json_object(in_path)
    except Exception as e:
        return _die(f"Failed to load JSON: {in_path} ({e})")

    errs = validate_payload(payload)
    if errs:
        return _die(f"Invalid payload: {'; '.join(errs[:10])}", rc=3)

    try:
        tzinfo = resolve_tz(normalize_tz_name(ns.tz))
    except ValueError as e:
        return _die(str(e))

    new_start = parse_date(ns.start)
    if new_start is None:
        return _die(f"Invalid --start value: {ns.start!r} (expected YYYY-MM-DD)")
    today = parse_date(ns.today) if ns.today else today_date(tzinfo)
    if today is None:
        return _die(f"Invalid --today value: {ns.today!r} (expected YYYY-MM-DD)")

    graph = DependencyGraph.build(normalize_tasks(payload.get("tasks"), tz=tzinfo))
    idx = graph.index_of(str(ns.task))
    if idx is None:
        return _die(f"Unknown task id: {ns.task!r}")

    request = build_reschedule(graph.task(idx), new_start, today=today)
    requests = [request]
    if ns.cascade:
        requests += cascade_reschedule(graph, request, mode=ns.cascade, today=today)

    sys.stdout.write(dumps_json({"requests": [r.to_dict() for r in requests]}, pretty=bool(ns.pretty)) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
