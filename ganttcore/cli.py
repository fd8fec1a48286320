from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .critical_path import available_strategies, get_strategy
from .model import GRANULARITIES
from .planner import build_timeline_from_payload
from .util.dates import normalize_tz_name, parse_date, resolve_tz, today_date
from .util.jsonio import dumps_json, read_json_object
from .validate import validate_payload


def main(argv: list[str] | None = None) -> None:
    default_out = os.path.join("build", "ganttcore_layout.json")
    ap = argparse.ArgumentParser(
        description="Compute timeline layout (window, bars, critical path, connectors, milestone markers) for a task payload."
    )
    ap.add_argument("payload", help="Payload JSON path ({view, tasks, milestones})")
    ap.add_argument(
        "--view",
        default=None,
        choices=GRANULARITIES,
        help="Override view granularity (default: payload view, else env GANTTCORE_VIEW or 'month')",
    )
    ap.add_argument("--anchor", default=None, help="Override anchor date YYYY-MM-DD")
    ap.add_argument(
        "--critical-path",
        default=None,
        help=f"Critical path strategy: {', '.join(available_strategies())} (default: payload, else env GANTTCORE_CRITICAL_PATH or 'fast')",
    )
    ap.add_argument("--today", default=None, help="Pin 'today' to YYYY-MM-DD (default: today in --tz)")
    ap.add_argument(
        "--tz",
        default=os.getenv("GANTTCORE_TZ", "local"),
        help="Timezone for 'today' and timestamp dates (default: env GANTTCORE_TZ or 'local')",
    )
    ap.add_argument("--out", default=default_out, help="Output JSON path, or '-' for stdout (default: ./build/ganttcore_layout.json)")
    ap.add_argument("--pretty", action="store_true", help="Pretty JSON output")

    args = ap.parse_args(argv)

    try:
        tzinfo = resolve_tz(normalize_tz_name(args.tz))
    except ValueError as e:
        raise SystemExit(f"Invalid --tz value: {e}")

    if args.today:
        today = parse_date(args.today)
        if today is None:
            raise SystemExit(f"Invalid --today value: {args.today!r} (expected YYYY-MM-DD)")
    else:
        today = today_date(tzinfo)

    try:
        payload = read_json_object(Path(args.payload))
    except Exception as e:
        raise SystemExit(f"Failed to load payload: {e}")

    errs = validate_payload(payload)
    if errs:
        raise SystemExit(f"Invalid payload: {'; '.join(errs[:10])}")

    view = dict(payload.get("view") or {})
    if args.view:
        view["granularity"] = args.view
    elif "granularity" not in view:
        view["granularity"] = os.getenv("GANTTCORE_VIEW", "month")
    if args.anchor:
        if parse_date(args.anchor) is None:
            raise SystemExit(f"Invalid --anchor value: {args.anchor!r} (expected YYYY-MM-DD)")
        view["anchor"] = args.anchor
    payload = dict(payload, view=view)

    strategy_name = args.critical_path
    if strategy_name is None and not isinstance(payload.get("critical_path"), str):
        strategy_name = os.getenv("GANTTCORE_CRITICAL_PATH") or None
    try:
        strategy = get_strategy(strategy_name) if strategy_name else None
    except ValueError as e:
        raise SystemExit(str(e))

    layout = build_timeline_from_payload(payload, strategy=strategy, today=today, tz=tzinfo)
    text = dumps_json(layout.to_dict(), pretty=bool(args.pretty))

    if args.out == "-":
        sys.stdout.write(text + "\n")
        return

    out_path = Path(os.path.abspath(args.out))
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SystemExit(f"Cannot create output directory '{out_path.parent}': {e}")
    out_path.write_text(text + "\n", encoding="utf-8", newline="\n")

    print(str(out_path))


if __name__ == "__main__":
    main()
