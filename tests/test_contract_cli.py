from __future__ import annotations

import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from ganttcore import cli

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURE = REPO_ROOT / "tests" / "fixtures" / "timeline_payload.json"


class TestCliContract(unittest.TestCase):
    def test_default_out_is_build_relative_to_cwd(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tmp = Path(td)
            old_cwd = Path.cwd()
            try:
                os.chdir(tmp)
                cli.main([str(FIXTURE), "--today", "2024-03-16", "--tz", "UTC"])
            finally:
                os.chdir(old_cwd)

            out = tmp / "build" / "ganttcore_layout.json"
            self.assertTrue(out.exists())
            data = json.loads(out.read_text(encoding="utf-8"))
            self.assertEqual(data["critical_path"]["ids"], ["ship", "build", "design"])
            self.assertEqual(data["window"]["total_days"], 31)

    def test_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "layout.json"
            cli.main(
                [
                    str(FIXTURE),
                    "--view",
                    "week",
                    "--anchor",
                    "2024-03-06",
                    "--critical-path",
                    "duration",
                    "--today",
                    "2024-03-16",
                    "--out",
                    str(out),
                    "--pretty",
                ]
            )
            data = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(data["window"]["granularity"], "week")
        self.assertEqual(data["window"]["start"], "2024-03-03")
        self.assertEqual(data["critical_path"]["strategy"], "duration")

    def test_env_strategy_only_fills_missing_choice(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            payload = json.loads(FIXTURE.read_text(encoding="utf-8"))
            payload.pop("critical_path")
            src = Path(td) / "payload.json"
            src.write_text(json.dumps(payload), encoding="utf-8")
            out = Path(td) / "layout.json"
            with patch.dict(os.environ, {"GANTTCORE_CRITICAL_PATH": "duration"}):
                cli.main([str(src), "--today", "2024-03-16", "--out", str(out)])
            data = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(data["critical_path"]["strategy"], "duration")

    def test_invalid_tz_reports_user_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(FIXTURE), "--tz", "No/Such_Zone"])
        self.assertIn("Invalid --tz value", str(ctx.exception))

    def test_invalid_today_reports_user_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(FIXTURE), "--today", "someday"])
        self.assertIn("Invalid --today value", str(ctx.exception))

    def test_missing_payload_reports_user_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(REPO_ROOT / "tests" / "fixtures" / "nope.json"), "--today", "2024-03-16"])
        self.assertIn("Failed to load payload", str(ctx.exception))

    def test_invalid_payload_reports_user_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "bad.json"
            src.write_text(json.dumps({"tasks": "nope"}), encoding="utf-8")
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(src), "--today", "2024-03-16"])
        self.assertIn("Invalid payload", str(ctx.exception))

    def test_unknown_strategy_reports_user_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(FIXTURE), "--today", "2024-03-16", "--critical-path", "cpm", "--out", "-"])
        self.assertIn("cpm", str(ctx.exception))

    def test_module_entrypoint_writes_stdout(self) -> None:
        cmd = [sys.executable, "-m", "ganttcore.cli", str(FIXTURE), "--today", "2024-03-16", "--tz", "UTC", "--out", "-"]
        p = subprocess.run(cmd, cwd=str(REPO_ROOT), capture_output=True, text=True)
        combined = (p.stdout or "") + "\n" + (p.stderr or "")
        self.assertEqual(p.returncode, 0, combined)
        data = json.loads(p.stdout)
        self.assertEqual([r["task_id"] for r in data["records"]], ["ship", "build", "design", "docs"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
