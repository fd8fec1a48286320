from __future__ import annotations

import datetime as dt
import unittest

from ganttcore.graph import DependencyGraph
from ganttcore.model import RescheduleRequest, Task
from ganttcore.reschedule import build_reschedule, cascade_reschedule

D = dt.date


class TestRescheduleContract(unittest.TestCase):
    def test_duration_is_preserved(self) -> None:
        task = Task(id="t1", start=D(2024, 1, 1), due=D(2024, 1, 5))
        req = build_reschedule(task, D(2024, 2, 1))
        self.assertEqual(req, RescheduleRequest(task_id="t1", start=D(2024, 2, 1), due=D(2024, 2, 5)))
        self.assertEqual(req.to_dict(), {"task_id": "t1", "start": "2024-02-01", "due": "2024-02-05"})

    def test_new_start_accepts_iso_strings(self) -> None:
        task = Task(id="t1", start=D(2024, 1, 1), due=D(2024, 1, 5))
        req = build_reschedule(task, "2024-02-01T12:00:00Z")
        self.assertEqual(req.due, D(2024, 2, 5))

    def test_missing_due_means_one_day(self) -> None:
        req = build_reschedule(Task(id="t", start=D(2024, 1, 1)), D(2024, 1, 10))
        self.assertEqual((req.start, req.due), (D(2024, 1, 10), D(2024, 1, 11)))

    def test_missing_start_measures_from_today(self) -> None:
        req = build_reschedule(Task(id="t", due=D(2024, 1, 8)), D(2024, 2, 1), today=D(2024, 1, 5))
        self.assertEqual(req.due, D(2024, 2, 4))

    def test_past_dates_and_inverted_ranges_are_accepted(self) -> None:
        req = build_reschedule(Task(id="t", start=D(2024, 1, 10), due=D(2024, 1, 8)), D(1999, 1, 1))
        self.assertEqual((req.start, req.due), (D(1999, 1, 1), D(1998, 12, 30)))

    def test_is_deterministic(self) -> None:
        task = Task(id="t", start=D(2024, 1, 1), due=D(2024, 1, 3))
        self.assertEqual(build_reschedule(task, D(2024, 5, 5)), build_reschedule(task, D(2024, 5, 5)))


class TestCascadeContract(unittest.TestCase):
    def setUp(self) -> None:
        self.graph = DependencyGraph.build(
            [
                Task(id="A", start=D(2024, 1, 1), due=D(2024, 1, 5)),
                Task(id="B", start=D(2024, 1, 6), due=D(2024, 1, 8), dependencies=("A",)),
                Task(id="C", start=D(2024, 1, 20), due=D(2024, 1, 21), dependencies=("B",)),
                Task(id="U", start=D(2024, 1, 2), due=D(2024, 1, 3)),
            ]
        )
        self.request = build_reschedule(self.graph.task(0), D(2024, 1, 3))

    def test_shift_moves_every_successor_by_the_delta(self) -> None:
        out = cascade_reschedule(self.graph, self.request, mode="shift")
        self.assertEqual(
            out,
            [
                RescheduleRequest(task_id="B", start=D(2024, 1, 8), due=D(2024, 1, 10)),
                RescheduleRequest(task_id="C", start=D(2024, 1, 22), due=D(2024, 1, 23)),
            ],
        )

    def test_push_moves_only_conflicting_successors(self) -> None:
        out = cascade_reschedule(self.graph, self.request, mode="push")
        self.assertEqual(out, [RescheduleRequest(task_id="B", start=D(2024, 1, 8), due=D(2024, 1, 10))])

    def test_no_successors_or_unknown_task(self) -> None:
        lone = build_reschedule(self.graph.task(3), D(2024, 3, 1))
        self.assertEqual(cascade_reschedule(self.graph, lone), [])
        ghost = RescheduleRequest(task_id="ghost", start=D(2024, 1, 1), due=D(2024, 1, 2))
        self.assertEqual(cascade_reschedule(self.graph, ghost), [])

    def test_zero_delta_shift_emits_nothing(self) -> None:
        same = build_reschedule(self.graph.task(0), D(2024, 1, 1))
        self.assertEqual(cascade_reschedule(self.graph, same, mode="shift"), [])

    def test_cycle_is_visited_once(self) -> None:
        g = DependencyGraph.build(
            [
                Task(id="A", start=D(2024, 1, 1), due=D(2024, 1, 2), dependencies=("B",)),
                Task(id="B", start=D(2024, 1, 3), due=D(2024, 1, 4), dependencies=("A",)),
            ]
        )
        req = build_reschedule(g.task(0), D(2024, 1, 11))
        out = cascade_reschedule(g, req, mode="shift")
        self.assertEqual(out, [RescheduleRequest(task_id="B", start=D(2024, 1, 13), due=D(2024, 1, 14))])

    def test_unknown_mode_raises(self) -> None:
        with self.assertRaises(ValueError):
            cascade_reschedule(self.graph, self.request, mode="ripple")


if __name__ == "__main__":
    unittest.main(verbosity=2)
