from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from ganttcore.graph import DependencyGraph
from ganttcore.model import Task


def _t(ident: str, *deps: str) -> Task:
    return Task(id=ident, dependencies=tuple(deps))


class TestDependencyGraphContract(unittest.TestCase):
    def test_adjacency_is_index_based(self) -> None:
        g = DependencyGraph.build([_t("A"), _t("B", "A"), _t("C", "A", "B")])
        self.assertEqual(len(g), 3)
        self.assertEqual(g.index_of("C"), 2)
        self.assertEqual(g.predecessors(2), (0, 1))
        self.assertEqual(g.successors(0), (1, 2))
        self.assertEqual(g.edges(), [(0, 1), (0, 2), (1, 2)])

    def test_dangling_dependencies_are_dropped_and_recorded(self) -> None:
        g = DependencyGraph.build([_t("A", "999"), _t("B", "A")])
        self.assertEqual(g.predecessors(0), ())
        self.assertEqual(g.dangling, (("A", "999"),))
        self.assertIsNone(g.index_of("999"))

    def test_duplicate_ids_and_edges(self) -> None:
        g = DependencyGraph.build([_t("A"), _t("B", "A", "A"), Task(id="A", title="second")])
        self.assertEqual(len(g), 2)
        self.assertEqual(g.duplicates, ("A",))
        self.assertEqual(g.task(0).title, "")
        self.assertEqual(g.predecessors(1), (0,))

    def test_topological_order_and_cycles(self) -> None:
        g = DependencyGraph.build([_t("C", "B"), _t("B", "A"), _t("A")])
        self.assertEqual(g.ids(g.topological_order()), ("A", "B", "C"))
        self.assertEqual(g.cyclic(), [])

        cyc = DependencyGraph.build([_t("X", "Y"), _t("Y", "X"), _t("Z", "Y"), _t("F")])
        self.assertEqual(cyc.ids(cyc.topological_order()), ("F",))
        self.assertEqual(cyc.ids(cyc.cyclic()), ("X", "Y", "Z"))

    def test_reachable_from_handles_cycles(self) -> None:
        g = DependencyGraph.build([_t("A", "C"), _t("B", "A"), _t("C", "B"), _t("D", "B")])
        self.assertEqual(g.ids(g.reachable_from(0)), ("B", "C", "D"))

    def test_empty(self) -> None:
        g = DependencyGraph.build([])
        self.assertEqual(len(g), 0)
        self.assertEqual(g.topological_order(), [])
        self.assertEqual(g.edges(), [])

    def test_dangling_logged_when_obs_enabled(self) -> None:
        with patch.dict(os.environ, {"GANTTCORE_OBS_LOG": "1"}, clear=False), patch("ganttcore.graph.eprint") as ep:
            DependencyGraph.build([_t("A", "999")])
        combined = "\n".join(str(c.args[0]) for c in ep.call_args_list if c.args)
        self.assertIn("[ganttcore.graph] WARN: dangling dependency", combined)

    def test_dangling_not_logged_when_obs_disabled(self) -> None:
        with patch.dict(os.environ, {}, clear=True), patch("ganttcore.graph.eprint") as ep:
            DependencyGraph.build([_t("A", "999")])
        self.assertFalse(ep.called)


if __name__ == "__main__":
    unittest.main(verbosity=2)
