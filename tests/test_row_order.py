import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from git_graph_data import Revision
from graph_errors import InvalidRowOrder
from graph_normalizer import normalize
from row_order import CHECK_STRICT, CHECK_WARN, check_row_order, find_topology_violations, order_rows


class TestOrderRows(unittest.TestCase):
    def setUp(self):
        self.graph = normalize(
            [
                Revision("c3", ("c2",), timestamp=10),
                Revision("c2", ("c1",), timestamp=30),
                Revision("c1", (), timestamp=20),
            ]
        )

    def test_input_order_by_default(self):
        self.assertEqual(order_rows(self.graph), ["c3", "c2", "c1"])

    def test_preferred_order_wins_over_timestamp(self):
        self.assertEqual(order_rows(self.graph, ["c1", "c3", "c2"]), ["c1", "c3", "c2"])

    def test_unlisted_ids_follow_by_newest_timestamp(self):
        # c2 (30) is newer than c1 (20)
        self.assertEqual(order_rows(self.graph, ["c3"]), ["c3", "c2", "c1"])
        self.assertEqual(order_rows(self.graph, []), ["c2", "c1", "c3"])

    def test_equal_timestamps_keep_input_order(self):
        graph = normalize([Revision("x", (), 5), Revision("y", (), 5), Revision("z", (), 5)])
        self.assertEqual(order_rows(graph, []), ["x", "y", "z"])

    def test_unknown_and_repeated_ids_ignored(self):
        self.assertEqual(order_rows(self.graph, ["nope", "c2", "c3", "c2", "c1"]), ["c2", "c3", "c1"])

    def test_deterministic(self):
        self.assertEqual(order_rows(self.graph, ["c1"]), order_rows(self.graph, ["c1"]))


class TestTopologyCheck(unittest.TestCase):
    def setUp(self):
        self.graph = normalize([Revision("child", ("parent",)), Revision("parent", ())])

    def test_valid_order_has_no_violations(self):
        self.assertEqual(find_topology_violations(self.graph, ["child", "parent"]), [])

    def test_parent_above_child_reported(self):
        violations = find_topology_violations(self.graph, ["parent", "child"])
        self.assertEqual(len(violations), 1)
        self.assertEqual(violations[0].child_id, "child")
        self.assertEqual(violations[0].parent_id, "parent")
        self.assertEqual((violations[0].child_row, violations[0].parent_row), (1, 0))

    def test_off_mode_skips_check(self):
        self.assertEqual(check_row_order(self.graph, ["parent", "child"]), [])

    def test_warn_mode_logs(self):
        with self.assertLogs(level="WARNING") as logs:
            violations = check_row_order(self.graph, ["parent", "child"], CHECK_WARN)
        self.assertEqual(len(violations), 1)
        self.assertIn("child", logs.output[0])

    def test_strict_mode_raises(self):
        with self.assertRaises(InvalidRowOrder) as ctx:
            check_row_order(self.graph, ["parent", "child"], CHECK_STRICT)
        self.assertEqual(ctx.exception.violation.parent_id, "parent")

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            check_row_order(self.graph, ["child", "parent"], "sometimes")


if __name__ == "__main__":
    unittest.main()
