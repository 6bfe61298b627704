import json
import os
import shutil
import sys
import tempfile
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from git_graph_data import Node, Row
from graph_errors import InvalidLayoutConfig
from graph_geometry import build_nodes, graph_size, index_nodes
from layout_config import DEFAULT_CONFIG, LayoutConfig


class TestBuildNodes(unittest.TestCase):
    def test_default_spacing(self):
        nodes = build_nodes([Row("a", 0, 0, [0]), Row("b", 1, 1, []), Row("c", 2, 0, [])])

        self.assertEqual(nodes[0], Node(id="a", x=20, y=14, lane=0, row=0))
        self.assertEqual((nodes[1].x, nodes[1].y), (42, 42))
        self.assertEqual((nodes[2].x, nodes[2].y), (20, 70))

    def test_custom_spacing(self):
        config = LayoutConfig(lane_width=10, row_height=30, left_padding=5, top_padding=0)
        nodes = build_nodes([Row("a", 3, 2, [])], config)

        self.assertEqual(nodes[0].point, (25, 90))

    def test_pure(self):
        rows = [Row("a", 0, 0, []), Row("b", 1, 0, [])]
        self.assertEqual(build_nodes(rows), build_nodes(rows))
        self.assertEqual(list(index_nodes(build_nodes(rows))), ["a", "b"])

    def test_graph_size(self):
        self.assertEqual(graph_size(2, 4), (2 * 20 + 22, 2 * 14 + 3 * 28))
        self.assertEqual(graph_size(0, 0), (40, 28))


class TestLayoutConfig(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_defaults(self):
        self.assertEqual(DEFAULT_CONFIG.lane_width, 22)
        self.assertEqual(DEFAULT_CONFIG.row_height, 28)
        self.assertEqual(DEFAULT_CONFIG.node_radius, 6)
        self.assertEqual(DEFAULT_CONFIG.left_padding, 20)
        self.assertEqual(DEFAULT_CONFIG.top_padding, 14)
        self.assertAlmostEqual(DEFAULT_CONFIG.tension, 0.35)

    def test_from_dict_accepts_wire_names(self):
        config = LayoutConfig.from_dict({"laneWidth": 16, "rowHeight": 24, "top_padding": 0})
        self.assertEqual(config.lane_width, 16)
        self.assertEqual(config.row_height, 24)
        self.assertEqual(config.top_padding, 0)
        self.assertEqual(config.left_padding, 20)

    def test_tension_clamped(self):
        self.assertEqual(LayoutConfig(tension=1.5).tension, 1.0)
        self.assertEqual(LayoutConfig(tension=0).tension, 0.0)

    def test_rejects_bad_values(self):
        bad = [{"colour": 1}, {"laneWidth": "wide"}, {"rowHeight": -1}, {"tension": True}]
        for data in bad:
            with self.subTest(data=data):
                with self.assertRaises(InvalidLayoutConfig):
                    LayoutConfig.from_dict(data)

    def test_load_json(self):
        path = os.path.join(self.tmp_dir, "layout.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"laneWidth": 12, "tension": 0.5}, f)

        config = LayoutConfig.load(path)
        self.assertEqual(config.lane_width, 12)
        self.assertEqual(config.tension, 0.5)

    def test_load_errors(self):
        with self.assertRaises(InvalidLayoutConfig):
            LayoutConfig.load(os.path.join(self.tmp_dir, "missing.json"))

        path = os.path.join(self.tmp_dir, "broken.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(InvalidLayoutConfig):
            LayoutConfig.load(path)

        with open(path, "w", encoding="utf-8") as f:
            f.write("[1, 2]")
        with self.assertRaises(InvalidLayoutConfig):
            LayoutConfig.load(path)


if __name__ == "__main__":
    unittest.main()
