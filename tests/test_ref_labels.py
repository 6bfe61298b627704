import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from git_graph_data import Revision
from git_graph_layout import layout_graph
from graph_normalizer import normalize
from ref_labels import annotate_rows, collect_labels, format_ref_label, short_id


class TestFormatRefLabel(unittest.TestCase):
    def test_formats(self):
        cases = {
            "HEAD": "HEAD",
            "refs/heads/main": "[local]/[main]",
            "refs/heads/feature/new-ux": "[local]/[feature/new-ux]",
            "refs/remotes/origin/main": "[origin]/[main]",
            "refs/remotes/lonely": "[remote]/[lonely]",
            "refs/tags/v1.0": "[tag]/[v1.0]",
            "origin/feature-x": "[origin]/[feature-x]",
            "main": "[main]",
        }
        for ref, expected in cases.items():
            with self.subTest(ref=ref):
                self.assertEqual(format_ref_label(ref), expected)


class TestAnnotateRows(unittest.TestCase):
    def setUp(self):
        self.graph = normalize(
            [
                Revision(
                    "c3" * 20, ("c2" * 20,), 30, "Commit 3", "Ann", refs=("HEAD", "refs/heads/main")
                ),
                Revision("c2" * 20, ("c1" * 20,), 20, "Commit 2", "Bo"),
                Revision("c1" * 20, (), 10, "Commit 1", "Ann", refs=("refs/tags/v1.0",)),
            ]
        )
        self.layout = layout_graph(self.graph)

    def test_short_id(self):
        self.assertEqual(short_id("abcdef0123456789"), "abcdef0")
        self.assertEqual(short_id("abc"), "abc")

    def test_collect_labels_dedupes(self):
        self.assertEqual(
            collect_labels(["HEAD", "refs/heads/main"], ["refs/heads/main", "refs/remotes/origin/main", ""]),
            ["HEAD", "refs/heads/main", "refs/remotes/origin/main"],
        )

    def test_annotate(self):
        extra = {"c2" * 20: ["refs/remotes/origin/main"]}
        rows = annotate_rows(self.layout, self.graph, extra)

        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[0]["short"], "c3c3c3c")
        self.assertEqual(rows[0]["labels"], ["HEAD", "[local]/[main]"])
        self.assertEqual(rows[0]["parentLanes"], [0])
        self.assertEqual(rows[1]["labels"], ["[origin]/[main]"])
        self.assertEqual(rows[1]["authorName"], "Bo")
        self.assertEqual(rows[2]["labels"], ["[tag]/[v1.0]"])
        self.assertEqual(rows[2]["parents"], [])

    def test_annotate_raw_labels(self):
        rows = annotate_rows(self.layout, self.graph, formatted=False)
        self.assertEqual(rows[0]["labels"], ["HEAD", "refs/heads/main"])

    def test_layout_untouched(self):
        before = self.layout.to_dict()
        annotate_rows(self.layout, self.graph, {"c1" * 20: ["refs/heads/old"]})
        self.assertEqual(self.layout.to_dict(), before)


if __name__ == "__main__":
    unittest.main()
