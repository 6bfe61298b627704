# git_graph_layout.py

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from edge_router import route_edges
from git_graph_data import Edge, Node, Revision, Row
from graph_geometry import build_nodes, index_nodes
from graph_normalizer import NormalizedGraph, normalize
from lane_assigner import assign_lanes
from layout_config import DEFAULT_CONFIG, LayoutConfig
from row_order import CHECK_OFF, TopologyViolation, check_row_order, order_rows


@dataclass
class GraphLayout:
    rows: list[Row] = field(default_factory=list)
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    max_lanes: int = 0
    violations: list[TopologyViolation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result = {
            "rows": [r.to_dict() for r in self.rows],
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "maxLanes": self.max_lanes,
        }
        if self.violations:
            result["violations"] = [v.to_dict() for v in self.violations]
        return result


def layout_graph(
    graph: NormalizedGraph,
    preferred_order: Optional[Iterable[str]] = None,
    config: Optional[LayoutConfig] = None,
    check: str = CHECK_OFF,
) -> GraphLayout:
    """Run ordering, lane assignment, geometry and edge routing over a normalized graph."""
    config = config or DEFAULT_CONFIG

    row_ids = order_rows(graph, preferred_order)
    violations = check_row_order(graph, row_ids, check)
    assignment = assign_lanes(row_ids, graph)
    nodes = build_nodes(assignment.rows, config)
    edges = route_edges(assignment.rows, index_nodes(nodes), graph, config)

    logging.debug(
        "Laid out %d rows in %d lanes with %d edges", len(assignment.rows), assignment.max_lanes, len(edges)
    )
    return GraphLayout(
        rows=assignment.rows,
        nodes=nodes,
        edges=edges,
        max_lanes=assignment.max_lanes,
        violations=violations,
    )


def compute_layout(
    revisions: Iterable[Union[Revision, Mapping]],
    preferred_order: Optional[Iterable[str]] = None,
    config: Optional[LayoutConfig] = None,
    check: str = CHECK_OFF,
) -> GraphLayout:
    """
    Lay out one batch of revisions, newest first.

    ``revisions`` may be Revision objects or decoded records. Without a
    ``preferred_order`` the input order is used as the row order. ``check``
    selects how a non-topological order is treated: "off", "warn" or
    "strict" (raises InvalidRowOrder).
    """
    return layout_graph(normalize(revisions), preferred_order, config, check)
