# edge_router.py

import logging
from typing import Iterable, Optional

from git_graph_data import EDGE_CURVE, EDGE_LINE, Edge, Node, Row
from graph_normalizer import NormalizedGraph
from layout_config import DEFAULT_CONFIG, LayoutConfig

# Horizontal pull of the second control point, in lane widths.
CURVE_LANE_BIAS = 0.6


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def route_edge(child: Node, parent: Node, config: Optional[LayoutConfig] = None) -> Edge:
    config = config or DEFAULT_CONFIG
    start = child.point
    end = parent.point

    if child.lane == parent.lane:
        return Edge(from_id=child.id, to_id=parent.id, kind=EDGE_LINE, points=(start, end))

    sign = _sign(parent.lane - child.lane) or 1
    rise = config.row_height * 0.5 * config.tension
    c1 = (start[0], start[1] + rise)
    c2 = (end[0] - sign * config.lane_width * CURVE_LANE_BIAS, end[1] - rise)
    return Edge(from_id=child.id, to_id=parent.id, kind=EDGE_CURVE, points=(start, c1, c2, end))


def route_edges(
    rows: Iterable[Row],
    nodes_by_id: dict[str, Node],
    graph: NormalizedGraph,
    config: Optional[LayoutConfig] = None,
) -> list[Edge]:
    """One edge per (child, parent) pair where both ends were laid out.

    Boundary parents have no node and are skipped.
    """
    config = config or DEFAULT_CONFIG
    edges = []
    for row in rows:
        child = nodes_by_id[row.id]
        present = graph.present_parents(row.id)
        for parent_id, reserved_lane in zip(present, row.parent_lanes):
            parent = nodes_by_id.get(parent_id)
            if parent is None:
                continue
            if parent.lane != reserved_lane:
                logging.debug(
                    "Parent %s was reserved in lane %d but drawn in lane %d",
                    parent_id,
                    reserved_lane,
                    parent.lane,
                )
            edges.append(route_edge(child, parent, config))
    return edges
