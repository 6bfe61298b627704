# graph_geometry.py

from typing import Iterable, Optional

from git_graph_data import Node, Row
from layout_config import DEFAULT_CONFIG, LayoutConfig


def lane_x(lane: int, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    return config.left_padding + lane * config.lane_width


def row_y(row: int, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    return config.top_padding + row * config.row_height


def build_nodes(rows: Iterable[Row], config: Optional[LayoutConfig] = None) -> list[Node]:
    """Map every row's (row, lane) pair to pixel coordinates, in row order."""
    config = config or DEFAULT_CONFIG
    return [
        Node(id=r.id, x=lane_x(r.lane, config), y=row_y(r.row, config), lane=r.lane, row=r.row)
        for r in rows
    ]


def index_nodes(nodes: Iterable[Node]) -> dict[str, Node]:
    return {n.id: n for n in nodes}


def graph_size(max_lanes: int, row_count: int, config: Optional[LayoutConfig] = None):
    """Width and height needed to draw the graph, paddings on both sides."""
    config = config or DEFAULT_CONFIG
    width = 2 * config.left_padding + max(0, max_lanes - 1) * config.lane_width
    height = 2 * config.top_padding + max(0, row_count - 1) * config.row_height
    return width, height
