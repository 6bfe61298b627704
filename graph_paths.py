# graph_paths.py

from typing import Optional
from xml.sax.saxutils import escape

from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import QColor, QPainterPath

from git_graph_data import EDGE_CURVE, Edge, Node
from git_graph_layout import GraphLayout
from graph_geometry import graph_size, index_nodes
from layout_config import DEFAULT_CONFIG, LayoutConfig

COLOR_PALETTE = [
    QColor("#1f77b4"),
    QColor("#ff7f0e"),
    QColor("#2ca02c"),
    QColor("#d62728"),
    QColor("#9467bd"),
    QColor("#8c564b"),
    QColor("#e377c2"),
    QColor("#7f7f7f"),
    QColor("#bcbd22"),
    QColor("#17becf"),
]
EDGE_THICKNESS = 1.5


def lane_color(lane: int) -> QColor:
    return COLOR_PALETTE[lane % len(COLOR_PALETTE)]


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _attr(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def edge_svg_path(edge: Edge) -> str:
    """SVG ``d`` attribute for an edge."""
    (x0, y0) = edge.start
    (x3, y3) = edge.end
    if edge.kind == EDGE_CURVE:
        (x1, y1), (x2, y2) = edge.controls
        return (
            f"M {_fmt(x0)} {_fmt(y0)} "
            f"C {_fmt(x1)} {_fmt(y1)}, {_fmt(x2)} {_fmt(y2)}, {_fmt(x3)} {_fmt(y3)}"
        )
    return f"M {_fmt(x0)} {_fmt(y0)} L {_fmt(x3)} {_fmt(y3)}"


def edge_painter_path(edge: Edge) -> QPainterPath:
    path = QPainterPath()
    path.moveTo(QPointF(*edge.start))
    if edge.kind == EDGE_CURVE:
        c1, c2 = edge.controls
        path.cubicTo(QPointF(*c1), QPointF(*c2), QPointF(*edge.end))
    else:
        path.lineTo(QPointF(*edge.end))
    return path


def node_rect(node: Node, radius: float = DEFAULT_CONFIG.node_radius) -> QRectF:
    """Bounding box of the node's circle, centered on the node."""
    return QRectF(node.x - radius, node.y - radius, 2 * radius, 2 * radius)


def render_svg(layout: GraphLayout, config: Optional[LayoutConfig] = None) -> str:
    """Standalone SVG document for a computed layout.

    Edges take the color of the lane they end in; nodes the color of their own lane.
    """
    config = config or DEFAULT_CONFIG
    width, height = graph_size(layout.max_lanes, len(layout.rows), config)
    nodes_by_id = index_nodes(layout.nodes)

    parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(width)}" height="{_fmt(height)}" '
        f'viewBox="0 0 {_fmt(width)} {_fmt(height)}">'
    ]
    for edge in layout.edges:
        color = lane_color(nodes_by_id[edge.to_id].lane).name()
        parts.append(
            f'  <path d="{edge_svg_path(edge)}" fill="none" stroke="{color}" '
            f'stroke-width="{_fmt(EDGE_THICKNESS)}" data-from="{_attr(edge.from_id)}" '
            f'data-to="{_attr(edge.to_id)}"/>'
        )
    for node in layout.nodes:
        parts.append(
            f'  <circle cx="{_fmt(node.x)}" cy="{_fmt(node.y)}" r="{_fmt(config.node_radius)}" '
            f'fill="{lane_color(node.lane).name()}" data-id="{_attr(node.id)}"/>'
        )
    parts.append("</svg>")
    return "\n".join(parts)
