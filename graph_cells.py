# graph_cells.py

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from git_graph_data import Row
from graph_normalizer import NormalizedGraph
from ref_labels import collect_labels, format_ref_label, short_id

NODE_CHAR = "*"
LINE_CHAR = "|"
HLINE_CHAR = "-"


@dataclass
class Cell:
    node: bool = False
    conn: bool = False  # a vertical strand passes through
    h: bool = False  # part of a horizontal run between a node and a parent lane

    @property
    def char(self) -> str:
        if self.node:
            return NODE_CHAR
        if self.conn:
            return LINE_CHAR
        if self.h:
            return HLINE_CHAR
        return " "


def _clamp(value: int, lanes: int) -> int:
    return max(0, min(lanes - 1, int(value)))


def prepare_cells(
    rows: list[Row],
    max_lanes: int,
    graph: Optional[NormalizedGraph] = None,
) -> list[list[Cell]]:
    """One list of lane cells per row.

    With ``graph`` given, strands between a child and a parent further down
    are also drawn through the rows in between.
    """
    lanes = max(1, max_lanes)
    grid = [[Cell() for _ in range(lanes)] for _ in rows]

    for i, row in enumerate(rows):
        cells = grid[i]
        lane = _clamp(row.lane, lanes)
        cells[lane].node = True
        cells[lane].conn = True
        for parent_lane in row.parent_lanes:
            pl = _clamp(parent_lane, lanes)
            cells[pl].conn = True
            for j in range(min(lane, pl), max(lane, pl) + 1):
                cells[j].h = True

    if graph is not None:
        row_of = {row.id: i for i, row in enumerate(rows)}
        for i, row in enumerate(rows):
            present = graph.present_parents(row.id)
            for parent_id, parent_lane in zip(present, row.parent_lanes):
                parent_row = row_of.get(parent_id)
                if parent_row is None:
                    continue
                pl = _clamp(parent_lane, lanes)
                for between in range(i + 1, parent_row):
                    grid[between][pl].conn = True
    return grid


def render_cells(cells: list[Cell]) -> str:
    out = []
    for idx, cell in enumerate(cells):
        out.append(cell.char)
        nxt = cells[idx + 1] if idx + 1 < len(cells) else None
        out.append(HLINE_CHAR if nxt is not None and cell.h and nxt.h else " ")
    return "".join(out).rstrip()


def render_text(
    rows: list[Row],
    max_lanes: int,
    graph: NormalizedGraph,
    labels_by_id: Optional[Mapping[str, Iterable[str]]] = None,
) -> str:
    """Plain-text graph, one line per row, like a compact ``git log --graph``."""
    labels_by_id = labels_by_id or {}
    grid = prepare_cells(rows, max_lanes, graph)
    width = 2 * max(1, max_lanes)

    lines = []
    for row, cells in zip(rows, grid):
        rev = graph.by_id[row.id]
        labels = [format_ref_label(r) for r in collect_labels(rev.refs, labels_by_id.get(row.id))]
        text = " ".join([short_id(row.id)] + labels + [rev.subject])
        lines.append(f"{render_cells(cells).ljust(width)} {text}".rstrip())
    return "\n".join(lines)
