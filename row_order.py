# row_order.py

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from graph_errors import InvalidRowOrder
from graph_normalizer import NormalizedGraph

CHECK_OFF = "off"
CHECK_WARN = "warn"
CHECK_STRICT = "strict"
CHECK_MODES = (CHECK_OFF, CHECK_WARN, CHECK_STRICT)


@dataclass(frozen=True)
class TopologyViolation:
    child_id: str
    parent_id: str
    child_row: int
    parent_row: int

    def to_dict(self):
        return {
            "childId": self.child_id,
            "parentId": self.parent_id,
            "childRow": self.child_row,
            "parentRow": self.parent_row,
        }


def order_rows(graph: NormalizedGraph, preferred_order: Optional[Iterable[str]] = None) -> list[str]:
    """Return revision ids top to bottom.

    The caller's order wins. Ids the caller did not list share one rank after
    the listed ones and fall back to newest timestamp first, then input order.
    """
    if preferred_order is None:
        preferred_order = graph.by_id.keys()

    rank: dict[str, int] = {}
    for revision_id in preferred_order:
        if revision_id not in graph.by_id:
            logging.debug("Ignoring unknown id %s in preferred order", revision_id)
            continue
        rank.setdefault(revision_id, len(rank))

    unranked = len(rank)
    input_index = {revision_id: i for i, revision_id in enumerate(graph.by_id)}

    def sort_key(revision_id: str):
        return (
            rank.get(revision_id, unranked),
            -graph.by_id[revision_id].timestamp,
            input_index[revision_id],
        )

    return sorted(graph.by_id, key=sort_key)


def find_topology_violations(graph: NormalizedGraph, row_ids: list[str]) -> list[TopologyViolation]:
    """Every (child, parent) pair where the parent is drawn at or above the child."""
    row_of = {revision_id: i for i, revision_id in enumerate(row_ids)}
    violations = []
    for child_row, child_id in enumerate(row_ids):
        for parent_id in graph.present_parents(child_id):
            parent_row = row_of.get(parent_id)
            if parent_row is not None and parent_row < child_row:
                violations.append(TopologyViolation(child_id, parent_id, child_row, parent_row))
    return violations


def check_row_order(graph: NormalizedGraph, row_ids: list[str], mode: str = CHECK_OFF) -> list[TopologyViolation]:
    if mode not in CHECK_MODES:
        raise ValueError(f"Unknown order check mode: {mode!r}")
    if mode == CHECK_OFF:
        return []

    violations = find_topology_violations(graph, row_ids)
    if violations and mode == CHECK_STRICT:
        raise InvalidRowOrder(violations[0])
    for v in violations:
        logging.warning(
            "Row order is not topological: %s (row %d) is below its parent %s (row %d)",
            v.child_id,
            v.child_row,
            v.parent_id,
            v.parent_row,
        )
    return violations
