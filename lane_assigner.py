# lane_assigner.py

import logging
from dataclasses import dataclass, field
from typing import Optional

from git_graph_data import Row
from graph_normalizer import NormalizedGraph


@dataclass
class LaneAssignment:
    rows: list[Row] = field(default_factory=list)
    lane_of: dict[str, int] = field(default_factory=dict)
    max_lanes: int = 0

    def parent_lanes_of(self, revision_id: str) -> list[int]:
        return list(self.rows[self._row_index[revision_id]].parent_lanes)

    def __post_init__(self):
        self._row_index = {r.id: i for i, r in enumerate(self.rows)}


class LaneAssigner:
    """Walks rows top to bottom and gives every revision a lane.

    ``active[i]`` holds the id expected next in lane ``i``, or None when the
    lane is free. A revision lands in the lane its child reserved for it;
    its parents are then reserved starting from that same lane.
    """

    def __init__(self):
        self.active: list[Optional[str]] = []
        self.max_lanes = 0

    @property
    def active_lanes(self) -> list[Optional[str]]:
        return list(self.active)

    def _first_free(self, start: int = 0) -> int:
        for i in range(start, len(self.active)):
            if self.active[i] is None:
                return i
        self.active.append(None)
        return len(self.active) - 1

    def _slot_of(self, revision_id: str) -> int:
        try:
            return self.active.index(revision_id)
        except ValueError:
            return -1

    def _trim(self):
        while self.active and self.active[-1] is None:
            self.active.pop()

    def place(self, revision_id: str, row_index: int, graph: NormalizedGraph) -> Row:
        """Process one row and return its lane and parent lanes."""
        lane = self._slot_of(revision_id)
        if lane == -1:
            lane = self._first_free()

        # The revision is consumed; its parents take over from this lane.
        self.active[lane] = None

        insert_at = lane
        parent_lanes = []
        for parent_id in graph.by_id[revision_id].parent_ids:
            if parent_id not in graph.by_id:
                continue
            existing = self._slot_of(parent_id)
            if existing != -1:
                parent_lanes.append(existing)
                continue
            spot = self._first_free(insert_at)
            self.active[spot] = parent_id
            parent_lanes.append(spot)
            insert_at = spot + 1

        self._trim()
        self.max_lanes = max(self.max_lanes, len(self.active), lane + 1)
        return Row(id=revision_id, row=row_index, lane=lane, parent_lanes=parent_lanes)

    def assign(self, row_ids: list[str], graph: NormalizedGraph) -> LaneAssignment:
        self.active = []
        self.max_lanes = 0

        rows = []
        for row_index, revision_id in enumerate(row_ids):
            rows.append(self.place(revision_id, row_index, graph))

        if self.active:
            # Reserved ids that never showed up: their child was ordered below them.
            logging.debug("Lane pass finished with %d pending lanes: %s", len(self.active), self.active)

        return LaneAssignment(
            rows=rows,
            lane_of={r.id: r.lane for r in rows},
            max_lanes=self.max_lanes,
        )


def assign_lanes(row_ids: list[str], graph: NormalizedGraph) -> LaneAssignment:
    return LaneAssigner().assign(row_ids, graph)
