# git_graph_data.py

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from graph_errors import MalformedRevision

Point = tuple[float, float]

_MISSING = object()

EDGE_LINE = "line"
EDGE_CURVE = "curve"


def _first_present(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class Revision:
    """One commit as handed over by the history collaborator.

    ``parent_ids`` is ordered; the first entry is the mainline parent.
    """

    id: str
    parent_ids: tuple[str, ...] = ()
    timestamp: int = 0
    subject: str = ""
    author_name: str = ""
    refs: tuple[str, ...] = ()

    @property
    def is_merge(self) -> bool:
        return len(self.parent_ids) > 1

    @property
    def is_root(self) -> bool:
        return not self.parent_ids

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Revision":
        """Build a Revision from a decoded record.

        Accepts the wire names (``parentIds``, ``authorName``), snake_case
        names and the older aliases (``parents``, ``author``, ``authorTime``,
        ``message``). Every field but ``refs`` must be present; an explicit
        null or empty parent list marks a root.
        """
        revision_id = data.get("id")
        if not isinstance(revision_id, str) or not revision_id:
            raise MalformedRevision(revision_id, "missing or empty id")

        parents = _first_present(data, "parentIds", "parent_ids", "parents", default=_MISSING)
        if parents is _MISSING:
            raise MalformedRevision(revision_id, "missing parentIds")
        if parents is None:
            parents = []
        if not isinstance(parents, (list, tuple)) or not all(isinstance(p, str) and p for p in parents):
            raise MalformedRevision(revision_id, "parent ids must be a list of non-empty strings")

        timestamp = _first_present(data, "timestamp", "authorTime", default=_MISSING)
        if timestamp is _MISSING:
            raise MalformedRevision(revision_id, "missing timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise MalformedRevision(revision_id, f"timestamp must be an integer, got {timestamp!r}")

        subject = _first_present(data, "subject", "message", default=_MISSING)
        if subject is _MISSING:
            raise MalformedRevision(revision_id, "missing subject")
        author_name = _first_present(data, "authorName", "author_name", "author", default=_MISSING)
        if author_name is _MISSING:
            raise MalformedRevision(revision_id, "missing authorName")

        refs = data.get("refs")
        if refs is None:
            refs = []
        if not isinstance(refs, (list, tuple)) or not all(isinstance(r, str) for r in refs):
            raise MalformedRevision(revision_id, "refs must be a list of strings")

        return cls(
            id=revision_id,
            parent_ids=tuple(parents),
            timestamp=timestamp,
            subject=str(subject or ""),
            author_name=str(author_name or ""),
            refs=tuple(refs),
        )

    def __repr__(self) -> str:
        return (
            f"Revision(id='{self.id[:7]}', "
            f"parents={[p[:7] for p in self.parent_ids]}, "
            f"timestamp={self.timestamp}, "
            f"subject='{self.subject[:20]}')"
        )


@dataclass
class Row:
    """A revision placed at display index ``row`` (0 is the newest)."""

    id: str
    row: int
    lane: int
    parent_lanes: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "lane": self.lane, "parentLanes": list(self.parent_lanes)}


@dataclass(frozen=True)
class Node:
    id: str
    x: float
    y: float
    lane: int
    row: int

    @property
    def point(self) -> Point:
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y, "lane": self.lane}


@dataclass(frozen=True)
class Edge:
    from_id: str
    to_id: str
    kind: str  # EDGE_LINE or EDGE_CURVE
    points: tuple[Point, ...]

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def controls(self) -> Optional[tuple[Point, Point]]:
        if self.kind != EDGE_CURVE:
            return None
        return self.points[1], self.points[2]

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromId": self.from_id,
            "toId": self.to_id,
            "kind": self.kind,
            "points": [list(p) for p in self.points],
        }
