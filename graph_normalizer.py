# graph_normalizer.py

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Union

from git_graph_data import Revision
from graph_errors import DuplicateRevisionId, MalformedRevision


@dataclass
class NormalizedGraph:
    """Lookup indices over one batch of revisions.

    ``by_id`` preserves the input order. Parent ids that are not keys of
    ``by_id`` point outside the batch (boundary parents).
    """

    by_id: dict[str, Revision] = field(default_factory=dict)
    children_of: dict[str, list[str]] = field(default_factory=dict)
    roots: set[str] = field(default_factory=set)
    merges: set[str] = field(default_factory=set)

    def __contains__(self, revision_id: str) -> bool:
        return revision_id in self.by_id

    def __len__(self) -> int:
        return len(self.by_id)

    def present_parents(self, revision_id: str) -> list[str]:
        """Parent ids of ``revision_id`` that are part of this batch, in order."""
        return [p for p in self.by_id[revision_id].parent_ids if p in self.by_id]

    def boundary_parents(self) -> set[str]:
        return {p for rev in self.by_id.values() for p in rev.parent_ids if p not in self.by_id}


def normalize(revisions: Iterable[Union[Revision, Mapping]]) -> NormalizedGraph:
    """Build a NormalizedGraph, rejecting the whole batch on the first bad entry."""
    graph = NormalizedGraph()

    for item in revisions:
        rev = item if isinstance(item, Revision) else Revision.from_dict(item)
        if rev.id in graph.by_id:
            raise DuplicateRevisionId(rev.id)
        if rev.id in rev.parent_ids:
            raise MalformedRevision(rev.id, "revision lists itself as a parent")
        if len(set(rev.parent_ids)) != len(rev.parent_ids):
            raise MalformedRevision(rev.id, "parent listed more than once")
        graph.by_id[rev.id] = rev

    for rev in graph.by_id.values():
        if rev.is_root:
            graph.roots.add(rev.id)
        if rev.is_merge:
            graph.merges.add(rev.id)
        for parent_id in rev.parent_ids:
            graph.children_of.setdefault(parent_id, []).append(rev.id)

    logging.debug(
        "Normalized %d revisions: %d roots, %d merges, %d boundary parents",
        len(graph.by_id),
        len(graph.roots),
        len(graph.merges),
        len(graph.boundary_parents()),
    )
    return graph
