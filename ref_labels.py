# ref_labels.py
#
# Optional enrichment applied after layout: short ids and branch/tag labels.

from typing import Any, Iterable, Mapping, Optional

from git_graph_layout import GraphLayout
from graph_normalizer import NormalizedGraph

SHORT_ID_LENGTH = 7

LOCAL_PREFIX = "refs/heads/"
REMOTE_PREFIX = "refs/remotes/"
TAG_PREFIX = "refs/tags/"


def short_id(revision_id: str, length: int = SHORT_ID_LENGTH) -> str:
    return revision_id[:length]


def format_ref_label(ref: str) -> str:
    """
    refs/heads/main          -> [local]/[main]
    refs/remotes/origin/main -> [origin]/[main]
    refs/tags/v1.0           -> [tag]/[v1.0]
    origin/main              -> [origin]/[main]
    HEAD                     -> HEAD
    """
    s = str(ref or "")
    if s == "HEAD":
        return "HEAD"
    if s.startswith(LOCAL_PREFIX):
        return f"[local]/[{s[len(LOCAL_PREFIX):]}]"
    if s.startswith(TAG_PREFIX):
        return f"[tag]/[{s[len(TAG_PREFIX):]}]"
    if s.startswith(REMOTE_PREFIX):
        rest = s[len(REMOTE_PREFIX) :]
        remote, sep, branch = rest.partition("/")
        if not sep:
            return f"[remote]/[{rest}]"
        return f"[{remote}]/[{branch}]"
    remote, sep, branch = s.partition("/")
    if not sep:
        return f"[{s}]"
    return f"[{remote}]/[{branch}]"


def collect_labels(refs: Iterable[str], extra: Optional[Iterable[str]] = None) -> list[str]:
    """Merge ref names, dropping duplicates but keeping first-seen order."""
    seen = {}
    for ref in list(refs) + list(extra or []):
        if ref:
            seen.setdefault(ref, None)
    return list(seen)


def annotate_rows(
    layout: GraphLayout,
    graph: NormalizedGraph,
    labels_by_id: Optional[Mapping[str, Iterable[str]]] = None,
    formatted: bool = True,
) -> list[dict[str, Any]]:
    """Row records for a history list: lane data plus what a person reads."""
    labels_by_id = labels_by_id or {}
    annotated = []
    for row in layout.rows:
        rev = graph.by_id[row.id]
        labels = collect_labels(rev.refs, labels_by_id.get(row.id))
        if formatted:
            labels = [format_ref_label(label) for label in labels]
        annotated.append(
            {
                "id": row.id,
                "short": short_id(row.id),
                "lane": row.lane,
                "parents": list(rev.parent_ids),
                "parentLanes": list(row.parent_lanes),
                "labels": labels,
                "subject": rev.subject,
                "authorName": rev.author_name,
                "timestamp": rev.timestamp,
            }
        )
    return annotated
