# git_log_parser.py
#
# Decodes history text that the caller already captured from git. Nothing in
# here runs git; pair GIT_LOG_ARGS / GIT_REF_ARGS with whatever process
# runner the caller uses.

import logging
from datetime import datetime

from git_graph_data import Revision
from graph_errors import LogParseError

FIELD_SEP = "\x00"

# %H: commit hash
# %h: abbreviated hash
# %P: parent hashes (space separated)
# %s: subject
# %an: author name
# %ae: author email
# %aI: author date (strict ISO 8601)
# %D: decorations without parentheses, full ref names with --decorate=full
GIT_LOG_FORMAT = "%H%x00%h%x00%P%x00%s%x00%an%x00%ae%x00%aI%x00%D"
LOG_RECORD_FIELDS = 8

DEFAULT_BATCH_SIZE = 200

GIT_LOG_ARGS = [
    "log",
    "--topo-order",
    "--decorate=full",
    "-z",
    "-n",
    str(DEFAULT_BATCH_SIZE),
    f"--pretty=format:{GIT_LOG_FORMAT}",
]

GIT_REF_ARGS = [
    "for-each-ref",
    "refs/heads/",
    "refs/remotes/",
    "refs/tags/",
    "--format=%(refname)%00%(objectname)",
]

HEAD = "HEAD"


def _parse_references(raw_refs_str: str) -> list[str]:
    """
    Parses the %D decoration string into ref names.
    Example: "HEAD -> refs/heads/main, tag: refs/tags/v1.1, refs/remotes/origin/main"
    Output: ['HEAD', 'refs/heads/main', 'refs/tags/v1.1', 'refs/remotes/origin/main']
    """
    content = raw_refs_str.strip()
    if content.startswith("(") and content.endswith(")"):
        content = content[1:-1]
    if not content:
        return []

    refs = []
    for ref in content.split(","):
        ref = ref.strip()
        if not ref:
            continue
        if ref.startswith("HEAD -> "):
            refs.append(HEAD)
            ref = ref[len("HEAD -> ") :].strip()
        elif ref.startswith("tag: "):
            ref = ref[len("tag: ") :].strip()
            if not ref.startswith("refs/"):
                ref = f"refs/tags/{ref}"
        refs.append(ref)
    return refs


def _parse_timestamp(revision_id: str, author_date: str) -> int:
    if not author_date:
        return 0
    try:
        return int(datetime.fromisoformat(author_date.strip()).timestamp())
    except ValueError as e:
        raise LogParseError(f"Bad author date {author_date!r} for {revision_id}") from e


def parse_git_log(log_output: str) -> list[Revision]:
    """
    Turns the output of ``git <GIT_LOG_ARGS>`` into Revisions, keeping git's order.
    """
    if not log_output.strip():
        return []

    parts = log_output.split(FIELD_SEP)
    # A trailing NUL after the last record leaves one extra empty field.
    if len(parts) % LOG_RECORD_FIELDS == 1 and not parts[-1].strip():
        parts.pop()
    if len(parts) % LOG_RECORD_FIELDS != 0:
        raise LogParseError(
            f"Expected a multiple of {LOG_RECORD_FIELDS} fields in git log output, got {len(parts)}"
        )

    revisions = []
    for i in range(0, len(parts), LOG_RECORD_FIELDS):
        sha, _short, parent_hashes_str, subject, author_name, _email, author_date, raw_refs = parts[
            i : i + LOG_RECORD_FIELDS
        ]
        sha = sha.strip()
        if not sha:
            raise LogParseError(f"Empty commit hash in record {i // LOG_RECORD_FIELDS}")

        revisions.append(
            Revision(
                id=sha,
                parent_ids=tuple(parent_hashes_str.split()),
                timestamp=_parse_timestamp(sha, author_date),
                subject=subject,
                author_name=author_name,
                refs=tuple(_parse_references(raw_refs)),
            )
        )

    logging.debug("Parsed %d revisions from git log output", len(revisions))
    return revisions


def parse_ref_listing(ref_output: str) -> dict[str, list[str]]:
    """
    Maps object ids to ref names from ``git <GIT_REF_ARGS>`` output
    (one "refname NUL objectname" pair per line). Remote HEAD symrefs are skipped.
    """
    labels_by_id: dict[str, list[str]] = {}
    for line in ref_output.splitlines():
        if not line.strip():
            continue
        ref, sep, obj = line.partition(FIELD_SEP)
        ref = ref.strip()
        obj = obj.strip()
        if not sep or not ref or not obj:
            logging.debug("Skipping malformed ref line: %r", line)
            continue
        if ref.startswith("refs/remotes/") and ref.endswith("/HEAD"):
            continue
        labels_by_id.setdefault(obj, []).append(ref)
    return labels_by_id
