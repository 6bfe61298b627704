# graph_errors.py


class LayoutError(Exception):
    """Base class for every error raised while laying out a commit graph."""


class DuplicateRevisionId(LayoutError):
    def __init__(self, revision_id: str):
        super().__init__(f"Duplicate revision id in batch: {revision_id}")
        self.revision_id = revision_id


class MalformedRevision(LayoutError):
    def __init__(self, revision_id, reason: str):
        super().__init__(f"Malformed revision {revision_id!r}: {reason}")
        self.revision_id = revision_id
        self.reason = reason


class InvalidRowOrder(LayoutError):
    """Raised in strict mode when a child is listed below one of its parents."""

    def __init__(self, violation):
        super().__init__(
            f"Revision {violation.child_id} is listed below its parent {violation.parent_id} "
            f"(rows {violation.child_row} > {violation.parent_row})"
        )
        self.violation = violation


class InvalidLayoutConfig(LayoutError):
    def __init__(self, key: str, reason: str):
        super().__init__(f"Invalid layout option {key!r}: {reason}")
        self.key = key
        self.reason = reason


class LogParseError(LayoutError):
    pass
