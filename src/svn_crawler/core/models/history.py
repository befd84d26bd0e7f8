"""Models for data read from the repository history."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from svn_crawler.core.exceptions import MappingError


class ChangeKind(str, Enum):
    """How a path was touched by a revision."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    REPLACED = "replaced"

    @classmethod
    def from_action(cls, action: str) -> "ChangeKind":
        """Map a Subversion action letter (A, M, D, R) to a change kind."""
        try:
            return _ACTIONS[action.upper()]
        except (KeyError, AttributeError):
            raise MappingError(
                f"Unknown change action: {action!r}", details={"action": action}
            ) from None

    @property
    def has_size(self) -> bool:
        """Whether the size of the path at the revision is meaningful."""
        return self in (ChangeKind.ADDED, ChangeKind.MODIFIED)


_ACTIONS = {
    "A": ChangeKind.ADDED,
    "M": ChangeKind.MODIFIED,
    "D": ChangeKind.DELETED,
    "R": ChangeKind.REPLACED,
}


class NodeKind(str, Enum):
    """Kind of a node in the repository tree."""

    FILE = "file"
    DIR = "dir"
    NONE = "none"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "NodeKind":
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.lower())
        except ValueError:
            return cls.UNKNOWN


class PathInfo(BaseModel):
    """Metadata of a path at a given revision."""

    path: str
    kind: NodeKind = NodeKind.UNKNOWN
    revision: int | None = None
    size: int | None = None

    class Config:
        frozen = True

    @property
    def is_file(self) -> bool:
        return self.kind == NodeKind.FILE


class LogEntry(BaseModel):
    """One commit as reported by the repository log.

    ``changed_paths`` keeps the order in which the repository reported the
    paths.
    """

    revision: int
    author: str | None = None
    date: datetime | None = None
    message: str | None = None
    changed_paths: dict[str, ChangeKind] = Field(default_factory=dict)

    class Config:
        frozen = True


class FileContent(BaseModel):
    """Raw bytes of a file at a revision and its declared MIME type."""

    data: bytes
    mime_type: str | None = None

    class Config:
        frozen = True

    @property
    def is_text(self) -> bool:
        """Text unless a non ``text/*`` MIME type was set on the file."""
        return self.mime_type is None or self.mime_type.startswith("text/")
