"""Revision, Document and FilterDecision models.

Revisions and documents expose an explicit index projection through
``to_index_payload()``; the payload is what the indexing sink receives, the
model fields are the internal representation.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from svn_crawler.core.models.history import ChangeKind
from svn_crawler.utils.dates import format_date
from svn_crawler.utils.hashing import document_id, revision_id

REVISION_TYPE = "svnrevision"
DOCUMENT_TYPE = "svndocument"


class FilterDecision(BaseModel):
    """Outcome of evaluating the exclusion policy against one changed path.

    ``exclude_from_crawl`` drops the path from its revision entirely;
    ``skip_content_only`` keeps the document but does not fetch its content.
    """

    exclude_from_crawl: bool = False
    skip_content_only: bool = False
    reason: str | None = None

    class Config:
        frozen = True

    @classmethod
    def none(cls) -> "FilterDecision":
        """The decision applied when no filter matched."""
        return cls()


class Document(BaseModel):
    """One changed path within one revision."""

    path: str
    change_kind: ChangeKind
    revision: int
    repository: str

    # Denormalized from the parent revision
    author: str | None = None
    date: datetime | None = None
    message: str | None = None

    content: str | None = None
    content_skipped: bool = False
    skip_reason: str | None = None

    class Config:
        frozen = True

    @property
    def id(self) -> str:
        return document_id(self.repository, self.path, self.revision)

    def to_index_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "repository": self.repository,
            "revision": self.revision,
            "author": self.author,
            "date": format_date(self.date),
            "message": self.message,
            "type": self.change_kind.value,
            "content": self.content,
            "content_skipped": self.content_skipped,
            "skip_reason": self.skip_reason,
        }


class Revision(BaseModel):
    """A single commit and the documents crawled from it.

    Documents are indexed as separate records and are not part of the
    revision payload.
    """

    revision: int
    repository: str
    author: str | None = None
    date: datetime | None = None
    message: str | None = None
    documents: list[Document] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def id(self) -> str:
        return revision_id(self.repository, self.revision)

    def add_document(self, document: Document) -> None:
        self.documents.append(document)

    def to_index_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "author": self.author,
            "repository": self.repository,
            "revision": self.revision,
            "date": format_date(self.date),
            "message": self.message,
        }
