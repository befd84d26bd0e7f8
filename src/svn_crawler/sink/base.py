"""Indexing sink interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import BaseModel, Field

from svn_crawler.core.models import Revision
from svn_crawler.core.models.revision import DOCUMENT_TYPE, REVISION_TYPE


class IndexAction(BaseModel):
    """One record to index: its id, target collection and payload."""

    id: str
    collection: str
    payload: dict[str, Any]

    class Config:
        frozen = True


class BulkResult(BaseModel):
    """Outcome of submitting one batch."""

    submitted: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return self.failed > 0


class IndexingSink(ABC):
    """Receives index actions in batches.

    Retrying failed items is the sink's concern; callers only log the
    returned BulkResult.
    """

    @abstractmethod
    def submit(self, actions: list[IndexAction]) -> BulkResult:
        """Submit one batch of actions."""


def build_actions(revisions: Iterable[Revision]) -> list[IndexAction]:
    """Index actions for revisions, each revision followed by its documents."""
    actions = []
    for revision in revisions:
        actions.append(
            IndexAction(
                id=revision.id,
                collection=REVISION_TYPE,
                payload=revision.to_index_payload(),
            )
        )
        for document in revision.documents:
            actions.append(
                IndexAction(
                    id=document.id,
                    collection=DOCUMENT_TYPE,
                    payload=document.to_index_payload(),
                )
            )
    return actions


def batched(actions: list[IndexAction], size: int) -> Iterator[list[IndexAction]]:
    """Split actions into consecutive batches of at most ``size`` items."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for i in range(0, len(actions), size):
        yield actions[i : i + size]
