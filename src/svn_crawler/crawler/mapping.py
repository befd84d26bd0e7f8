"""Mapping of log entries and changed paths to indexable records."""

import structlog

from svn_crawler.core.exceptions import (
    MappingError,
    RepositoryConnectionError,
    RepositoryError,
)
from svn_crawler.core.models import (
    ChangeKind,
    Document,
    FilterDecision,
    LogEntry,
    Revision,
)
from svn_crawler.svn.connector import RepositoryConnector

logger = structlog.get_logger(__name__)

# Stored instead of the bytes of files with a non-text MIME type
BINARY_CONTENT_PLACEHOLDER = "Not text type"


def _coerce_change_kind(value: ChangeKind | str) -> ChangeKind:
    if isinstance(value, ChangeKind):
        return value
    try:
        return ChangeKind(value)
    except ValueError:
        return ChangeKind.from_action(value)


class RevisionMapper:
    """Maps a log entry to a Revision with no documents yet."""

    def __init__(self, repository_identity: str) -> None:
        self._repository_identity = repository_identity

    def map(self, entry: LogEntry) -> Revision:
        return Revision(
            revision=entry.revision,
            repository=self._repository_identity,
            author=entry.author,
            date=entry.date,
            message=entry.message,
        )


class DocumentMapper:
    """Maps one changed path of a revision to a Document.

    Content is fetched only for files that still exist at the revision and
    only when neither the change kind nor the filter decision rules it out.
    """

    def __init__(self, repository: RepositoryConnector) -> None:
        self._repository = repository

    def map(
        self,
        path: str,
        change_kind: ChangeKind | str,
        revision: Revision,
        decision: FilterDecision | None = None,
    ) -> Document:
        if not path:
            raise MappingError(
                "Changed path is empty", details={"revision": revision.revision}
            )
        kind = _coerce_change_kind(change_kind)
        decision = decision or FilterDecision.none()

        content = None
        skip_reason = None
        if kind == ChangeKind.DELETED:
            skip_reason = "path deleted"
        elif decision.skip_content_only:
            skip_reason = decision.reason
        else:
            content = self._fetch_content(path, revision.revision)

        return Document(
            path=path,
            change_kind=kind,
            revision=revision.revision,
            repository=revision.repository,
            author=revision.author,
            date=revision.date,
            message=revision.message,
            content=content,
            content_skipped=skip_reason is not None,
            skip_reason=skip_reason,
        )

    def _fetch_content(self, path: str, revision: int) -> str | None:
        try:
            info = self._repository.path_info(path, revision)
            if info is None or not info.is_file:
                return None
            file_content = self._repository.file_content(path, revision)
        except RepositoryConnectionError:
            raise
        except RepositoryError as e:
            logger.warning(
                "Failed to fetch content",
                path=path,
                revision=revision,
                error=str(e),
            )
            return None

        if not file_content.is_text:
            return BINARY_CONTENT_PLACEHOLDER
        return file_content.data.decode("utf-8", errors="replace")
