"""Crawl driver: one synchronous crawl of a repository path."""

import threading
from enum import Enum

import structlog
from pydantic import BaseModel, Field

from svn_crawler.core.exceptions import (
    MappingError,
    RepositoryConnectionError,
    RepositoryError,
)
from svn_crawler.core.models import CrawlParameters, LogEntry, RepositoryAddress, Revision
from svn_crawler.crawler.filters import EntryFilter
from svn_crawler.crawler.mapping import DocumentMapper, RevisionMapper
from svn_crawler.crawler.range import NO_VALID_REVISION, resolve_end_revision
from svn_crawler.svn.connector import ConnectorRegistry, RepositoryConnector, get_registry

logger = structlog.get_logger(__name__)


class CrawlState(str, Enum):
    """Lifecycle of one crawl invocation."""

    OPENING = "opening"
    RESOLVING_RANGE = "resolving_range"
    ENUMERATING = "enumerating"
    DONE = "done"
    EMPTY = "empty"
    FAILED = "failed"
    CANCELLED = "cancelled"


class CrawlResult(BaseModel):
    """Ordered revisions produced by one crawl."""

    state: CrawlState
    revisions: list[Revision] = Field(default_factory=list)
    start_revision: int
    end_revision: int | None = None

    @property
    def last_revision(self) -> int | None:
        """Highest revision crawled, None when nothing was crawled."""
        if not self.revisions:
            return None
        return self.revisions[-1].revision

    @property
    def document_count(self) -> int:
        return sum(len(r.documents) for r in self.revisions)


class Crawler:
    """Orchestrates connector, range resolution, filtering and mapping.

    Per-path failures skip that document; connection failures abort the
    crawl and are re-raised.
    """

    def __init__(self, registry: ConnectorRegistry | None = None) -> None:
        self._registry = registry or get_registry()
        self.state: CrawlState | None = None

    def crawl(
        self,
        address: RepositoryAddress | str,
        parameters: CrawlParameters,
        cancel_event: threading.Event | None = None,
    ) -> CrawlResult:
        """Crawl ``parameters.path`` of the repository at ``address``.

        If ``cancel_event`` is set between two commits, the revisions crawled
        so far are returned with state CANCELLED.
        """
        if isinstance(address, str):
            address = RepositoryAddress.parse(address)
        path = parameters.path
        start = parameters.start_revision

        try:
            self.state = CrawlState.OPENING
            repository = self._registry.open(address, parameters.credentials)

            self.state = CrawlState.RESOLVING_RANGE
            end = resolve_end_revision(repository, path, start, parameters.end_revision)
            if end == NO_VALID_REVISION:
                logger.warning(
                    "Path did not exist in revision range",
                    url=address.url,
                    path=path,
                    start=start,
                    end=parameters.end_revision,
                )
                return self._finish(CrawlState.EMPTY, [], start, None)
            if start > end:
                logger.info(
                    "Nothing to index", url=address.url, path=path, start=start, end=end
                )
                return self._finish(CrawlState.EMPTY, [], start, end)

            self.state = CrawlState.ENUMERATING
            logger.info(
                "Retrieving revisions", url=address.url, path=path, start=start, end=end
            )
            entries = repository.log_entries(path, start, end)
            revisions, cancelled = self._enumerate(
                repository, parameters, entries, cancel_event
            )
        except (RepositoryError, MappingError) as e:
            self.state = CrawlState.FAILED
            logger.error("Crawl failed", url=address.url, path=path, error=str(e))
            raise

        logger.info(
            "Retrieved revisions",
            url=address.url,
            path=path,
            start=start,
            end=end,
            revisions=len(revisions),
            cancelled=cancelled,
        )
        state = CrawlState.CANCELLED if cancelled else CrawlState.DONE
        return self._finish(state, revisions, start, end)

    def _finish(
        self,
        state: CrawlState,
        revisions: list[Revision],
        start: int,
        end: int | None,
    ) -> CrawlResult:
        self.state = state
        return CrawlResult(
            state=state, revisions=revisions, start_revision=start, end_revision=end
        )

    def _enumerate(
        self,
        repository: RepositoryConnector,
        parameters: CrawlParameters,
        entries: list[LogEntry],
        cancel_event: threading.Event | None,
    ) -> tuple[list[Revision], bool]:
        entry_filter = EntryFilter(parameters, repository)
        revision_mapper = RevisionMapper(repository.identity)
        document_mapper = DocumentMapper(repository)

        revisions: list[Revision] = []
        for entry in entries:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Crawl cancelled", revisions=len(revisions))
                return revisions, True
            if revisions and entry.revision <= revisions[-1].revision:
                logger.warning(
                    "Skipping out of order log entry",
                    revision=entry.revision,
                    previous=revisions[-1].revision,
                )
                continue

            revision = revision_mapper.map(entry)
            for changed_path, change_kind in entry.changed_paths.items():
                logger.debug("Extracting entry", path=changed_path, revision=entry.revision)
                try:
                    decision = entry_filter.decide(entry.revision, changed_path, change_kind)
                    if decision.exclude_from_crawl:
                        continue
                    revision.add_document(
                        document_mapper.map(changed_path, change_kind, revision, decision)
                    )
                except RepositoryConnectionError:
                    raise
                except (MappingError, RepositoryError) as e:
                    logger.warning(
                        "Failed to map changed path",
                        path=changed_path,
                        revision=entry.revision,
                        error=str(e),
                    )
            revisions.append(revision)

        return revisions, False
