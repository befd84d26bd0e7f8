"""Polling scheduler driving repeated crawls."""

import threading

import structlog

from svn_crawler.config.settings import Settings
from svn_crawler.crawler.driver import CrawlResult, Crawler
from svn_crawler.services.state import RevisionStateStore
from svn_crawler.sink.base import IndexingSink, batched, build_actions

logger = structlog.get_logger(__name__)


class CrawlScheduler:
    """Runs a crawl every ``update_rate`` seconds on a background thread.

    Crawls never overlap. ``stop()`` sets the cancellation event, which the
    running crawl checks between commits. The watermark only advances after
    the crawl output was handed to the sink.
    """

    def __init__(
        self,
        crawler: Crawler,
        sink: IndexingSink,
        settings: Settings,
        state_store: RevisionStateStore | None = None,
    ) -> None:
        self._crawler = crawler
        self._sink = sink
        self._settings = settings
        self._state_store = state_store
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_revision: int | None = None
        if state_store is not None:
            self._last_revision = state_store.load(settings.state_key)

    @property
    def last_revision(self) -> int | None:
        return self._last_revision

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def next_start_revision(self) -> int:
        if self._last_revision is None:
            return self._settings.start_revision
        return max(self._settings.start_revision, self._last_revision + 1)

    def run_once(self) -> CrawlResult:
        """Crawl from the watermark and submit the output to the sink."""
        start = self.next_start_revision()
        logger.info(
            "Indexing subversion repository",
            repos=self._settings.repos,
            path=self._settings.path,
            start=start,
        )
        result = self._crawler.crawl(
            self._settings.address(),
            self._settings.crawl_parameters(start_revision=start),
            cancel_event=self._stop_event,
        )
        if not result.revisions:
            logger.info(
                "Nothing to index",
                last_revision=self._last_revision,
                repos=self._settings.repos,
                path=self._settings.path,
            )
            return result

        actions = build_actions(result.revisions)
        for batch in batched(actions, self._settings.bulk_size):
            bulk = self._sink.submit(batch)
            logger.info("Executed bulk", actions=len(batch), submitted=bulk.submitted)
            if bulk.has_failures:
                logger.warning("Bulk had failures", failed=bulk.failed, errors=bulk.errors)

        self._last_revision = result.last_revision
        if self._state_store is not None and self._last_revision is not None:
            self._state_store.save(self._settings.state_key, self._last_revision)
        return result

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception as e:
                logger.warning("Subversion crawl cycle failed", error=str(e), exc_info=True)
            logger.debug("Scheduler going to sleep", seconds=self._settings.update_rate)
            self._stop_event.wait(self._settings.update_rate)

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop, name="svn-crawler-scheduler", daemon=True
        )
        self._thread.start()
        logger.info("Scheduler started", update_rate=self._settings.update_rate)

    def stop(self, timeout: float | None = None) -> None:
        """Request cancellation and wait for the running cycle to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Scheduler stopped")
