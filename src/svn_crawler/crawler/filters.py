"""Exclusion policy for changed paths."""

import structlog

from svn_crawler.core.models import ChangeKind, CrawlParameters, FilterDecision
from svn_crawler.svn.connector import RepositoryConnector

logger = structlog.get_logger(__name__)


class EntryFilter:
    """Decides whether, and how, a changed path is filtered out.

    Patterns are checked first, in configuration order, and the first match
    wins; the size ceiling is checked only for added or modified paths.
    """

    def __init__(self, parameters: CrawlParameters, repository: RepositoryConnector) -> None:
        self._parameters = parameters
        self._patterns = parameters.compiled_patterns
        self._repository = repository

    def decide(self, revision: int, path: str, change_kind: ChangeKind) -> FilterDecision:
        for pattern in self._patterns:
            if pattern.fullmatch(path):
                return self._excluded(
                    path,
                    FilterDecision(
                        exclude_from_crawl=True,
                        skip_content_only=True,
                        reason=f"matches pattern {pattern.pattern}",
                    ),
                )

        maximum = self._parameters.maximum_file_size
        if maximum is not None and change_kind.has_size:
            info = self._repository.path_info(path, revision)
            if info is not None and info.size is not None and info.size > maximum:
                return self._excluded(
                    path,
                    FilterDecision(
                        exclude_from_crawl=True,
                        skip_content_only=False,
                        reason=f"size too big {info.size}",
                    ),
                )

        return FilterDecision.none()

    @staticmethod
    def _excluded(path: str, decision: FilterDecision) -> FilterDecision:
        logger.warning("Entry filtered out", path=path, reason=decision.reason)
        return decision
