"""Revision range resolution.

Narrows a requested end revision to the youngest revision where the crawled
path is known to exist, so that a path deleted before the end of the range
can still be crawled up to its deletion.
"""

import structlog

from svn_crawler.core.models.parameters import ROOT_PATH
from svn_crawler.svn.connector import RepositoryConnector

logger = structlog.get_logger(__name__)

NO_VALID_REVISION = -1


def resolve_end_revision(
    repository: RepositoryConnector,
    path: str,
    start: int,
    end_requested: int | None = None,
) -> int:
    """Return a safe end revision for crawling ``path``.

    ``end_requested`` None means the latest revision. Returns
    NO_VALID_REVISION when the path exists at no revision of the range.
    """
    end = repository.latest_revision() if end_requested is None else end_requested

    # The root always exists
    if path == ROOT_PATH:
        return end

    if repository.path_info(path, end) is not None:
        return end

    # Either deleted inside the range or never present in it
    return last_valid_revision(repository, path, start, end)


def last_valid_revision(
    repository: RepositoryConnector,
    path: str,
    start: int,
    end: int,
) -> int:
    """Youngest revision in [start, end] where ``path`` exists.

    Scans backward one revision at a time; path existence is not monotonic
    because of delete/recreate cycles, so no bisection.
    """
    if start >= end:
        logger.error(
            "Start revision must be older than end revision",
            path=path,
            start=start,
            end=end,
        )
        return NO_VALID_REVISION

    for revision in range(end, start - 1, -1):
        if repository.path_info(path, revision) is not None:
            logger.debug("Found last valid revision", path=path, revision=revision)
            return revision
    return NO_VALID_REVISION
