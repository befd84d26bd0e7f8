"""History crawling: range resolution, filtering, mapping and the driver."""

from svn_crawler.crawler.driver import CrawlResult, Crawler, CrawlState
from svn_crawler.crawler.filters import EntryFilter
from svn_crawler.crawler.mapping import (
    BINARY_CONTENT_PLACEHOLDER,
    DocumentMapper,
    RevisionMapper,
)
from svn_crawler.crawler.range import NO_VALID_REVISION, resolve_end_revision

__all__ = [
    "BINARY_CONTENT_PLACEHOLDER",
    "NO_VALID_REVISION",
    "CrawlResult",
    "CrawlState",
    "Crawler",
    "DocumentMapper",
    "EntryFilter",
    "RevisionMapper",
    "resolve_end_revision",
]
