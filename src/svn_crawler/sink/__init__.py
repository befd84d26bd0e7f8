"""Indexing sinks for crawl output."""

from svn_crawler.sink.base import (
    BulkResult,
    IndexAction,
    IndexingSink,
    batched,
    build_actions,
)
from svn_crawler.sink.bulk import BulkFileSink

__all__ = [
    "BulkFileSink",
    "BulkResult",
    "IndexAction",
    "IndexingSink",
    "batched",
    "build_actions",
]
