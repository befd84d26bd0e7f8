"""Services orchestrating crawls around the core."""

from svn_crawler.services.scheduler import CrawlScheduler
from svn_crawler.services.state import RevisionStateStore

__all__ = ["CrawlScheduler", "RevisionStateStore"]
