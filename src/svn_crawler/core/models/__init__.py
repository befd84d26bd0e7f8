"""Domain models for svn-crawler."""

from svn_crawler.core.models.address import Credentials, RepositoryAddress
from svn_crawler.core.models.history import (
    ChangeKind,
    FileContent,
    LogEntry,
    NodeKind,
    PathInfo,
)
from svn_crawler.core.models.parameters import CrawlParameters
from svn_crawler.core.models.revision import Document, FilterDecision, Revision

__all__ = [
    "RepositoryAddress",
    "Credentials",
    "CrawlParameters",
    "ChangeKind",
    "NodeKind",
    "PathInfo",
    "LogEntry",
    "FileContent",
    "FilterDecision",
    "Revision",
    "Document",
]
