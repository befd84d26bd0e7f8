"""Core domain models and exceptions for svn-crawler."""

from svn_crawler.core.exceptions import (
    ConfigurationError,
    ContentFetchError,
    MappingError,
    RepositoryConnectionError,
    RepositoryError,
    SvnCrawlerError,
)
from svn_crawler.core.models import (
    ChangeKind,
    CrawlParameters,
    Credentials,
    Document,
    FileContent,
    FilterDecision,
    LogEntry,
    NodeKind,
    PathInfo,
    RepositoryAddress,
    Revision,
)

__all__ = [
    # Models
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
    # Exceptions
    "SvnCrawlerError",
    "ConfigurationError",
    "RepositoryError",
    "RepositoryConnectionError",
    "ContentFetchError",
    "MappingError",
]
