"""Exception hierarchy for svn-crawler."""

from typing import Any


class SvnCrawlerError(Exception):
    """Base exception for all svn-crawler errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigurationError(SvnCrawlerError):
    """Raised when settings or crawl parameters are invalid."""


class RepositoryError(SvnCrawlerError):
    """Raised when a single repository call fails."""


class RepositoryConnectionError(RepositoryError, ConnectionError):
    """Raised when the repository is unreachable, refuses the credentials,
    or its address uses an unsupported scheme.

    Fatal to the crawl invocation.
    """


class ContentFetchError(RepositoryError):
    """Raised when the bytes of one file cannot be read."""


class MappingError(SvnCrawlerError):
    """Raised when the connector reports data of an unexpected shape."""
