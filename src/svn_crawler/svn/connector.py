"""Repository connector interface and scheme registry."""

from collections.abc import Callable
from functools import lru_cache
from typing import Protocol

import structlog

from svn_crawler.core.exceptions import RepositoryConnectionError
from svn_crawler.core.models import (
    Credentials,
    FileContent,
    LogEntry,
    PathInfo,
    RepositoryAddress,
)

logger = structlog.get_logger(__name__)


class RepositoryConnector(Protocol):
    """Read access to the history of one repository.

    Paths starting with ``/`` are relative to the repository root, others to
    the repository location.
    """

    @property
    def identity(self) -> str:
        """Identity string of the repository, stable across crawls."""
        ...

    def latest_revision(self) -> int:
        ...

    def path_info(self, path: str, revision: int) -> PathInfo | None:
        """Metadata of ``path`` at ``revision``, or None if it does not exist."""
        ...

    def file_content(self, path: str, revision: int) -> FileContent:
        """Bytes and MIME type of a file; raises ContentFetchError on failure."""
        ...

    def log_entries(self, path: str, start: int, end: int) -> list[LogEntry]:
        """Commits touching ``path`` between ``start`` and ``end``, oldest first."""
        ...


Opener = Callable[[RepositoryAddress, Credentials], RepositoryConnector]


class ConnectorRegistry:
    """Connector variants keyed by address scheme."""

    def __init__(self) -> None:
        self._openers: dict[str, Opener] = {}

    def register(self, scheme: str, opener: Opener) -> None:
        self._openers[scheme.lower()] = opener

    @property
    def schemes(self) -> list[str]:
        return sorted(self._openers)

    def open(
        self,
        address: RepositoryAddress,
        credentials: Credentials | None = None,
    ) -> RepositoryConnector:
        """Open a connector for ``address``.

        Raises RepositoryConnectionError for unsupported schemes and for
        repositories that cannot be reached.
        """
        opener = self._openers.get(address.protocol)
        if opener is None:
            raise RepositoryConnectionError(
                f"Unsupported repository protocol: {address.protocol}",
                details={"url": address.url, "supported": self.schemes},
            )
        logger.debug("Opening repository", url=address.url, protocol=address.protocol)
        return opener(address, credentials or Credentials())


def create_default_registry() -> ConnectorRegistry:
    """Registry with the ``svn`` client for every scheme it understands."""
    from svn_crawler.svn.client import SvnClientRepository

    registry = ConnectorRegistry()
    registry.register("file", SvnClientRepository.open_local)
    for scheme in ("svn", "svn+ssh", "http", "https"):
        registry.register(scheme, SvnClientRepository.open_network)
    return registry


@lru_cache
def get_registry() -> ConnectorRegistry:
    """Get the process-wide connector registry."""
    return create_default_registry()


def open_repository(
    address: RepositoryAddress,
    credentials: Credentials | None = None,
) -> RepositoryConnector:
    """Open a repository through the process-wide registry."""
    return get_registry().open(address, credentials)
