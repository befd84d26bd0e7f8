"""Subversion repository access for svn-crawler."""

from svn_crawler.svn.client import SvnClientRepository
from svn_crawler.svn.connector import (
    ConnectorRegistry,
    RepositoryConnector,
    create_default_registry,
    get_registry,
    open_repository,
)

__all__ = [
    "ConnectorRegistry",
    "RepositoryConnector",
    "SvnClientRepository",
    "create_default_registry",
    "get_registry",
    "open_repository",
]
