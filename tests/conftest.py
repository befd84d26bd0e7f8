"""Pytest configuration and fixtures."""

import pytest

from fakes import InMemoryRepository
from svn_crawler.core.models import RepositoryAddress
from svn_crawler.crawler import Crawler
from svn_crawler.svn.connector import ConnectorRegistry

MEMORY_URL = "mem:///repos/test"


@pytest.fixture
def repository() -> InMemoryRepository:
    """Create an empty in-memory repository (revision 0 only)."""
    return InMemoryRepository(identity="/repos/test")


@pytest.fixture
def registry(repository: InMemoryRepository) -> ConnectorRegistry:
    """Registry opening the in-memory repository for ``mem://`` addresses."""
    registry = ConnectorRegistry()

    def _open(address, credentials):
        repository._check_reachable()
        return repository

    registry.register("mem", _open)
    return registry


@pytest.fixture
def address() -> RepositoryAddress:
    return RepositoryAddress.parse(MEMORY_URL)


@pytest.fixture
def crawler(registry: ConnectorRegistry) -> Crawler:
    return Crawler(registry=registry)
