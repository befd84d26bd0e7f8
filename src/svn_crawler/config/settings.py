"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from svn_crawler.core.exceptions import ConfigurationError
from svn_crawler.core.models import CrawlParameters, RepositoryAddress


class Settings(BaseSettings):
    """Application settings loaded from ``SVN_CRAWLER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SVN_CRAWLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # General
    log_level: str = "INFO"
    json_logs: bool = False

    # Repository
    repos: str | None = None
    path: str = "/"
    start_revision: int = 0
    end_revision: int | None = None
    login: str | None = None
    password: str | None = None

    # Filtering
    filters: list[str] = []
    maximum_file_size: int | None = None

    # Scheduling
    update_rate: float = 15 * 60  # seconds
    bulk_size: int = 200

    # Output
    index_name: str = "svn"
    output: str | None = None  # bulk NDJSON file, stdout when unset
    state_file: str = "~/.svn-crawler/state.json"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.state_file = str(Path(self.state_file).expanduser())

    def address(self) -> RepositoryAddress:
        """Repository address built from ``repos``."""
        if not self.repos:
            raise ConfigurationError("No repository configured (SVN_CRAWLER_REPOS)")
        return RepositoryAddress.parse(self.repos)

    def crawl_parameters(self, start_revision: int | None = None) -> CrawlParameters:
        """Crawl parameters, optionally starting from another revision."""
        try:
            return CrawlParameters(
                path=self.path,
                start_revision=self.start_revision if start_revision is None else start_revision,
                end_revision=self.end_revision,
                login=self.login,
                password=self.password,
                patterns_to_filter=self.filters,
                maximum_file_size=self.maximum_file_size,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid crawl parameters: {e}") from e

    @property
    def state_key(self) -> str:
        """Key of this repository path in the revision state file."""
        return f"{self.repos}#{self.path}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
