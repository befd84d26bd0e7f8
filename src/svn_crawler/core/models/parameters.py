"""Crawl parameter model."""

import re

from pydantic import BaseModel, Field, field_validator

from svn_crawler.core.models.address import Credentials

ROOT_PATH = "/"


class CrawlParameters(BaseModel):
    """Parameters of one crawl invocation.

    ``patterns_to_filter`` are regular expressions matched against the whole
    changed path; their order is the evaluation order.
    """

    path: str = ROOT_PATH
    start_revision: int = Field(default=0, ge=0)
    end_revision: int | None = Field(default=None, ge=0)
    login: str | None = None
    password: str | None = None
    patterns_to_filter: list[str] = Field(default_factory=list)
    maximum_file_size: int | None = Field(default=None, ge=0)

    class Config:
        frozen = True

    @field_validator("path")
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        value = value.strip() or ROOT_PATH
        if value != ROOT_PATH:
            value = value.rstrip("/")
        return value

    @field_validator("patterns_to_filter")
    @classmethod
    def _check_patterns(cls, value: list[str]) -> list[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid filter pattern {pattern!r}: {e}") from e
        return value

    @property
    def compiled_patterns(self) -> list[re.Pattern[str]]:
        return [re.compile(pattern) for pattern in self.patterns_to_filter]

    @property
    def credentials(self) -> Credentials:
        return Credentials(login=self.login, password=self.password)
