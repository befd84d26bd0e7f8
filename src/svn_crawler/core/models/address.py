"""Repository address and credential models."""

from urllib.parse import urlsplit

from pydantic import BaseModel, field_validator

from svn_crawler.core.exceptions import ConfigurationError

LOCAL_PROTOCOLS = frozenset({"file"})


class RepositoryAddress(BaseModel):
    """Location of a Subversion repository.

    ``path`` is the path of the repository location on its host, e.g.
    ``/svn/project`` for ``https://example.org/svn/project``.
    """

    protocol: str
    host: str = ""
    port: int | None = None
    path: str = "/"

    class Config:
        frozen = True

    @field_validator("protocol")
    @classmethod
    def _normalize_protocol(cls, value: str) -> str:
        return value.lower()

    @classmethod
    def parse(cls, url: str) -> "RepositoryAddress":
        """Build an address from a URL such as ``svn://host:3690/repos``."""
        parts = urlsplit(url.strip())
        if not parts.scheme:
            raise ConfigurationError(
                f"Repository URL has no scheme: {url}", details={"url": url}
            )
        try:
            port = parts.port
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid port in repository URL: {url}", details={"url": url}
            ) from e
        return cls(
            protocol=parts.scheme,
            host=parts.hostname or "",
            port=port,
            path=parts.path.rstrip("/") or "/",
        )

    @property
    def is_local(self) -> bool:
        return self.protocol in LOCAL_PROTOCOLS

    @property
    def url(self) -> str:
        netloc = self.host
        if self.port is not None:
            netloc = f"{netloc}:{self.port}"
        return f"{self.protocol}://{netloc}{self.path}"

    def __str__(self) -> str:
        return self.url


class Credentials(BaseModel):
    """Login and password for network repositories."""

    login: str | None = None
    password: str | None = None

    class Config:
        frozen = True

    @property
    def is_empty(self) -> bool:
        return not self.login
