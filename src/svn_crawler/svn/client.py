"""Subversion connector built on the ``svn`` command-line client.

Uses subprocess + ``svn --xml`` directly (no SVN bindings dependency).
"""

import re
import subprocess
import xml.etree.ElementTree as ET
from urllib.parse import quote

import structlog

from svn_crawler.core.exceptions import (
    ContentFetchError,
    MappingError,
    RepositoryConnectionError,
    RepositoryError,
)
from svn_crawler.core.models import (
    ChangeKind,
    Credentials,
    FileContent,
    LogEntry,
    NodeKind,
    PathInfo,
    RepositoryAddress,
)
from svn_crawler.utils.dates import parse_svn_date

logger = structlog.get_logger(__name__)

MIME_TYPE_PROPERTY = "svn:mime-type"

# Error codes reported when a path or revision does not exist
NOT_FOUND_CODES = frozenset(
    {"E160013", "E160006", "E160016", "E170000", "W170000", "E195012", "E200009"}
)
# Error codes reported when the repository cannot be reached or refuses access
CONNECTION_CODES = frozenset(
    {
        "E000111",
        "E170001",
        "E170013",
        "E175002",
        "E180001",
        "E210002",
        "E215004",
        "E670002",
        "E731001",
    }
)

_ERROR_CODE_RE = re.compile(r"\b([EW]\d{6})\b")


class PathNotFoundError(RepositoryError):
    """Raised internally when ``svn`` reports a missing path or revision."""


def _error_codes(stderr: str) -> set[str]:
    return set(_ERROR_CODE_RE.findall(stderr))


def _classify_error(stderr: str, command: list[str]) -> RepositoryError:
    """Turn ``svn`` stderr into the matching exception."""
    codes = _error_codes(stderr)
    details = {"command": " ".join(command), "codes": sorted(codes)}
    message = stderr.strip().splitlines()[-1] if stderr.strip() else "svn command failed"
    if codes & CONNECTION_CODES:
        return RepositoryConnectionError(message, details=details)
    if codes & NOT_FOUND_CODES:
        return PathNotFoundError(message, details=details)
    return RepositoryError(message, details=details)


def _parse_xml(output: bytes) -> ET.Element:
    try:
        return ET.fromstring(output)
    except ET.ParseError as e:
        raise MappingError(f"Unreadable svn XML output: {e}") from e


def parse_info_xml(output: bytes) -> list[dict[str, str | None]]:
    """Parse ``svn info --xml`` into one dict per entry."""
    entries = []
    for entry in _parse_xml(output).iter("entry"):
        commit = entry.find("commit")
        entries.append(
            {
                "path": entry.get("path"),
                "kind": entry.get("kind"),
                "revision": entry.get("revision"),
                "url": entry.findtext("url"),
                "root": entry.findtext("repository/root"),
                "uuid": entry.findtext("repository/uuid"),
                "commit_revision": commit.get("revision") if commit is not None else None,
            }
        )
    return entries


def parse_list_size(output: bytes) -> int | None:
    """Size of the first file entry of ``svn list --xml`` output."""
    for entry in _parse_xml(output).iter("entry"):
        size = entry.findtext("size")
        if size is not None:
            return int(size)
    return None


def parse_properties_xml(output: bytes) -> dict[str, str]:
    """Parse ``svn proplist --xml -v`` into a name -> value dict."""
    return {
        prop.get("name", ""): prop.text or ""
        for prop in _parse_xml(output).iter("property")
    }


def parse_log_xml(output: bytes) -> list[LogEntry]:
    """Parse ``svn log --xml -v`` output.

    Changed paths keep the order of the XML; paths with an unknown action are
    dropped with a warning.
    """
    entries = []
    for element in _parse_xml(output).iter("logentry"):
        revision = int(element.get("revision", "-1"))
        changed_paths: dict[str, ChangeKind] = {}
        for path_element in element.iter("path"):
            path = (path_element.text or "").strip()
            try:
                changed_paths[path] = ChangeKind.from_action(path_element.get("action", ""))
            except MappingError as e:
                logger.warning(
                    "Skipping changed path", path=path, revision=revision, error=str(e)
                )
        entries.append(
            LogEntry(
                revision=revision,
                author=element.findtext("author"),
                date=parse_svn_date(element.findtext("date")),
                message=element.findtext("msg"),
                changed_paths=changed_paths,
            )
        )
    entries.sort(key=lambda e: e.revision)
    return entries


class SvnClientRepository:
    """Connector backed by the ``svn`` executable."""

    def __init__(
        self,
        address: RepositoryAddress,
        credentials: Credentials | None = None,
        executable: str = "svn",
    ) -> None:
        self._address = address
        self._credentials = credentials or Credentials()
        self._executable = executable
        self._root_url: str | None = None
        self._uuid: str | None = None

    @classmethod
    def open_local(
        cls, address: RepositoryAddress, credentials: Credentials
    ) -> "SvnClientRepository":
        """Open a ``file://`` repository; credentials are not used."""
        repository = cls(address)
        repository.connect()
        return repository

    @classmethod
    def open_network(
        cls, address: RepositoryAddress, credentials: Credentials
    ) -> "SvnClientRepository":
        """Open an ``svn://``, ``svn+ssh://``, ``http://`` or ``https://`` repository."""
        repository = cls(address, credentials)
        repository.connect()
        return repository

    @property
    def address(self) -> RepositoryAddress:
        return self._address

    @property
    def identity(self) -> str:
        return self._address.path

    @property
    def root_url(self) -> str:
        if self._root_url is None:
            self.connect()
        return self._root_url or self._address.url

    def _auth_args(self) -> list[str]:
        if self._address.is_local or self._credentials.is_empty:
            return []
        args = ["--username", self._credentials.login or "", "--no-auth-cache"]
        if self._credentials.password is not None:
            args.extend(["--password", self._credentials.password])
        return args

    def _run_svn(self, *args: str) -> bytes:
        """Run an svn command and return raw stdout."""
        command = [self._executable, *args, "--non-interactive", *self._auth_args()]
        try:
            result = subprocess.run(command, capture_output=True, check=True)
        except FileNotFoundError as e:
            raise RepositoryConnectionError(
                f"svn client not found: {self._executable}",
                details={"executable": self._executable},
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace")
            # auth arguments stay out of error details
            raise _classify_error(stderr, [self._executable, *args]) from e
        return result.stdout

    def connect(self) -> None:
        """Check the repository is reachable and read its root URL."""
        try:
            entries = parse_info_xml(self._run_svn("info", "--xml", self._address.url))
        except RepositoryConnectionError:
            raise
        except RepositoryError as e:
            raise RepositoryConnectionError(
                f"Cannot open repository {self._address.url}: {e.message}",
                details={"url": self._address.url},
            ) from e
        if not entries:
            raise RepositoryConnectionError(
                f"Cannot open repository {self._address.url}",
                details={"url": self._address.url},
            )
        self._root_url = (entries[0]["root"] or self._address.url).rstrip("/")
        self._uuid = entries[0]["uuid"]
        logger.debug(
            "Repository opened",
            url=self._address.url,
            root=self._root_url,
            uuid=self._uuid,
        )

    def _url(self, path: str, revision: int | None = None) -> str:
        """Absolute URL of ``path`` with an optional peg revision."""
        if path.startswith("/"):
            base = self.root_url
        else:
            base = self._address.url.rstrip("/") + "/"
        url = base + quote(path, safe="/")
        if revision is not None:
            url = f"{url}@{revision}"
        return url

    def latest_revision(self) -> int:
        entries = parse_info_xml(self._run_svn("info", "--xml", "-r", "HEAD", self.root_url))
        if not entries or entries[0]["revision"] is None:
            raise MappingError("svn info reported no revision", details={"url": self.root_url})
        return int(entries[0]["revision"])

    def path_info(self, path: str, revision: int) -> PathInfo | None:
        url = self._url(path, revision)
        try:
            entries = parse_info_xml(self._run_svn("info", "--xml", url))
        except PathNotFoundError:
            return None
        if not entries:
            return None

        entry = entries[0]
        kind = NodeKind.parse(entry["kind"])
        size = None
        if kind == NodeKind.FILE:
            size = parse_list_size(self._run_svn("list", "--xml", url))
        commit_revision = entry["commit_revision"]
        return PathInfo(
            path=path,
            kind=kind,
            revision=int(commit_revision) if commit_revision else None,
            size=size,
        )

    def file_content(self, path: str, revision: int) -> FileContent:
        url = self._url(path, revision)
        try:
            data = self._run_svn("cat", url)
            properties = parse_properties_xml(self._run_svn("proplist", "--xml", "-v", url))
        except RepositoryConnectionError:
            raise
        except (RepositoryError, MappingError) as e:
            raise ContentFetchError(
                f"Cannot read {path}@{revision}: {e.message}",
                details={"path": path, "revision": revision},
            ) from e
        return FileContent(data=data, mime_type=properties.get(MIME_TYPE_PROPERTY))

    def log_entries(self, path: str, start: int, end: int) -> list[LogEntry]:
        output = self._run_svn(
            "log",
            "--xml",
            "--verbose",
            "--stop-on-copy",
            "-r",
            f"{start}:{end}",
            self._url(path, end),
        )
        return parse_log_xml(output)
