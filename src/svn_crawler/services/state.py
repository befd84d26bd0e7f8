"""Persistence of the last indexed revision per repository path."""

import json
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class RevisionStateStore:
    """JSON file mapping ``"<url>#<path>"`` keys to the last indexed revision."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, int]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Unreadable state file, ignoring", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            return {}
        return {key: int(value) for key, value in data.items() if isinstance(value, int)}

    def load(self, key: str) -> int | None:
        """Last indexed revision for ``key``, None if never indexed."""
        return self._read().get(key)

    def save(self, key: str, revision: int) -> None:
        data = self._read()
        data[key] = revision
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        logger.debug("Saved revision state", key=key, revision=revision)
