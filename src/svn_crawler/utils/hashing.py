"""Deterministic identifiers for indexed records.

Ids are MD5 digests over the UTF-16-LE code units of the string parts
followed by the revision as a signed 64-bit little-endian integer, so the
same repository, path and revision always produce the same id.
"""

import hashlib
import struct


def _hasher(*parts: str, revision: int):
    h = hashlib.md5()
    for part in parts:
        h.update(part.encode("utf-16-le"))
    h.update(struct.pack("<q", revision))
    return h


def revision_id(repository: str, revision: int) -> str:
    """Id of a revision: repository@revision."""
    return _hasher(repository, revision=revision).hexdigest()


def document_id(repository: str, path: str, revision: int) -> str:
    """Id of a changed path: repository, path@revision."""
    return _hasher(repository, path, revision=revision).hexdigest()
