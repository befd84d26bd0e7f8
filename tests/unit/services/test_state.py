"""Tests for the revision state store."""

import json

import pytest

from svn_crawler.services import RevisionStateStore


@pytest.mark.unit
class TestRevisionStateStore:
    """Tests for RevisionStateStore."""

    def test_missing_file(self, tmp_path) -> None:
        store = RevisionStateStore(tmp_path / "state.json")
        assert store.load("svn://host/repos#/") is None

    def test_save_and_load(self, tmp_path) -> None:
        store = RevisionStateStore(tmp_path / "nested" / "state.json")

        store.save("svn://host/repos#/", 12)
        store.save("svn://host/repos#/trunk", 7)

        assert store.load("svn://host/repos#/") == 12
        assert RevisionStateStore(store.path).load("svn://host/repos#/trunk") == 7

    def test_save_overwrites(self, tmp_path) -> None:
        store = RevisionStateStore(tmp_path / "state.json")
        store.save("key", 1)
        store.save("key", 2)
        assert json.loads(store.path.read_text()) == {"key": 2}

    def test_corrupt_file_is_ignored(self, tmp_path) -> None:
        path = tmp_path / "state.json"
        path.write_text("{not json")
        store = RevisionStateStore(path)

        assert store.load("key") is None
        store.save("key", 3)
        assert store.load("key") == 3
