"""Tests for index actions and the bulk file sink."""

import io
import json

import pytest

from factories import DocumentFactory, RevisionFactory
from svn_crawler.sink import BulkFileSink, IndexAction, batched, build_actions


@pytest.fixture
def revisions():
    first = RevisionFactory(revision=1)
    first.add_document(DocumentFactory(revision=1, path="/a.txt"))
    first.add_document(DocumentFactory(revision=1, path="/b.txt"))
    second = RevisionFactory(revision=2)
    return [first, second]


@pytest.mark.unit
class TestBuildActions:
    """Tests for build_actions."""

    def test_revision_followed_by_documents(self, revisions) -> None:
        actions = build_actions(revisions)

        assert [a.collection for a in actions] == [
            "svnrevision",
            "svndocument",
            "svndocument",
            "svnrevision",
        ]
        assert actions[0].id == revisions[0].id
        assert actions[1].payload["path"] == "/a.txt"
        assert actions[3].payload["revision"] == 2

    def test_revision_payload_has_no_documents(self, revisions) -> None:
        payload = build_actions(revisions)[0].payload
        assert "documents" not in payload
        assert payload["date"] == "2013-05-01T12:00:00.000+0000"

    def test_empty(self) -> None:
        assert build_actions([]) == []


@pytest.mark.unit
class TestBatched:
    """Tests for batched."""

    def test_splits_in_order(self) -> None:
        actions = [IndexAction(id=str(i), collection="c", payload={}) for i in range(5)]
        batches = list(batched(actions, 2))
        assert [[a.id for a in b] for b in batches] == [["0", "1"], ["2", "3"], ["4"]]

    def test_no_actions(self) -> None:
        assert list(batched([], 200)) == []

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            list(batched([], 0))


@pytest.mark.unit
class TestBulkFileSink:
    """Tests for BulkFileSink."""

    def test_writes_header_and_source_lines(self, revisions) -> None:
        stream = io.StringIO()
        actions = build_actions(revisions)

        result = BulkFileSink(stream, index_name="code").submit(actions)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 2 * len(actions)
        header = json.loads(lines[0])
        assert header == {
            "index": {"_index": "code", "_type": "svnrevision", "_id": revisions[0].id}
        }
        assert json.loads(lines[1])["id"] == revisions[0].id
        assert result.submitted == len(actions)
        assert not result.has_failures

    def test_unserializable_payload_is_counted_as_failure(self) -> None:
        stream = io.StringIO()
        actions = [
            IndexAction(id="ok", collection="svnrevision", payload={"a": 1}),
            IndexAction(id="bad", collection="svnrevision", payload={"a": object()}),
        ]

        result = BulkFileSink(stream).submit(actions)

        assert result.submitted == 1
        assert result.failed == 1
        assert result.errors[0].startswith("bad:")
        assert len(stream.getvalue().splitlines()) == 2
