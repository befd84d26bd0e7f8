"""Sink writing Elasticsearch bulk NDJSON to a text stream."""

import json
from typing import TextIO

import structlog

from svn_crawler.sink.base import BulkResult, IndexAction, IndexingSink

logger = structlog.get_logger(__name__)


class BulkFileSink(IndexingSink):
    """Writes each action as an ``index`` line followed by its source line.

    The output can be posted as-is to an Elasticsearch ``_bulk`` endpoint.
    """

    def __init__(self, stream: TextIO, index_name: str = "svn") -> None:
        self._stream = stream
        self._index_name = index_name

    def submit(self, actions: list[IndexAction]) -> BulkResult:
        result = BulkResult()
        for action in actions:
            header = {
                "index": {
                    "_index": self._index_name,
                    "_type": action.collection,
                    "_id": action.id,
                }
            }
            try:
                lines = json.dumps(header) + "\n" + json.dumps(action.payload) + "\n"
            except (TypeError, ValueError) as e:
                result.failed += 1
                result.errors.append(f"{action.id}: {e}")
                continue
            self._stream.write(lines)
            result.submitted += 1
        self._stream.flush()
        logger.debug(
            "Bulk written",
            index=self._index_name,
            submitted=result.submitted,
            failed=result.failed,
        )
        return result
