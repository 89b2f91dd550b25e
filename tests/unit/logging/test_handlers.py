"""Unit tests for JSONFormatter."""

import json
import sys
import logging

from lingmedia.logging.context import DocumentContextFilter, document_context
from lingmedia.logging.handlers import JSONFormatter


def _record(msg: str = "Found audio", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="lingmedia.media.updater",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter output."""

    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["message"] == "Found audio"
        assert entry["logger"] == "lingmedia.media.updater"
        assert "timestamp" in entry
        assert "context" not in entry

    def test_extra_fields_in_context(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(candidate="fox.mp3")))
        assert entry["context"] == {"candidate": "fox.mp3"}

    def test_document_context_fields(self) -> None:
        record = _record()
        with document_context("s1", "fox.flextext"):
            DocumentContextFilter().filter(record)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["context"] == {"story_id": "s1", "document": "fox.flextext"}
        assert "document_tag" not in entry["context"]

    def test_exception_included(self) -> None:
        try:
            raise OSError("unreadable")
        except OSError:
            record = logging.LogRecord(
                name="lingmedia",
                level=logging.WARNING,
                pathname=__file__,
                lineno=1,
                msg="failed",
                args=(),
                exc_info=sys.exc_info(),
            )
        entry = json.loads(JSONFormatter().format(record))
        assert "OSError: unreadable" in entry["exception"]
