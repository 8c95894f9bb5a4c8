"""Tests for the JSONL log sink."""

import json
import logging

import pytest
from ts_preview.logging_setup import JsonlHandler
from ts_preview.logging_setup import init_json_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler, JsonlHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _lines(path):
    return [json.loads(line) for line in path.read_text().splitlines()]


class TestInitJsonLogging:
    def test_writes_jsonl(self, tmp_path, root_logger):
        log_file = tmp_path / "logs" / "preview.jsonl"
        init_json_logging(str(log_file), "debug")

        logging.getLogger("ts_preview.test").info("resolved %s", "react", extra={"event": "resolve:done"})

        [entry] = _lines(log_file)
        assert entry["lvl"] == "INFO"
        assert entry["logger"] == "ts_preview.test"
        assert entry["message"] == "resolved react"
        assert entry["event"] == "resolve:done"
        assert entry["schema"]["name"] == "ts-preview.log"
        assert entry["thread"] == "MainThread"
        assert root_logger.level == logging.DEBUG

    def test_replaces_previous_handler(self, tmp_path, root_logger):
        first = init_json_logging(str(tmp_path / "a.jsonl"))
        second = init_json_logging(str(tmp_path / "b.jsonl"))

        handlers = [h for h in root_logger.handlers if isinstance(h, JsonlHandler)]
        assert handlers == [second]
        assert first is not second

    def test_dict_message_merged(self, tmp_path, root_logger):
        log_file = tmp_path / "c.jsonl"
        init_json_logging(str(log_file), "INFO")

        logging.getLogger("ts_preview.test").warning({"event": "build:error", "errors": 2})

        [entry] = _lines(log_file)
        assert entry["event"] == "build:error"
        assert entry["errors"] == 2

    def test_level_filters(self, tmp_path, root_logger):
        log_file = tmp_path / "d.jsonl"
        init_json_logging(str(log_file), "WARNING")

        logging.getLogger("ts_preview.test").info("hidden")
        logging.getLogger("ts_preview.test").warning("shown")

        assert [e["message"] for e in _lines(log_file)] == ["shown"]
