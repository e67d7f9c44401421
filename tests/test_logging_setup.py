"""Tests for the JSONL logging bootstrap."""

import json
import logging

import pytest

from unused_projects.logging_setup import JsonlHandler
from unused_projects.logging_setup import init_json_logging


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def test_no_path_installs_nothing(clean_root_logger, monkeypatch):
    monkeypatch.delenv("UNUSED_PROJECTS_LOG_PATH", raising=False)
    before = list(clean_root_logger.handlers)

    assert init_json_logging() is None
    assert clean_root_logger.handlers == before


def test_writes_jsonl(clean_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "report.jsonl"
    init_json_logging(str(log_file), "debug")

    logging.getLogger("unused_projects.test").info("grouped %d extensions", 3, extra={"event": "grouped"})

    entry = json.loads(log_file.read_text().splitlines()[-1])
    assert entry["lvl"] == "INFO"
    assert entry["logger"] == "unused_projects.test"
    assert entry["message"] == "grouped 3 extensions"
    assert entry["event"] == "grouped"
    assert clean_root_logger.level == logging.DEBUG


def test_env_path(clean_root_logger, tmp_path, monkeypatch):
    log_file = tmp_path / "env.jsonl"
    monkeypatch.setenv("UNUSED_PROJECTS_LOG_PATH", str(log_file))

    handler = init_json_logging()

    assert isinstance(handler, JsonlHandler)
    assert handler.path == log_file


def test_reinit_replaces_handler(clean_root_logger, tmp_path):
    init_json_logging(str(tmp_path / "a.jsonl"))
    init_json_logging(str(tmp_path / "b.jsonl"))

    jsonl = [h for h in clean_root_logger.handlers if isinstance(h, JsonlHandler)]
    assert len(jsonl) == 1
    assert jsonl[0].path.name == "b.jsonl"


def test_dict_message_merged(tmp_path):
    handler = JsonlHandler(tmp_path / "x.jsonl")
    record = logging.LogRecord("t", logging.INFO, "t.py", 1, {"groups": 4}, (), None)

    payload = handler.format_record(record)

    assert payload["groups"] == 4
