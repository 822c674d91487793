"""Tests for logging setup and the JSONL formatter."""

import json
import logging
from pathlib import Path

from ob_blog.config import LoggingConfig
from ob_blog.utils.logging import entry_context, log_event, log_warning, setup_logging


def test_setup_logging_writes_jsonl(tmp_path: Path):
    cfg = LoggingConfig(console=False, file=True, format="jsonl", filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)

    log_event(logger, "Entry published", event="entry_published", entry_id="abc")
    for handler in logger.handlers:
        handler.flush()
        handler.close()

    lines = (tmp_path / "run.jsonl").read_text(encoding="utf-8").strip().split("\n")
    assert len(lines) == 1

    record = json.loads(lines[0])
    assert record["message"] == "Entry published"
    assert record["event"] == "entry_published"
    assert record["entry_id"] == "abc"
    assert record["level"] == "INFO"
    assert "timestamp" in record


def test_setup_logging_console_only(tmp_path: Path):
    cfg = LoggingConfig(level="debug", console=True, file=False)
    logger = setup_logging(cfg, tmp_path)

    assert logger.name == "ob_blog"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False
    assert not any(tmp_path.iterdir())


def test_log_event_ignores_missing_logger():
    log_event(None, "nothing happens")


def _close(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()
        handler.close()


def test_entry_context_tags_jsonl_records(tmp_path: Path):
    cfg = LoggingConfig(console=False, file=True, format="jsonl", filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)

    with entry_context("e1"):
        log_event(logger, "Entry published", event="entry_published")
        log_warning(logger, "Explicit id wins", entry_id="other")
    log_event(logger, "Pages regenerated", event="pages_regenerated")
    _close(logger)

    records = [json.loads(line) for line in (tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()]
    assert [r.get("entry_id") for r in records] == ["e1", "other", None]
    assert "entry_id" not in records[2]


def test_plain_file_format_shows_entry_id(tmp_path: Path):
    cfg = LoggingConfig(console=False, file=True, format="plain", filename="run.log")
    logger = setup_logging(cfg, tmp_path)

    with entry_context("abc123"):
        log_event(logger, "Draft created")
    log_event(logger, "Done")
    _close(logger)

    first, second = (tmp_path / "run.log").read_text(encoding="utf-8").splitlines()
    assert first.endswith("INFO [abc123] Draft created")
    assert second.endswith("INFO Done")
