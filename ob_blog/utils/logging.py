"""
Logging for blog commands.

Records go to a rich console handler and, optionally, to a plain or JSONL
file under the logs directory. Records emitted inside ``entry_context``
carry the id of the entry being worked on, so one entry's history can be
pulled out of the JSONL log with a single filter.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from rich.logging import RichHandler

from ..config import LoggingConfig

_CURRENT_ENTRY: ContextVar[str | None] = ContextVar("ob_entry_id", default=None)


def setup_logging(cfg: LoggingConfig, log_dir: Path | None) -> logging.Logger:
    logger = logging.getLogger("ob_blog")
    logger.setLevel(_level_from_string(cfg.level))
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setLevel(_level_from_string(cfg.level))
        console_handler.addFilter(EntryFilter())
        console_handler.setFormatter(ConsoleFormatter())
        logger.addHandler(console_handler)

    if cfg.file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_path = log_dir / cfg.filename
        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setLevel(_level_from_string(cfg.level))
        file_handler.addFilter(EntryFilter())
        file_handler.setFormatter(_build_file_formatter(cfg.format))
        logger.addHandler(file_handler)

    return logger


@contextmanager
def entry_context(entry_id: str) -> Iterator[None]:
    """Tag every record logged inside the block with ``entry_id``."""
    token = _CURRENT_ENTRY.set(entry_id)
    try:
        yield
    finally:
        _CURRENT_ENTRY.reset(token)


def log_event(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    if logger is None:
        return
    logger.info(message, extra=fields)


def log_warning(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    if logger is None:
        return
    logger.warning(message, extra=fields)


class EntryFilter(logging.Filter):
    """Fill ``record.entry_id`` from the active ``entry_context`` unless set explicitly."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "entry_id", None) is None:
            record.entry_id = _CURRENT_ENTRY.get()
        return True


class ConsoleFormatter(logging.Formatter):
    # Short ids keep console lines readable; the files keep the full id.
    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        entry_id = getattr(record, "entry_id", None)
        if entry_id:
            return f"[{entry_id[:8]}] {message}"
        return message


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extract_extras(record))
        return json.dumps(payload, ensure_ascii=False, default=str)


class PlainFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(entry_label)s%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        entry_id = getattr(record, "entry_id", None)
        record.entry_label = f"[{entry_id}] " if entry_id else ""
        return super().format(record)


_RESERVED = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
        "asctime",
        "entry_label",
    }
)


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    extras = {key: value for key, value in record.__dict__.items() if key not in _RESERVED}
    if extras.get("entry_id") is None:
        extras.pop("entry_id", None)
    return extras


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return PlainFormatter()


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
