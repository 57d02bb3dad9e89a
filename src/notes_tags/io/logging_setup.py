"""Centralized logging bootstrap for notes-tags runtime.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
// [LAW:one-source-of-truth] Runtime log path/level are derived here and returned to callers.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str) -> tuple[str, int]:
    normalized = str(raw or "INFO").strip().upper()
    level = getattr(logging, normalized, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    level_name = logging.getLevelName(level)
    return str(level_name), int(level)


def _safe_name(value: str) -> str:
    candidate = "".join(ch if (ch.isalnum() or ch in {"-", "_"}) else "-" for ch in value)
    cleaned = candidate.strip("-_")
    return cleaned or "session"


def _default_log_path(session_name: str) -> str:
    log_dir = Path(
        os.environ.get("NOTES_TAGS_LOG_DIR", os.path.expanduser("~/.local/share/notes-tags/logs"))
    )
    log_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return str(log_dir / f"{_safe_name(session_name)}-{ts}-{os.getpid()}.log")


def _make_stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    # While the TUI owns the terminal, records marked notes_tags_in_app stay off stderr.
    handler.addFilter(lambda record: not bool(getattr(record, "notes_tags_in_app", False)))
    return handler


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(session_name: str = "notes", level: str | None = None) -> LoggingRuntime:
    """Configure notes_tags logger hierarchy with stderr + rotating file handlers.

    Idempotent: repeated calls return the originally configured runtime.
    level overrides NOTES_TAGS_LOG_LEVEL when given.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    raw_level = level if level is not None else os.environ.get("NOTES_TAGS_LOG_LEVEL", "INFO")
    level_name, level_value = _parse_level(raw_level)
    file_path = os.environ.get("NOTES_TAGS_LOG_FILE", "") or _default_log_path(session_name)
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    # [LAW:single-enforcer] All notes_tags module loggers propagate to this one logger.
    logger = logging.getLogger("notes_tags")
    logger.setLevel(level_value)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_stream_handler(level_value))
    logger.addHandler(_make_file_handler(level_value, file_path))

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=file_path)
    return _RUNTIME


def reset() -> None:
    """Drop handlers and forget the runtime (tests only)."""
    global _RUNTIME
    logger = logging.getLogger("notes_tags")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    _RUNTIME = None
