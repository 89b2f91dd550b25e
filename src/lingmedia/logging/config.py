"""Logging setup for lingmedia batch runs.

Every handler carries the DocumentContextFilter, so a record logged while a
document is being resolved is tagged with its story ID and filename. The
HTTP client libraries log one INFO line per remote probe; they get their
own level so a remote search over many candidates does not drown the
per-document progress lines.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from lingmedia.logging.context import DocumentContextFilter
from lingmedia.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from lingmedia.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s - %(document_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

HTTP_LOGGERS = ("httpx", "httpcore")

_LEVEL_MAP: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _level(name: str) -> int:
    return _LEVEL_MAP.get(name.casefold(), logging.INFO)


def _make_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def _open_file_handler(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it is unavailable."""
    file_path = Path(config.file).expanduser()
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Install handlers on the root logger for one lingmedia run.

    Logs go to the configured file and/or stderr. Stderr is always used
    when no file is configured or the file cannot be opened, so progress
    and missing-media warnings are never silently lost.

    Args:
        config: Logging configuration.
    """
    level = _level(config.level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_file_handler(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = _make_formatter(config)
    context_filter = DocumentContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    http_level = _level(config.http_level)
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
