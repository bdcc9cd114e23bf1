from __future__ import annotations

import json
import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Any

from .config import ClientConfig

PACKAGE_LOGGER = "retail_console_sdk"
DEFAULT_HISTORY_SIZE = 1000

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_REDACTED_KEYS = {"token", "authorization", "password"}

# Handlers added by configure_logging, replaced on the next call.
_installed_handlers: list[logging.Handler] = []


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    context = {}
    for key, value in vars(record).items():
        if key in _RESERVED_ATTRS or key.startswith("_"):
            continue
        context[key] = "***" if key.lower() in _REDACTED_KEYS else value
    return context


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(_record_context(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class LogHistoryHandler(logging.Handler):
    """Keeps the most recent records in memory for diagnostics screens."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._entries: deque[dict[str, Any]] = deque(maxlen=capacity)
        self._entries_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "context": _record_context(record),
        }
        with self._entries_lock:
            self._entries.append(entry)

    def entries(self) -> list[dict[str, Any]]:
        with self._entries_lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._entries_lock:
            self._entries.clear()


def resolve_level(config: ClientConfig) -> int:
    if config.log_level:
        level = logging.getLevelName(config.log_level)
        if isinstance(level, int):
            return level
    return logging.ERROR if config.is_production else logging.DEBUG


def configure_logging(
    config: ClientConfig,
    *,
    stream_handler: logging.Handler | None = None,
    history_size: int = DEFAULT_HISTORY_SIZE,
) -> LogHistoryHandler:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(config))
    while _installed_handlers:
        logger.removeHandler(_installed_handlers.pop())

    console = stream_handler or logging.StreamHandler()
    console.setFormatter(JsonFormatter())
    history = LogHistoryHandler(capacity=history_size)
    for handler in (console, history):
        logger.addHandler(handler)
        _installed_handlers.append(handler)
    return history
