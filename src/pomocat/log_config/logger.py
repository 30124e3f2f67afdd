"""Logging setup for pomocat and the contextual logger used by the session."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any, MutableMapping

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE = "pomocat.log"

# Third-party loggers that flood DEBUG output (HTTP access lines, image plugins).
_QUIET_LOGGERS = ("uvicorn.access", "PIL", "watchfiles")


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = "logs",
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> None:
    """Send pomocat's logs to the console and to ``<log_dir>/pomocat.log``.

    Calling it again replaces the handlers installed by the previous call.
    Unknown level names fall back to ``INFO``.

    Args:
        log_level: One of DEBUG / INFO / WARNING / ERROR / CRITICAL.
        log_dir: Directory for the rotating log file (created if absent);
            ``None`` logs to the console only.
        max_bytes: Size at which the log file rotates.
        backup_count: Number of rotated files to keep.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(log_dir, _LOG_FILE),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes messages with ``[key=value]`` pairs.

    The context can change over the adapter's life, so a long-lived owner
    (the session state machine) can keep e.g. the current cycle in its lines::

        log = ContextualLogger(logging.getLogger(__name__), component="pomodoro")
        log.bind(cycle=2)
        log.info("Break started")  # => "[component=pomodoro] [cycle=2] Break started"
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        super().__init__(logger, dict(context))

    @property
    def prefix(self) -> str:
        return " ".join(f"[{k}={v}]" for k, v in self.extra.items())

    def bind(self, **context: Any) -> None:
        """Add or replace context keys."""
        self.extra.update(context)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        prefix = self.prefix
        return (f"{prefix} {msg}" if prefix else msg), kwargs
