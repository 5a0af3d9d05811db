from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Dict, List
from pathlib import Path

from . import settings


def configure_logging(force: bool = False) -> None:
    """Install the service's log handlers on the root logger.

    Handlers are installed once; a second call is a no-op unless ``force`` is
    True or ``LOG_FORCE`` is set. An empty ``LOG_FILE`` disables the file
    handler.
    """

    root_logger = logging.getLogger()

    if root_logger.handlers and not (force or settings.LOG_FORCE):
        return

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handlers: List[logging.Handler] = []
    if settings.LOG_FILE:
        handlers.append(
            _build_file_handler(
                settings.LOG_FILE,
                max_bytes=settings.LOG_MAX_BYTES,
                backup_count=settings.LOG_BACKUP_COUNT,
            )
        )

    if settings.LOG_CONSOLE or not handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(_formatter())
        handlers.append(console_handler)

    logging.basicConfig(level=settings.LOG_LEVEL, handlers=handlers)
    logging.captureWarnings(True)

    _quiet_loggers()


def _build_file_handler(path_str: str, *, max_bytes: int, backup_count: int) -> RotatingFileHandler:
    path = Path(path_str).expanduser()
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(_formatter())
    return handler


def _formatter() -> logging.Formatter:
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s%(meta)s"
    return _ExtraFormatter(fmt)


class _ExtraFormatter(logging.Formatter):
    """Appends any ``extra=`` fields of a record to the formatted line."""

    _reserved = set(
        logging.LogRecord("", 0, "", 0, "", None, None).__dict__
    ) | {"message", "asctime", "meta", "taskName"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        extras = self._collect_extras(record)
        record.meta = f" | {extras}" if extras else ""
        return super().format(record)

    def _collect_extras(self, record: logging.LogRecord) -> Dict[str, object]:
        return {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._reserved
        }


def _quiet_loggers() -> None:
    noisy = {
        "urllib3": logging.WARNING,
        "httpx": logging.WARNING,
        "uvicorn.access": logging.WARNING,
    }
    for name, level in noisy.items():
        logging.getLogger(name).setLevel(level)
