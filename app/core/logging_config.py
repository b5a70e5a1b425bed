"""Logging for the report API and CLI, tagged with a request id."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator

from app.core.settings import Settings


REQUEST_ID_HEADER = "X-Request-ID"
LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s - %(message)s"

_request_id: ContextVar[str] = ContextVar("report_request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamps the active request id (HTTP request or CLI run) on each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()
        return True


@contextmanager
def bind_request_id(value: str) -> Iterator[str]:
    """Tags log records emitted inside the block with ``value``."""
    token = _request_id.set(value)
    try:
        yield value
    finally:
        _request_id.reset(token)


def configure_logging(settings: Settings) -> None:
    """Attaches console and rotating file handlers to the root logger once per process."""
    root_logger = logging.getLogger()
    if getattr(root_logger, "_report_logging_configured", False):
        return

    root_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    request_filter = RequestIdFilter()

    Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
    handlers = [
        logging.StreamHandler(),
        RotatingFileHandler(settings.log_file, maxBytes=5_000_000, backupCount=5, encoding="utf-8"),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(request_filter)
        root_logger.addHandler(handler)

    root_logger._report_logging_configured = True
