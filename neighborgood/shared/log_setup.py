"""
NeighborGood - Logging Setup

Configures the root logger from the ``logging`` section of the settings.
Two output formats are supported:
- text: ``%(asctime)s - %(name)s - %(levelname)s - %(message)s``
- json: one JSON object per line, including any ``extra=`` context

Usage:
    from neighborgood.shared.log_setup import configure_logging

    configure_logging(get_config())
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from neighborgood.shared.config import Settings, get_config

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TEXT_FORMAT_NO_TIME = "%(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys() | {"message", "asctime"}
)


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.include_timestamp:
            payload["timestamp"] = datetime.fromtimestamp(record.created, UTC).isoformat()

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def build_formatter(config: Settings) -> logging.Formatter:
    """Create the formatter selected by ``config.logging``."""
    log_config = config.logging
    if log_config.format == "json":
        return JsonFormatter(include_timestamp=log_config.include_timestamp)
    return logging.Formatter(TEXT_FORMAT if log_config.include_timestamp else TEXT_FORMAT_NO_TIME)


def configure_logging(config: Settings | None = None) -> logging.Logger:
    """
    Install a single stream handler on the root logger.

    Existing root handlers are replaced so repeated calls don't duplicate output.

    Args:
        config: Configuration object (uses default if not provided)

    Returns:
        The configured root logger
    """
    config = config or get_config()

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(config))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.logging.level.upper())

    return root
