"""Logging helpers shared by the renderer and the command line."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(level: str = "WARNING", handler: Optional[logging.Handler] = None) -> None:
    """Installs a JSON handler on the package logger.

    Args:
        level: Level name applied to the ``tomlcomment`` logger.
        handler: Handler to install. Defaults to a stderr stream handler.
    """
    handler = handler or logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    package_logger = logging.getLogger("tomlcomment")
    package_logger.handlers = [handler]
    package_logger.setLevel(level.upper())
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
