from __future__ import annotations

import datetime as dt
import json
import logging
import sys
from typing import Any

from .settings import Settings

_EXTRA_FIELDS = ("event", "todo_id", "session_id", "position", "state", "url", "error")
_HANDLER_NAME = "todo_app"


def _iso_now() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


class JsonLogFormatter(logging.Formatter):
    """Single-line JSON records with the todo extras attached when present."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "ts": _iso_now(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for attr in _EXTRA_FIELDS:
            if hasattr(record, attr):
                payload[attr] = getattr(record, attr)
        if record.exc_info:
            exc_type = record.exc_info[0]
            payload["err_type"] = getattr(exc_type, "__name__", str(exc_type))
            payload["stack"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleLogFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        ts = _iso_now()[11:19]  # HH:MM:SS
        parts = [ts, record.levelname.upper(), record.name, record.getMessage()]
        for attr in _EXTRA_FIELDS:
            value = getattr(record, attr, None)
            if value is not None:
                parts.append(f"{attr}={value}")
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# PUBLIC_INTERFACE
def configure_logging(settings: Settings) -> logging.Logger:
    """
    Attach one stream handler to the 'todo_app' logger.

    Calling it again replaces the formatter and level instead of adding handlers.
    """
    root = logging.getLogger("todo_app")
    root.setLevel(settings.log_level)

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)
    handler.setFormatter(JsonLogFormatter() if settings.log_format == "json" else ConsoleLogFormatter())
    return root
