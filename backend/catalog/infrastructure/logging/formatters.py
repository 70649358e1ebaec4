"""Formatters selectable through ``LOG_FORMAT``.

``simple`` and ``detailed`` are plain layouts for a person watching the
console. ``structured`` writes ``key=value`` lines and ``json`` one JSON
object per record; both carry every field passed through ``extra=``.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, Tuple

SIMPLE_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
DETAILED_FORMAT = "%(asctime)s [%(levelname)8s] %(name)s: %(message)s"

# Attributes every record has; anything else arrived through ``extra=`` or a filter.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {"message", "asctime"}


def extra_fields(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    return ((key, value) for key, value in vars(record).items() if key not in _STANDARD_ATTRS)


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


def _render_value(value: Any) -> str:
    if isinstance(value, (bool, int, float)):
        return str(value)
    return json.dumps(str(value), ensure_ascii=False)


class StructuredFormatter(logging.Formatter):
    """One ``key=value`` line per record.

    Example:
        timestamp=2024-05-01T09:30:00+00:00 level=INFO module=catalog.modules.author.services
        message="Author deleted" author_id=7 correlation_id="3f9c2a1b"
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"timestamp={_timestamp(record)}",
            f"level={record.levelname}",
            f"module={record.name}",
            f"message={json.dumps(record.getMessage(), ensure_ascii=False)}",
        ]
        parts.extend(f"{key}={_render_value(value)}" for key, value in extra_fields(record))

        if record.exc_info:
            parts.append(f"exception={_render_value(self.formatException(record.exc_info))}")

        return " ".join(parts)


class JSONFormatter(logging.Formatter):
    """One JSON object per record; values JSON cannot encode are stringified."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
            "location": f"{record.filename}:{record.lineno}",
            "function": record.funcName,
        }
        payload.update(extra_fields(record))

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


_FORMATTERS: Dict[str, Callable[[], logging.Formatter]] = {
    "simple": lambda: logging.Formatter(SIMPLE_FORMAT),
    "detailed": lambda: logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"),
    "structured": StructuredFormatter,
    "json": JSONFormatter,
}


def get_formatter(format_type: str) -> logging.Formatter:
    """Build the formatter named by ``format_type`` (case-insensitive).

    Raises:
        ValueError: If the name is not one of simple, detailed, structured, json
    """
    try:
        factory = _FORMATTERS[format_type.lower()]
    except KeyError:
        raise ValueError(f"Unknown format type: {format_type}. Available: {', '.join(_FORMATTERS)}") from None
    return factory()
