"""Logging setup for the cuber CLI and controller."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from cuber.config import Settings

# Attributes passed through ``extra=`` by the controller.
CONTEXT_FIELDS = ("command", "solve_id", "count")

_PRETTY_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with command context inlined."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_context(record))
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class PrettyFormatter(logging.Formatter):
    """Human-readable lines; command context is appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__(_PRETTY_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} ({pairs}){sep}{tail}"


def build_handler(config: Settings, stream: Optional[TextIO] = None) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(getattr(logging, config.log_level, logging.WARNING))
    if config.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(PrettyFormatter())
    return handler


def setup_logging(config: Optional[Settings] = None) -> None:
    """Install a single stderr handler on the root logger.

    Later calls are ignored so that the CLI and embedding code can both call
    this without stacking handlers.
    """
    root = logging.getLogger()
    if getattr(root, "_cuber_configured", False):
        return
    if config is None:
        from cuber.config import settings as config

    handler = build_handler(config)
    root.setLevel(handler.level)
    root.handlers.clear()
    root.addHandler(handler)
    root._cuber_configured = True  # type: ignore[attr-defined]
