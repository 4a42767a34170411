"""
Structured Logging

Configures Python logging to emit JSON lines in production and a
readable format in development. Context travels through `extra=`.

Usage:
    from reclaim.logging import get_logger
    logger = get_logger("detector")
    logger.info("Verdict ready", extra={"status": "authentic", "model_used": "fallback-analysis"})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


LOG_LEVEL = os.getenv("RECLAIM_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("RECLAIM_LOG_FORMAT", "json")  # "json" or "text"

CONTEXT_FIELDS = (
    "status", "confidence", "ai_probability", "credibility_score",
    "is_news", "model_used", "content_type", "text_length", "truncated",
    "error", "error_type", "duration_ms", "status_code", "method", "path",
)


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in CONTEXT_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging():
    """Configure the reclaim logger. Call once at app startup."""
    root = logging.getLogger("reclaim")
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if LOG_FORMAT == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the reclaim namespace."""
    return logging.getLogger(f"reclaim.{name}")
