"""Logging for the recipe generation pipeline.

Every logger comes from get_logger(), which reads two environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text (colored, one line per record) or json (default: text)

Pipeline context travels on records via `extra=`. The fields listed in
CONTEXT_FIELDS (which normalization path ran, the requested complexity) are
rendered by both formatters, so degraded generations can be filtered in
either output.
"""

import json
import logging
import os
import sys
from typing import Any

CONTEXT_FIELDS = ("parse_path", "complexity_level")

# level name -> (ANSI color, icon)
LEVEL_STYLES = {
    "DEBUG": ("\033[36m", "🔍"),
    "INFO": ("\033[32m", "ℹ️"),
    "WARNING": ("\033[33m", "⚠️"),
    "ERROR": ("\033[31m", "❌"),
}
RESET = "\033[0m"


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Pipeline context fields present on `record`, in CONTEXT_FIELDS order."""
    return {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, context fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class RichTextFormatter(logging.Formatter):
    """Colored single-line text; context fields trail as [key=value] tags."""

    def format(self, record: logging.LogRecord) -> str:
        color, icon = LEVEL_STYLES.get(record.levelname, (RESET, ""))
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        tags = "".join(f" [{key}={value}]" for key, value in record_context(record).items())

        text = f"{color}{icon} {timestamp} {record.levelname:<8} {record.name:<20} {record.getMessage()}{RESET}{tags}"
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


def get_logger(name: str) -> logging.Logger:
    """Return the named logger, attaching a stdout handler on first use."""
    named_logger = logging.getLogger(name)
    if named_logger.handlers:
        return named_logger

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    formatter = JSONFormatter() if os.getenv("LOG_TYPE", "text").lower() == "json" else RichTextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    named_logger.setLevel(level)
    named_logger.addHandler(handler)
    return named_logger


logger = get_logger("recipe_generator")

# google-genai logs every request at INFO
logging.getLogger("google_genai").setLevel(logging.WARNING)
