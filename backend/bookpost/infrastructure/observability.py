"""Structured Logging: JSON formatter and one-shot setup for the process.

Invariants:
    - Every record carries timestamp, level, logger name, and message
    - Known extra fields (method, url, ip, status, user_id, error_code, path) surfaced when present
    - setup_logging replaces handlers it installed earlier, never stacks them
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "method", "url", "ip", "status", "duration_ms",
    "user_id", "error_code", "path", "service",
)


class JSONFormatter(logging.Formatter):
    """Format logs as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


_installed_handlers: list[logging.Handler] = []


def setup_logging(
    level: str = "INFO", fmt: str = "json", log_file: str | None = None,
) -> None:
    """Configure the root logger: stderr always, plus an append-mode file when given."""
    for handler in _installed_handlers:
        logging.root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if fmt == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logging.root.addHandler(handler)
        _installed_handlers.append(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
