"""Structured Logging — one JSON object per line for the Task Board API.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Request and store context (user_id, board_id, task_id, error_code, path,
      operation, backend) appears only when the call site passed it via `extra`
    - LOG_FORMAT=json emits JSON lines; any other value emits plain text

Design Decisions:
    - Field whitelist (_EXTRA_KEYS) rather than dumping record.__dict__: stray
      attributes and request bodies never reach the log stream
    - setup_logging runs once, from the FastAPI lifespan
"""

import logging
import json
from datetime import datetime, timezone

_HANDLER_NAME = "taskboard"

_EXTRA_KEYS = (
    "user_id", "board_id", "task_id", "error_code",
    "path", "operation", "backend",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the Task Board handler on the root logger, replacing an earlier one."""
    if fmt == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.set_name(_HANDLER_NAME)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
