"""Structured Logging — one JSON object per log line.

Invariants:
    - Every line carries timestamp (from the record), level, logger and message
    - Tool and command fields (tool_name, command, exit_code, ...) appear only when set
    - setup_logging() is idempotent: calling it again replaces its handler

Design Decisions:
    - setup_logging called once on startup via lifespan
    - "text" format for local runs, "json" otherwise
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "tool_name", "error_code", "command", "exit_code",
    "duration_ms", "timed_out", "step",
)
_HANDLER_NAME = "macmaint"


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in _EXTRA_FIELDS
            if getattr(record, key, None) is not None
        })
        if isinstance(entry.get("command"), (list, tuple)):
            entry["command"] = " ".join(entry["command"])
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    return handler
