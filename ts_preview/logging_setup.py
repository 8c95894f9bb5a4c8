"""
JSONL logging bootstrap.
Resolver and build diagnostics go to one structured sink, one JSON object per line.
"""

import json
import logging
from datetime import UTC
from datetime import datetime
from pathlib import Path

from .settings import BundlerSettings

SCHEMA = {"name": "ts-preview.log", "ver": "1.0.0"}

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonlHandler(logging.Handler):
    """Append log records to a JSONL file."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def to_entry(self, record: logging.LogRecord) -> dict:
        entry = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": SCHEMA,
            "logger": record.name,
            # Graph walks log from pool workers
            "thread": record.threadName,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        if isinstance(record.msg, dict):
            entry.update(record.msg)
        if record.exc_info:
            entry["exc"] = logging.Formatter().formatException(record.exc_info)
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                entry.setdefault(key, value)
        return entry

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.to_entry(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | None = None, level: str | None = None) -> JsonlHandler:
    """Install the JSONL sink on the root logger.

    A sink from an earlier call is closed and replaced. Missing arguments fall
    back to BundlerSettings defaults.
    """
    defaults = BundlerSettings()
    level_name = (level or defaults.log_level).upper()

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    for previous in [h for h in root.handlers if isinstance(h, JsonlHandler)]:
        root.removeHandler(previous)
        previous.close()

    handler = JsonlHandler(path or defaults.log_path)
    root.addHandler(handler)
    return handler
