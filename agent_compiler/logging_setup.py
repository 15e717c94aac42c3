"""
Logging bootstrap for the compiler CLI.

Console diagnostics go through Rich on stderr; an optional JSONL sink records
every log record as one JSON object per line.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_PATH = os.environ.get("AGENT_COMPILER_LOG_PATH")
DEFAULT_LEVEL = os.environ.get("AGENT_COMPILER_LOG_LEVEL", "INFO").upper()

_RESERVED_ATTRS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    }
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            base = {
                "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "schema": {"name": "agent_compiler.log", "ver": "1.0.0"},
                "logger": record.name,
                "event": getattr(record, "event", None),
                "message": record.getMessage(),
            }
            for k, v in record.__dict__.items():
                if k in _RESERVED_ATTRS:
                    continue
                base.setdefault(k, v)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(base, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


def init_logging(verbose: bool = False, path: str | None = None, level: str | None = None) -> None:
    """
    Configure the root logger for a CLI run.

    Args:
        verbose: Show DEBUG diagnostics on stderr (otherwise WARNING and above)
        path: JSONL log file; defaults to AGENT_COMPILER_LOG_PATH, disabled when unset
        level: Level for the JSONL sink; defaults to AGENT_COMPILER_LOG_LEVEL
    """
    path = path or DEFAULT_PATH
    level = (level or DEFAULT_LEVEL).upper()

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    # Drop handlers from a previous init to avoid duplicate output
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler | RichHandler):
            root.removeHandler(h)

    console_handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.addHandler(console_handler)

    if path:
        jsonl_handler = JsonlHandler(path)
        jsonl_handler.setLevel(getattr(logging, level, logging.INFO))
        root.addHandler(jsonl_handler)
