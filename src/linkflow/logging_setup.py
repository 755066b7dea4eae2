# src/linkflow/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_QUIET_LIBRARIES = ("httpx", "httpcore", "py.warnings")


class _ConsoleNoiseFilter(logging.Filter):
    """Keep stderr readable next to the REPL; ConsoleNotifier already reports workflow outcomes."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("linkflow.core."):
            return record.levelno >= logging.WARNING
        if name.startswith("linkflow."):
            return True
        if name.startswith(_QUIET_LIBRARIES):
            return record.levelno >= logging.ERROR
        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    log_dir: str | Path = ".local/linkflow",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """Filtered stderr handler plus a full linkflow.log in log_dir. Returns the log file path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "linkflow.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())

    logfile = logging.FileHandler(log_file, encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(fmt)

    root.addHandler(console)
    root.addHandler(logfile)
    logging.captureWarnings(True)
    return log_file
