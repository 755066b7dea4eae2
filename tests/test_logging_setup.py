# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from linkflow.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    "name,level,shown",
    [
        ("linkflow.core.workflow", logging.INFO, False),
        ("linkflow.core.workflow", logging.WARNING, True),
        ("linkflow.cli.main", logging.INFO, True),
        ("httpx", logging.WARNING, False),
        ("httpcore.connection", logging.ERROR, True),
        ("py.warnings", logging.WARNING, False),
        ("asyncio", logging.WARNING, True),
        ("asyncio", logging.INFO, False),
    ],
)
def test_console_filter(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("linkflow.test").debug("hello file")
        for h in root.handlers:
            h.flush()

        assert log_file == tmp_path / "logs" / "linkflow.log"
        assert "hello file" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
