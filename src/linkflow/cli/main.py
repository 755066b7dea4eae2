# src/linkflow/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (restoring any saved session),
then runs the console front-end on an asyncio loop.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.workflow.aclose()
    except Exception:
        logger.debug("Workflow close failed.", exc_info=True)

    try:
        aclose = getattr(state.transport, "aclose", None)
        if aclose is not None:
            await aclose()
    except Exception:
        logger.debug("Transport close failed.", exc_info=True)


async def _run(state: AppState) -> None:
    try:
        if getattr(state.settings, "console_enabled", True):
            await run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to drive the workflow. Exiting.")
    finally:
        await _shutdown(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/linkflow")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s (backend=%s)...", settings.app_name, settings.api_base_url)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        asyncio.run(_run(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
