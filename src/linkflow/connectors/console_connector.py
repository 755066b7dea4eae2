# src/linkflow/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.ports import NotifyKind
from ..core.state import AppState

logger = logging.getLogger(__name__)

_KIND_LABELS = {
    NotifyKind.SUCCESS: "OK",
    NotifyKind.ERROR: "ERROR",
    NotifyKind.INFO: "INFO",
}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    if sys.stdout.isatty():
        sys.stdout.write("\033[1A\033[2K\r")
        sys.stdout.write(line + "\n")
        sys.stdout.flush()
    else:
        print(line)


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsoleNotifier:
    """NotificationSink that prints toasts as timestamped console lines."""

    def notify(self, message: str, kind: NotifyKind) -> None:
        _print_ts(f"[{_KIND_LABELS.get(kind, str(kind).upper())}] {message}")


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (logged_in=%s).", state.auth.is_authenticated)
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "linkflow"))
    _print_ts(f"[{app_name}] Use /login, then /submit <link>. Use /help for commands, /exit to quit.\n")

    if state.auth.is_authenticated:
        _print_ts("[INFO] Welcome back, your session was restored.")

    while True:
        try:
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
            _rewrite_prev_line(f"[{_ts_local()}] >>> {user_input}")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            # A bare link is the common case on the dashboard.
            user_input = f"/submit {user_input}"

        try:
            reply = await command_registry.handle(state, user_input, emit=_print_ts)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            _print_ts(reply)

    logger.info("Console connector finished.")
