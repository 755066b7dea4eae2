# src/linkflow/cli/commands.py

from __future__ import annotations

import asyncio
import getpass
import inspect
import logging
from collections.abc import Awaitable, Callable

from ..core.errors import Busy, LinkflowError
from ..core.models import Credentials, TaskStatus
from ..core.state import AppState
from ..core.workflow import PROGRESS_INTERVAL_SECONDS

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], "str | Awaitable[str]"]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /login, /submit, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        reply = handler(state, args, emit)
        if inspect.isawaitable(reply):
            reply = await reply
        return reply

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


async def _ask_secret(prompt: str) -> str:
    return await asyncio.to_thread(getpass.getpass, prompt)


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    run = state.workflow.current
    auth = "logged in" if state.auth.is_authenticated else "logged out"
    lines = [
        "Status:",
        f"  Session: {auth}",
        f"  Backend: {getattr(state.settings, 'api_base_url', '?')}",
        f"  Task: {run.status.value} ({run.progress_percent}%)",
    ]
    if run.link:
        lines.append(f"  Link: {run.link}")
    if run.result_message:
        lines.append(f"  Result: {run.result_message}{' [simulated]' if run.simulated else ''}")
    if run.error_message:
        lines.append(f"  Error: {run.error_message}")
    return "\n".join(lines)


async def cmd_login(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /login <id> <password>
    /login <id>             -> asks for the password
    """
    if not args:
        return "Usage: /login <login_id> [password]"

    password = args[1] if len(args) > 1 else await _ask_secret("Password: ")
    try:
        await state.auth.login(Credentials(login_id=args[0], password=password))
    except LinkflowError:
        # Already reported through the notifier.
        return ""
    return "You can now /submit a link."


async def cmd_register(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /register <id> <password> <confirm>
    /register <id>                      -> asks for password + confirmation
    """
    if not args:
        return "Usage: /register <login_id> [password confirm]"

    if len(args) >= 3:
        password, confirm = args[1], args[2]
    else:
        password = await _ask_secret("Password: ")
        confirm = await _ask_secret("Confirm password: ")

    try:
        await state.auth.register(
            Credentials(login_id=args[0], password=password, confirm_password=confirm)
        )
    except LinkflowError:
        return ""
    return f"Now use /login {args[0]}"


def cmd_logout(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.auth.logout()
    return ""


async def cmd_submit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /submit <link>  -> start processing and show progress until the run ends
    """
    link = args[0] if args else ""
    try:
        run = await state.workflow.submit(link)
    except Busy as e:
        return e.message

    last = -1
    while run.status is TaskStatus.IN_PROGRESS and state.workflow.current is run:
        if emit is not None and run.progress_percent != last:
            emit(f"Processing... {run.progress_percent}%")
        last = run.progress_percent
        await asyncio.sleep(PROGRESS_INTERVAL_SECONDS / 2)

    if run.status is TaskStatus.SUCCEEDED:
        suffix = " [simulated]" if run.simulated else ""
        return f"Result: {run.result_message}{suffix}"
    if run.status is TaskStatus.FAILED:
        return f"Task failed: {run.error_message}"
    return "Task discarded."


def cmd_dismiss(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if state.workflow.current.status.is_active:
        return "A task is still running."
    state.workflow.dismiss()
    return "Ready for a new link."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session and task state.")
registry.register("login", cmd_login, help_text="Log in: /login <id> [password].")
registry.register("register", cmd_register, help_text="Create an account: /register <id> [password confirm].")
registry.register("logout", cmd_logout, help_text="Forget the stored session.")
registry.register("submit", cmd_submit, help_text="Process a link: /submit <url>.", aliases=["process"])
registry.register("dismiss", cmd_dismiss, help_text="Clear the last task result.")
