# src/linkflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- restores the persisted session,
- wires transport, session store and notifier into the auth controller and task workflow.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier
from ..core.auth import AuthController
from ..core.ports import NotificationSink, SessionStore, Transport
from ..core.state import AppState
from ..core.workflow import TaskWorkflow
from ..session.store import JsonFileSessionStore
from ..transport.http import HttpTransport

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.session_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    transport: Transport | None = None,
    session_store: SessionStore | None = None,
    notifier: NotificationSink | None = None,
    workflow: TaskWorkflow | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Collaborators are injectable for tests; anything not passed in is built from settings.
    An injected workflow must be built on the same session_store.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if session_store is None:
        _ensure_local_dirs(settings)
        session_store = JsonFileSessionStore(settings.session_path)
    session_store.init()

    if transport is None:
        transport = HttpTransport(settings)
    if notifier is None:
        notifier = ConsoleNotifier()

    if workflow is None:
        workflow = TaskWorkflow(
            transport,
            session_store,
            notifier,
            offline_fallback=bool(getattr(settings, "offline_task_fallback", True)),
        )
    auth = AuthController(
        transport,
        session_store,
        notifier,
        offline_login=bool(getattr(settings, "offline_login", False)),
        offline_register=bool(getattr(settings, "offline_register", False)),
        on_logout=workflow.abandon,
    )

    if auth.is_authenticated:
        logger.info("Session restored; already logged in.")

    return AppState(
        settings=settings,
        transport=transport,
        session_store=session_store,
        notifier=notifier,
        auth=auth,
        workflow=workflow,
    )
