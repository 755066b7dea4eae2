# tests/conftest.py

from __future__ import annotations

import time
from pathlib import Path
from types import SimpleNamespace

import pytest

from linkflow.core.auth import AuthController
from linkflow.core.models import Session
from linkflow.core.workflow import TaskWorkflow
from linkflow.session.store import JsonFileSessionStore

from .fakes import FakeTransport, RecordingNotifier

# Fast timings so workflow tests finish in milliseconds.
TICK = 0.01
FALLBACK_DELAY = 0.05


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment.
    """
    return SimpleNamespace(
        app_name="linkflow-test",
        api_base_url="http://backend.test",
        login_path="/api/auth/login",
        register_path="/api/auth/register",
        process_path="/api/process",
        connect_timeout_seconds=1.0,
        data_dir=tmp_path,
        session_path=tmp_path / "session.json",
        offline_login=False,
        offline_register=False,
        offline_task_fallback=True,
        console_enabled=False,
    )


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def session_store(settings: SimpleNamespace) -> JsonFileSessionStore:
    """
    Real file-backed store: durability is part of what we want to test.
    """
    store = JsonFileSessionStore(settings.session_path)
    store.init()
    return store


@pytest.fixture()
def workflow(transport, session_store, notifier) -> TaskWorkflow:
    return TaskWorkflow(
        transport,
        session_store,
        notifier,
        progress_interval=TICK,
        fallback_delay=FALLBACK_DELAY,
    )


@pytest.fixture()
def auth(transport, session_store, notifier, workflow) -> AuthController:
    return AuthController(transport, session_store, notifier, on_logout=workflow.abandon)


@pytest.fixture()
def logged_in(session_store: JsonFileSessionStore) -> Session:
    session = Session(token="tok-1", created_at=time.time())
    session_store.set(session)
    return session
