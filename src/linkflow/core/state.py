# src/linkflow/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .auth import AuthController
from .ports import NotificationSink, SessionStore, Transport
from .workflow import TaskWorkflow


@dataclass
class AppState:
    """Everything a connector needs, wired once in cli/bootstrap.py."""

    settings: Any

    transport: Transport
    session_store: SessionStore
    notifier: NotificationSink

    auth: AuthController
    workflow: TaskWorkflow
