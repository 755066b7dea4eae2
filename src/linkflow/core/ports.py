# src/linkflow/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the HTTP backend, session storage and the UI swappable and makes testing easier.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Protocol

from .models import Session, TransportResult

logger = logging.getLogger(__name__)


class NotifyKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Transport(Protocol):
    """
    Backend boundary. Never raises for backend or network problems:
    returns TransportOk / ApplicationError / ConnectivityFailure instead.
    """

    async def login(self, login_id: str, password: str) -> TransportResult: ...
    async def register(self, login_id: str, password: str) -> TransportResult: ...
    async def submit_task(self, link: str, session_token: str) -> TransportResult: ...


class SessionStore(Protocol):
    """Durable slot holding at most one Session."""

    def init(self) -> None: ...
    def get(self) -> Session | None: ...
    def set(self, session: Session) -> None: ...
    def clear(self) -> None: ...


class NotificationSink(Protocol):
    """User-facing status messages (toasts, console lines, ...)."""

    def notify(self, message: str, kind: NotifyKind) -> None: ...


def safe_notify(sink: NotificationSink | None, message: str, kind: NotifyKind) -> None:
    """Fire-and-forget: sink failures are logged, never propagated into the core."""
    if sink is None:
        return
    try:
        sink.notify(message, kind)
    except Exception:
        logger.debug("Notification sink failed (kind=%s).", kind, exc_info=True)
