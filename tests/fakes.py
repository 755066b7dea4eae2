# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from linkflow.core.models import TransportOk, TransportResult
from linkflow.core.ports import NotificationSink, NotifyKind


class FakeTransport:
    """
    Scripted Transport for unit tests.

    - Captures calls for assertions
    - Returns the configured result per operation
    - submit_task can be held open with `gate` to observe in-flight state
    """

    def __init__(
        self,
        *,
        login_result: TransportResult | None = None,
        register_result: TransportResult | None = None,
        submit_result: TransportResult | None = None,
    ) -> None:
        self.login_result = login_result or TransportOk({"sessionToken": "tok-1"})
        self.register_result = register_result or TransportOk({})
        self.submit_result = submit_result or TransportOk({"message": "done"})
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple] = []

    def hold(self) -> asyncio.Event:
        self.gate = asyncio.Event()
        return self.gate

    async def login(self, login_id: str, password: str) -> TransportResult:
        self.calls.append(("login", login_id, password))
        return self.login_result

    async def register(self, login_id: str, password: str) -> TransportResult:
        self.calls.append(("register", login_id, password))
        return self.register_result

    async def submit_task(self, link: str, session_token: str) -> TransportResult:
        self.calls.append(("submit_task", link, session_token))
        if self.gate is not None:
            await self.gate.wait()
        return self.submit_result


@dataclass(slots=True)
class Notice:
    message: str
    kind: NotifyKind


@dataclass(slots=True)
class RecordingNotifier(NotificationSink):
    """NotificationSink that just remembers what it was told."""

    notices: list[Notice] = field(default_factory=list)

    def notify(self, message: str, kind: NotifyKind) -> None:
        self.notices.append(Notice(message=message, kind=kind))

    def of_kind(self, kind: NotifyKind) -> list[Notice]:
        return [n for n in self.notices if n.kind == kind]
