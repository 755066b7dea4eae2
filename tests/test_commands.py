# tests/test_commands.py

from __future__ import annotations

import asyncio

import pytest

from linkflow.cli.bootstrap import create_initial_state
from linkflow.cli.commands import CommandRegistry, registry
from linkflow.core.models import ConnectivityFailure, TaskStatus
from linkflow.core.workflow import FALLBACK_DELAY_SECONDS, TaskWorkflow
from linkflow.session.store import MemorySessionStore

from .conftest import FALLBACK_DELAY, TICK


@pytest.fixture()
def state(settings, transport, notifier):
    store = MemorySessionStore()
    workflow = TaskWorkflow(
        transport,
        store,
        notifier,
        progress_interval=TICK,
        fallback_delay=FALLBACK_DELAY,
    )
    return create_initial_state(
        settings=settings,
        transport=transport,
        session_store=store,
        notifier=notifier,
        workflow=workflow,
    )


@pytest.mark.asyncio
async def test_command_registry_routes_sync_and_async_handlers(state) -> None:
    reg = CommandRegistry()
    called = {"sync": 0, "async": 0}

    def h_sync(state, args, emit):
        called["sync"] += 1
        return "sync"

    async def h_async(state, args, emit):
        called["async"] += 1
        if emit is not None:
            emit("note")
        return f"async {' '.join(args)}"

    reg.register("a", h_sync, "a")
    reg.register("b", h_async, "b", aliases=["bee"])

    assert await reg.handle(state, "/a x") == "sync"
    assert await reg.handle(state, "/BEE y z", emit=lambda _: None) == "async y z"
    assert called == {"sync": 1, "async": 1}


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_login_then_submit_through_commands(state, transport) -> None:
    emitted: list[str] = []

    await registry.handle(state, "/login user@example.com password123")
    assert state.auth.is_authenticated

    reply = await registry.handle(state, "/submit https://example.com/report", emit=emitted.append)

    assert reply == "Result: done"
    assert state.workflow.current.status is TaskStatus.SUCCEEDED
    assert "Session: logged in" in (await registry.handle(state, "/status") or "")


@pytest.mark.asyncio
async def test_submit_reports_simulated_result(state, transport) -> None:
    transport.submit_result = ConnectivityFailure(reason="connection refused")
    await registry.handle(state, "/login u p")

    loop = asyncio.get_running_loop()
    started = loop.time()
    reply = await registry.handle(state, "/submit https://example.com/report")

    assert loop.time() - started < FALLBACK_DELAY_SECONDS
    assert reply is not None
    assert reply.endswith("[simulated]")
    assert "https://example.com/report" in reply


@pytest.mark.asyncio
async def test_submit_invalid_link_and_logged_out(state, transport) -> None:
    assert await registry.handle(state, "/submit not-a-url") == "Task failed: invalid_url"
    assert await registry.handle(state, "/submit https://example.com") == "Task failed: unauthenticated"
    assert transport.calls == []


@pytest.mark.asyncio
async def test_logout_and_dismiss(state) -> None:
    await registry.handle(state, "/login u p")
    await registry.handle(state, "/submit https://example.com/report")

    assert await registry.handle(state, "/dismiss") == "Ready for a new link."
    assert state.workflow.current.status is TaskStatus.IDLE

    await registry.handle(state, "/logout")
    assert not state.auth.is_authenticated


@pytest.mark.asyncio
async def test_register_mismatch_reports_through_notifier(state, notifier, transport) -> None:
    reply = await registry.handle(state, "/register u a b")

    assert reply == ""
    assert transport.calls == []
    assert notifier.notices[-1].message == "Passwords do not match"
