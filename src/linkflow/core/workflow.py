# src/linkflow/core/workflow.py

"""
Task submission workflow.

One TaskRun at a time. A submission feeds two event sources into the same run:
- the real Transport.submit_task call (authoritative),
- a cosmetic progress loop (ticks progress_percent up to a cap).

Both run on the event loop and are serialized; races are resolved by
transition guards rather than locks:
- a tick that sees a run which is no longer current + IN_PROGRESS stops,
- a terminal state is written at most once per run,
- a response for a run that is no longer current (or whose session was cleared) is stale and dropped.

An unreachable backend is recovered locally: after a fixed delay the run
succeeds with a simulated result. Backend rejections are never recovered.
"""

from __future__ import annotations

import asyncio
import contextlib
import itertools
import logging

import httpx

from .errors import BackendRejected, Busy, TransportUnavailable, Unauthenticated, ValidationError
from .models import (
    ApplicationError,
    ConnectivityFailure,
    TaskRun,
    TaskStatus,
    TransportOk,
    TransportResult,
)
from .ports import NotificationSink, NotifyKind, SessionStore, Transport, safe_notify

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL_SECONDS = 0.2
PROGRESS_STEP = 10
PROGRESS_CAP = 90
FALLBACK_DELAY_SECONDS = 1.0

DEFAULT_RESULT_MESSAGE = "Process completed successfully!"
UNEXPECTED_FAILURE_MESSAGE = "An error occurred"


def is_absolute_url(link: str) -> bool:
    """True for links with both a scheme and a host (e.g. https://example.com/x)."""
    if not isinstance(link, str) or not link.strip():
        return False
    try:
        url = httpx.URL(link.strip())
    except (httpx.InvalidURL, TypeError):
        return False
    return url.is_absolute_url


class TaskWorkflow:
    def __init__(
        self,
        transport: Transport,
        session_store: SessionStore,
        notifier: NotificationSink | None = None,
        *,
        offline_fallback: bool = True,
        progress_interval: float = PROGRESS_INTERVAL_SECONDS,
        progress_step: int = PROGRESS_STEP,
        progress_cap: int = PROGRESS_CAP,
        fallback_delay: float = FALLBACK_DELAY_SECONDS,
    ) -> None:
        self._transport = transport
        self._sessions = session_store
        self._notifier = notifier
        self._offline_fallback = offline_fallback

        self._progress_interval = progress_interval
        self._progress_step = progress_step
        self._progress_cap = progress_cap
        self._fallback_delay = fallback_delay

        self._ids = itertools.count(1)
        self._run = TaskRun()
        self._job: asyncio.Task[None] | None = None
        self._ticker: asyncio.Task[None] | None = None

    @property
    def current(self) -> TaskRun:
        return self._run

    # ---- public operations ----

    async def submit(self, link: str) -> TaskRun:
        """
        Admit a new run and start it in the background.

        Returns the new run; its outcome is observed on the run itself (or via wait()).
        Raises Busy if the current run is still active.
        """
        if self._run.status.is_active:
            logger.info("Submit rejected: run %s is %s", self._run.run_id, self._run.status)
            raise Busy()

        self._stop_progress()
        run = TaskRun(run_id=next(self._ids), link=link, status=TaskStatus.VALIDATING)
        self._run = run

        if not is_absolute_url(link):
            err = ValidationError("invalid_url")
            message = "Please enter a link" if not (link or "").strip() else err.message
            self._fail(run, err.code, message)
            return run

        run.link = link.strip()
        run.status = TaskStatus.SUBMITTING

        session = self._sessions.get()
        if session is None:
            err = Unauthenticated()
            self._fail(run, err.code, err.message)
            return run

        run.status = TaskStatus.IN_PROGRESS
        logger.info("Run %s: submitting %s", run.run_id, run.link)
        self._ticker = asyncio.create_task(self._simulate_progress(run))
        self._job = asyncio.create_task(self._execute(run, session.token))
        return run

    async def wait(self) -> TaskRun:
        """Wait for the current run's background job (if any) and return the current run."""
        job = self._job
        if job is not None and not job.done():
            await asyncio.wait({job})
        return self._run

    def dismiss(self) -> None:
        """Reset a finished run back to Idle. Active runs are left alone."""
        if self._run.status.is_terminal:
            self._run = TaskRun()

    def abandon(self) -> None:
        """
        Stop the progress timer and detach the current run (used on logout).

        The in-flight request is not cancelled; its response becomes stale and is dropped.
        """
        self._stop_progress()
        if self._run.status is not TaskStatus.IDLE:
            logger.info("Run %s abandoned in state %s", self._run.run_id, self._run.status)
        self._run = TaskRun()

    async def aclose(self) -> None:
        self._stop_progress()
        job = self._job
        self._job = None
        if job is not None and not job.done():
            job.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await job

    # ---- background ----

    async def _simulate_progress(self, run: TaskRun) -> None:
        while True:
            await asyncio.sleep(self._progress_interval)
            if self._run is not run or run.status is not TaskStatus.IN_PROGRESS:
                return
            if run.progress_percent >= self._progress_cap:
                return
            run.progress_percent = min(self._progress_cap, run.progress_percent + self._progress_step)

    async def _execute(self, run: TaskRun, token: str) -> None:
        try:
            result: TransportResult = await self._transport.submit_task(run.link or "", token)
        except Exception:
            logger.exception("Run %s: transport crashed", run.run_id)
            if self._run is run:
                self._stop_progress()
            if self._still_current(run):
                self._fail(run, "unexpected_error", UNEXPECTED_FAILURE_MESSAGE)
            return

        # The real result is in: no more cosmetic ticks, whatever it says.
        # A run that is no longer current had its ticker stopped already.
        if self._run is run:
            self._stop_progress()

        if not self._still_current(run):
            logger.info("Run %s: stale response dropped", run.run_id)
            return

        match result:
            case TransportOk(payload=payload):
                message = payload.get("message")
                if not isinstance(message, str) or not message.strip():
                    message = DEFAULT_RESULT_MESSAGE
                self._succeed(run, message, DEFAULT_RESULT_MESSAGE)

            case ApplicationError(status=status, detail=detail):
                err = BackendRejected(status, detail)
                logger.info("Run %s: backend rejected (%s)", run.run_id, err.status)
                self._fail(run, err.message, err.message)

            case ConnectivityFailure(reason=reason):
                await self._recover_offline(run, reason)

    async def _recover_offline(self, run: TaskRun, reason: str) -> None:
        if not self._offline_fallback:
            err = TransportUnavailable(reason)
            self._fail(run, err.code, err.message)
            return

        logger.warning("Run %s: backend unreachable (%s), simulating result", run.run_id, reason)
        await asyncio.sleep(self._fallback_delay)

        if not self._still_current(run):
            logger.info("Run %s: simulated result dropped (run moved on)", run.run_id)
            return

        run.simulated = True
        self._succeed(
            run,
            f"Mock process completed for: {run.link}",
            DEFAULT_RESULT_MESSAGE + " (Mock mode)",
        )

    # ---- transitions ----

    def _still_current(self, run: TaskRun) -> bool:
        if self._run is not run:
            return False
        if self._sessions.get() is None:
            # Session went away under the request: discard the run.
            # A re-login that replaced the token keeps the run.
            self._run = TaskRun()
            return False
        return True

    def _succeed(self, run: TaskRun, result_message: str, notice: str) -> None:
        if run.status.is_terminal:
            return
        run.progress_percent = 100
        run.result_message = result_message
        run.status = TaskStatus.SUCCEEDED
        logger.info("Run %s: succeeded%s", run.run_id, " (simulated)" if run.simulated else "")
        safe_notify(self._notifier, notice, NotifyKind.SUCCESS)

    def _fail(self, run: TaskRun, error_message: str, notice: str) -> None:
        if run.status.is_terminal:
            return
        run.error_message = error_message
        run.status = TaskStatus.FAILED
        logger.info("Run %s: failed (%s)", run.run_id, error_message)
        safe_notify(self._notifier, notice, NotifyKind.ERROR)

    def _stop_progress(self) -> None:
        ticker = self._ticker
        self._ticker = None
        if ticker is not None and not ticker.done():
            ticker.cancel()

