# src/linkflow/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


@dataclass(frozen=True, slots=True)
class Session:
    token: str
    created_at: float


@dataclass(slots=True)
class Credentials:
    login_id: str
    password: str
    confirm_password: str | None = None

    def __repr__(self) -> str:
        # Keep passwords out of logs and tracebacks.
        return f"Credentials(login_id={self.login_id!r})"


class TaskStatus(StrEnum):
    """
    TaskRun lifecycle.

    IDLE -> VALIDATING -> SUBMITTING -> IN_PROGRESS -> SUCCEEDED | FAILED
    Validation and session checks may jump straight to FAILED.
    """

    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.SUCCEEDED, TaskStatus.FAILED)

    @property
    def is_active(self) -> bool:
        return self in (TaskStatus.VALIDATING, TaskStatus.SUBMITTING, TaskStatus.IN_PROGRESS)


@dataclass(slots=True)
class TaskRun:
    run_id: int = 0
    link: str | None = None
    status: TaskStatus = TaskStatus.IDLE
    progress_percent: int = 0
    result_message: str | None = None
    error_message: str | None = None
    simulated: bool = False


# ---- Transport results (tagged) ----


@dataclass(frozen=True, slots=True)
class TransportOk:
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ApplicationError:
    """Backend answered with a non-2xx status."""

    status: int
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class ConnectivityFailure:
    """Backend could not be reached at all."""

    reason: str


TransportResult = TransportOk | ApplicationError | ConnectivityFailure
