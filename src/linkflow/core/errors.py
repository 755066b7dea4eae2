# src/linkflow/core/errors.py

"""
Error taxonomy shared by the auth controller and the task workflow.

Every error carries a stable `code` (used as TaskRun.error_message and in logs)
and a human-readable message (shown to the user).
"""

from __future__ import annotations


class LinkflowError(Exception):
    code = "error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.code
        super().__init__(self.message)


class ValidationError(LinkflowError):
    """Client-detected input problem. Never reaches the transport."""

    _MESSAGES = {
        "missing_fields": "Please fill in all fields",
        "password_mismatch": "Passwords do not match",
        "invalid_url": "Please enter a valid URL",
    }

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or self._MESSAGES.get(code, code))


class Unauthenticated(LinkflowError):
    code = "unauthenticated"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Please log in first")


class AuthError(LinkflowError):
    """Backend rejected login or registration; reason comes from the backend."""

    code = "auth_error"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or "Authentication failed")


class BackendRejected(LinkflowError):
    code = "backend_rejected"

    def __init__(self, status: int, detail: str | None = None) -> None:
        self.status = status
        super().__init__(detail or "Process failed")


class TransportUnavailable(LinkflowError):
    """Backend is unreachable (connection-level failure)."""

    code = "transport_unavailable"

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__("Failed to connect to the server.")


class Busy(LinkflowError):
    code = "busy"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "A task is already being processed")
