# src/linkflow/core/auth.py

"""
Login / registration / logout.

Unlike task submission, an unreachable backend is NOT papered over here by default:
a mock session grants dashboard access, so it only happens when `offline_login`
is switched on explicitly.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .errors import AuthError, LinkflowError, TransportUnavailable, ValidationError
from .models import ApplicationError, ConnectivityFailure, Credentials, Session, TransportOk
from .ports import NotificationSink, NotifyKind, SessionStore, Transport, safe_notify

logger = logging.getLogger(__name__)

MOCK_SUFFIX = " (Mock mode)"


def _token_from(payload: dict) -> str | None:
    for key in ("sessionToken", "access_token", "token"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _require_fields(credentials: Credentials) -> None:
    if not credentials.login_id or not credentials.password:
        raise ValidationError("missing_fields")


class AuthController:
    def __init__(
        self,
        transport: Transport,
        session_store: SessionStore,
        notifier: NotificationSink | None = None,
        *,
        offline_login: bool = False,
        offline_register: bool = False,
        on_logout: Callable[[], None] | None = None,
    ) -> None:
        self._transport = transport
        self._sessions = session_store
        self._notifier = notifier
        self._offline_login = offline_login
        self._offline_register = offline_register
        self._on_logout = on_logout

    @property
    def is_authenticated(self) -> bool:
        return self._sessions.get() is not None

    async def login(self, credentials: Credentials) -> Session:
        try:
            session = await self._login(credentials)
        except LinkflowError as e:
            logger.info("Login failed for %r: %s", credentials.login_id, e.code)
            safe_notify(self._notifier, e.message, NotifyKind.ERROR)
            raise
        return session

    async def register(self, credentials: Credentials) -> None:
        try:
            await self._register(credentials)
        except LinkflowError as e:
            logger.info("Registration failed for %r: %s", credentials.login_id, e.code)
            safe_notify(self._notifier, e.message, NotifyKind.ERROR)
            raise

    def logout(self) -> None:
        self._sessions.clear()
        if self._on_logout is not None:
            self._on_logout()
        logger.info("Logged out.")
        safe_notify(self._notifier, "Logged out.", NotifyKind.INFO)

    async def _login(self, credentials: Credentials) -> Session:
        _require_fields(credentials)

        result = await self._transport.login(credentials.login_id, credentials.password)

        match result:
            case TransportOk(payload=payload):
                token = _token_from(payload)
                if token is None:
                    raise AuthError("Login response did not include a session token")
                session = Session(token=token, created_at=time.time())
                self._sessions.set(session)
                logger.info("Login succeeded for %r", credentials.login_id)
                safe_notify(self._notifier, "Login successful!", NotifyKind.SUCCESS)
                return session

            case ApplicationError(detail=detail):
                raise AuthError(detail)

            case ConnectivityFailure(reason=reason):
                if not self._offline_login:
                    raise TransportUnavailable(reason)
                session = Session(token=f"mock_token_{int(time.time() * 1000)}", created_at=time.time())
                self._sessions.set(session)
                logger.warning("Backend unreachable (%s); created offline session.", reason)
                safe_notify(self._notifier, "Login successful!" + MOCK_SUFFIX, NotifyKind.SUCCESS)
                return session

        raise TypeError(f"Unexpected transport result: {result!r}")

    async def _register(self, credentials: Credentials) -> None:
        _require_fields(credentials)
        if credentials.password != credentials.confirm_password:
            raise ValidationError("password_mismatch")

        result = await self._transport.register(credentials.login_id, credentials.password)

        match result:
            case TransportOk():
                logger.info("Registration succeeded for %r", credentials.login_id)
                safe_notify(self._notifier, "Registration successful! Please login.", NotifyKind.SUCCESS)
                return

            case ApplicationError(detail=detail):
                raise AuthError(detail or "Registration failed")

            case ConnectivityFailure(reason=reason):
                if not self._offline_register:
                    raise TransportUnavailable(reason)
                logger.warning("Backend unreachable (%s); registration simulated.", reason)
                safe_notify(
                    self._notifier,
                    "Registration successful! Please login." + MOCK_SUFFIX,
                    NotifyKind.SUCCESS,
                )
                return

        raise TypeError(f"Unexpected transport result: {result!r}")
