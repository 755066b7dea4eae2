# src/linkflow/transport/http.py

"""
HTTP transport (httpx).

Maps every outcome onto a tagged result so callers never sniff exception text:
- 2xx                     -> TransportOk(payload)
- non-2xx                 -> ApplicationError(status, detail)
- httpx.TransportError    -> ConnectivityFailure (connect refused, DNS, connect timeout, ...)

Only the connect phase has a timeout; a slow backend is not a connectivity failure.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.models import ApplicationError, ConnectivityFailure, TransportOk, TransportResult

logger = logging.getLogger(__name__)


def _detail_from(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None

    if isinstance(data, dict):
        for key in ("detail", "message"):
            value = data.get(key)
            if value:
                return value if isinstance(value, str) else str(value)
        return None
    if isinstance(data, str) and data.strip():
        return data.strip()
    return None


def _payload_from(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class HttpTransport:
    """Transport backed by a shared httpx.AsyncClient."""

    def __init__(self, settings: Any, *, client: httpx.AsyncClient | None = None) -> None:
        self._login_path = str(getattr(settings, "login_path", "/api/auth/login"))
        self._register_path = str(getattr(settings, "register_path", "/api/auth/register"))
        self._process_path = str(getattr(settings, "process_path", "/api/process"))

        if client is None:
            base_url = str(getattr(settings, "api_base_url", "") or "").strip()
            if not base_url:
                raise RuntimeError("Backend base URL is not set. Set LINKFLOW_API_BASE_URL in your .env.")
            connect_s = float(getattr(settings, "connect_timeout_seconds", 5.0))
            client = httpx.AsyncClient(
                base_url=base_url,
                timeout=httpx.Timeout(None, connect=connect_s),
            )
        self._client = client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def login(self, login_id: str, password: str) -> TransportResult:
        return await self._post(self._login_path, {"loginId": login_id, "password": password})

    async def register(self, login_id: str, password: str) -> TransportResult:
        return await self._post(self._register_path, {"loginId": login_id, "password": password})

    async def submit_task(self, link: str, session_token: str) -> TransportResult:
        return await self._post(
            self._process_path,
            {"link": link},
            headers={"Authorization": f"Bearer {session_token}"},
        )

    async def _post(
        self,
        path: str,
        body: dict[str, Any],
        *,
        headers: dict[str, str] | None = None,
    ) -> TransportResult:
        try:
            response = await self._client.post(path, json=body, headers=headers)
        except httpx.TransportError as e:
            logger.info("POST %s: backend unreachable (%s)", path, e.__class__.__name__)
            return ConnectivityFailure(reason=str(e) or e.__class__.__name__)

        if response.is_success:
            logger.debug("POST %s -> %s", path, response.status_code)
            return TransportOk(payload=_payload_from(response))

        detail = _detail_from(response)
        logger.info("POST %s -> %s (%s)", path, response.status_code, detail)
        return ApplicationError(status=response.status_code, detail=detail)
