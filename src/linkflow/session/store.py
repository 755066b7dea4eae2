# src/linkflow/session/store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..core.models import Session

logger = logging.getLogger(__name__)

TOKEN_SLOT = "auth_token"


class JsonFileSessionStore:
    """
    Session slot persisted as a small JSON file.

    Writes go to a temp sibling and are moved into place with os.replace,
    so the file is either the old or the new session, never half-written.
    The in-process view is updated only after the disk operation succeeded.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._session: Session | None = None

    def init(self) -> None:
        self._session = self._load()
        if self._session is not None:
            logger.info("Restored session from %s", self._path)

    def get(self) -> Session | None:
        return self._session

    def set(self, session: Session) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {TOKEN_SLOT: session.token, "created_at": session.created_at}
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            # The token is a credential; keep the file private on disk.
            os.chmod(self._path, 0o600)
        self._session = session
        logger.debug("Session saved to %s", self._path)

    def clear(self) -> None:
        with contextlib.suppress(FileNotFoundError):
            self._path.unlink()
        self._session = None
        logger.debug("Session cleared (%s)", self._path)

    def _load(self) -> Session | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable session file %s; treating as logged out.", self._path, exc_info=True)
            return None

        if not isinstance(data, dict):
            return None
        token = data.get(TOKEN_SLOT)
        if not isinstance(token, str) or not token:
            return None
        created_at = data.get("created_at")
        if not isinstance(created_at, (int, float)):
            created_at = 0.0
        return Session(token=token, created_at=float(created_at))


class MemorySessionStore:
    """In-process session slot (tests, throwaway runs)."""

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    def init(self) -> None:
        return

    def get(self) -> Session | None:
        return self._session

    def set(self, session: Session) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None
