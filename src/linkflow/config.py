# src/linkflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Offline fallbacks are explicit switches, one per operation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "LINKFLOW"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Backend ----
    api_base_url: str
    login_path: str
    register_path: str
    process_path: str
    connect_timeout_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    session_path: Path

    # ---- Offline fallbacks ----
    offline_login: bool
    offline_register: bool
    offline_task_fallback: bool

    # ---- Connector flags ----
    console_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "linkflow").strip() or "linkflow"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_base_url = _env(_k("API_BASE_URL"), "http://localhost:8000").strip().rstrip("/")
        login_path = _env(_k("LOGIN_PATH"), "/api/auth/login")
        register_path = _env(_k("REGISTER_PATH"), "/api/auth/register")
        process_path = _env(_k("PROCESS_PATH"), "/api/process")
        connect_timeout_seconds = max(0.1, _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/linkflow"))
        session_path = _env_path(_k("SESSION_PATH"), data_dir / "session.json")

        # Login fallback grants dashboard access, so it is never on by default.
        offline_login = _env_bool(_k("OFFLINE_LOGIN"), False)
        offline_register = _env_bool(_k("OFFLINE_REGISTER"), False)
        offline_task_fallback = _env_bool(_k("OFFLINE_TASK_FALLBACK"), True)

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_base_url=api_base_url,
            login_path=login_path,
            register_path=register_path,
            process_path=process_path,
            connect_timeout_seconds=connect_timeout_seconds,
            data_dir=data_dir,
            session_path=session_path,
            offline_login=offline_login,
            offline_register=offline_register,
            offline_task_fallback=offline_task_fallback,
            console_enabled=console_enabled,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
