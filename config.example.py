# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real credentials. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "LINKFLOW_APP_NAME": "App display name (default: linkflow).",
    "LINKFLOW_LOG_LEVEL": "Console logging level (default: INFO).",
    # Backend
    "LINKFLOW_API_BASE_URL": "Backend base URL (default: http://localhost:8000).",
    "LINKFLOW_LOGIN_PATH": "Login endpoint path (default: /api/auth/login).",
    "LINKFLOW_REGISTER_PATH": "Registration endpoint path (default: /api/auth/register).",
    "LINKFLOW_PROCESS_PATH": "Task submission endpoint path (default: /api/process).",
    "LINKFLOW_CONNECT_TIMEOUT_SECONDS": "Connect timeout used to detect an unreachable backend (default: 5).",
    # Paths (gitignored)
    "LINKFLOW_DATA_DIR": "Local data directory for logs and session (default: .local/linkflow).",
    "LINKFLOW_SESSION_PATH": "Persisted session file (default: <data_dir>/session.json).",
    # Offline fallbacks (one switch per operation)
    "LINKFLOW_OFFLINE_LOGIN": "Create a mock session when the backend is unreachable (default: false).",
    "LINKFLOW_OFFLINE_REGISTER": "Pretend registration succeeded when the backend is unreachable (default: false).",
    "LINKFLOW_OFFLINE_TASK_FALLBACK": "Simulate task results when the backend is unreachable (default: true).",
    # Connectors
    "LINKFLOW_CONSOLE_ENABLED": "Enable the console front-end (default: true).",
}
