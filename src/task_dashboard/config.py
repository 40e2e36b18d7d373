# src/task_dashboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Malformed values never raise; they fall back to defaults.
- Legacy `API_URL` is still honoured when the prefixed name is missing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDASH"

DEFAULT_API_URL = "http://localhost:3001"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


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
    data_dir: Path

    # ---- Remote record store ----
    api_url: str

    # ---- Dashboard behaviour ----
    confirm_deletes: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-dashboard").strip() or "task-dashboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdash"))

        api_url = (_first_env(_k("API_URL"), "API_URL", default=DEFAULT_API_URL) or DEFAULT_API_URL).strip()
        # Trailing slashes would produce "//tasks" when joined.
        api_url = api_url.rstrip("/") or DEFAULT_API_URL

        confirm_deletes = _env_bool(_k("CONFIRM_DELETES"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_url=api_url,
            confirm_deletes=confirm_deletes,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
