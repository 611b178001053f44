from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .util import env_flag

APP_VERSION = "0.1.0"


@dataclass(frozen=True)
class Settings:
    vault_dir: Path
    api_auth_mode: str
    api_auth_token: str | None
    api_debug_log: bool
    watch_on_startup: bool
    app_version: str


def load_settings() -> Settings:
    vault_dir = Path(os.environ.get("VAULT_DIR", "./vault")).resolve()
    api_auth_mode = os.environ.get("API_AUTH_MODE", "none").strip().lower()
    api_auth_token = os.environ.get("API_AUTH_TOKEN")
    api_debug_log = env_flag("API_DEBUG_LOG")
    watch_on_startup = env_flag("WATCH_ON_STARTUP")
    app_version = os.environ.get("APP_VERSION", APP_VERSION)
    return Settings(
        vault_dir=vault_dir,
        api_auth_mode=api_auth_mode,
        api_auth_token=api_auth_token,
        api_debug_log=api_debug_log,
        watch_on_startup=watch_on_startup,
        app_version=app_version,
    )
