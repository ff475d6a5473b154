from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import os


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    EXERCISEDB_ENDPOINT: str = "https://exercisedb.p.rapidapi.com/exercises?limit=0"
    EXERCISEDB_API_KEY: Optional[str] = None
    EXERCISEDB_API_HOST: str = "exercisedb.p.rapidapi.com"
    # None means the transport decides; no explicit timeout is enforced
    EXERCISEDB_TIMEOUT_SECONDS: Optional[float] = None

    # App-level policies
    FALLBACK_DELAY_SECONDS: float = 2.0
    PREFS_PATH: Path = Path("~/.fitexplorer/prefs.json")


_SECRET_KEYS = [
    "APP_ENV",
    "LOG_LEVEL",
    "EXERCISEDB_ENDPOINT",
    "EXERCISEDB_API_KEY",
    "EXERCISEDB_API_HOST",
    "FALLBACK_DELAY_SECONDS",
]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Allow Streamlit Cloud secrets to override or provide env values
    overrides: dict = {}
    try:
        import streamlit as _st  # type: ignore
        sec = getattr(_st, "secrets", None)
        if sec:
            for k in _SECRET_KEYS:
                if k in sec and sec[k] is not None and sec[k] != "":
                    overrides[k] = sec[k]
    except Exception:
        # No secrets.toml outside of a Streamlit runtime
        pass
    s = Settings(**overrides)  # type: ignore[call-arg]
    # Extra fallback: if the API key is blank but present in process env, use it
    if not s.EXERCISEDB_API_KEY:
        env_key = os.environ.get("EXERCISEDB_API_KEY")
        if env_key:
            s.EXERCISEDB_API_KEY = env_key
    return s


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once, using LOG_LEVEL unless a level is given."""
    lvl = (level or get_settings().LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, lvl, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
