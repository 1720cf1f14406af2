"""
app/config.py
Application configuration
Environment-driven (.env supported for local runs)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_STATUS_PHRASE = "ha cambiado a"


@dataclass(frozen=True)
class AppSettings:
    database_url: str
    log_level: str = "INFO"
    ticket_status_phrase: str = DEFAULT_STATUS_PHRASE


def _log_level() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(level), int):
        raise RuntimeError(f"LOG_LEVEL must be a logging level name, got {level!r}")
    return level


def load_app_settings() -> AppSettings:
    load_dotenv()

    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        raise RuntimeError("DATABASE_URL is not set")

    return AppSettings(
        database_url=database_url,
        log_level=_log_level(),
        ticket_status_phrase=os.getenv("TICKET_STATUS_PHRASE", DEFAULT_STATUS_PHRASE).strip()
        or DEFAULT_STATUS_PHRASE,
    )
