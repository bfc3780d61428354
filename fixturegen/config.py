"""
Runtime settings read from the environment, plus logging setup.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://0.0.0.0:5173",
    "http://[::1]:5173",
)
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    default_doubled: bool = False


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def _valid_log_level(raw: str | None, default: str = "INFO") -> str:
    """Upper-cased level name if logging knows it, else default."""
    name = (raw or "").strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else default


def get_settings() -> Settings:
    """Build settings from FIXTUREGEN_* environment variables."""
    origins_raw = os.environ.get("FIXTUREGEN_CORS_ORIGINS", "").strip()
    return Settings(
        log_level=_valid_log_level(os.environ.get("FIXTUREGEN_LOG_LEVEL")),
        cors_origins=_split_origins(origins_raw) if origins_raw else DEFAULT_CORS_ORIGINS,
        default_doubled=os.environ.get("FIXTUREGEN_DEFAULT_DOUBLED", "").strip().lower() in _TRUTHY,
    )


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=_valid_log_level(level, get_settings().log_level), format=LOG_FORMAT)
