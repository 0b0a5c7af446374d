"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path


logger = logging.getLogger(__name__)

DATA_DIR_ENV = "DRAFTGRADE_DATA_DIR"
SLEEPER_URL_ENV = "DRAFTGRADE_SLEEPER_URL"
HTTP_TIMEOUT_ENV = "DRAFTGRADE_HTTP_TIMEOUT"

DEFAULT_SLEEPER_URL = "https://api.sleeper.app/v1"
DEFAULT_HTTP_TIMEOUT = 30.0


def env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def data_dir() -> Path:
    """Root of the bundled data files (VORP scores, ADP rankings)."""

    raw = os.getenv(DATA_DIR_ENV)
    if raw:
        return Path(raw).expanduser()
    return Path.cwd() / "data"


def sleeper_base_url() -> str:
    return os.getenv(SLEEPER_URL_ENV, DEFAULT_SLEEPER_URL).rstrip("/")


def http_timeout() -> float:
    return env_float(HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT, clamp_min=1.0)
