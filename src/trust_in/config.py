"""Environment-driven settings.

SIRENE_API_BASE       registry search endpoint
SIRENE_TIMEOUT_SECONDS request timeout for registry lookups
LOG_LEVEL             root log level for the server
"""

from __future__ import annotations

import logging
import os

DEFAULT_SIRENE_API_BASE = "https://public.opendatasoft.com/api/records/1.0/search/"
DEFAULT_SIRENE_TIMEOUT_SECONDS = 20.0
DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


def get_sirene_api_base() -> str:
    return os.environ.get("SIRENE_API_BASE", DEFAULT_SIRENE_API_BASE)


def get_sirene_timeout() -> float:
    raw = os.environ.get("SIRENE_TIMEOUT_SECONDS", "")
    if not raw:
        return DEFAULT_SIRENE_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid SIRENE_TIMEOUT_SECONDS %r — using %.0fs", raw, DEFAULT_SIRENE_TIMEOUT_SECONDS)
        return DEFAULT_SIRENE_TIMEOUT_SECONDS


def get_log_level() -> int:
    name = os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
