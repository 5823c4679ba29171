"""Runtime settings loaded from the environment."""

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .graph import DEFAULT_MAX_DISTANCE

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    max_distance: int = DEFAULT_MAX_DISTANCE
    log_level: str = DEFAULT_LOG_LEVEL


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r: must not be negative, using %d", name, raw, default)
        return default
    return value


def _level_from_env(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper() or default
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring %s=%r: not a logging level, using %s", name, level, default)
        return default
    return level


def get_settings() -> Settings:
    """Load configuration from environment (and a .env file if present)."""
    load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        max_distance=_int_from_env("KINSHIP_MAX_DISTANCE", DEFAULT_MAX_DISTANCE),
        log_level=_level_from_env("KINSHIP_LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )
