"""
Runtime configuration.

Values come from environment variables (optionally seeded from a .env
file by env.load_env) and are validated once into a frozen Settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_DB_PATH = Path("data/talentmatch.db")
DEFAULT_LOG_DIR = Path("logs")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Container for engine configuration."""

    db_path: Path = DEFAULT_DB_PATH
    min_threshold: float = 0.3
    limit: int = 10
    max_workers: int = 8
    org_key_words: int = 1
    similarity_floor: int = 50
    log_level: str = "INFO"
    log_dir: Path = DEFAULT_LOG_DIR


def _get(env: Mapping[str, str], key: str) -> Optional[str]:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _as_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = _get(env, key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


def _as_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = _get(env, key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        Validated Settings

    Raises:
        ValueError: If any value is malformed or out of range
    """
    env = os.environ if env is None else env

    min_threshold = _as_float(env, "TALENTMATCH_MIN_THRESHOLD", 0.3)
    if not 0.0 <= min_threshold <= 1.0:
        raise ValueError("TALENTMATCH_MIN_THRESHOLD must be between 0 and 1.")

    limit = _as_int(env, "TALENTMATCH_LIMIT", 10)
    if limit <= 0:
        raise ValueError("TALENTMATCH_LIMIT must be > 0.")

    max_workers = _as_int(env, "TALENTMATCH_MAX_WORKERS", 8)
    if max_workers <= 0:
        raise ValueError("TALENTMATCH_MAX_WORKERS must be > 0.")

    org_key_words = _as_int(env, "TALENTMATCH_ORG_KEY_WORDS", 1)
    if org_key_words <= 0:
        raise ValueError("TALENTMATCH_ORG_KEY_WORDS must be > 0.")

    similarity_floor = _as_int(env, "TALENTMATCH_SIMILARITY_FLOOR", 50)
    if not 0 <= similarity_floor <= 100:
        raise ValueError("TALENTMATCH_SIMILARITY_FLOOR must be between 0 and 100.")

    log_level = (_get(env, "TALENTMATCH_LOG_LEVEL") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"TALENTMATCH_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}.")

    return Settings(
        db_path=Path(_get(env, "TALENTMATCH_DB") or DEFAULT_DB_PATH),
        min_threshold=min_threshold,
        limit=limit,
        max_workers=max_workers,
        org_key_words=org_key_words,
        similarity_floor=similarity_floor,
        log_level=log_level,
        log_dir=Path(_get(env, "TALENTMATCH_LOG_DIR") or DEFAULT_LOG_DIR),
    )
