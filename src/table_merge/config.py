"""Shared configuration for the table_merge engine.

Runtime settings come from environment variables (optionally via a ``.env``
file at the project root).  Format constants that define the canonical text
representation are fixed and not configurable.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")


# ─── Canonical Format Constants ──────────────────────────────────────────────

DELIMITER = ","
QUOTE = '"'

# A column needs at least this many numeric cells before a trend is inferred
MIN_NUMERIC_CELLS = 3

# Deltas deviating from the median by more than this are flagged
DELTA_TOLERANCE = 0.0


# ─── Environment Settings ────────────────────────────────────────────────────

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}


class Settings(BaseModel):
    """Runtime settings resolved from the environment."""

    log_level: str = "INFO"
    protect_header: bool = True
    suggestion_decimals: int = Field(default=0, ge=0)


def _get_env(key: str, default: str | None = None) -> str | None:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    if value.lower() in _TRUE_VALUES:
        return True
    if value.lower() in _FALSE_VALUES:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def load_settings() -> Settings:
    """Read TABLE_MERGE_* environment variables into a Settings object."""
    decimals = _get_int("TABLE_MERGE_SUGGESTION_DECIMALS", 0)
    if decimals < 0:
        raise ValueError("Environment variable TABLE_MERGE_SUGGESTION_DECIMALS must not be negative")
    return Settings(
        log_level=_get_env("TABLE_MERGE_LOG_LEVEL", "INFO").upper(),
        protect_header=_get_bool("TABLE_MERGE_PROTECT_HEADER", True),
        suggestion_decimals=decimals,
    )
