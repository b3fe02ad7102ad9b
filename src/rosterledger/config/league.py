"""League rules with environment overrides."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from rosterledger.models.money import Money
from rosterledger.models.player import LINEUP_POSITIONS, Position
from rosterledger.models.team import MAX_ROSTER_SIZE


logger = logging.getLogger(__name__)

_MAX_ROSTER_ENV = "ROSTERLEDGER_MAX_ROSTER"
_DEFAULT_CAP_ENV = "ROSTERLEDGER_DEFAULT_CAP"
_ROOKIE_MAX_ENV = "ROSTERLEDGER_ROOKIE_MAX"
DB_PATH_ENV = "ROSTERLEDGER_DB_PATH"

_DEFAULT_CAP = 140_000_000
_DEFAULT_ROOKIE_MAX = 8_000_000
_DEFAULT_DB_FILE = "rosterledger.sqlite"


@dataclass(frozen=True)
class LeagueRules:
    max_roster_size: int = MAX_ROSTER_SIZE
    default_salary_cap: Money = Money(_DEFAULT_CAP)
    rookie_max_annual: Money = Money(_DEFAULT_ROOKIE_MAX)
    lineup_positions: Tuple[Position, ...] = LINEUP_POSITIONS
    genesis_hash: str = "GENESIS"
    hash_display_length: int = 12


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if not math.isfinite(value):
        logger.warning("Non-finite float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(
    name: str,
    default: int,
    *,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def get_rules() -> LeagueRules:
    """Return league rules, applying any ``ROSTERLEDGER_*`` environment overrides."""

    return LeagueRules(
        max_roster_size=_env_int(_MAX_ROSTER_ENV, MAX_ROSTER_SIZE, min_value=1, max_value=MAX_ROSTER_SIZE),
        default_salary_cap=Money(_env_float(_DEFAULT_CAP_ENV, _DEFAULT_CAP, clamp_min=0.0)),
        rookie_max_annual=Money(_env_float(_ROOKIE_MAX_ENV, _DEFAULT_ROOKIE_MAX, clamp_min=0.0)),
    )


def default_db_path() -> Path:
    env_db = os.getenv(DB_PATH_ENV)
    if env_db:
        return Path(env_db)
    return Path.cwd() / _DEFAULT_DB_FILE
