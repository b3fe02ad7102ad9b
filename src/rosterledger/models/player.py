"""Player variants, fatigue dynamics and market valuation."""

from __future__ import annotations

import math
from enum import Enum
from typing import Tuple
from uuid import uuid4

from pydantic import BaseModel, Field

from rosterledger.errors import ValidationError


class Position(str, Enum):
    PG = "PG"
    SG = "SG"
    SF = "SF"
    PF = "PF"
    C = "C"

    def __str__(self) -> str:
        return self.value


LINEUP_POSITIONS: Tuple[Position, ...] = (
    Position.PG,
    Position.SG,
    Position.SF,
    Position.PF,
    Position.C,
)


class ExperienceLevel(str, Enum):
    ROOKIE = "ROOKIE"
    VETERAN = "VETERAN"
    TWO_WAY = "TWO_WAY"


MIN_AGE = 16
MAX_RATING = 99
MAX_FATIGUE = 100
REST_RECOVERY = 20
FATIGUE_PENALTY = 0.35


def _clamp_rating(value: int) -> int:
    return max(0, min(MAX_RATING, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class Player:
    """Common attributes shared by every experience level.

    Identity, position, age and ratings are fixed at construction; only fatigue
    changes afterwards, through :meth:`apply_minutes` and :meth:`rest`.
    """

    experience: ExperienceLevel

    def __init__(
        self,
        player_id: str,
        name: str,
        position: Position | str,
        age: int,
        offense: int,
        defense: int,
    ) -> None:
        if not player_id:
            raise ValidationError("player_id must be non-empty")
        if age < MIN_AGE:
            raise ValidationError(f"age too low: {age} < {MIN_AGE}")
        try:
            self._position = Position(position)
        except ValueError as exc:
            raise ValidationError(f"unknown position {position!r}") from exc
        self._player_id = player_id
        self._name = name
        self._age = age
        self._offense = _clamp_rating(offense)
        self._defense = _clamp_rating(defense)
        self._fatigue = 0

    @property
    def player_id(self) -> str:
        return self._player_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def position(self) -> Position:
        return self._position

    @property
    def age(self) -> int:
        return self._age

    @property
    def offense(self) -> int:
        return self._offense

    @property
    def defense(self) -> int:
        return self._defense

    @property
    def fatigue(self) -> int:
        return self._fatigue

    def overall_rating(self) -> int:
        return (self._offense + self._defense) // 2

    def effective_rating(self) -> float:
        return max(0.0, self.overall_rating() - self._fatigue * FATIGUE_PENALTY)

    def apply_minutes(self, minutes: int) -> None:
        if minutes < 0:
            raise ValidationError(f"minutes must be >= 0, got {minutes}")
        self._fatigue = min(MAX_FATIGUE, self._fatigue + minutes // 2)

    def rest(self) -> None:
        self._fatigue = max(0, self._fatigue - REST_RECOVERY)

    def market_value(self) -> int:
        return market_value(self)

    def __repr__(self) -> str:
        return (
            f"{self._name}({self._player_id}, {self._position}, "
            f"O:{self._offense} D:{self._defense} Fat:{self._fatigue})"
        )


class RookiePlayer(Player):
    experience = ExperienceLevel.ROOKIE


class VeteranPlayer(Player):
    experience = ExperienceLevel.VETERAN

    def __init__(
        self,
        player_id: str,
        name: str,
        position: Position | str,
        age: int,
        offense: int,
        defense: int,
        years_in_league: int,
    ) -> None:
        super().__init__(player_id, name, position, age, offense, defense)
        if years_in_league < 0:
            raise ValidationError(f"years_in_league must be >= 0, got {years_in_league}")
        self._years_in_league = years_in_league

    @property
    def years_in_league(self) -> int:
        return self._years_in_league


class TwoWayPlayer(Player):
    experience = ExperienceLevel.TWO_WAY

    def __init__(
        self,
        player_id: str,
        name: str,
        position: Position | str,
        age: int,
        offense: int,
        defense: int,
        g_league_days_remaining: int,
    ) -> None:
        super().__init__(player_id, name, position, age, offense, defense)
        if g_league_days_remaining < 0:
            raise ValidationError(
                f"g_league_days_remaining must be >= 0, got {g_league_days_remaining}"
            )
        self._g_league_days_remaining = g_league_days_remaining

    @property
    def g_league_days_remaining(self) -> int:
        return self._g_league_days_remaining

    def assign_to_g_league(self, days: int) -> None:
        if days <= 0:
            raise ValidationError(f"days must be > 0, got {days}")
        self._g_league_days_remaining = max(0, self._g_league_days_remaining - days)


def market_value(player: Player) -> int:
    """Fatigue-adjusted integer score used to rank players.

    Rookies get an upside bonus, veterans an experience bonus minus an age
    penalty past 32, and two-way players lose two points while they still owe
    G League days.
    """

    effective = player.effective_rating()
    if player.experience is ExperienceLevel.ROOKIE:
        return _round_half_up(effective + 5)
    if player.experience is ExperienceLevel.VETERAN:
        age_penalty = max(0, player.age - 32)
        return _round_half_up(effective + 3 - age_penalty * 0.5)
    if player.experience is ExperienceLevel.TWO_WAY:
        availability_penalty = 2 if player.g_league_days_remaining > 0 else 0  # type: ignore[attr-defined]
        return _round_half_up(effective - availability_penalty)
    raise TypeError(f"Unsupported experience level {player.experience!r}")


class PlayerProfile(BaseModel):
    """Builder-style configuration consumed by :func:`create_player`."""

    player_id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = "Unknown"
    position: Position = Position.SG
    age: int = 19
    offense: int = 70
    defense: int = 70
    years_in_league: int = 0
    g_league_days_remaining: int = 50


def create_player(level: ExperienceLevel | str, profile: PlayerProfile | None = None, **overrides) -> Player:
    """Build the player variant for ``level`` from ``profile`` (plus keyword overrides)."""

    profile = profile or PlayerProfile()
    if overrides:
        profile = profile.model_copy(update=overrides)
    try:
        level = ExperienceLevel(level)
    except ValueError as exc:
        raise ValidationError(f"unknown experience level {level!r}") from exc
    common = (
        profile.player_id,
        profile.name,
        profile.position,
        profile.age,
        profile.offense,
        profile.defense,
    )
    if level is ExperienceLevel.ROOKIE:
        return RookiePlayer(*common)
    if level is ExperienceLevel.VETERAN:
        return VeteranPlayer(*common, years_in_league=profile.years_in_league)
    return TwoWayPlayer(*common, g_league_days_remaining=profile.g_league_days_remaining)
