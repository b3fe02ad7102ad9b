"""Load roster CSVs and drive them into the league through the service."""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as RowValidationError
from pydantic.config import ConfigDict

from rosterledger.errors import ValidationError
from rosterledger.league import League
from rosterledger.models.contract import (
    Contract,
    RookieScaleSalaryStrategy,
    SalaryStrategy,
    StandardSalaryStrategy,
)
from rosterledger.models.money import Money
from rosterledger.models.player import MIN_AGE, ExperienceLevel, PlayerProfile, Position, create_player
from rosterledger.models.roles import Role


logger = logging.getLogger(__name__)

MIN_IMPORT_SALARY = 1_200_000
SALARY_PER_RATING_POINT = 350_000

# Loose position labels used by public data feeds.
_POSITION_ALIASES: Mapping[str, Position] = {
    "G": Position.PG,
    "G-F": Position.SG,
    "F-G": Position.SG,
    "F": Position.SF,
    "F-C": Position.PF,
    "C-F": Position.PF,
}


def salary_for_rating(overall: int) -> Money:
    """Contract value used when a row carries no explicit contract total."""

    return Money(max(MIN_IMPORT_SALARY, overall * SALARY_PER_RATING_POINT))


def _parse_money(raw: str) -> Optional[Money]:
    text = re.sub(r"[^0-9.]", "", raw)
    if not text:
        return None
    return Money(text)


class RosterRow(BaseModel):
    team_id: str = Field(..., min_length=1)
    team_name: str = ""
    player_id: str = Field(..., min_length=1)
    name: str
    position: Position
    experience: ExperienceLevel = ExperienceLevel.VETERAN
    age: int = Field(..., ge=MIN_AGE)
    offense: int
    defense: int
    years_in_league: int = Field(default=0, ge=0)
    g_league_days_remaining: int = Field(default=0, ge=0)
    contract_total: Optional[Money] = None
    contract_years: int = Field(default=1, gt=0)

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("team_id", mode="before")
    @classmethod
    def _upper_team(cls, value: str) -> str:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("position", mode="before")
    @classmethod
    def _normalize_position(cls, value):
        if isinstance(value, str):
            token = value.strip().upper()
            return _POSITION_ALIASES.get(token, token)
        return value

    @field_validator("experience", mode="before")
    @classmethod
    def _normalize_experience(cls, value):
        if isinstance(value, str):
            return value.strip().upper().replace("-", "_")
        return value

    @field_validator("contract_total", mode="before")
    @classmethod
    def _parse_contract_total(cls, value):
        if isinstance(value, str):
            return _parse_money(value)
        if isinstance(value, (int, float)):
            return Money(value)
        return value

    def profile(self) -> PlayerProfile:
        return PlayerProfile(
            player_id=self.player_id,
            name=self.name,
            position=self.position,
            age=self.age,
            offense=self.offense,
            defense=self.defense,
            years_in_league=self.years_in_league,
            g_league_days_remaining=self.g_league_days_remaining,
        )


@dataclass(frozen=True)
class SkippedRow:
    team_id: str
    player_id: str
    reason: str


@dataclass
class ImportReport:
    teams_registered: List[str] = field(default_factory=list)
    players_signed: int = 0
    skipped: List[SkippedRow] = field(default_factory=list)


def load_roster_csv(path: Path) -> List[RosterRow]:
    rows: List[RosterRow] = []
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, raw in enumerate(reader, start=2):
            cleaned = {key.strip(): value.strip() for key, value in raw.items() if key and value and value.strip()}
            try:
                rows.append(RosterRow(**cleaned))
            except RowValidationError as exc:
                raise ValidationError(f"{path.name} line {line_no}: {exc}") from exc
    logger.info("Loaded %s roster rows from %s", len(rows), path)
    return rows


def _strategy_for(level: ExperienceLevel, league: League) -> SalaryStrategy:
    if level is ExperienceLevel.ROOKIE:
        return RookieScaleSalaryStrategy(league.rules.rookie_max_annual)
    return StandardSalaryStrategy()


def import_rosters(
    league: League,
    actor: Role,
    rows: Sequence[RosterRow],
    *,
    salary_cap: Optional[Money] = None,
    start_date: Optional[date] = None,
) -> ImportReport:
    """Register unseen teams and sign every row that fits.

    Rows whose team is already full, whose salary would break the cap, or whose
    player is already on the roster are skipped and reported rather than forced.
    Rows that could not build a valid player or contract never get here:
    `load_roster_csv` rejects the whole file first.
    """

    report = ImportReport()
    service = league.service
    known = {team.team_id for team in service.list_teams()}

    for row in rows:
        if row.team_id not in known:
            team = league.new_team(row.team_id, row.team_name or row.team_id, salary_cap)
            service.register_team(actor, team)
            known.add(row.team_id)
            report.teams_registered.append(row.team_id)
        team = service.get_team(row.team_id)

        if team.find_player_by_id(row.player_id) is not None:
            report.skipped.append(SkippedRow(row.team_id, row.player_id, "already on roster"))
            continue
        if team.is_full():
            report.skipped.append(SkippedRow(row.team_id, row.player_id, "roster full"))
            continue

        player = create_player(row.experience, row.profile())
        total_value = row.contract_total
        if total_value is None:
            total_value = salary_for_rating(player.overall_rating())
        contract = Contract(
            total_value=total_value,
            years=row.contract_years,
            start_date=start_date or date.today(),
        )
        strategy = _strategy_for(row.experience, league)
        annual = strategy.annual_salary(player, contract)
        if not team.salary_cap.can_commit(annual):
            report.skipped.append(SkippedRow(row.team_id, row.player_id, f"cap exceeded at {annual}"))
            continue

        service.sign_player(actor, row.team_id, player, contract, strategy)
        report.players_signed += 1

    if report.skipped:
        logger.warning("Skipped %s of %s roster rows", len(report.skipped), len(rows))
    logger.info(
        "Imported %s players across %s new teams",
        report.players_signed,
        len(report.teams_registered),
    )
    return report
