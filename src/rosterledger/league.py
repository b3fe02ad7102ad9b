"""Composition root wiring repositories, ledger, service and optimizer together."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rosterledger.audit import AuditLedger
from rosterledger.config import LeagueRules, get_rules
from rosterledger.models.money import SalaryCap
from rosterledger.models.roles import Role
from rosterledger.models.team import Team
from rosterledger.optimizer import LineupOptimizer
from rosterledger.persistence import InMemoryTeamRepository, SqliteAuditLedger, TeamRepository
from rosterledger.service import TeamManagementService


SAMPLE_TEAMS = (
    ("LAL", "Lakers"),
    ("GSW", "Warriors"),
    ("BOS", "Celtics"),
)


@dataclass
class League:
    rules: LeagueRules
    teams: TeamRepository
    audit: AuditLedger
    service: TeamManagementService
    optimizer: LineupOptimizer

    def new_team(self, team_id: str, name: str, cap=None) -> Team:
        return Team(
            team_id,
            name,
            SalaryCap(cap if cap is not None else self.rules.default_salary_cap),
            max_roster_size=self.rules.max_roster_size,
        )


def build_league(db_path: Optional[Path | str] = None, rules: Optional[LeagueRules] = None) -> League:
    """Create a league; the audit ledger is durable only when ``db_path`` is given."""

    rules = rules or get_rules()
    teams = InMemoryTeamRepository()
    if db_path is not None:
        audit: AuditLedger = SqliteAuditLedger(db_path, genesis_hash=rules.genesis_hash)
    else:
        audit = AuditLedger(genesis_hash=rules.genesis_hash)
    service = TeamManagementService(teams, audit)
    return League(
        rules=rules,
        teams=teams,
        audit=audit,
        service=service,
        optimizer=LineupOptimizer(rules.lineup_positions),
    )


def seed_sample_teams(league: League, actor: Role) -> list[Team]:
    teams = [league.new_team(team_id, name) for team_id, name in SAMPLE_TEAMS]
    for team in teams:
        league.service.register_team(actor, team)
    return teams
