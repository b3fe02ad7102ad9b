"""Authorized, audited roster transactions over team aggregates."""

from __future__ import annotations

import logging
from threading import RLock
from typing import List, Optional

from rosterledger.audit import AuditEntry, AuditLedger
from rosterledger.errors import CapExceeded, NotFound, RosterError, Unauthorized
from rosterledger.models.contract import Contract, SalaryStrategy
from rosterledger.models.player import Player
from rosterledger.models.roles import Role
from rosterledger.models.team import Team
from rosterledger.persistence import TeamRepository


logger = logging.getLogger(__name__)

REGISTER_TEAM = "REGISTER_TEAM"
SIGN_PLAYER = "SIGN_PLAYER"
WAIVE_PLAYER = "WAIVE_PLAYER"
TRADE_PLAYER = "TRADE_PLAYER"
TRADE = "TRADE"

NO_STATE = "NONE"
_TRADE_SNAPSHOT_JOIN = " | "


def _rejected(action: str) -> str:
    return f"{action}_REJECTED"


def _not_found(action: str) -> str:
    return f"{action}_NOT_FOUND"


def _snapshot(team: Optional[Team]) -> str:
    return NO_STATE if team is None else str(team)


class TeamManagementService:
    """The only component that mutates teams.

    Each mutating call resolves its teams, authorizes the actor, mutates, and
    appends exactly one ledger entry. Rejected attempts (unauthorized actor,
    unknown team, player missing on waive) are appended with identical before
    and after snapshots before the error is raised. Calls are serialized on a
    single re-entrant lock so ledger appends follow commit order.
    """

    def __init__(self, teams: TeamRepository, audit: AuditLedger) -> None:
        self._teams = teams
        self._audit = audit
        self._lock = RLock()

    @property
    def audit(self) -> AuditLedger:
        return self._audit

    def list_teams(self) -> List[Team]:
        return self._teams.find_all()

    def get_team(self, team_id: str) -> Team:
        team = self._teams.find_by_id(team_id)
        if team is None:
            raise NotFound(f"Unknown team: {team_id}")
        return team

    def register_team(self, actor: Role, team: Team) -> None:
        with self._lock:
            self._teams.save(team)
            self._record(actor, REGISTER_TEAM, NO_STATE, str(team))
        logger.info("Registered team %s (%s) by %s", team.team_id, team.name, actor.id)

    def sign_player(
        self,
        actor: Role,
        team_id: str,
        player: Player,
        contract: Contract,
        strategy: SalaryStrategy,
    ) -> None:
        with self._lock:
            team = self._resolve(actor, team_id, SIGN_PLAYER)
            before = str(team)
            self._authorize(actor, SIGN_PLAYER, before, "Only Coach may sign players")

            annual = strategy.annual_salary(player, contract)
            try:
                team.salary_cap.commit(annual)
            except CapExceeded:
                logger.warning(
                    "Cap rejected signing %s to %s at %s (remaining %s)",
                    player.player_id,
                    team_id,
                    annual,
                    team.salary_cap.remaining,
                )
                raise
            try:
                team.add_player(player, annual)
            except RosterError:
                team.salary_cap.uncommit(annual)
                raise

            self._record(actor, SIGN_PLAYER, before, str(team))
            self._teams.save(team)
        logger.info("Signed %s to %s at %s per year", player.player_id, team_id, annual)

    def waive_player(self, actor: Role, team_id: str, player_id: str) -> None:
        with self._lock:
            team = self._resolve(actor, team_id, WAIVE_PLAYER)
            before = str(team)
            self._authorize(actor, WAIVE_PLAYER, before, "Only Coach may waive players")

            player = team.find_player_by_id(player_id)
            if player is None:
                self._record(actor, _not_found(WAIVE_PLAYER), before, before)
                logger.warning("Waive of %s rejected: not on %s", player_id, team_id)
                raise NotFound(f"Player not on roster: {player_id}")

            team.salary_cap.uncommit(team.annual_salary_for(player_id))
            team.remove_player(player)

            self._record(actor, WAIVE_PLAYER, before, str(team))
            self._teams.save(team)
        logger.info("Waived %s from %s", player_id, team_id)

    def trade(self, actor: Role, from_team_id: str, to_team_id: str, player_id: str) -> None:
        """Move a player and the attached salary from one team to another.

        The debit of the source team and the credit of the destination team are
        separate mutations. If the destination rejects the credit (cap or roster
        limit), the source team stays debited and the error propagates without a
        ledger entry.
        """

        with self._lock:
            source = self._teams.find_by_id(from_team_id)
            target = self._teams.find_by_id(to_team_id)
            before = _TRADE_SNAPSHOT_JOIN.join((_snapshot(source), _snapshot(target)))
            if source is None or target is None:
                self._record(actor, _not_found(TRADE), before, before)
                missing = from_team_id if source is None else to_team_id
                logger.warning("Trade rejected: unknown team %s", missing)
                raise NotFound(f"Unknown team: {missing}")

            self._authorize(actor, TRADE, before, "Only Coach may execute trades")

            player = source.find_player_by_id(player_id)
            if player is None:
                raise NotFound(f"Player not on from-team: {player_id}")

            annual = source.annual_salary_for(player_id)
            source.salary_cap.uncommit(annual)
            source.remove_player(player)

            try:
                target.salary_cap.commit(annual)
                try:
                    target.add_player(player, annual)
                except RosterError:
                    target.salary_cap.uncommit(annual)
                    raise
            except RosterError as exc:
                logger.warning(
                    "Trade of %s from %s to %s failed after debit; %s keeps the release: %s",
                    player_id,
                    from_team_id,
                    to_team_id,
                    from_team_id,
                    exc,
                )
                raise

            after = _TRADE_SNAPSHOT_JOIN.join((str(source), str(target)))
            self._record(actor, TRADE_PLAYER, before, after)
            self._teams.save(source)
            self._teams.save(target)
        logger.info("Traded %s from %s to %s at %s", player_id, from_team_id, to_team_id, annual)

    def _resolve(self, actor: Role, team_id: str, action: str) -> Team:
        team = self._teams.find_by_id(team_id)
        if team is None:
            self._record(actor, _not_found(action), NO_STATE, NO_STATE)
            logger.warning("%s rejected: unknown team %s", action, team_id)
            raise NotFound(f"Unknown team: {team_id}")
        return team

    def _authorize(self, actor: Role, action: str, snapshot: str, message: str) -> None:
        if actor.can_mutate_roster:
            return
        self._record(actor, _rejected(action), snapshot, snapshot)
        logger.warning("%s rejected for %s (%s)", action, actor.id, actor.role_name)
        raise Unauthorized(message)

    def _record(self, actor: Role, action: str, before: str, after: str) -> AuditEntry:
        entry = AuditEntry.create(actor, action, before, after, self._audit.tail_hash())
        self._audit.append(entry)
        return entry
