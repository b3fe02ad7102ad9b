"""Team aggregate: roster, salary cap and per-player salary bookkeeping."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from rosterledger.errors import NotFound, RosterFull, ValidationError
from rosterledger.models.money import Money, SalaryCap
from rosterledger.models.player import Player
from rosterledger.models.roster import RosterList


MAX_ROSTER_SIZE = 20


class Team:
    """A team's players in roster order, with the salary committed to each.

    The ids on the roster and the keys of the salary table are always the same
    set. Only :class:`~rosterledger.service.TeamManagementService` should call
    the mutators.
    """

    def __init__(
        self,
        team_id: str,
        name: str,
        salary_cap: SalaryCap,
        *,
        max_roster_size: int = MAX_ROSTER_SIZE,
    ) -> None:
        if not team_id:
            raise ValidationError("team_id must be non-empty")
        if not 1 <= max_roster_size <= MAX_ROSTER_SIZE:
            raise ValidationError(
                f"max_roster_size must be between 1 and {MAX_ROSTER_SIZE}, got {max_roster_size}"
            )
        self._team_id = team_id
        self._name = name
        self._salary_cap = salary_cap
        self._max_roster_size = max_roster_size
        self._roster: RosterList[Player] = RosterList()
        self._salary_by_id: Dict[str, Money] = {}

    @property
    def team_id(self) -> str:
        return self._team_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def salary_cap(self) -> SalaryCap:
        return self._salary_cap

    @property
    def max_roster_size(self) -> int:
        return self._max_roster_size

    @property
    def roster_size(self) -> int:
        return len(self._roster)

    def is_full(self) -> bool:
        return len(self._roster) >= self._max_roster_size

    def add_player(self, player: Player, annual_salary: Money) -> None:
        if self.is_full():
            raise RosterFull(f"roster full: {self._team_id} already has {len(self._roster)} players")
        if player.player_id in self._salary_by_id:
            raise ValidationError(f"player {player.player_id} is already on {self._team_id}")
        self._roster.add_last(player)
        self._salary_by_id[player.player_id] = annual_salary

    def remove_player(self, player: Player) -> bool:
        removed = self._roster.remove_first_occurrence(lambda p: p.player_id == player.player_id)
        if removed:
            del self._salary_by_id[player.player_id]
        return removed

    def find_player_by_id(self, player_id: str) -> Optional[Player]:
        for player in self._roster:
            if player.player_id == player_id:
                return player
        return None

    def annual_salary_for(self, player_id: str) -> Money:
        try:
            return self._salary_by_id[player_id]
        except KeyError:
            raise NotFound(f"No salary tracked for player_id={player_id}") from None

    def players(self) -> list[Player]:
        return self._roster.to_list()

    def __iter__(self) -> Iterator[Player]:
        return iter(self._roster)

    def __len__(self) -> int:
        return len(self._roster)

    def __str__(self) -> str:
        return (
            f"Team[{self._name} ({self._team_id}) roster={len(self._roster)} "
            f"capRemaining={self._salary_cap.remaining}]"
        )

    def __repr__(self) -> str:
        return f"Team(team_id={self._team_id!r}, name={self._name!r}, roster={len(self._roster)})"
