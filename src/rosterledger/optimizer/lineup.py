"""Branch-and-bound search for the best legal starting five."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from rosterledger.errors import MissingPosition
from rosterledger.models.player import LINEUP_POSITIONS, Player, Position, market_value
from rosterledger.models.team import Team


@dataclass(frozen=True)
class Lineup:
    starters: Tuple[Player, ...]
    score: int
    nodes_visited: int = field(default=0, compare=False)
    branches_pruned: int = field(default=0, compare=False)

    def by_position(self) -> Dict[Position, Player]:
        return {player.position: player for player in self.starters}


@dataclass
class _SearchState:
    best_score: Optional[int] = None
    best_chosen: Tuple[Player, ...] = ()
    nodes_visited: int = 0
    branches_pruned: int = 0


class LineupOptimizer:
    """Pick one player per position maximizing the summed market value.

    Candidates at each position are sorted by descending value (stable, so
    roster order breaks ties). A branch is pruned when its score so far plus
    the best remaining candidate at every open position cannot beat the best
    complete lineup already found. Strict ``>`` keeps the first lineup found on
    exact ties, which makes the result deterministic.
    """

    def __init__(self, positions: Sequence[Position] = LINEUP_POSITIONS) -> None:
        self.positions: Tuple[Position, ...] = tuple(positions)

    def best_starting_five(self, team: Team) -> Lineup:
        return self.best_lineup(team.players())

    def best_lineup(self, roster: Sequence[Player]) -> Lineup:
        by_position: Dict[Position, List[Player]] = {pos: [] for pos in self.positions}
        for player in roster:
            if player.position in by_position:
                by_position[player.position].append(player)

        for pos in self.positions:
            if not by_position[pos]:
                raise MissingPosition(pos)

        values = {id(player): market_value(player) for player in roster}
        candidates: List[List[Tuple[Player, int]]] = []
        for pos in self.positions:
            ranked = sorted(by_position[pos], key=lambda p: values[id(p)], reverse=True)
            candidates.append([(player, values[id(player)]) for player in ranked])

        # suffix_best[d] = sum of the top candidate value at positions d..end
        suffix_best = [0] * (len(candidates) + 1)
        for depth in range(len(candidates) - 1, -1, -1):
            suffix_best[depth] = suffix_best[depth + 1] + candidates[depth][0][1]

        state = _SearchState()
        self._search(candidates, suffix_best, 0, [], 0, state)
        return Lineup(
            starters=state.best_chosen,
            score=state.best_score or 0,
            nodes_visited=state.nodes_visited,
            branches_pruned=state.branches_pruned,
        )

    def _search(
        self,
        candidates: List[List[Tuple[Player, int]]],
        suffix_best: List[int],
        depth: int,
        chosen: List[Player],
        score: int,
        state: _SearchState,
    ) -> None:
        state.nodes_visited += 1
        if depth == len(candidates):
            if state.best_score is None or score > state.best_score:
                state.best_score = score
                state.best_chosen = tuple(chosen)
            return

        upper_bound = score + suffix_best[depth]
        if state.best_score is not None and upper_bound <= state.best_score:
            state.branches_pruned += 1
            return

        for player, value in candidates[depth]:
            chosen.append(player)
            self._search(candidates, suffix_best, depth + 1, chosen, score + value, state)
            chosen.pop()


def best_starting_five(team: Team) -> Lineup:
    return LineupOptimizer().best_starting_five(team)
