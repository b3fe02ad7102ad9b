import itertools
import random

import pytest

from rosterledger.errors import MissingPosition
from rosterledger.models import (
    LINEUP_POSITIONS,
    Money,
    Position,
    RookiePlayer,
    SalaryCap,
    Team,
    TwoWayPlayer,
    VeteranPlayer,
    market_value,
)
from rosterledger.optimizer import LineupOptimizer, best_starting_five


def _team(players) -> Team:
    team = Team("LAL", "Lakers", SalaryCap(Money(140_000_000)))
    for player in players:
        team.add_player(player, Money(1_000_000))
    return team


def _random_player(rng: random.Random, player_id: str, position: Position):
    offense = rng.randint(40, 99)
    defense = rng.randint(40, 99)
    kind = rng.choice(["rookie", "veteran", "two_way"])
    if kind == "rookie":
        player = RookiePlayer(player_id, player_id, position, 20, offense, defense)
    elif kind == "veteran":
        player = VeteranPlayer(player_id, player_id, position, rng.randint(24, 38), offense, defense, years_in_league=5)
    else:
        player = TwoWayPlayer(player_id, player_id, position, 22, offense, defense, g_league_days_remaining=rng.randint(0, 3))
    player.apply_minutes(rng.randint(0, 48))
    return player


def test_one_candidate_per_position_returns_all_five():
    players = [
        RookiePlayer("pg", "Guard", Position.PG, 20, 75, 70),
        VeteranPlayer("sg", "Wing", Position.SG, 34, 85, 80, years_in_league=12),
        TwoWayPlayer("sf", "Swing", Position.SF, 23, 68, 66, g_league_days_remaining=4),
        VeteranPlayer("pf", "Forward", Position.PF, 27, 78, 82, years_in_league=5),
        RookiePlayer("c", "Center", Position.C, 19, 72, 88),
    ]
    lineup = best_starting_five(_team(players))

    assert [p.player_id for p in lineup.starters] == ["pg", "sg", "sf", "pf", "c"]
    assert lineup.score == sum(market_value(p) for p in players)
    assert set(lineup.by_position()) == set(LINEUP_POSITIONS)


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_two_candidates_per_position_matches_brute_force(seed):
    rng = random.Random(seed)
    players = [
        _random_player(rng, f"{position.value}{slot}", position)
        for slot in range(2)
        for position in LINEUP_POSITIONS
    ]
    lineup = LineupOptimizer().best_lineup(players)

    grouped = [[p for p in players if p.position is position] for position in LINEUP_POSITIONS]
    combos = list(itertools.product(*grouped))
    assert len(combos) == 32
    best = max(sum(market_value(p) for p in combo) for combo in combos)

    assert lineup.score == best
    assert lineup.score == sum(market_value(p) for p in lineup.starters)
    assert [p.position for p in lineup.starters] == list(LINEUP_POSITIONS)


def test_ignores_positions_outside_the_lineup_and_prunes():
    rng = random.Random(99)
    players = [
        _random_player(rng, f"{position.value}{slot}", position)
        for slot in range(4)
        for position in LINEUP_POSITIONS
    ]
    lineup = LineupOptimizer().best_lineup(players)
    grouped = [[p for p in players if p.position is position] for position in LINEUP_POSITIONS]
    best = max(sum(market_value(p) for p in combo) for combo in itertools.product(*grouped))

    assert lineup.score == best
    assert lineup.branches_pruned > 0
    assert lineup.nodes_visited < 1 + 4 + 16 + 64 + 256 + 1024


def test_missing_position_raises():
    players = [
        RookiePlayer("pg", "Guard", Position.PG, 20, 75, 70),
        RookiePlayer("sg", "Wing", Position.SG, 20, 75, 70),
        RookiePlayer("sf", "Swing", Position.SF, 20, 75, 70),
        RookiePlayer("pf", "Forward", Position.PF, 20, 75, 70),
    ]
    with pytest.raises(MissingPosition) as excinfo:
        best_starting_five(_team(players))
    assert excinfo.value.position is Position.C
    assert str(excinfo.value) == "Cannot build lineup: missing position C"


def test_ties_resolve_to_roster_order():
    players = [
        RookiePlayer("pg-first", "Guard A", Position.PG, 20, 70, 70),
        RookiePlayer("pg-second", "Guard B", Position.PG, 20, 70, 70),
        RookiePlayer("sg", "Wing", Position.SG, 20, 70, 70),
        RookiePlayer("sf", "Swing", Position.SF, 20, 70, 70),
        RookiePlayer("pf", "Forward", Position.PF, 20, 70, 70),
        RookiePlayer("c", "Center", Position.C, 20, 70, 70),
    ]
    first = best_starting_five(_team(players))
    second = best_starting_five(_team(players))

    assert first.starters[0].player_id == "pg-first"
    assert first.starters == second.starters
    assert first.score == second.score == 75 * 5


def test_fatigue_changes_the_pick():
    fresh = VeteranPlayer("pg-fresh", "Fresh", Position.PG, 30, 80, 80, years_in_league=8)
    tired = VeteranPlayer("pg-tired", "Tired", Position.PG, 30, 84, 84, years_in_league=8)
    tired.apply_minutes(96)
    others = [
        RookiePlayer(pos.value, pos.value, pos, 20, 70, 70)
        for pos in LINEUP_POSITIONS
        if pos is not Position.PG
    ]
    lineup = best_starting_five(_team([tired, fresh, *others]))
    assert lineup.by_position()[Position.PG].player_id == "pg-fresh"


def test_best_starting_five_leaves_the_team_untouched():
    rng = random.Random(5)
    players = [
        _random_player(rng, f"{position.value}{slot}", position)
        for slot in range(3)
        for position in LINEUP_POSITIONS
    ]
    team = _team(players)
    team.salary_cap.commit(Money(2_500_000))

    def state():
        return (
            [p.player_id for p in team.players()],
            [p.fatigue for p in team.players()],
            [team.annual_salary_for(p.player_id) for p in team.players()],
            team.salary_cap.committed,
        )

    before = state()
    first = best_starting_five(team)
    second = best_starting_five(team)

    assert state() == before
    assert first.starters == second.starters
    assert first.score == second.score
