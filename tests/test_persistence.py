import logging
import sqlite3

from rosterledger.models import Contract, Money, Position, Role, StandardSalaryStrategy, VeteranPlayer
from rosterledger.league import build_league, seed_sample_teams
from rosterledger.persistence import InMemoryTeamRepository, SqliteAuditLedger


COACH = Role.coach("u1", "Coach Carter")


def _populate(db_path) -> int:
    league = build_league(db_path=db_path)
    seed_sample_teams(league, COACH)
    player = VeteranPlayer("x", "Mover", Position.SF, 29, 80, 80, years_in_league=6)
    league.service.sign_player(
        COACH, "LAL", player, Contract(total_value=Money(10_000_000)), StandardSalaryStrategy()
    )
    league.service.trade(COACH, "LAL", "GSW", "x")
    return len(league.audit)


def test_sqlite_ledger_survives_reload(tmp_path):
    db_path = tmp_path / "ledger.sqlite"
    written = _populate(db_path)

    reloaded = SqliteAuditLedger(db_path)
    assert len(reloaded) == written == 5
    assert reloaded.verify_integrity()
    assert [e.action for e in reloaded.all()][-2:] == ["SIGN_PLAYER", "TRADE_PLAYER"]


def test_appends_after_reload_continue_the_chain(tmp_path):
    db_path = tmp_path / "ledger.sqlite"
    _populate(db_path)

    league = build_league(db_path=db_path)
    assert len(league.audit) == 5
    seed_sample_teams(league, COACH)

    reloaded = SqliteAuditLedger(db_path)
    assert len(reloaded) == 8
    assert reloaded.verify_integrity()


def test_tampered_row_fails_verification(tmp_path, caplog):
    db_path = tmp_path / "ledger.sqlite"
    _populate(db_path)

    conn = sqlite3.connect(db_path)
    conn.execute("UPDATE audit_entries SET after_snapshot = 'nothing happened' WHERE seq = 4")
    conn.commit()
    conn.close()

    with caplog.at_level(logging.WARNING, logger="rosterledger.persistence"):
        reloaded = SqliteAuditLedger(db_path)

    assert not reloaded.verify_integrity()
    assert reloaded.first_broken_index() == 3
    assert "fails verification" in caplog.text


def test_in_memory_repository_search_and_order():
    league = build_league()
    seed_sample_teams(league, COACH)
    repo = league.teams

    assert isinstance(repo, InMemoryTeamRepository)
    assert [team.team_id for team in repo.find_all()] == ["LAL", "GSW", "BOS"]
    assert repo.find_by_id("BOS").name == "Celtics"
    assert repo.find_by_id("NYK") is None
    assert [team.team_id for team in repo.search(lambda t: t.name.startswith("W"))] == ["GSW"]


def test_append_after_deleted_row_still_records_entry(tmp_path):
    db_path = tmp_path / "ledger.sqlite"
    league = build_league(db_path=db_path)
    seed_sample_teams(league, COACH)

    conn = sqlite3.connect(db_path)
    conn.execute("DELETE FROM audit_entries WHERE seq = 2")
    conn.commit()
    conn.close()

    league = build_league(db_path=db_path)
    assert len(league.audit) == 2
    assert league.audit.first_broken_index() == 1

    league.service.register_team(COACH, league.new_team("NYK", "Knicks"))

    assert league.audit.all()[-1].action == "REGISTER_TEAM"
    reloaded = SqliteAuditLedger(db_path)
    assert len(reloaded) == 3
    assert reloaded.all()[-1].hash == league.audit.tail_hash()
    assert reloaded.first_broken_index() == 1
