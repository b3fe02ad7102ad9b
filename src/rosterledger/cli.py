"""Command-line interface: load rosters, print best lineups and check the audit ledger."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rosterledger.config import default_db_path
from rosterledger.errors import MissingPosition, RosterError
from rosterledger.ingest import import_rosters, load_roster_csv
from rosterledger.league import League, build_league, seed_sample_teams
from rosterledger.models.money import Money
from rosterledger.models.roles import Role


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage team rosters and compute starting lineups")
    parser.add_argument(
        "rosters",
        type=Path,
        nargs="?",
        default=None,
        help="Roster CSV to import (sample teams are registered when omitted)",
    )
    parser.add_argument("--coach-id", default="u1", help="Actor id recorded in the audit ledger")
    parser.add_argument("--coach-name", default="Coach Carter", help="Display name for the acting coach")
    parser.add_argument(
        "--salary-cap",
        type=float,
        default=None,
        help="Salary cap for newly registered teams (default uses league rules)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite file for a durable audit ledger",
    )
    parser.add_argument(
        "--persist",
        action="store_true",
        help="Use the default ledger database (ROSTERLEDGER_DB_PATH or ./rosterledger.sqlite)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write the import summary JSON",
    )
    parser.add_argument("--team", action="append", default=[], help="Only report these team ids")
    parser.add_argument("--show-audit", action="store_true", help="Print every audit entry")
    return parser.parse_args(argv)


def _print_lineups(league: League, team_ids: list[str]) -> None:
    teams = league.service.list_teams()
    if team_ids:
        wanted = {team_id.upper() for team_id in team_ids}
        teams = [team for team in teams if team.team_id in wanted]
    for team in teams:
        print(team)
        try:
            lineup = league.optimizer.best_starting_five(team)
        except MissingPosition as exc:
            print(f"  {exc}")
            continue
        for player in lineup.starters:
            print(f"  {player.position!s:<2} {player.name} ({player.player_id}) value={player.market_value()}")
        print(f"  score={lineup.score}")


def _print_audit(league: League) -> None:
    width = league.rules.hash_display_length
    for entry in league.audit.all():
        print(
            f"{entry.timestamp.isoformat()} {entry.actor_role:<14} {entry.actor_id:<8} "
            f"{entry.action:<24} {entry.short_hash(width)}"
        )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    db_path = args.db or (default_db_path() if args.persist else None)
    league = build_league(db_path=db_path)
    coach = Role.coach(args.coach_id, args.coach_name)

    try:
        cap = Money(args.salary_cap) if args.salary_cap is not None else None
        if args.rosters:
            rows = load_roster_csv(args.rosters)
            report = import_rosters(league, coach, rows, salary_cap=cap)
            print(
                f"Imported {report.players_signed} players into "
                f"{len(league.service.list_teams())} teams"
            )
            if report.skipped:
                preview = ", ".join(f"{row.player_id} ({row.reason})" for row in report.skipped[:5])
                more = len(report.skipped) - 5
                suffix = f", +{more} more" if more > 0 else ""
                print(f"Skipped rows: {preview}{suffix}")
            if args.report:
                report_payload = {
                    "teams_registered": report.teams_registered,
                    "players_signed": report.players_signed,
                    "skipped": [
                        {"team_id": row.team_id, "player_id": row.player_id, "reason": row.reason}
                        for row in report.skipped
                    ],
                }
                args.report.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")
                print(f"Wrote import report to {args.report}")
        else:
            seed_sample_teams(league, coach)
    except (OSError, RosterError) as exc:
        print(f"Import failed: {exc}")
        return 1

    _print_lineups(league, args.team)

    if args.show_audit:
        _print_audit(league)

    broken = league.audit.first_broken_index()
    if broken is None:
        print(f"Audit ledger OK ({len(league.audit)} entries)")
        return 0
    print(f"Audit ledger BROKEN at entry {broken} of {len(league.audit)}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
