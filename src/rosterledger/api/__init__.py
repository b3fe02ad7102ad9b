"""REST API over the roster management service."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException

from rosterledger.api.schemas import (
    ActorPayload,
    AuditEntryResponse,
    AuditVerifyResponse,
    LineupResponse,
    PlayerResponse,
    SignPlayerRequest,
    StarterResponse,
    TeamCreateRequest,
    TeamResponse,
    TradeRequest,
    WaivePlayerRequest,
)
from rosterledger.audit import AuditEntry
from rosterledger.errors import (
    CapacityExceeded,
    MissingPosition,
    NotFound,
    RosterError,
    Unauthorized,
    ValidationError,
)
from rosterledger.league import League, build_league
from rosterledger.models.contract import Contract, RookieScaleSalaryStrategy, StandardSalaryStrategy
from rosterledger.models.money import Money
from rosterledger.models.player import create_player
from rosterledger.models.roles import Role
from rosterledger.models.team import Team


def _http_error(exc: RosterError) -> HTTPException:
    if isinstance(exc, ValidationError):
        status = 400
    elif isinstance(exc, Unauthorized):
        status = 403
    elif isinstance(exc, NotFound):
        status = 404
    elif isinstance(exc, (CapacityExceeded, MissingPosition)):
        status = 409
    else:
        status = 400
    return HTTPException(status_code=status, detail=str(exc))


def _to_role(payload: ActorPayload) -> Role:
    return Role(payload.actor_id, payload.display_name or payload.actor_id, payload.role)


def _team_response(team: Team) -> TeamResponse:
    cap = team.salary_cap
    return TeamResponse(
        team_id=team.team_id,
        name=team.name,
        salary_cap=str(cap.cap.amount),
        committed=str(cap.committed.amount),
        remaining=str(cap.remaining.amount),
        roster_size=team.roster_size,
        players=[
            PlayerResponse(
                player_id=player.player_id,
                name=player.name,
                position=player.position,
                experience=player.experience,
                age=player.age,
                offense=player.offense,
                defense=player.defense,
                fatigue=player.fatigue,
                overall_rating=player.overall_rating(),
                market_value=player.market_value(),
                annual_salary=str(team.annual_salary_for(player.player_id).amount),
            )
            for player in team
        ],
    )


def _entry_response(entry: AuditEntry, hash_length: int) -> AuditEntryResponse:
    return AuditEntryResponse(
        actor_id=entry.actor_id,
        actor_role=entry.actor_role,
        action=entry.action,
        before_snapshot=entry.before_snapshot,
        after_snapshot=entry.after_snapshot,
        timestamp=entry.timestamp,
        prev_hash=entry.prev_hash,
        hash=entry.hash,
        short_hash=entry.short_hash(hash_length),
    )


def create_app(league: League | None = None) -> FastAPI:
    app = FastAPI(title="rosterledger")
    league = league or build_league()
    app.state.league = league
    service = league.service

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/teams", response_model=list[TeamResponse])
    async def list_teams() -> list[TeamResponse]:
        return [_team_response(team) for team in service.list_teams()]

    @app.post("/teams", response_model=TeamResponse, status_code=201)
    async def register_team(request: TeamCreateRequest) -> TeamResponse:
        cap = Money(request.salary_cap) if request.salary_cap is not None else None
        try:
            team = league.new_team(request.team_id, request.name, cap)
        except RosterError as exc:
            raise _http_error(exc) from exc
        if league.teams.find_by_id(team.team_id) is not None:
            raise HTTPException(status_code=409, detail=f"Team {team.team_id} already registered")
        service.register_team(_to_role(request.actor), team)
        return _team_response(team)

    @app.get("/teams/{team_id}", response_model=TeamResponse)
    async def get_team(team_id: str) -> TeamResponse:
        try:
            return _team_response(service.get_team(team_id))
        except RosterError as exc:
            raise _http_error(exc) from exc

    @app.post("/teams/{team_id}/players", response_model=TeamResponse)
    async def sign_player(team_id: str, request: SignPlayerRequest) -> TeamResponse:
        try:
            player = create_player(request.experience, request.player)
            contract_kwargs = {
                "total_value": Money(request.contract_total),
                "years": request.contract_years,
            }
            if request.start_date is not None:
                contract_kwargs["start_date"] = request.start_date
            contract = Contract(**contract_kwargs)
            if request.salary_strategy == "rookie_scale":
                max_annual = (
                    Money(request.rookie_max_annual)
                    if request.rookie_max_annual is not None
                    else league.rules.rookie_max_annual
                )
                strategy = RookieScaleSalaryStrategy(max_annual)
            else:
                strategy = StandardSalaryStrategy()
            service.sign_player(_to_role(request.actor), team_id, player, contract, strategy)
            return _team_response(service.get_team(team_id))
        except RosterError as exc:
            raise _http_error(exc) from exc

    @app.post("/teams/{team_id}/players/{player_id}/waive", response_model=TeamResponse)
    async def waive_player(team_id: str, player_id: str, request: WaivePlayerRequest) -> TeamResponse:
        try:
            service.waive_player(_to_role(request.actor), team_id, player_id)
            return _team_response(service.get_team(team_id))
        except RosterError as exc:
            raise _http_error(exc) from exc

    @app.post("/trades", response_model=list[TeamResponse])
    async def trade(request: TradeRequest) -> list[TeamResponse]:
        try:
            service.trade(
                _to_role(request.actor),
                request.from_team_id,
                request.to_team_id,
                request.player_id,
            )
            return [
                _team_response(service.get_team(request.from_team_id)),
                _team_response(service.get_team(request.to_team_id)),
            ]
        except RosterError as exc:
            raise _http_error(exc) from exc

    @app.get("/teams/{team_id}/lineup", response_model=LineupResponse)
    async def best_lineup(team_id: str) -> LineupResponse:
        try:
            lineup = league.optimizer.best_starting_five(service.get_team(team_id))
        except RosterError as exc:
            raise _http_error(exc) from exc
        return LineupResponse(
            team_id=team_id,
            score=lineup.score,
            starters=[
                StarterResponse(
                    player_id=player.player_id,
                    name=player.name,
                    position=player.position,
                    market_value=player.market_value(),
                )
                for player in lineup.starters
            ],
        )

    @app.get("/audit", response_model=list[AuditEntryResponse])
    async def audit_entries(action: str | None = None) -> list[AuditEntryResponse]:
        entries = service.audit.all()
        if action:
            entries = tuple(entry for entry in entries if entry.action == action)
        return [_entry_response(entry, league.rules.hash_display_length) for entry in entries]

    @app.get("/audit/verify", response_model=AuditVerifyResponse)
    async def audit_verify() -> AuditVerifyResponse:
        ledger = service.audit
        broken = ledger.first_broken_index()
        return AuditVerifyResponse(
            valid=broken is None,
            entries=len(ledger),
            first_broken_index=broken,
            tail_hash=ledger.tail_hash(),
        )

    return app


__all__ = ["create_app"]
