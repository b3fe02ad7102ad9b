from __future__ import annotations

from datetime import date
from typing import List, Literal

from pydantic import BaseModel, Field

from rosterledger.models.player import ExperienceLevel, PlayerProfile, Position
from rosterledger.models.roles import RoleKind


class ActorPayload(BaseModel):
    actor_id: str = Field(..., min_length=1)
    display_name: str = ""
    role: RoleKind = RoleKind.COACH


class TeamCreateRequest(BaseModel):
    actor: ActorPayload
    team_id: str = Field(..., min_length=1)
    name: str
    salary_cap: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)


class SignPlayerRequest(BaseModel):
    actor: ActorPayload
    experience: ExperienceLevel = ExperienceLevel.VETERAN
    player: PlayerProfile
    contract_total: float = Field(..., ge=0.0, allow_inf_nan=False)
    contract_years: int = Field(default=1)
    start_date: date | None = None
    salary_strategy: Literal["standard", "rookie_scale"] = "standard"
    rookie_max_annual: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)


class WaivePlayerRequest(BaseModel):
    actor: ActorPayload


class TradeRequest(BaseModel):
    actor: ActorPayload
    from_team_id: str
    to_team_id: str
    player_id: str


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    position: Position
    experience: ExperienceLevel
    age: int
    offense: int
    defense: int
    fatigue: int
    overall_rating: int
    market_value: int
    annual_salary: str


class TeamResponse(BaseModel):
    team_id: str
    name: str
    salary_cap: str
    committed: str
    remaining: str
    roster_size: int
    players: List[PlayerResponse]
