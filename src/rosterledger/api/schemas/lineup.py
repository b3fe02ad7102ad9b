from __future__ import annotations

from typing import List

from pydantic import BaseModel

from rosterledger.models.player import Position


class StarterResponse(BaseModel):
    player_id: str
    name: str
    position: Position
    market_value: int


class LineupResponse(BaseModel):
    team_id: str
    score: int
    starters: List[StarterResponse]
