"""Pydantic models for API I/O."""

from .audit import AuditEntryResponse, AuditVerifyResponse
from .lineup import LineupResponse, StarterResponse
from .team import (
    ActorPayload,
    PlayerResponse,
    SignPlayerRequest,
    TeamCreateRequest,
    TeamResponse,
    TradeRequest,
    WaivePlayerRequest,
)

__all__ = [
    "ActorPayload",
    "AuditEntryResponse",
    "AuditVerifyResponse",
    "LineupResponse",
    "PlayerResponse",
    "SignPlayerRequest",
    "StarterResponse",
    "TeamCreateRequest",
    "TeamResponse",
    "TradeRequest",
    "WaivePlayerRequest",
]
