"""Transactional roster management."""

from .management import (
    REGISTER_TEAM,
    SIGN_PLAYER,
    TRADE,
    TRADE_PLAYER,
    WAIVE_PLAYER,
    TeamManagementService,
)

__all__ = [
    "REGISTER_TEAM",
    "SIGN_PLAYER",
    "TRADE",
    "TRADE_PLAYER",
    "WAIVE_PLAYER",
    "TeamManagementService",
]
