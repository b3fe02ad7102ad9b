"""Domain model: money, players, contracts, roles and teams."""

from .contract import Contract, RookieScaleSalaryStrategy, SalaryStrategy, StandardSalaryStrategy
from .money import Money, SalaryCap
from .player import (
    LINEUP_POSITIONS,
    ExperienceLevel,
    Player,
    PlayerProfile,
    Position,
    RookiePlayer,
    TwoWayPlayer,
    VeteranPlayer,
    create_player,
    market_value,
)
from .roles import Role, RoleKind
from .roster import RosterList
from .team import MAX_ROSTER_SIZE, Team

__all__ = [
    "Contract",
    "ExperienceLevel",
    "LINEUP_POSITIONS",
    "MAX_ROSTER_SIZE",
    "Money",
    "Player",
    "PlayerProfile",
    "Position",
    "Role",
    "RoleKind",
    "RookiePlayer",
    "RookieScaleSalaryStrategy",
    "RosterList",
    "SalaryCap",
    "SalaryStrategy",
    "StandardSalaryStrategy",
    "Team",
    "TwoWayPlayer",
    "VeteranPlayer",
    "create_player",
    "market_value",
]
