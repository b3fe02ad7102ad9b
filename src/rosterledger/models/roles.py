"""Closed set of actor roles and their capabilities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoleKind(str, Enum):
    COACH = "Coach"
    ASSISTANT_COACH = "AssistantCoach"


_ROSTER_MUTATORS = frozenset({RoleKind.COACH})


@dataclass(frozen=True)
class Role:
    id: str
    display_name: str
    kind: RoleKind

    @classmethod
    def coach(cls, id: str, display_name: str) -> "Role":
        return cls(id, display_name, RoleKind.COACH)

    @classmethod
    def assistant_coach(cls, id: str, display_name: str) -> "Role":
        return cls(id, display_name, RoleKind.ASSISTANT_COACH)

    @property
    def role_name(self) -> str:
        return self.kind.value

    @property
    def can_mutate_roster(self) -> bool:
        return self.kind in _ROSTER_MUTATORS
