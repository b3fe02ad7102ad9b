"""Exception hierarchy shared by the domain model, service and optimizer."""

from __future__ import annotations


class RosterError(Exception):
    """Base class for every error raised by rosterledger."""


class ValidationError(RosterError, ValueError):
    """Bad constructor or argument input; raised before any state changes."""


class CapacityExceeded(RosterError):
    """A roster or salary cap limit would be exceeded."""


class RosterFull(CapacityExceeded):
    pass


class CapExceeded(CapacityExceeded):
    pass


class NotFound(RosterError, LookupError):
    """Unknown team, or player missing from the relevant roster."""


class Unauthorized(RosterError, PermissionError):
    """Actor lacks the capability to mutate rosters."""


class MissingPosition(RosterError):
    def __init__(self, position) -> None:
        super().__init__(f"Cannot build lineup: missing position {position}")
        self.position = position


class ConcurrentModificationError(RosterError, RuntimeError):
    """Roster container changed while it was being iterated."""


__all__ = [
    "RosterError",
    "ValidationError",
    "CapacityExceeded",
    "RosterFull",
    "CapExceeded",
    "NotFound",
    "Unauthorized",
    "MissingPosition",
    "ConcurrentModificationError",
]
