"""Append-only, hash-chained audit ledger."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from rosterledger.models.roles import Role


GENESIS_HASH = "GENESIS"
_SEPARATOR = "|"


def compute_hash(
    prev_hash: str,
    actor_id: str,
    actor_role: str,
    action: str,
    before_snapshot: str,
    after_snapshot: str,
    timestamp: datetime,
) -> str:
    payload = _SEPARATOR.join(
        (
            prev_hash,
            actor_id,
            actor_role,
            action,
            before_snapshot,
            after_snapshot,
            timestamp.isoformat(),
        )
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class AuditEntry:
    """One recorded attempt to change league state, successful or rejected."""

    actor_id: str
    actor_role: str
    action: str
    before_snapshot: str
    after_snapshot: str
    timestamp: datetime
    prev_hash: str
    hash: str = field(default="")

    @classmethod
    def create(
        cls,
        actor: Role,
        action: str,
        before_snapshot: str,
        after_snapshot: str,
        prev_hash: str,
        *,
        timestamp: Optional[datetime] = None,
    ) -> "AuditEntry":
        timestamp = timestamp or datetime.now(timezone.utc)
        digest = compute_hash(
            prev_hash,
            actor.id,
            actor.role_name,
            action,
            before_snapshot,
            after_snapshot,
            timestamp,
        )
        return cls(
            actor_id=actor.id,
            actor_role=actor.role_name,
            action=action,
            before_snapshot=before_snapshot,
            after_snapshot=after_snapshot,
            timestamp=timestamp,
            prev_hash=prev_hash,
            hash=digest,
        )

    def expected_hash(self, prev_hash: str) -> str:
        return compute_hash(
            prev_hash,
            self.actor_id,
            self.actor_role,
            self.action,
            self.before_snapshot,
            self.after_snapshot,
            self.timestamp,
        )

    def verifies_against(self, prev_hash: str) -> bool:
        return self.prev_hash == prev_hash and self.expected_hash(prev_hash) == self.hash

    def short_hash(self, length: int = 12) -> str:
        return self.hash[:length]

    def __str__(self) -> str:
        return f"AuditEntry[{self.actor_role} {self.actor_id} action={self.action} hash={self.short_hash()}...]"


class AuditLedger:
    """In-memory ledger. Entries can only be appended, never edited or removed."""

    def __init__(self, genesis_hash: str = GENESIS_HASH) -> None:
        self._genesis_hash = genesis_hash
        self._entries: List[AuditEntry] = []

    def genesis_hash(self) -> str:
        return self._genesis_hash

    def append(self, entry: AuditEntry) -> None:
        self._entries.append(entry)

    def all(self) -> Tuple[AuditEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def tail_hash(self) -> str:
        if not self._entries:
            return self._genesis_hash
        return self._entries[-1].hash

    def first_broken_index(self) -> Optional[int]:
        """Index of the first entry whose link or hash does not check out."""

        prev = self._genesis_hash
        for index, entry in enumerate(self._entries):
            if not entry.verifies_against(prev):
                return index
            prev = entry.hash
        return None

    def verify_integrity(self) -> bool:
        return self.first_broken_index() is None

    def by_action(self, action: str) -> List[AuditEntry]:
        return [entry for entry in self._entries if entry.action == action]

    def rejected(self) -> List[AuditEntry]:
        return [
            entry
            for entry in self._entries
            if entry.action.endswith("_REJECTED") or entry.action.endswith("_NOT_FOUND")
        ]
