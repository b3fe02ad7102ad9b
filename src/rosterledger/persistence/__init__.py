"""Persistence collaborators: team repositories and a SQLite-backed audit ledger."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

from rosterledger.audit import GENESIS_HASH, AuditEntry, AuditLedger
from rosterledger.models.team import Team


logger = logging.getLogger(__name__)


class TeamRepository(Protocol):
    def save(self, team: Team) -> None: ...

    def find_by_id(self, team_id: str) -> Optional[Team]: ...

    def find_all(self) -> List[Team]: ...

    def search(self, predicate: Callable[[Team], bool]) -> List[Team]: ...


class InMemoryTeamRepository:
    """Dictionary-backed repository; iteration follows registration order."""

    def __init__(self) -> None:
        self._store: Dict[str, Team] = {}

    def save(self, team: Team) -> None:
        self._store[team.team_id] = team

    def find_by_id(self, team_id: str) -> Optional[Team]:
        return self._store.get(team_id)

    def find_all(self) -> List[Team]:
        return list(self._store.values())

    def search(self, predicate: Callable[[Team], bool]) -> List[Team]:
        return [team for team in self._store.values() if predicate(team)]


class SqliteAuditLedger(AuditLedger):
    """Audit ledger that writes through to a SQLite table.

    Rows are stored verbatim, so an entry edited on disk no longer verifies
    once the ledger is reloaded.
    """

    def __init__(self, db_path: Path | str, genesis_hash: str = GENESIS_HASH) -> None:
        super().__init__(genesis_hash)
        self.db_path = Path(db_path)
        self._ensure_schema()
        self._entries.extend(self._load_entries())
        broken = self.first_broken_index()
        if broken is not None:
            logger.warning(
                "Audit ledger %s fails verification at entry %s of %s",
                self.db_path,
                broken,
                len(self._entries),
            )

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS audit_entries (
                    seq INTEGER PRIMARY KEY,
                    actor_id TEXT NOT NULL,
                    actor_role TEXT NOT NULL,
                    action TEXT NOT NULL,
                    before_snapshot TEXT NOT NULL,
                    after_snapshot TEXT NOT NULL,
                    timestamp TEXT NOT NULL,
                    prev_hash TEXT NOT NULL,
                    hash TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def _load_entries(self) -> List[AuditEntry]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM audit_entries ORDER BY seq").fetchall()
        return [self._row_to_entry(row) for row in rows]

    def append(self, entry: AuditEntry) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO audit_entries (
                    actor_id, actor_role, action, before_snapshot,
                    after_snapshot, timestamp, prev_hash, hash
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.actor_id,
                    entry.actor_role,
                    entry.action,
                    entry.before_snapshot,
                    entry.after_snapshot,
                    entry.timestamp.isoformat(),
                    entry.prev_hash,
                    entry.hash,
                ),
            )
            conn.commit()
        super().append(entry)

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> AuditEntry:
        return AuditEntry(
            actor_id=row["actor_id"],
            actor_role=row["actor_role"],
            action=row["action"],
            before_snapshot=row["before_snapshot"],
            after_snapshot=row["after_snapshot"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            prev_hash=row["prev_hash"],
            hash=row["hash"],
        )


__all__ = ["InMemoryTeamRepository", "SqliteAuditLedger", "TeamRepository"]
