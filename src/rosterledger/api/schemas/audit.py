from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class AuditEntryResponse(BaseModel):
    actor_id: str
    actor_role: str
    action: str
    before_snapshot: str
    after_snapshot: str
    timestamp: datetime
    prev_hash: str
    hash: str
    short_hash: str


class AuditVerifyResponse(BaseModel):
    valid: bool
    entries: int
    first_broken_index: int | None
    tail_hash: str
