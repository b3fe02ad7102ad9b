"""Tamper-evident audit trail for every attempted roster mutation."""

from .ledger import GENESIS_HASH, AuditEntry, AuditLedger, compute_hash

__all__ = ["GENESIS_HASH", "AuditEntry", "AuditLedger", "compute_hash"]
