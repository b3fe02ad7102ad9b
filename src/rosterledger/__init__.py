"""Roster management with salary cap rules, an audit ledger and lineup search."""

__version__ = "0.1.0"
