"""League-wide configuration: roster limits, cap defaults and ledger constants."""

from .league import DB_PATH_ENV, LeagueRules, default_db_path, get_rules

__all__ = [
    "DB_PATH_ENV",
    "LeagueRules",
    "default_db_path",
    "get_rules",
]
