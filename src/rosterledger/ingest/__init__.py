"""Input adapters that load roster files into a league."""

from .roster import (
    ImportReport,
    RosterRow,
    SkippedRow,
    import_rosters,
    load_roster_csv,
    salary_for_rating,
)

__all__ = [
    "ImportReport",
    "RosterRow",
    "SkippedRow",
    "import_rosters",
    "load_roster_csv",
    "salary_for_rating",
]
