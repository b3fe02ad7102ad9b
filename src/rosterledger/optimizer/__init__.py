"""Starting lineup search over a team's roster."""

from .lineup import Lineup, LineupOptimizer, best_starting_five

__all__ = ["Lineup", "LineupOptimizer", "best_starting_five"]
