"""Event pool coverage and puzzle demand analysis."""

from .analyzer import (
    get_era_bucket,
    analyze_coverage_gaps,
    analyze_puzzle_demand,
    pick_balanced_years,
    select_work
)

__all__ = [
    "get_era_bucket",
    "analyze_coverage_gaps",
    "analyze_puzzle_demand",
    "pick_balanced_years",
    "select_work"
]
