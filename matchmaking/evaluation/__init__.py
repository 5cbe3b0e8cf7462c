"""
Evaluation module for matching runs.

Reports iteration statistics, team score distributions and a constraint
audit. No claim of optimality is made.
"""

from .metrics import (
    IterativeMatchingStats,
    compute_iterative_stats,
    ScoreDistributionStats,
    compute_distribution_stats,
    find_constraint_violations,
    TeamQualityReport,
    create_team_quality_report,
)

__all__ = [
    "IterativeMatchingStats",
    "compute_iterative_stats",
    "ScoreDistributionStats",
    "compute_distribution_stats",
    "find_constraint_violations",
    "TeamQualityReport",
    "create_team_quality_report",
]
