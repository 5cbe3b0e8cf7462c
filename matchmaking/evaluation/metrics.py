"""
Evaluation of matching runs.

There is no ground truth for a "good" team, so evaluation reports how the
run behaved:
1. Iteration statistics (how much each round contributed)
2. Distribution of team compatibility scores and experience
3. Constraint audit (every team respects size, cohort and availability rules)

This module DOES NOT claim the teams are optimal.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from ..engine.eligibility import ConstraintLevel, availability_compatible
from ..schema import IterationRecord, IterativeMatchingResult, MatchingResult, Team, TeamPreference

logger = logging.getLogger(__name__)


@dataclass
class IterativeMatchingStats:
    """Summary of an iterative run, derived from its history."""
    total_iterations: int
    total_teams_formed: int
    total_participants_matched: int
    final_efficiency: float
    iteration_breakdown: List[IterationRecord]
    average_iteration_efficiency: float
    best_iteration: Optional[IterationRecord]
    worst_iteration: Optional[IterationRecord]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalIterations": self.total_iterations,
            "totalTeamsFormed": self.total_teams_formed,
            "totalParticipantsMatched": self.total_participants_matched,
            "finalEfficiency": float(self.final_efficiency),
            "iterationBreakdown": [r.to_dict() for r in self.iteration_breakdown],
            "averageIterationEfficiency": float(self.average_iteration_efficiency),
            "bestIteration": self.best_iteration.to_dict() if self.best_iteration else None,
            "worstIteration": self.worst_iteration.to_dict() if self.worst_iteration else None,
        }


def compute_iterative_stats(result: IterativeMatchingResult) -> IterativeMatchingStats:
    """
    Summarize an iterative matching result.

    Best and worst iterations are the first ones reaching the maximum and
    minimum efficiency respectively.

    Args:
        result: Output of the iterative orchestrator

    Returns:
        IterativeMatchingStats
    """
    history = list(result.iteration_history)
    efficiencies = np.array([r.efficiency for r in history], dtype=float)

    return IterativeMatchingStats(
        total_iterations=result.iterations,
        total_teams_formed=len(result.teams),
        total_participants_matched=result.statistics.total_participants - len(result.unmatched),
        final_efficiency=result.statistics.matching_efficiency,
        iteration_breakdown=history,
        average_iteration_efficiency=float(efficiencies.mean()) if history else 0.0,
        best_iteration=history[int(np.argmax(efficiencies))] if history else None,
        worst_iteration=history[int(np.argmin(efficiencies))] if history else None,
    )


@dataclass
class ScoreDistributionStats:
    """Statistics about a per-team value distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 40.0, "p50": 55.0, "p90": 70.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


def compute_distribution_stats(values: np.ndarray) -> ScoreDistributionStats:
    """Distribution statistics; all zeros for an empty array."""
    if len(values) == 0:
        return ScoreDistributionStats(0.0, 0.0, 0.0, 0.0, {"p10": 0.0, "p50": 0.0, "p90": 0.0})
    return ScoreDistributionStats(
        mean=float(np.mean(values)),
        std=float(np.std(values)),
        min=float(np.min(values)),
        max=float(np.max(values)),
        quantiles={f"p{q}": float(np.percentile(values, q)) for q in (10, 50, 90)},
    )


def find_constraint_violations(
    team: Team,
    level: ConstraintLevel = ConstraintLevel.STRICT
) -> List[str]:
    """
    Check a formed team against the hard matching rules.

    Pairwise availability is only audited for STRICT runs; RELAXED teams
    may legitimately hold a High/Low pair.

    Returns:
        Human-readable violations (empty if the team is valid)
    """
    violations = []
    members = team.members

    if any(m.preferred_team_size != team.team_size for m in members):
        violations.append(f"{team.id}: member prefers a different team size")

    mixes_cohorts = len({m.is_postgraduate for m in members}) > 1
    if mixes_cohorts and any(m.team_preference is not TeamPreference.EITHER for m in members):
        violations.append(f"{team.id}: mixes UG and PG members")

    if level is not ConstraintLevel.STRICT:
        return violations

    for i, a in enumerate(members):
        for b in members[i + 1:]:
            if not availability_compatible(a.availability_level, b.availability_level):
                violations.append(f"{team.id}: incompatible availability {a.id}/{b.id}")

    return violations


@dataclass
class TeamQualityReport:
    """
    Quality report for a matching result.

    Contains score and experience distributions plus a constraint audit.
    """
    n_teams: int
    n_unmatched: int
    matching_efficiency: float
    compatibility_stats: ScoreDistributionStats
    experience_stats: ScoreDistributionStats
    team_size_distribution: Dict[int, int]
    violations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_teams": self.n_teams,
            "n_unmatched": self.n_unmatched,
            "matching_efficiency": float(self.matching_efficiency),
            "compatibility_stats": self.compatibility_stats.to_dict(),
            "experience_stats": self.experience_stats.to_dict(),
            "team_size_distribution": {str(k): v for k, v in self.team_size_distribution.items()},
            "violations": list(self.violations),
        }

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved team quality report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            "Team Quality Report",
            "=" * 50,
            "",
            f"Teams: {self.n_teams}  Unmatched: {self.n_unmatched}  "
            f"Efficiency: {self.matching_efficiency:.1f}%",
            "",
            "Compatibility Score:",
            f"  Mean: {self.compatibility_stats.mean:.2f}",
            f"  Std:  {self.compatibility_stats.std:.2f}",
            f"  Min:  {self.compatibility_stats.min:.2f}",
            f"  Max:  {self.compatibility_stats.max:.2f}",
            "",
            "Average Experience:",
            f"  Mean: {self.experience_stats.mean:.2f}",
        ]
        if self.team_size_distribution:
            lines.append("")
            lines.append("Team Sizes:")
            for size, count in sorted(self.team_size_distribution.items()):
                lines.append(f"  {size}: {count}")

        lines.append("")
        if self.violations:
            lines.append(f"Constraint violations ({len(self.violations)}):")
            lines.extend(f"  - {v}" for v in self.violations)
        else:
            lines.append("Constraint audit: PASS")
        return "\n".join(lines)


def create_team_quality_report(
    result: MatchingResult,
    level: ConstraintLevel = ConstraintLevel.STRICT
) -> TeamQualityReport:
    """
    Build a quality report for a matching result.

    Args:
        result: Single-round or iterative matching result
        level: ConstraintLevel the run used, for the availability audit

    Returns:
        TeamQualityReport
    """
    scores = np.array([t.compatibility_score for t in result.teams], dtype=float)
    experience = np.array([t.average_experience for t in result.teams], dtype=float)
    violations = [v for t in result.teams for v in find_constraint_violations(t, level)]
    if violations:
        logger.warning(f"Found {len(violations)} constraint violations in formed teams")

    return TeamQualityReport(
        n_teams=len(result.teams),
        n_unmatched=len(result.unmatched),
        matching_efficiency=result.statistics.matching_efficiency,
        compatibility_stats=compute_distribution_stats(scores),
        experience_stats=compute_distribution_stats(experience),
        team_size_distribution=dict(result.statistics.team_size_distribution),
        violations=violations,
    )
