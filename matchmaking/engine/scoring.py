"""
Compatibility scoring of a candidate against a partially built team.

The score rewards diversity (experience, skills, roles) and shared case
interests. It only ranks candidates that already passed eligibility
filtering; it never makes a candidate eligible.

Scoring Formula:
    score = experience_bonus * [experience not yet on the team]
          + shared_case_bonus * |team cases & candidate cases|
          + unique_skill_bonus * |candidate skills - team skills|
          + availability_bonus * [availability fits any member]
          + unique_role_bonus * |candidate roles - team roles|
"""

import logging
from dataclasses import dataclass, asdict
from itertools import combinations
from typing import Any, Dict, Sequence

import numpy as np

from ..schema import Participant
from .eligibility import availability_compatible

logger = logging.getLogger(__name__)


@dataclass
class ScoringWeights:
    """
    Point values for each scoring component.

    Attributes:
        experience_bonus: Candidate brings a new experience level
        shared_case_bonus: Per case type shared with the team
        unique_skill_bonus: Per core strength the team lacks
        availability_bonus: Availability compatible with any member
        unique_role_bonus: Per preferred role the team lacks
    """
    experience_bonus: float = 25.0
    shared_case_bonus: float = 15.0
    unique_skill_bonus: float = 10.0
    availability_bonus: float = 20.0
    unique_role_bonus: float = 8.0

    def validate(self) -> None:
        """Validate configuration values."""
        for name, value in asdict(self).items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringWeights":
        """Create from main config dictionary."""
        scoring = config.get("scoring", {}) or {}
        defaults = cls()
        return cls(**{k: float(scoring.get(k, v)) for k, v in asdict(defaults).items()})


DEFAULT_WEIGHTS = ScoringWeights()


def score_candidate(
    team: Sequence[Participant],
    candidate: Participant,
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> float:
    """
    Score a candidate against the current team.

    Args:
        team: Current team members (may be empty)
        candidate: Candidate under consideration
        weights: Point values for each component

    Returns:
        Unnormalized score
    """
    score = 0.0

    team_experience = {m.experience for m in team}
    if candidate.experience not in team_experience:
        score += weights.experience_bonus

    team_cases = {c for m in team for c in m.case_preferences}
    score += weights.shared_case_bonus * len(team_cases & set(candidate.case_preferences))

    team_skills = {s for m in team for s in m.core_strengths}
    new_skills = len(candidate.core_strengths) - len(team_skills & set(candidate.core_strengths))
    score += weights.unique_skill_bonus * new_skills

    if any(availability_compatible(candidate.availability_level, m.availability_level) for m in team):
        score += weights.availability_bonus

    team_roles = {r for m in team for r in m.preferred_roles}
    new_roles = len(candidate.preferred_roles) - len(team_roles & set(candidate.preferred_roles))
    score += weights.unique_role_bonus * new_roles

    return score


def pairwise_team_score(
    members: Sequence[Participant],
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> float:
    """
    Mean pairwise score of a finished team, clamped to [0, 100].

    Each unordered pair (a, b) with a before b contributes
    score_candidate([a], b).

    Args:
        members: Team members in team order
        weights: Point values for each component

    Returns:
        Team compatibility score; 0.0 for fewer than two members
    """
    if len(members) < 2:
        return 0.0
    pair_scores = np.array([
        score_candidate([a], b, weights) for a, b in combinations(members, 2)
    ])
    return float(np.clip(pair_scores.mean(), 0.0, 100.0))
