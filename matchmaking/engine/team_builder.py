"""
Greedy construction of a single team.

Key Design Decisions:
- Anchor = first candidate by (experience desc, availability desc, input
  position asc); the key is a total order so runs are reproducible
- Extension picks the highest-scoring eligible candidate; ties go to the
  candidate seen first in anchor order
- A build either returns exactly target_size members or nothing; the pool
  is read, never written
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..schema import Participant, Team
from .eligibility import EligibilityFilter
from .pool import ParticipantPool
from .scoring import ScoringWeights, DEFAULT_WEIGHTS, score_candidate, pairwise_team_score

logger = logging.getLogger(__name__)

MAX_COMMON_CASE_TYPES = 3


def anchor_order(pool: ParticipantPool, indices: Sequence[int]) -> List[int]:
    """Sort pool indices by experience desc, availability desc, then input position."""
    return sorted(
        indices,
        key=lambda i: (-pool[i].experience.level, -pool[i].availability.rank, i)
    )


def materialize_team(
    team_id: str,
    members: Sequence[Participant],
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> Team:
    """
    Build the Team record for a completed member list.

    Args:
        team_id: Id assigned by the id generator
        members: Members in the order they joined
        weights: Scoring weights for the pairwise compatibility score

    Returns:
        Team with derived statistics
    """
    size = len(members)

    case_counts = {}
    for member in members:
        for case_type in member.case_preferences:
            case_counts[case_type.value] = case_counts.get(case_type.value, 0) + 1
    common_cases = [c for c, n in case_counts.items() if n >= 2][:MAX_COMMON_CASE_TYPES]

    size_matches = sum(1 for m in members if m.preferred_team_size == size)

    return Team(
        id=team_id,
        members=list(members),
        team_size=size,
        compatibility_score=pairwise_team_score(members, weights),
        average_experience=float(np.mean([m.experience.level for m in members])),
        common_case_types=common_cases,
        preferred_team_size_match=100.0 * size_matches / size,
    )


class TeamBuilder:
    """
    Builds one team of an exact target size.

    Attributes:
        eligibility: Filter chain deciding who may join
        weights: Scoring weights for ranking eligible candidates
    """

    def __init__(self, eligibility: EligibilityFilter, weights: ScoringWeights = DEFAULT_WEIGHTS):
        self.eligibility = eligibility
        self.weights = weights

    def build(
        self,
        pool: ParticipantPool,
        candidates: Sequence[int],
        target_size: int
    ) -> Optional[List[int]]:
        """
        Try to build one team from the candidate indices.

        Args:
            pool: Pool the indices refer to (read only)
            candidates: Live pool indices to draw from
            target_size: Exact size of the team

        Returns:
            Member indices in joining order, or None if no full team is possible
        """
        ordered = anchor_order(pool, candidates)
        if len(ordered) < target_size:
            return None

        anchor = ordered[0]
        team_idx = [anchor]
        remaining = ordered[1:]
        logger.debug(
            f"Starting {target_size}-member team with anchor {pool[anchor].full_name} "
            f"(team pref: {pool[anchor].team_preference.value})"
        )

        while len(team_idx) < target_size and remaining:
            team = [pool[i] for i in team_idx]
            eligible = self.eligibility.eligible(team, [pool[i] for i in remaining], target_size)
            if not eligible:
                logger.debug(f"Discarding partial team of {len(team_idx)}: no eligible candidates")
                return None

            eligible_ids = {p.id for p in eligible}
            best_index = None
            best_score = -np.inf
            for i in remaining:
                if pool[i].id not in eligible_ids:
                    continue
                score = score_candidate(team, pool[i], self.weights)
                # strict > keeps the first-seen candidate on ties
                if score > best_score:
                    best_index, best_score = i, score

            team_idx.append(best_index)
            remaining.remove(best_index)
            logger.debug(f"Added {pool[best_index].full_name} (score {best_score:.1f})")

        if len(team_idx) != target_size:
            return None
        return team_idx
