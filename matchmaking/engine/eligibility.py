"""
Eligibility filtering for team extension.

A candidate may join a partially built team only if it passes, in order:
1. Team-size preference: exact match with the target size
2. Team-composition preference: consistent with the team's preference
3. Availability: compatible with the team per the constraint level

Key Design Decisions:
- One filter chain for every relaxation level; ConstraintLevel only changes
  the availability predicate
- A team whose members hold different team preferences is a broken
  invariant: the filter logs it as an error and admits nobody, so the
  build fails instead of silently resolving the conflict
- Filters are pure: inputs are never modified
"""

import logging
from enum import Enum
from typing import List, Sequence

from ..schema import Participant, AvailabilityLevel, TeamPreference
from .errors import InconsistentTeamError

logger = logging.getLogger(__name__)


class ConstraintLevel(Enum):
    """How strictly availability is enforced when extending a team."""
    STRICT = "strict"    # compatible with every member
    RELAXED = "relaxed"  # compatible with at least one member


# High and Low are the only incompatible pair.
_INCOMPATIBLE_LEVELS = frozenset({
    (AvailabilityLevel.HIGH, AvailabilityLevel.LOW),
    (AvailabilityLevel.LOW, AvailabilityLevel.HIGH),
})


def availability_compatible(a: AvailabilityLevel, b: AvailabilityLevel) -> bool:
    """Check two availability levels against the compatibility matrix."""
    return (a, b) not in _INCOMPATIBLE_LEVELS


def has_uniform_preference(team: Sequence[Participant]) -> bool:
    """True when every member holds the same team preference."""
    return len({m.team_preference for m in team}) <= 1


def team_preference_of(team: Sequence[Participant]) -> TeamPreference:
    """
    Return the single team preference shared by all members.

    Args:
        team: Non-empty list of team members

    Returns:
        The uniform TeamPreference

    Raises:
        InconsistentTeamError: If members hold different preferences
    """
    preferences = {m.team_preference for m in team}
    if len(preferences) != 1:
        raise InconsistentTeamError(
            f"Team members have mixed team preferences: "
            f"{sorted(p.value for p in preferences)}"
        )
    return next(iter(preferences))


def composition_compatible(team: Sequence[Participant], candidate: Participant) -> bool:
    """
    Check whether a candidate fits the team's composition preference.

    An empty team accepts anyone. For "Undergrads only"/"Postgrads only" the
    candidate must belong to that cohort, accept that composition (or
    Either), and the team must not already hold someone from the other
    cohort. Cohort partitioning already guarantees the last condition; it is
    checked here so the filter is correct on its own.
    """
    if not team:
        return True

    preference = team_preference_of(team)

    if preference is TeamPreference.UNDERGRADS_ONLY:
        return (
            not candidate.is_postgraduate
            and candidate.team_preference in (TeamPreference.UNDERGRADS_ONLY, TeamPreference.EITHER)
            and not any(m.is_postgraduate for m in team)
        )

    if preference is TeamPreference.POSTGRADS_ONLY:
        return (
            candidate.is_postgraduate
            and candidate.team_preference in (TeamPreference.POSTGRADS_ONLY, TeamPreference.EITHER)
            and all(m.is_postgraduate for m in team)
        )

    return candidate.team_preference is TeamPreference.EITHER


def availability_fits(
    team: Sequence[Participant],
    candidate: Participant,
    level: ConstraintLevel = ConstraintLevel.STRICT
) -> bool:
    """Check candidate availability against every (strict) or any (relaxed) member."""
    if not team:
        return True
    checks = (availability_compatible(candidate.availability_level, m.availability_level) for m in team)
    if level is ConstraintLevel.STRICT:
        return all(checks)
    return any(checks)


class EligibilityFilter:
    """
    Filter chain deciding which candidates may extend a team.

    Attributes:
        level: ConstraintLevel applied to the availability stage
    """

    def __init__(self, level: ConstraintLevel = ConstraintLevel.STRICT):
        self.level = level

    def eligible(
        self,
        team: Sequence[Participant],
        candidates: Sequence[Participant],
        target_size: int
    ) -> List[Participant]:
        """
        Return the candidates eligible to join the team, in input order.

        Args:
            team: Current (possibly empty) team members
            candidates: Candidate pool, not modified
            target_size: Size of the team being built

        Returns:
            Eligible candidates; empty if any stage leaves none
        """
        by_size = [c for c in candidates if c.preferred_team_size == target_size]
        if not by_size:
            logger.debug(f"No candidates prefer team size {target_size}")
            return []

        if not has_uniform_preference(team):
            logger.error(
                f"Team has inconsistent team preferences "
                f"{sorted({m.team_preference.value for m in team})}; it cannot be extended"
            )
            return []

        by_composition = [c for c in by_size if composition_compatible(team, c)]
        if not by_composition:
            logger.debug("No candidates with compatible team preferences")
            return []

        by_availability = [c for c in by_composition if availability_fits(team, c, self.level)]
        if not by_availability:
            logger.debug(f"No candidates with compatible availability ({self.level.value})")
        return by_availability
