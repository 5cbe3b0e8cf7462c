"""
Single round of team matching.

Participants are split into UG/PG cohorts, then every (cohort, size) bucket
is formed independently for sizes 2, 3 and 4. Nobody is ever placed in a
team of a size they did not ask for and leftovers are returned as-is.
"""

import logging
from typing import Callable, List, Optional, Sequence

from ..schema import Participant, Team, MatchingResult, MatchingStatistics, TEAM_SIZES
from .bucket import form_bucket
from .cohort import partition_by
from .eligibility import ConstraintLevel, EligibilityFilter
from .ids import CounterIdGenerator
from .errors import PoolError
from .pool import ParticipantPool
from .scoring import ScoringWeights, DEFAULT_WEIGHTS
from .team_builder import TeamBuilder

logger = logging.getLogger(__name__)


class SingleRoundMatcher:
    """
    One full matching pass over a roster.

    Attributes:
        level: ConstraintLevel for availability checks
        weights: Scoring weights
        team_sizes: Bucket sizes, processed in this order
        next_team_id: Id generator for formed teams
    """

    def __init__(
        self,
        level: ConstraintLevel = ConstraintLevel.STRICT,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        team_sizes: Sequence[int] = TEAM_SIZES,
        next_team_id: Optional[Callable[[Optional[int]], str]] = None
    ):
        self.level = level
        self.weights = weights
        self.team_sizes = tuple(team_sizes)
        self.next_team_id = next_team_id or CounterIdGenerator()
        self.builder = TeamBuilder(EligibilityFilter(level), weights)

    def match(self, participants: Sequence[Participant]) -> MatchingResult:
        """
        Match a roster in one pass.

        Args:
            participants: Participants in input order

        Returns:
            MatchingResult with teams, unmatched participants (input order)
            and statistics
        """
        pool = ParticipantPool(participants)
        ug, pg = partition_by(range(len(pool.participants)), lambda i: pool[i].is_postgraduate)
        logger.info(f"Matching {len(pool.participants)} participants: {len(ug)} UG, {len(pg)} PG")

        teams: List[Team] = []
        for cohort_name, cohort in (("UG", ug), ("PG", pg)):
            for size in self.team_sizes:
                formed, leftover = form_bucket(pool, cohort, size, self.builder, self.next_team_id)
                teams.extend(formed)
                if formed or leftover:
                    logger.debug(
                        f"{cohort_name} size {size}: {len(formed)} teams, {len(leftover)} left over"
                    )

        if not pool.check_invariant():
            raise PoolError("Participant pool lost track of a participant")

        unmatched = pool.remaining()
        statistics = MatchingStatistics.from_teams(teams, len(pool.participants))
        logger.info(
            f"Round complete: {len(teams)} teams, {len(unmatched)} unmatched, "
            f"efficiency {statistics.matching_efficiency:.1f}%"
        )
        return MatchingResult(teams=teams, unmatched=unmatched, statistics=statistics)


def match_participants(
    participants: Sequence[Participant],
    level: ConstraintLevel = ConstraintLevel.STRICT,
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> MatchingResult:
    """Run one strict matching pass with default sizes and sequential ids."""
    return SingleRoundMatcher(level=level, weights=weights).match(participants)
