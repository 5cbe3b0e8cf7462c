"""
Team formation for one (cohort, team size) bucket.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ..schema import Team
from .pool import ParticipantPool
from .team_builder import TeamBuilder, materialize_team

logger = logging.getLogger(__name__)


def form_bucket(
    pool: ParticipantPool,
    cohort: Sequence[int],
    target_size: int,
    builder: TeamBuilder,
    next_team_id: Callable[[Optional[int]], str]
) -> Tuple[List[Team], List[int]]:
    """
    Form as many full teams as possible from one bucket.

    Participants in the cohort who prefer target_size are repeatedly handed
    to the builder; each formed team's members are taken from the pool.
    Stops at the first failed build.

    Args:
        pool: Pool owned by the current round
        cohort: Pool indices of the cohort
        target_size: Team size of this bucket
        builder: TeamBuilder used for every attempt
        next_team_id: Id generator for formed teams

    Returns:
        Tuple of (teams formed, live indices of this bucket left over)
    """
    cohort_set = set(cohort)
    teams: List[Team] = []

    def bucket_indices() -> List[int]:
        return [
            i for i in pool.live_indices(lambda p: p.preferred_team_size == target_size)
            if i in cohort_set
        ]

    candidates = bucket_indices()
    while len(candidates) >= target_size:
        member_idx = builder.build(pool, candidates, target_size)
        if member_idx is None:
            break
        members = pool.take(member_idx)
        team = materialize_team(next_team_id(None), members, builder.weights)
        teams.append(team)
        logger.info(
            f"Formed {team.id}: {', '.join(m.full_name for m in members)} "
            f"(score {team.compatibility_score:.1f})"
        )
        candidates = bucket_indices()

    if candidates:
        logger.debug(f"{len(candidates)} participants left in size-{target_size} bucket")
    return teams, candidates
