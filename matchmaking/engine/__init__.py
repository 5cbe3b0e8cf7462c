"""
Team formation engine.

Pure, synchronous matching: cohort partitioning, eligibility filtering,
candidate scoring, greedy team building and the single-round and iterative
drivers on top of them.
"""

from .errors import MatchingError, InconsistentTeamError, PoolError
from .cohort import partition_cohorts
from .eligibility import ConstraintLevel, EligibilityFilter, availability_compatible
from .scoring import ScoringWeights, score_candidate, pairwise_team_score
from .pool import ParticipantPool
from .ids import CounterIdGenerator, UuidIdGenerator
from .team_builder import TeamBuilder, materialize_team
from .bucket import form_bucket
from .single_round import SingleRoundMatcher, match_participants
from .iterative import IterativeOrchestrator, run_iterative_matching, default_max_iterations

__all__ = [
    "MatchingError",
    "InconsistentTeamError",
    "PoolError",
    "partition_cohorts",
    "ConstraintLevel",
    "EligibilityFilter",
    "availability_compatible",
    "ScoringWeights",
    "score_candidate",
    "pairwise_team_score",
    "ParticipantPool",
    "CounterIdGenerator",
    "UuidIdGenerator",
    "TeamBuilder",
    "materialize_team",
    "form_bucket",
    "SingleRoundMatcher",
    "match_participants",
    "IterativeOrchestrator",
    "run_iterative_matching",
    "default_max_iterations",
]
