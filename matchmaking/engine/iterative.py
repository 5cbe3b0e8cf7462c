"""
Iterative matching over the shrinking unmatched pool.

Each iteration re-runs a full single round on whoever is still unmatched.
Every round uses the same constraint level; constraints are never relaxed
between rounds.

Termination:
- fewer than min_participants_per_iteration participants remain
- max_iterations rounds have run
- max_consecutive_failures zero-progress rounds in a row with fewer than
  4 participants left
- everyone is matched
"""

import logging
from typing import Callable, List, Optional, Sequence

from ..schema import (
    Participant,
    Team,
    MatchingStatistics,
    IterationRecord,
    IterativeMatchingResult,
    TEAM_SIZES,
)
from .eligibility import ConstraintLevel
from .ids import CounterIdGenerator
from .scoring import ScoringWeights, DEFAULT_WEIGHTS
from .single_round import SingleRoundMatcher

logger = logging.getLogger(__name__)

DEFAULT_MIN_ITERATIONS = 10
DEFAULT_MAX_CONSECUTIVE_FAILURES = 8
STALL_THRESHOLD = 4


def default_max_iterations(n_participants: int, ceiling: Optional[int] = None) -> int:
    """max(10, n), optionally capped by a hard ceiling."""
    value = max(DEFAULT_MIN_ITERATIONS, n_participants)
    if ceiling is not None:
        value = min(value, ceiling)
    return value


class IterativeOrchestrator:
    """
    Runs single rounds until the unmatched pool stops shrinking.

    Attributes:
        max_iterations: Round limit; None derives it from the roster size
        min_participants_per_iteration: Stop when fewer remain
        max_consecutive_failures: Zero-progress rounds tolerated near the end
        level: ConstraintLevel used in every round
        weights: Scoring weights
        next_team_id: Id generator; called with the iteration index
    """

    def __init__(
        self,
        max_iterations: Optional[int] = None,
        min_participants_per_iteration: int = 2,
        max_consecutive_failures: int = DEFAULT_MAX_CONSECUTIVE_FAILURES,
        level: ConstraintLevel = ConstraintLevel.STRICT,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        team_sizes: Sequence[int] = TEAM_SIZES,
        next_team_id: Optional[Callable[[Optional[int]], str]] = None,
        max_iterations_ceiling: Optional[int] = None
    ):
        if min_participants_per_iteration < 2:
            raise ValueError(
                f"min_participants_per_iteration must be >= 2, got {min_participants_per_iteration}"
            )
        if max_iterations is not None and max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")

        self.max_iterations = max_iterations
        self.min_participants_per_iteration = min_participants_per_iteration
        self.max_consecutive_failures = max_consecutive_failures
        self.level = level
        self.weights = weights
        self.team_sizes = tuple(team_sizes)
        self.next_team_id = next_team_id or CounterIdGenerator()
        self.max_iterations_ceiling = max_iterations_ceiling

    def run(self, participants: Sequence[Participant]) -> IterativeMatchingResult:
        """
        Match a roster over as many rounds as useful.

        Args:
            participants: Participants in input order

        Returns:
            IterativeMatchingResult with all teams and the iteration history
        """
        max_iterations = self.max_iterations or default_max_iterations(
            len(participants), self.max_iterations_ceiling
        )

        logger.info("=" * 60)
        logger.info("ITERATIVE MATCHING")
        logger.info("=" * 60)
        logger.info(f"Total participants: {len(participants)}")
        logger.info(f"Max iterations: {max_iterations}")
        logger.info(f"Min participants per iteration: {self.min_participants_per_iteration}")

        remaining: List[Participant] = list(participants)
        all_teams: List[Team] = []
        history: List[IterationRecord] = []
        iteration = 0
        consecutive_failures = 0

        while len(remaining) >= self.min_participants_per_iteration and iteration < max_iterations:
            iteration += 1
            processed = len(remaining)
            logger.debug(f"--- Iteration {iteration}: {processed} unmatched participants ---")

            round_matcher = SingleRoundMatcher(
                level=self.level,
                weights=self.weights,
                team_sizes=self.team_sizes,
                next_team_id=CounterIdGenerator(prefix=f"round{iteration}"),
            )
            round_result = round_matcher.match(remaining)

            new_teams = [t.with_id(self.next_team_id(iteration)) for t in round_result.teams]
            all_teams.extend(new_teams)
            matched = sum(len(t.members) for t in new_teams)
            remaining = round_result.unmatched

            record = IterationRecord(
                iteration=iteration,
                participants_processed=processed,
                teams_formed=len(new_teams),
                participants_matched=matched,
                remaining_unmatched=len(remaining),
                efficiency=100.0 * matched / processed if processed else 0.0,
            )
            history.append(record)
            logger.info(
                f"Iteration {iteration}: {record.teams_formed} teams, {matched} matched, "
                f"{len(remaining)} remaining ({record.efficiency:.1f}%)"
            )

            if matched == 0:
                consecutive_failures += 1
                logger.info(
                    f"No progress in iteration {iteration} "
                    f"(consecutive failures: {consecutive_failures})"
                )
                if (consecutive_failures >= self.max_consecutive_failures
                        and len(remaining) < STALL_THRESHOLD):
                    logger.info(
                        f"Stopping after {consecutive_failures} consecutive failures "
                        f"with {len(remaining)} participants remaining"
                    )
                    break
            else:
                consecutive_failures = 0

            if not remaining:
                logger.info(f"All participants matched after {iteration} iterations")
                break

        statistics = MatchingStatistics.from_teams(all_teams, len(participants))

        logger.info("=" * 60)
        logger.info("ITERATIVE MATCHING COMPLETE")
        logger.info("=" * 60)
        logger.info(f"Total iterations: {iteration}")
        logger.info(f"Total teams formed: {len(all_teams)}")
        logger.info(f"Final matching efficiency: {statistics.matching_efficiency:.1f}%")
        logger.info(f"Remaining unmatched: {len(remaining)}")

        return IterativeMatchingResult(
            teams=all_teams,
            unmatched=remaining,
            statistics=statistics,
            iterations=iteration,
            iteration_history=history,
        )


def run_iterative_matching(
    participants: Sequence[Participant],
    max_iterations: Optional[int] = None,
    min_participants_per_iteration: int = 2
) -> IterativeMatchingResult:
    """Run iterative strict matching with default settings."""
    orchestrator = IterativeOrchestrator(
        max_iterations=max_iterations,
        min_participants_per_iteration=min_participants_per_iteration,
    )
    return orchestrator.run(participants)
