"""
Cohort partitioning.

Undergraduate and postgraduate participants are matched in separate
cohorts; nobody crosses cohorts within a round.
"""

import logging
from typing import Callable, List, Sequence, Tuple, TypeVar

from ..schema import Participant

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition_cohorts(participants: Sequence[Participant]) -> Tuple[List[Participant], List[Participant]]:
    """
    Split participants into (undergraduate, postgraduate) cohorts.

    Args:
        participants: Participants in input order

    Returns:
        Tuple of (ug, pg) lists; disjoint, order preserved, union == input
    """
    ug, pg = partition_by(participants, lambda p: p.is_postgraduate)
    logger.debug(f"Cohorts: {len(ug)} UG, {len(pg)} PG")
    return ug, pg


def partition_by(items: Sequence[T], predicate: Callable[[T], bool]) -> Tuple[List[T], List[T]]:
    """Split items into (failing, passing) lists by predicate, preserving order."""
    rejected: List[T] = []
    accepted: List[T] = []
    for item in items:
        (accepted if predicate(item) else rejected).append(item)
    return rejected, accepted
