"""
Participant pool for one matching round.

The pool is an arena of participants addressed by index plus a set of live
indices. Forming a team takes its members out of the live set; failed
builds never touch it. Every participant is therefore either placed or
still live, never both, and this is checkable at any time.
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence, Set

from ..schema import Participant
from .errors import PoolError

logger = logging.getLogger(__name__)


class ParticipantPool:
    """
    Index-addressable pool of participants.

    Attributes:
        participants: Arena in input order; index == input position
    """

    def __init__(self, participants: Sequence[Participant]):
        """
        Initialize the pool.

        Args:
            participants: Participants in input order

        Raises:
            ValueError: If two participants share an id
        """
        self.participants: List[Participant] = list(participants)
        ids = [p.id for p in self.participants]
        if len(set(ids)) != len(ids):
            raise ValueError("Participant ids must be unique within a roster")
        self._live: Set[int] = set(range(len(self.participants)))
        self._taken: Set[int] = set()

    def __len__(self) -> int:
        return len(self._live)

    def __getitem__(self, index: int) -> Participant:
        return self.participants[index]

    def live_indices(self, predicate: Optional[Callable[[Participant], bool]] = None) -> List[int]:
        """Live indices in input order, optionally filtered by a predicate."""
        return [
            i for i in sorted(self._live)
            if predicate is None or predicate(self.participants[i])
        ]

    def take(self, indices: Iterable[int]) -> List[Participant]:
        """
        Remove participants from the live set.

        Args:
            indices: Arena indices to take

        Returns:
            The taken participants, in the given order

        Raises:
            PoolError: If an index is not live
        """
        indices = list(indices)
        for i in indices:
            if i not in self._live:
                raise PoolError(f"Participant at index {i} is not available")
        for i in indices:
            self._live.discard(i)
            self._taken.add(i)
        return [self.participants[i] for i in indices]

    def remaining(self) -> List[Participant]:
        """Live participants in input order."""
        return [self.participants[i] for i in sorted(self._live)]

    def check_invariant(self) -> bool:
        """Every arena slot is in exactly one of live/taken."""
        return (
            not (self._live & self._taken)
            and len(self._live) + len(self._taken) == len(self.participants)
        )
