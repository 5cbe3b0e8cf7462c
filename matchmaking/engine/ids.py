"""
Team id generators.

The engine never invents ids itself; a generator is passed in so runs can
be reproduced exactly in tests and audits.
"""

import uuid
from typing import Optional


class CounterIdGenerator:
    """
    Sequential team ids: team-1, team-2, ...

    When an iteration index is given the id carries it as a suffix
    (team-3-iter2). The counter is shared across iterations, so ids stay
    unique for a whole run.
    """

    def __init__(self, prefix: str = "team", start: int = 1):
        self.prefix = prefix
        self._next = start

    def __call__(self, iteration: Optional[int] = None) -> str:
        number = self._next
        self._next += 1
        if iteration is None:
            return f"{self.prefix}-{number}"
        return f"{self.prefix}-{number}-iter{iteration}"


class UuidIdGenerator:
    """Random team ids, for callers that merge results from several runs."""

    def __init__(self, prefix: str = "team"):
        self.prefix = prefix

    def __call__(self, iteration: Optional[int] = None) -> str:
        token = uuid.uuid4().hex[:12]
        if iteration is None:
            return f"{self.prefix}-{token}"
        return f"{self.prefix}-{token}-iter{iteration}"
