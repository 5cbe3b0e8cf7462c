"""
Exceptions raised by the matching engine.

These signal programming errors (broken invariants), not bad input. Bad
input is reported through the service envelope instead.
"""


class MatchingError(Exception):
    """Base class for matching engine errors."""


class InconsistentTeamError(MatchingError):
    """A partially built team holds members with different team preferences."""


class PoolError(MatchingError):
    """A participant was taken from the pool twice or never registered."""
