"""
Case Competition Team Formation

This package groups registered case-competition participants into teams of
their preferred size, under hard eligibility rules and soft compatibility
preferences.

Key Design Decisions:
- Undergraduate and postgraduate cohorts are always matched separately
- Nobody is placed in a team of a size or composition they did not ask for
- Greedy anchor-and-extend construction, repeated over the unmatched pool
- Deterministic: the same roster in the same order gives the same teams
"""

__version__ = "1.0.0"
