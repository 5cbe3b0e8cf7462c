"""
Schema module for team formation.

This module defines the participant record consumed by the engine and the
team/result structures it produces.
"""

from .participant import (
    Participant,
    Experience,
    Availability,
    AvailabilityLevel,
    StudyYear,
    TeamPreference,
    CoreStrength,
    PreferredRole,
    CaseType,
    TEAM_SIZES,
)
from .results import (
    Team,
    MatchingStatistics,
    MatchingResult,
    IterationRecord,
    IterativeMatchingResult,
    find_team,
)

__all__ = [
    "Participant",
    "Experience",
    "Availability",
    "AvailabilityLevel",
    "StudyYear",
    "TeamPreference",
    "CoreStrength",
    "PreferredRole",
    "CaseType",
    "TEAM_SIZES",
    "Team",
    "MatchingStatistics",
    "MatchingResult",
    "IterationRecord",
    "IterativeMatchingResult",
    "find_team",
]
