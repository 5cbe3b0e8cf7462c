"""
Result structures produced by the matching engine.

Teams, per-round results and the iterative audit trail. Every structure
serializes with to_dict() using the camelCase keys of the response envelope.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .participant import Participant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Team:
    """
    A fully formed team.

    Only ever created with exactly team_size members; partially built
    teams are discarded by the builder.

    Attributes:
        id: Team identifier from the injected id generator
        members: Ordered members, anchor first
        team_size: Target size the team was built for
        compatibility_score: Mean pairwise score, clamped to [0, 100]
        average_experience: Mean experience code (0-3)
        common_case_types: Up to 3 case interests shared by 2+ members
        preferred_team_size_match: % of members whose preferred size == team_size
    """
    id: str
    members: List[Participant]
    team_size: int
    compatibility_score: float
    average_experience: float
    common_case_types: List[str]
    preferred_team_size_match: float

    def __post_init__(self):
        if len(self.members) != self.team_size:
            raise ValueError(
                f"Team {self.id} has {len(self.members)} members, expected {self.team_size}"
            )

    @property
    def member_ids(self) -> List[str]:
        return [m.id for m in self.members]

    def with_id(self, team_id: str) -> "Team":
        """Return a copy of this team under a new id."""
        return replace(self, id=team_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "members": [m.to_dict() for m in self.members],
            "teamSize": self.team_size,
            "compatibilityScore": float(self.compatibility_score),
            "averageExperience": float(self.average_experience),
            "commonCaseTypes": list(self.common_case_types),
            "preferredTeamSizeMatch": float(self.preferred_team_size_match),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            members=[Participant.from_dict(m) for m in data["members"]],
            team_size=int(data["teamSize"]),
            compatibility_score=float(data["compatibilityScore"]),
            average_experience=float(data["averageExperience"]),
            common_case_types=list(data.get("commonCaseTypes", [])),
            preferred_team_size_match=float(data["preferredTeamSizeMatch"]),
        )


@dataclass
class MatchingStatistics:
    """Aggregate statistics for a set of formed teams."""
    total_participants: int
    teams_formed: int
    average_team_size: float
    matching_efficiency: float  # percent placed
    team_size_distribution: Dict[int, int] = field(default_factory=dict)
    case_type_distribution: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_teams(cls, teams: List[Team], total_participants: int) -> "MatchingStatistics":
        """Compute statistics over formed teams for a roster of given size."""
        placed = sum(len(t.members) for t in teams)
        size_distribution: Dict[int, int] = {}
        case_distribution: Dict[str, int] = {}
        for team in teams:
            size_distribution[team.team_size] = size_distribution.get(team.team_size, 0) + 1
            for case_type in team.common_case_types:
                case_distribution[case_type] = case_distribution.get(case_type, 0) + 1

        return cls(
            total_participants=total_participants,
            teams_formed=len(teams),
            average_team_size=placed / len(teams) if teams else 0.0,
            matching_efficiency=100.0 * placed / total_participants if total_participants else 0.0,
            team_size_distribution=size_distribution,
            case_type_distribution=case_distribution,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalParticipants": int(self.total_participants),
            "teamsFormed": int(self.teams_formed),
            "averageTeamSize": float(self.average_team_size),
            "matchingEfficiency": float(self.matching_efficiency),
            "teamSizeDistribution": {str(k): v for k, v in self.team_size_distribution.items()},
            "caseTypeDistribution": dict(self.case_type_distribution),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchingStatistics":
        """Create from dictionary."""
        return cls(
            total_participants=int(data["totalParticipants"]),
            teams_formed=int(data["teamsFormed"]),
            average_team_size=float(data["averageTeamSize"]),
            matching_efficiency=float(data["matchingEfficiency"]),
            team_size_distribution={int(k): v for k, v in data.get("teamSizeDistribution", {}).items()},
            case_type_distribution=dict(data.get("caseTypeDistribution", {})),
        )


@dataclass
class MatchingResult:
    """Teams, leftovers and statistics from one matching pass."""
    teams: List[Team]
    unmatched: List[Participant]
    statistics: MatchingStatistics

    @property
    def placed_count(self) -> int:
        return sum(len(t.members) for t in self.teams)

    def check_conservation(self, total: int) -> bool:
        """True when every participant is either placed or unmatched, never both."""
        placed_ids = [pid for t in self.teams for pid in t.member_ids]
        unmatched_ids = [p.id for p in self.unmatched]
        all_ids = placed_ids + unmatched_ids
        return len(all_ids) == total and len(set(all_ids)) == total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teams": [t.to_dict() for t in self.teams],
            "unmatched": [p.to_dict() for p in self.unmatched],
            "statistics": self.statistics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchingResult":
        """Create from dictionary (iteration history, if any, is not restored)."""
        return MatchingResult(
            teams=[Team.from_dict(t) for t in data["teams"]],
            unmatched=[Participant.from_dict(p) for p in data["unmatched"]],
            statistics=MatchingStatistics.from_dict(data["statistics"]),
        )

    def summary(self) -> str:
        """Generate text summary of the result."""
        stats = self.statistics
        lines = [
            "Matching Result",
            "=" * 50,
            f"  Participants: {stats.total_participants}",
            f"  Teams formed: {stats.teams_formed}",
            f"  Average team size: {stats.average_team_size:.2f}",
            f"  Matching efficiency: {stats.matching_efficiency:.1f}%",
            f"  Unmatched: {len(self.unmatched)}",
        ]
        if stats.team_size_distribution:
            lines.append("  Team sizes:")
            for size, count in sorted(stats.team_size_distribution.items()):
                lines.append(f"    {size}: {count}")
        return "\n".join(lines)


@dataclass(frozen=True)
class IterationRecord:
    """One entry of the iterative audit trail."""
    iteration: int
    participants_processed: int
    teams_formed: int
    participants_matched: int
    remaining_unmatched: int
    efficiency: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "iteration": self.iteration,
            "participantsProcessed": self.participants_processed,
            "teamsFormed": self.teams_formed,
            "participantsMatched": self.participants_matched,
            "remainingUnmatched": self.remaining_unmatched,
            "efficiency": float(self.efficiency),
        }


@dataclass
class IterativeMatchingResult(MatchingResult):
    """MatchingResult plus the per-round history of the iterative loop."""
    iterations: int = 0
    iteration_history: List[IterationRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["iterations"] = self.iterations
        result["iterationHistory"] = [h.to_dict() for h in self.iteration_history]
        return result

    def summary(self) -> str:
        lines = [super().summary(), f"  Iterations: {self.iterations}"]
        for record in self.iteration_history:
            lines.append(
                f"    Iteration {record.iteration}: {record.participants_matched}/"
                f"{record.participants_processed} matched ({record.efficiency:.1f}%)"
            )
        return "\n".join(lines)


def find_team(result: MatchingResult, participant_id: str) -> Optional[Team]:
    """Return the team containing the given participant, if any."""
    for team in result.teams:
        if participant_id in team.member_ids:
            return team
    return None
