"""
Participant schema for team formation.

Defines the categorical choices collected by the registration form and the
normalized Participant record consumed by the matching engine.

Key Design Decisions:
- Enum values are the human-readable labels used in roster files
- Ordered choices (experience, availability) expose numeric codes
- Participants are frozen: the engine never edits a record in place
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class Experience(Enum):
    """Previous case competition experience (ordered)."""
    NONE = "None"
    PARTICIPATED_1_2 = "Participated in 1–2"
    PARTICIPATED_3_PLUS = "Participated in 3+"
    FINALIST_WINNER = "Finalist/Winner in at least one"

    @property
    def level(self) -> int:
        """Numeric code 0-3."""
        return _EXPERIENCE_LEVELS[self]


_EXPERIENCE_LEVELS = {
    Experience.NONE: 0,
    Experience.PARTICIPATED_1_2: 1,
    Experience.PARTICIPATED_3_PLUS: 2,
    Experience.FINALIST_WINNER: 3,
}


class AvailabilityLevel(Enum):
    """Collapsed availability level used for compatibility checks."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Availability(Enum):
    """Self-reported availability band for the next 2-4 weeks (ordered)."""
    FULLY = "Fully Available (10–15 hrs/week)"
    MODERATELY = "Moderately Available (5–10 hrs/week)"
    LIGHTLY = "Lightly Available (1–4 hrs/week)"
    NOT_NOW = "Not available now, but interested later"

    @property
    def rank(self) -> int:
        """Band order, 3 (fully) down to 0 (not available now)."""
        return _AVAILABILITY_RANKS[self]

    @property
    def level(self) -> AvailabilityLevel:
        """Fold the four bands into High/Medium/Low."""
        if self is Availability.FULLY:
            return AvailabilityLevel.HIGH
        if self is Availability.MODERATELY:
            return AvailabilityLevel.MEDIUM
        return AvailabilityLevel.LOW


_AVAILABILITY_RANKS = {
    Availability.FULLY: 3,
    Availability.MODERATELY: 2,
    Availability.LIGHTLY: 1,
    Availability.NOT_NOW: 0,
}


class StudyYear(Enum):
    """Current year of study."""
    FIRST_YEAR = "First Year"
    SECOND_YEAR = "Second Year"
    THIRD_YEAR = "Third Year"
    FINAL_YEAR = "Final Year"
    PG_FIRST_YEAR = "PG/MBA (1st Year)"
    PG_SECOND_YEAR = "PG/MBA (2nd Year)"

    @property
    def is_postgraduate(self) -> bool:
        return "PG" in self.value or "MBA" in self.value


class TeamPreference(Enum):
    """Who the participant wants on their team."""
    UNDERGRADS_ONLY = "Undergrads only"
    POSTGRADS_ONLY = "Postgrads only"
    EITHER = "Either UG or PG"


class CoreStrength(Enum):
    """Core strength categories (participants pick up to 3)."""
    STRATEGY = "Strategy & Structuring"
    DATA_ANALYSIS = "Data Analysis & Research"
    FINANCIAL_MODELING = "Financial Modeling"
    MARKET_RESEARCH = "Market Research"
    PRESENTATION_DESIGN = "Presentation Design (PPT/Canva)"
    PUBLIC_SPEAKING = "Public Speaking & Pitching"
    COORDINATION = "Time Management & Coordination"
    IDEATION = "Innovation & Ideation"
    PRODUCT_THINKING = "UI/UX or Product Thinking"
    STORYTELLING = "Storytelling"
    TECHNICAL = "Technical (Coding, App Dev, Automation)"


class PreferredRole(Enum):
    """Preferred team roles (participants pick up to 2)."""
    TEAM_LEAD = "Team Lead"
    RESEARCHER = "Researcher"
    DATA_ANALYST = "Data Analyst"
    DESIGNER = "Designer"
    PRESENTER = "Presenter"
    COORDINATOR = "Coordinator"
    FLEXIBLE = "Flexible with any role"


class CaseType(Enum):
    """Case competition categories (participants pick up to 3)."""
    CONSULTING = "Consulting"
    PRODUCT_TECH = "Product/Tech"
    MARKETING = "Marketing"
    SOCIAL_IMPACT = "Social Impact"
    OPERATIONS = "Operations/Supply Chain"
    FINANCE = "Finance"
    PUBLIC_POLICY = "Public Policy/ESG"


TEAM_SIZES = (2, 3, 4)

MAX_CORE_STRENGTHS = 3
MAX_PREFERRED_ROLES = 2
MAX_CASE_PREFERENCES = 3


def _coerce_choices(values, enum_cls, attr: str, limit: int) -> Tuple[Enum, ...]:
    """Convert a list of labels/enums to a tuple of distinct enum members."""
    items = tuple(v if isinstance(v, enum_cls) else enum_cls(v) for v in values)
    if len(set(items)) != len(items):
        raise ValueError(f"{attr} must not contain duplicates, got {[i.value for i in items]}")
    if len(items) > limit:
        raise ValueError(f"{attr} allows at most {limit} values, got {len(items)}")
    return items


@dataclass(frozen=True)
class Participant:
    """
    One normalized registration record.

    Attributes:
        id: Unique participant identifier
        full_name: Display name
        email: Contact email (unique within a roster)
        college_name: College or university
        current_year: Year of study, decides the UG/PG cohort
        core_strengths: Up to 3 distinct skills
        preferred_roles: Up to 2 distinct roles
        availability: Availability band
        experience: Case competition experience
        case_preferences: Up to 3 distinct case interests
        preferred_team_size: 2, 3 or 4
        team_preference: Desired team composition
        whatsapp_number: Optional phone number
    """
    id: str
    full_name: str
    email: str
    college_name: str
    current_year: StudyYear
    core_strengths: Tuple[CoreStrength, ...]
    preferred_roles: Tuple[PreferredRole, ...]
    availability: Availability
    experience: Experience
    case_preferences: Tuple[CaseType, ...]
    preferred_team_size: int
    team_preference: TeamPreference = TeamPreference.EITHER
    whatsapp_number: str = ""

    def __post_init__(self):
        """Coerce string labels to enums and validate bounds."""
        # frozen dataclass: assign through object.__setattr__
        set_ = object.__setattr__
        if isinstance(self.current_year, str):
            set_(self, "current_year", StudyYear(self.current_year))
        if isinstance(self.availability, str):
            set_(self, "availability", Availability(self.availability))
        if isinstance(self.experience, str):
            set_(self, "experience", Experience(self.experience))
        if isinstance(self.team_preference, str):
            set_(self, "team_preference", TeamPreference(self.team_preference))

        set_(self, "core_strengths", _coerce_choices(
            self.core_strengths, CoreStrength, "core_strengths", MAX_CORE_STRENGTHS))
        set_(self, "preferred_roles", _coerce_choices(
            self.preferred_roles, PreferredRole, "preferred_roles", MAX_PREFERRED_ROLES))
        set_(self, "case_preferences", _coerce_choices(
            self.case_preferences, CaseType, "case_preferences", MAX_CASE_PREFERENCES))

        if self.preferred_team_size not in TEAM_SIZES:
            raise ValueError(
                f"preferred_team_size must be one of {TEAM_SIZES}, got {self.preferred_team_size}"
            )
        if not self.id:
            raise ValueError("id must be a non-empty string")

    @property
    def is_postgraduate(self) -> bool:
        return self.current_year.is_postgraduate

    @property
    def availability_level(self) -> AvailabilityLevel:
        return self.availability.level

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with label values and camelCase keys."""
        return {
            "id": self.id,
            "fullName": self.full_name,
            "email": self.email,
            "whatsappNumber": self.whatsapp_number,
            "collegeName": self.college_name,
            "currentYear": self.current_year.value,
            "coreStrengths": [s.value for s in self.core_strengths],
            "preferredRoles": [r.value for r in self.preferred_roles],
            "availability": self.availability.value,
            "experience": self.experience.value,
            "casePreferences": [c.value for c in self.case_preferences],
            "preferredTeamSize": self.preferred_team_size,
            "teamPreference": self.team_preference.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Create from a dictionary produced by to_dict()."""
        return cls(
            id=data["id"],
            full_name=data.get("fullName", ""),
            email=data.get("email", ""),
            college_name=data.get("collegeName", ""),
            current_year=data["currentYear"],
            core_strengths=data.get("coreStrengths", []),
            preferred_roles=data.get("preferredRoles", []),
            availability=data["availability"],
            experience=data["experience"],
            case_preferences=data.get("casePreferences", []),
            preferred_team_size=int(data["preferredTeamSize"]),
            team_preference=data.get("teamPreference", TeamPreference.EITHER.value),
            whatsapp_number=data.get("whatsappNumber", ""),
        )
