"""
Conversion of raw roster rows into Participant records.

Key Design Decisions:
- Each field is looked up under several header spellings used by past
  registration forms; the first non-empty one wins
- Rows without a name or email are skipped, as are repeated emails
  (case-insensitive); both are reported in ParseStats
- Participant ids are sequential (p-0001, ...) unless a generator is given,
  so the same roster always yields the same ids
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from ..schema import Participant
from . import normalizers

logger = logging.getLogger(__name__)

HEADER_VARIANTS: Dict[str, Tuple[str, ...]] = {
    "full_name": ("Full Name", "fullName", "name"),
    "email": ("Email ID", "email", "Email"),
    "whatsapp_number": ("WhatsApp Number", "whatsapp", "phone"),
    "college_name": ("College Name", "college", "College"),
    "current_year": ("Current Year of Study", "Course"),
    "core_strengths": ("Top 3 Core Strengths", "Your Top 3 Core Strengths"),
    "preferred_roles": ("Preferred Role(s)", "Preferred Role(s) in a Team"),
    "availability": (
        "Availability (next 2–4 weeks)",
        "Your Availability for case comps (next 2–4 weeks)",
    ),
    "experience": ("Previous Case Comp Experience", "Previous Case Competition Experience"),
    "case_preferences": (
        "Case Comp Preferences",
        "Which type(s) of case competitions are you most interested in?",
    ),
    "preferred_team_size": ("Preferred Team Size", "Preferred team size"),
    "team_preference": ("Who do you want on your team?", "Team Preference"),
}


@dataclass
class ParseStats:
    """Row accounting for one roster parse."""
    total_rows: int = 0
    total_parsed: int = 0
    skipped_rows: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "totalParsed": self.total_parsed,
            "skippedRows": self.skipped_rows,
            "errors": list(self.errors),
        }


def _field(row: Dict[str, str], name: str) -> str:
    for header in HEADER_VARIANTS[name]:
        value = str(row.get(header, "") or "").strip()
        if value:
            return value
    return ""


def _sequential_ids() -> Callable[[], str]:
    counter = {"n": 0}

    def next_id() -> str:
        counter["n"] += 1
        return f"p-{counter['n']:04d}"

    return next_id


def parse_row(row: Dict[str, str], participant_id: str) -> Participant:
    """
    Build a Participant from one raw row.

    Args:
        row: Mapping of header -> cell text
        participant_id: Id to assign

    Returns:
        Normalized Participant
    """
    return Participant(
        id=participant_id,
        full_name=_field(row, "full_name"),
        email=_field(row, "email"),
        whatsapp_number=_field(row, "whatsapp_number"),
        college_name=_field(row, "college_name"),
        current_year=normalizers.parse_current_year(_field(row, "current_year")),
        core_strengths=normalizers.parse_core_strengths(_field(row, "core_strengths")),
        preferred_roles=normalizers.parse_preferred_roles(_field(row, "preferred_roles")),
        availability=normalizers.parse_availability(_field(row, "availability")),
        experience=normalizers.parse_experience(_field(row, "experience")),
        case_preferences=normalizers.parse_case_preferences(_field(row, "case_preferences")),
        preferred_team_size=normalizers.parse_preferred_team_size(_field(row, "preferred_team_size")),
        team_preference=normalizers.parse_team_preference(_field(row, "team_preference")),
    )


def parse_participants(
    df: pd.DataFrame,
    id_generator: Optional[Callable[[], str]] = None
) -> Tuple[List[Participant], ParseStats]:
    """
    Normalize roster rows into Participant records.

    Args:
        df: Raw roster rows (as returned by the loaders)
        id_generator: Callable returning a fresh participant id per call

    Returns:
        Tuple of (participants in row order, ParseStats)
    """
    next_id = id_generator or _sequential_ids()
    stats = ParseStats(total_rows=len(df))
    participants: List[Participant] = []
    seen_emails = set()

    for row_number, row in enumerate(df.to_dict(orient="records"), start=1):
        name = _field(row, "full_name")
        email = _field(row, "email")

        if not name or not email:
            stats.errors.append(f"Row {row_number}: missing name or email")
            logger.warning(f"Skipping row {row_number}: missing name or email")
            continue
        if email.lower() in seen_emails:
            stats.errors.append(f"Row {row_number}: duplicate email {email}")
            logger.warning(f"Skipping duplicate email: {email}")
            continue

        try:
            participant = parse_row(row, next_id())
        except ValueError as e:
            stats.errors.append(f"Row {row_number}: {e}")
            logger.warning(f"Skipping row {row_number}: {e}")
            continue

        seen_emails.add(email.lower())
        participants.append(participant)
        logger.debug(f"Added participant: {participant.full_name} ({participant.current_year.value})")

    stats.total_parsed = len(participants)
    stats.skipped_rows = stats.total_rows - stats.total_parsed

    size_prefs: Dict[int, int] = {}
    for p in participants:
        size_prefs[p.preferred_team_size] = size_prefs.get(p.preferred_team_size, 0) + 1
    logger.info(
        f"Parsed {stats.total_parsed}/{stats.total_rows} rows "
        f"({stats.skipped_rows} skipped); team size preferences: {dict(sorted(size_prefs.items()))}"
    )
    return participants, stats

