"""
Value normalization for roster columns.

Registration forms are filled in by hand, so every column is matched by
keywords and aliases rather than exact labels. Each parser always returns
a valid value; unrecognized input falls back to a documented default.
"""

import re
from typing import Dict, List

from ..schema import (
    Availability,
    CaseType,
    CoreStrength,
    Experience,
    PreferredRole,
    StudyYear,
    TeamPreference,
)

_LIST_SEPARATORS = re.compile(r"[;,\n]")

CORE_STRENGTH_ALIASES: Dict[str, CoreStrength] = {
    "strategy & structuring": CoreStrength.STRATEGY,
    "strategy and structuring": CoreStrength.STRATEGY,
    "data analysis & research": CoreStrength.DATA_ANALYSIS,
    "data analysis and research": CoreStrength.DATA_ANALYSIS,
    "financial modeling": CoreStrength.FINANCIAL_MODELING,
    "market research": CoreStrength.MARKET_RESEARCH,
    "presentation design (ppt/canva)": CoreStrength.PRESENTATION_DESIGN,
    "presentation design": CoreStrength.PRESENTATION_DESIGN,
    "public speaking & pitching": CoreStrength.PUBLIC_SPEAKING,
    "public speaking and pitching": CoreStrength.PUBLIC_SPEAKING,
    "time management & coordination": CoreStrength.COORDINATION,
    "time management and coordination": CoreStrength.COORDINATION,
    "innovation & ideation": CoreStrength.IDEATION,
    "innovation and ideation": CoreStrength.IDEATION,
    "ui/ux or product thinking": CoreStrength.PRODUCT_THINKING,
    "ui/ux": CoreStrength.PRODUCT_THINKING,
    "product thinking": CoreStrength.PRODUCT_THINKING,
    "storytelling": CoreStrength.STORYTELLING,
    "technical (coding, app dev, automation)": CoreStrength.TECHNICAL,
    "technical": CoreStrength.TECHNICAL,
    "coding": CoreStrength.TECHNICAL,
}

ROLE_ALIASES: Dict[str, PreferredRole] = {
    "team lead": PreferredRole.TEAM_LEAD,
    "team leader": PreferredRole.TEAM_LEAD,
    "leader": PreferredRole.TEAM_LEAD,
    "researcher": PreferredRole.RESEARCHER,
    "data analyst": PreferredRole.DATA_ANALYST,
    "analyst": PreferredRole.DATA_ANALYST,
    "designer": PreferredRole.DESIGNER,
    "presenter": PreferredRole.PRESENTER,
    "coordinator": PreferredRole.COORDINATOR,
    "flexible with any role": PreferredRole.FLEXIBLE,
    "flexible": PreferredRole.FLEXIBLE,
    "any role": PreferredRole.FLEXIBLE,
}

CASE_TYPE_ALIASES: Dict[str, CaseType] = {
    "consulting": CaseType.CONSULTING,
    "product/tech": CaseType.PRODUCT_TECH,
    "product": CaseType.PRODUCT_TECH,
    "tech": CaseType.PRODUCT_TECH,
    "technology": CaseType.PRODUCT_TECH,
    "marketing": CaseType.MARKETING,
    "social impact": CaseType.SOCIAL_IMPACT,
    "social": CaseType.SOCIAL_IMPACT,
    "impact": CaseType.SOCIAL_IMPACT,
    "operations/supply chain": CaseType.OPERATIONS,
    "operations": CaseType.OPERATIONS,
    "supply chain": CaseType.OPERATIONS,
    "finance": CaseType.FINANCE,
    "financial": CaseType.FINANCE,
    "public policy/esg": CaseType.PUBLIC_POLICY,
    "public policy": CaseType.PUBLIC_POLICY,
    "esg": CaseType.PUBLIC_POLICY,
    "policy": CaseType.PUBLIC_POLICY,
}


def _has_any(text: str, keywords) -> bool:
    return any(k in text for k in keywords)


def _parse_list(value: str, aliases: Dict, limit: int) -> List:
    """Split a multi-select cell and map each item through an alias table."""
    text = (value or "").lower()
    found = []
    # labels that contain a comma would be cut apart by the split below
    for alias, choice in aliases.items():
        if "," in alias and alias in text:
            text = text.replace(alias, ";")
            if choice not in found:
                found.append(choice)
    for item in _LIST_SEPARATORS.split(text):
        choice = aliases.get(item.strip().lower())
        if choice is not None and choice not in found:
            found.append(choice)
    return found[:limit]


def parse_current_year(value: str) -> StudyYear:
    """
    Map a free-text year of study to a StudyYear.

    Anything mentioning PG, MBA, master(s) or postgraduate is PG (1st year
    if it also mentions 1st/1/first, otherwise 2nd). Default: First Year.
    """
    text = (value or "").strip().lower()
    if not text:
        return StudyYear.FIRST_YEAR

    is_first = _has_any(text, ("1st", "1", "first"))
    if _has_any(text, ("pg", "mba", "master", "postgraduate", "post graduate")):
        return StudyYear.PG_FIRST_YEAR if is_first else StudyYear.PG_SECOND_YEAR

    if is_first:
        return StudyYear.FIRST_YEAR
    if _has_any(text, ("2nd", "2", "second")):
        return StudyYear.SECOND_YEAR
    if _has_any(text, ("3rd", "3", "third")):
        return StudyYear.THIRD_YEAR
    if _has_any(text, ("4th", "4", "fourth", "final")):
        return StudyYear.FINAL_YEAR
    return StudyYear.FIRST_YEAR


def parse_core_strengths(value: str) -> List[CoreStrength]:
    """Up to 3 recognized core strengths, in the order given."""
    return _parse_list(value, CORE_STRENGTH_ALIASES, 3)


def parse_preferred_roles(value: str) -> List[PreferredRole]:
    """Up to 2 recognized roles; defaults to flexible."""
    roles = _parse_list(value, ROLE_ALIASES, 2)
    return roles or [PreferredRole.FLEXIBLE]


def parse_case_preferences(value: str) -> List[CaseType]:
    """Up to 3 recognized case types; defaults to Consulting."""
    cases = _parse_list(value, CASE_TYPE_ALIASES, 3)
    return cases or [CaseType.CONSULTING]


def parse_availability(value: str) -> Availability:
    """Keyword match on the availability band; default Moderately."""
    text = (value or "").strip().lower()
    if _has_any(text, ("fully available", "10–15", "10-15", "15", "high", "very available")):
        return Availability.FULLY
    if _has_any(text, ("moderately available", "5–10", "5-10", "moderate")):
        return Availability.MODERATELY
    if _has_any(text, ("lightly available", "1–4", "1-4", "light", "limited")):
        return Availability.LIGHTLY
    if _has_any(text, ("not available", "interested later", "busy")):
        return Availability.NOT_NOW
    return Availability.MODERATELY


def parse_experience(value: str) -> Experience:
    """Keyword match on previous case competition experience; default None."""
    text = (value or "").strip().lower()
    if _has_any(text, ("finalist", "winner", "won", "first place")):
        return Experience.FINALIST_WINNER
    if _has_any(text, ("3+", "3 or more", "more than 3", "multiple", "many")):
        return Experience.PARTICIPATED_3_PLUS
    if _has_any(text, ("1–2", "1-2", "1 to 2", "couple", "few")):
        return Experience.PARTICIPATED_1_2
    return Experience.NONE


def parse_preferred_team_size(value: str) -> int:
    """Team size 2, 3 or 4 from digits or words; default 4."""
    text = (value or "").strip().lower()
    if text == "2" or _has_any(text, ("2 member", "two", "pair")):
        return 2
    if text == "3" or _has_any(text, ("3 member", "three", "trio")):
        return 3
    if text == "4" or _has_any(text, ("4 member", "four", "quad")):
        return 4
    return 4


def parse_team_preference(value: str) -> TeamPreference:
    """Team composition preference; default Either."""
    text = (value or "").strip().lower()
    if "only" in text:
        if "undergrad" in text:
            return TeamPreference.UNDERGRADS_ONLY
        if "postgrad" in text or "pg" in text:
            return TeamPreference.POSTGRADS_ONLY
    return TeamPreference.EITHER
