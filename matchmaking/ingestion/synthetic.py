"""
Synthetic rosters for demonstrations and smoke tests.

Rows use the same headers and free-text style as real registration
exports, so they exercise the normalizers as well as the engine.
"""

import logging

import numpy as np
import pandas as pd

from ..schema import Availability, CaseType, CoreStrength, Experience, PreferredRole, StudyYear

logger = logging.getLogger(__name__)

FIRST_NAMES = ["Aarav", "Diya", "Kabir", "Meera", "Rohan", "Sara", "Vikram", "Ananya",
               "Ishaan", "Naina", "Arjun", "Tara", "Dev", "Riya", "Karan", "Zoya"]
LAST_NAMES = ["Sharma", "Iyer", "Khan", "Patel", "Das", "Mehta", "Rao", "Singh", "Nair", "Bose"]
COLLEGES = ["IIM Ahmedabad", "SRCC", "IIT Delhi", "NMIMS", "St. Xavier's", "Christ University"]
TEAM_PREFERENCE_TEXT = ["Undergrads only", "Postgrads only", "Either UG or PG"]


def create_synthetic_roster(n_participants: int = 40, seed: int = 42) -> pd.DataFrame:
    """
    Create a synthetic registration roster.

    Args:
        n_participants: Number of rows
        seed: Random seed for reproducibility

    Returns:
        DataFrame with roster-file headers and text values
    """
    rng = np.random.RandomState(seed)

    strengths = [s.value for s in CoreStrength]
    roles = [r.value for r in PreferredRole]
    cases = [c.value for c in CaseType]

    rows = []
    for i in range(n_participants):
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
        rows.append({
            "Full Name": name,
            "Email ID": f"participant{i + 1}@example.edu",
            "College Name": rng.choice(COLLEGES),
            "Current Year of Study": rng.choice([y.value for y in StudyYear], p=[0.2, 0.2, 0.2, 0.15, 0.15, 0.1]),
            "Top 3 Core Strengths": "; ".join(rng.choice(strengths, size=rng.randint(1, 4), replace=False)),
            "Preferred Role(s)": "; ".join(rng.choice(roles, size=rng.randint(1, 3), replace=False)),
            "Availability (next 2–4 weeks)": rng.choice([a.value for a in Availability], p=[0.35, 0.4, 0.2, 0.05]),
            "Previous Case Comp Experience": rng.choice([e.value for e in Experience]),
            "Case Comp Preferences": "; ".join(rng.choice(cases, size=rng.randint(1, 4), replace=False)),
            "Preferred Team Size": str(rng.choice([2, 3, 4], p=[0.2, 0.3, 0.5])),
            "Who do you want on your team?": rng.choice(TEAM_PREFERENCE_TEXT, p=[0.2, 0.1, 0.7]),
        })

    df = pd.DataFrame(rows)
    logger.info(f"Created synthetic roster: {n_participants} participants")
    return df
