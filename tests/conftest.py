import pytest

from matchmaking.schema import Participant


@pytest.fixture
def make_participant():
    def _make(
        pid,
        size=4,
        year="Second Year",
        preference="Either UG or PG",
        availability="Fully Available (10–15 hrs/week)",
        experience="None",
        strengths=(),
        roles=("Flexible with any role",),
        cases=("Consulting",),
        name=None,
    ):
        return Participant(
            id=pid,
            full_name=name or f"Person {pid}",
            email=f"{pid}@example.edu",
            college_name="SRCC",
            current_year=year,
            core_strengths=list(strengths),
            preferred_roles=list(roles),
            availability=availability,
            experience=experience,
            case_preferences=list(cases),
            preferred_team_size=size,
            team_preference=preference,
        )

    return _make
