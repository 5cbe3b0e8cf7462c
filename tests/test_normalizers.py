import pandas as pd

from matchmaking.ingestion import create_synthetic_roster, parse_participants
from matchmaking.ingestion import normalizers
from matchmaking.schema import (
    Availability,
    CaseType,
    CoreStrength,
    Experience,
    PreferredRole,
    StudyYear,
    TeamPreference,
)


def test_current_year():
    assert normalizers.parse_current_year("MBA 1st year") is StudyYear.PG_FIRST_YEAR
    assert normalizers.parse_current_year("PG - second year") is StudyYear.PG_SECOND_YEAR
    assert normalizers.parse_current_year("3rd Year") is StudyYear.THIRD_YEAR
    assert normalizers.parse_current_year("Final year") is StudyYear.FINAL_YEAR
    assert normalizers.parse_current_year("") is StudyYear.FIRST_YEAR


def test_core_strengths_keep_comma_labels_whole():
    parsed = normalizers.parse_core_strengths(
        "Technical (Coding, App Dev, Automation), Storytelling; Market Research, Financial Modeling"
    )
    assert parsed == [CoreStrength.TECHNICAL, CoreStrength.STORYTELLING, CoreStrength.MARKET_RESEARCH]


def test_roles_and_cases_defaults():
    assert normalizers.parse_preferred_roles("") == [PreferredRole.FLEXIBLE]
    assert normalizers.parse_preferred_roles("Team Lead; Designer; Presenter") == [
        PreferredRole.TEAM_LEAD, PreferredRole.DESIGNER,
    ]
    assert normalizers.parse_case_preferences("something else") == [CaseType.CONSULTING]
    assert normalizers.parse_case_preferences("Finance, ESG") == [CaseType.FINANCE, CaseType.PUBLIC_POLICY]


def test_availability_and_experience():
    assert normalizers.parse_availability("Fully Available (10–15 hrs/week)") is Availability.FULLY
    assert normalizers.parse_availability("Lightly Available (1–4 hrs/week)") is Availability.LIGHTLY
    assert normalizers.parse_availability("Not available now, but interested later") is Availability.NOT_NOW
    assert normalizers.parse_availability("") is Availability.MODERATELY

    assert normalizers.parse_experience("Finalist/Winner in at least one") is Experience.FINALIST_WINNER
    assert normalizers.parse_experience("Participated in 3+") is Experience.PARTICIPATED_3_PLUS
    assert normalizers.parse_experience("Participated in 1–2") is Experience.PARTICIPATED_1_2
    assert normalizers.parse_experience("") is Experience.NONE


def test_team_size_and_preference():
    assert normalizers.parse_preferred_team_size("2") == 2
    assert normalizers.parse_preferred_team_size("Three members") == 3
    assert normalizers.parse_preferred_team_size("") == 4

    assert normalizers.parse_team_preference("Undergrads only") is TeamPreference.UNDERGRADS_ONLY
    assert normalizers.parse_team_preference("Postgrads only") is TeamPreference.POSTGRADS_ONLY
    assert normalizers.parse_team_preference("no preference") is TeamPreference.EITHER


def test_header_variants_are_recognized():
    df = pd.DataFrame([{
        "fullName": "Tara Bose",
        "email": "tara@example.edu",
        "college": "Christ University",
        "Course": "PG/MBA (1st Year)",
        "Preferred team size": "3",
        "Team Preference": "Postgrads only",
    }])
    participants, stats = parse_participants(df)

    assert stats.total_parsed == 1
    tara = participants[0]
    assert tara.id == "p-0001"
    assert tara.college_name == "Christ University"
    assert tara.is_postgraduate
    assert tara.preferred_team_size == 3
    assert tara.team_preference is TeamPreference.POSTGRADS_ONLY


def test_synthetic_roster_parses_cleanly():
    df = create_synthetic_roster(25, seed=1)
    participants, stats = parse_participants(df)

    assert len(df) == 25
    assert stats.total_parsed == 25
    assert stats.errors == []
    assert len({p.id for p in participants}) == 25
