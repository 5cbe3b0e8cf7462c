import pytest

from matchmaking.schema import (
    Availability,
    AvailabilityLevel,
    CoreStrength,
    Experience,
    MatchingResult,
    StudyYear,
    find_team,
)
from matchmaking.engine import match_participants


def test_labels_are_coerced_to_enums(make_participant):
    p = make_participant("a", year="PG/MBA (2nd Year)", strengths=("Storytelling",),
                         experience="Participated in 3+")

    assert p.current_year is StudyYear.PG_SECOND_YEAR
    assert p.is_postgraduate
    assert p.core_strengths == (CoreStrength.STORYTELLING,)
    assert p.experience.level == 2
    assert p.availability is Availability.FULLY
    assert p.availability_level is AvailabilityLevel.HIGH


def test_invalid_participants(make_participant):
    with pytest.raises(ValueError):
        make_participant("a", size=5)
    with pytest.raises(ValueError):
        make_participant("")
    with pytest.raises(ValueError):
        make_participant("a", roles=("Designer", "Presenter", "Researcher"))
    with pytest.raises(ValueError):
        make_participant("a", cases=("Finance", "Finance"))
    with pytest.raises(ValueError):
        make_participant("a", experience="Grandmaster")


def test_ordered_codes():
    assert [e.level for e in Experience] == [0, 1, 2, 3]
    assert [a.rank for a in Availability] == [3, 2, 1, 0]


def test_participant_dict_uses_labels(make_participant):
    p = make_participant("a", cases=("Marketing", "Finance"))
    data = p.to_dict()

    assert data["casePreferences"] == ["Marketing", "Finance"]
    assert data["teamPreference"] == "Either UG or PG"
    assert data["preferredTeamSize"] == 4


def test_result_from_dict_and_find_team(make_participant):
    participants = [make_participant(f"p{i}", size=2) for i in range(3)]
    result = MatchingResult.from_dict(match_participants(participants).to_dict())

    assert result.statistics.team_size_distribution == {2: 1}
    assert find_team(result, "p1").id == "team-1"
    assert find_team(result, "p2") is None
    assert "Teams formed: 1" in result.summary()
