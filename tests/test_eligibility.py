import pytest

from matchmaking.engine import (
    ConstraintLevel,
    EligibilityFilter,
    InconsistentTeamError,
    availability_compatible,
    match_participants,
)
from matchmaking.engine.eligibility import composition_compatible, team_preference_of
from matchmaking.schema import Availability, AvailabilityLevel, TeamPreference

HIGH = AvailabilityLevel.HIGH
MEDIUM = AvailabilityLevel.MEDIUM
LOW = AvailabilityLevel.LOW


def test_availability_matrix_only_rejects_high_low():
    assert availability_compatible(HIGH, HIGH)
    assert availability_compatible(HIGH, MEDIUM)
    assert availability_compatible(MEDIUM, LOW)
    assert availability_compatible(LOW, LOW)
    assert not availability_compatible(HIGH, LOW)
    assert not availability_compatible(LOW, HIGH)


def test_not_available_folds_into_low():
    assert Availability.NOT_NOW.level is LOW
    assert Availability.LIGHTLY.level is LOW
    assert Availability.MODERATELY.level is MEDIUM
    assert Availability.FULLY.level is HIGH


def test_size_filter_is_exact(make_participant):
    candidates = [make_participant("a", size=2), make_participant("b", size=3), make_participant("c", size=4)]
    eligible = EligibilityFilter().eligible([], candidates, 3)
    assert [c.id for c in eligible] == ["b"]


def test_empty_team_accepts_any_composition(make_participant):
    candidates = [
        make_participant("a", preference=TeamPreference.UNDERGRADS_ONLY),
        make_participant("b", preference=TeamPreference.EITHER),
        make_participant("c", year="PG/MBA (1st Year)", preference=TeamPreference.POSTGRADS_ONLY),
    ]
    eligible = EligibilityFilter().eligible([], candidates, 4)
    assert [c.id for c in eligible] == ["a", "b", "c"]


def test_undergrads_only_team(make_participant):
    team = [make_participant("anchor", preference=TeamPreference.UNDERGRADS_ONLY)]
    ug_only = make_participant("ug1", preference=TeamPreference.UNDERGRADS_ONLY)
    ug_either = make_participant("ug2", preference=TeamPreference.EITHER)
    ug_pg_pref = make_participant("ug3", preference=TeamPreference.POSTGRADS_ONLY)
    pg_either = make_participant("pg1", year="PG/MBA (2nd Year)", preference=TeamPreference.EITHER)

    assert composition_compatible(team, ug_only)
    assert composition_compatible(team, ug_either)
    assert not composition_compatible(team, ug_pg_pref)
    assert not composition_compatible(team, pg_either)


def test_postgrads_only_team_mirrors_undergrads(make_participant):
    team = [make_participant("anchor", year="PG/MBA (1st Year)", preference=TeamPreference.POSTGRADS_ONLY)]
    assert composition_compatible(team, make_participant("pg", year="PG/MBA (2nd Year)", preference=TeamPreference.EITHER))
    assert not composition_compatible(team, make_participant("ug", preference=TeamPreference.EITHER))


def test_either_team_only_accepts_either(make_participant):
    team = [make_participant("anchor", preference=TeamPreference.EITHER)]
    assert composition_compatible(team, make_participant("a", preference=TeamPreference.EITHER))
    assert not composition_compatible(team, make_participant("b", preference=TeamPreference.UNDERGRADS_ONLY))


def test_team_with_mixed_preferences_cannot_be_extended(make_participant):
    team = [
        make_participant("a", preference=TeamPreference.UNDERGRADS_ONLY),
        make_participant("b", preference=TeamPreference.EITHER),
    ]
    candidates = [
        make_participant("c", preference=TeamPreference.EITHER),
        make_participant("d", preference=TeamPreference.UNDERGRADS_ONLY),
    ]
    assert EligibilityFilter().eligible(team, candidates, 4) == []
    assert EligibilityFilter(ConstraintLevel.RELAXED).eligible(team, candidates, 4) == []


def test_team_preference_of_rejects_mixed_team(make_participant):
    team = [
        make_participant("a", preference=TeamPreference.UNDERGRADS_ONLY),
        make_participant("b", preference=TeamPreference.EITHER),
    ]
    with pytest.raises(InconsistentTeamError):
        team_preference_of(team)
    assert team_preference_of(team[:1]) is TeamPreference.UNDERGRADS_ONLY


def test_undergrads_only_anchor_with_either_partners_forms_no_team_of_three(make_participant):
    participants = [
        make_participant("a", size=3, preference=TeamPreference.UNDERGRADS_ONLY,
                         experience="Finalist/Winner in at least one"),
        make_participant("b", size=3, preference=TeamPreference.EITHER),
        make_participant("c", size=3, preference=TeamPreference.EITHER),
    ]
    result = match_participants(participants)

    assert result.teams == []
    assert [p.id for p in result.unmatched] == ["a", "b", "c"]


def test_strict_availability_needs_every_member(make_participant):
    team = [
        make_participant("high", availability=Availability.FULLY),
        make_participant("medium", availability=Availability.MODERATELY),
    ]
    low = make_participant("low", availability=Availability.LIGHTLY)

    assert EligibilityFilter(ConstraintLevel.STRICT).eligible(team, [low], 4) == []
    assert EligibilityFilter(ConstraintLevel.RELAXED).eligible(team, [low], 4) == [low]


def test_filter_does_not_modify_candidates(make_participant):
    candidates = [make_participant("a", size=2), make_participant("b", size=4)]
    before = list(candidates)
    EligibilityFilter().eligible([make_participant("t")], candidates, 4)
    assert candidates == before
