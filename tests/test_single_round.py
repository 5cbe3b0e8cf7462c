from matchmaking.engine import (
    ConstraintLevel,
    CounterIdGenerator,
    SingleRoundMatcher,
    match_participants,
    partition_cohorts,
)
from matchmaking.engine.cohort import partition_by

FULLY = "Fully Available (10–15 hrs/week)"
LIGHTLY = "Lightly Available (1–4 hrs/week)"


def test_partition_by_splits_on_predicate():
    assert partition_by(range(5), lambda i: i % 2 == 1) == ([0, 2, 4], [1, 3])
    assert partition_by([], lambda i: True) == ([], [])


def test_partition_cohorts_preserves_order(make_participant):
    participants = [
        make_participant("ug1"),
        make_participant("pg1", year="PG/MBA (1st Year)"),
        make_participant("ug2"),
        make_participant("pg2", year="PG/MBA (2nd Year)"),
    ]
    ug, pg = partition_cohorts(participants)

    assert [p.id for p in ug] == ["ug1", "ug2"]
    assert [p.id for p in pg] == ["pg1", "pg2"]


def test_cohorts_are_matched_separately(make_participant):
    participants = (
        [make_participant(f"ug{i}", size=3) for i in range(3)]
        + [make_participant(f"pg{i}", size=3, year="PG/MBA (1st Year)") for i in range(3)]
    )
    result = match_participants(participants)

    assert len(result.teams) == 2
    assert result.unmatched == []
    assert [t.member_ids for t in result.teams] == [["ug0", "ug1", "ug2"], ["pg0", "pg1", "pg2"]]
    assert [t.id for t in result.teams] == ["team-1", "team-2"]
    assert result.statistics.matching_efficiency == 100.0


def test_high_and_low_availability_are_split(make_participant):
    participants = [
        make_participant("l0", size=2, availability=LIGHTLY),
        make_participant("f1", size=2, availability=FULLY),
        make_participant("l2", size=2, availability=LIGHTLY),
        make_participant("f3", size=2, availability=FULLY),
    ]
    result = match_participants(participants)

    assert [t.member_ids for t in result.teams] == [["f1", "f3"], ["l0", "l2"]]


def test_nobody_is_placed_in_another_size(make_participant):
    participants = [
        make_participant("a", size=2),
        make_participant("b", size=3),
        make_participant("c", size=4),
        make_participant("d", size=2),
    ]
    result = match_participants(participants)

    assert len(result.teams) == 1
    assert result.teams[0].member_ids == ["a", "d"]
    # leftovers keep input order
    assert [p.id for p in result.unmatched] == ["b", "c"]
    for team in result.teams:
        assert all(m.preferred_team_size == team.team_size for m in team.members)


def test_failed_anchor_blocks_its_bucket(make_participant):
    participants = [
        make_participant("high", size=2, availability=FULLY),
        make_participant("low1", size=2, availability=LIGHTLY),
        make_participant("low2", size=2, availability=LIGHTLY),
    ]
    strict = match_participants(participants)
    assert strict.teams == []
    assert len(strict.unmatched) == 3

    relaxed = match_participants(participants, level=ConstraintLevel.RELAXED)
    assert relaxed.teams == []


def test_result_accounts_for_everyone(make_participant):
    participants = [make_participant(f"p{i}", size=(2, 3, 4)[i % 3]) for i in range(17)]
    result = SingleRoundMatcher(next_team_id=CounterIdGenerator(prefix="t", start=5)).match(participants)

    assert result.check_conservation(17)
    assert result.statistics.total_participants == 17
    assert result.placed_count + len(result.unmatched) == 17
    assert result.teams[0].id == "t-5"
    assert sum(result.statistics.team_size_distribution.values()) == len(result.teams)
