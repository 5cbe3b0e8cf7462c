import pytest

from matchmaking.engine import IterativeOrchestrator, UuidIdGenerator, default_max_iterations, run_iterative_matching
from matchmaking.ingestion import create_synthetic_roster, parse_participants
from matchmaking.schema import TeamPreference

FULLY = "Fully Available (10–15 hrs/week)"
LIGHTLY = "Lightly Available (1–4 hrs/week)"


def test_single_team_in_first_iteration(make_participant):
    participants = [make_participant(f"p{i}") for i in range(4)]
    result = run_iterative_matching(participants)

    assert result.iterations == 1
    assert [t.id for t in result.teams] == ["team-1-iter1"]
    assert result.unmatched == []
    assert result.statistics.matching_efficiency == 100.0


def test_stops_when_too_few_remain(make_participant):
    participants = [make_participant(f"p{i}", size=2) for i in range(5)]
    result = run_iterative_matching(participants)

    assert result.iterations == 1
    assert len(result.teams) == 2
    assert [t.id for t in result.teams] == ["team-1-iter1", "team-2-iter1"]
    assert [p.id for p in result.unmatched] == ["p4"]
    assert result.statistics.matching_efficiency == 80.0

    record = result.iteration_history[0]
    assert record.participants_processed == 5
    assert record.participants_matched == 4
    assert record.remaining_unmatched == 1
    assert record.efficiency == 80.0


def test_stalled_pool_stops_after_consecutive_failures(make_participant):
    participants = [
        make_participant("high", size=2, availability=FULLY),
        make_participant("low", size=2, availability=LIGHTLY),
    ]
    result = run_iterative_matching(participants)

    assert result.iterations == 8
    assert result.teams == []
    assert len(result.unmatched) == 2
    assert all(r.participants_matched == 0 for r in result.iteration_history)


def test_max_iterations_is_respected(make_participant):
    participants = [
        make_participant("high", size=2, availability=FULLY),
        make_participant("low", size=2, availability=LIGHTLY),
    ]
    result = IterativeOrchestrator(max_iterations=3).run(participants)
    assert result.iterations == 3
    assert len(result.iteration_history) == 3


def test_large_stalled_pool_runs_to_the_limit(make_participant):
    # stall stop only applies once fewer than 4 participants remain
    participants = [make_participant("high", size=2, availability=FULLY)] + [
        make_participant(f"low{i}", size=2, availability=LIGHTLY) for i in range(4)
    ]
    result = IterativeOrchestrator(max_iterations=12).run(participants)
    assert result.iterations == 12


def test_default_max_iterations():
    assert default_max_iterations(3) == 10
    assert default_max_iterations(25) == 25
    assert default_max_iterations(100, ceiling=30) == 30


def test_invalid_settings_raise():
    with pytest.raises(ValueError):
        IterativeOrchestrator(min_participants_per_iteration=1)
    with pytest.raises(ValueError):
        IterativeOrchestrator(max_iterations=0)


def test_synthetic_roster_invariants():
    participants, _ = parse_participants(create_synthetic_roster(60, seed=7))
    result = run_iterative_matching(participants)

    assert result.check_conservation(len(participants))
    for team in result.teams:
        assert len(team.members) == team.team_size
        assert all(m.preferred_team_size == team.team_size for m in team.members)
        assert len({m.is_postgraduate for m in team.members}) == 1
        preferences = {m.team_preference for m in team.members}
        assert not {TeamPreference.UNDERGRADS_ONLY, TeamPreference.POSTGRADS_ONLY} <= preferences
        if TeamPreference.UNDERGRADS_ONLY in preferences:
            assert not any(m.is_postgraduate for m in team.members)
        if TeamPreference.POSTGRADS_ONLY in preferences:
            assert all(m.is_postgraduate for m in team.members)
        assert 0.0 <= team.compatibility_score <= 100.0

    ids = [t.id for t in result.teams]
    assert len(set(ids)) == len(ids)


def test_iteration_history_is_monotonic():
    participants, _ = parse_participants(create_synthetic_roster(60, seed=7))
    records = run_iterative_matching(participants).iteration_history

    assert records
    assert records[0].participants_processed == len(participants)
    for prev, cur in zip(records, records[1:]):
        assert cur.participants_processed == prev.remaining_unmatched
        assert cur.remaining_unmatched <= prev.remaining_unmatched
    for record in records:
        assert record.remaining_unmatched == record.participants_processed - record.participants_matched
        if record.participants_matched > 0:
            assert record.remaining_unmatched < record.participants_processed


def test_runs_are_deterministic():
    participants, _ = parse_participants(create_synthetic_roster(40, seed=3))
    first = run_iterative_matching(participants).to_dict()
    second = run_iterative_matching(participants).to_dict()
    assert first == second


def test_uuid_ids_carry_iteration_suffix(make_participant):
    participants = [make_participant(f"p{i}", size=2) for i in range(4)]
    result = IterativeOrchestrator(next_team_id=UuidIdGenerator()).run(participants)

    ids = [t.id for t in result.teams]
    assert len(set(ids)) == 2
    assert all(i.startswith("team-") and i.endswith("-iter1") for i in ids)
