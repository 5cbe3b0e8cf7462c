from matchmaking.engine import EligibilityFilter, ParticipantPool, TeamBuilder, materialize_team
from matchmaking.engine.team_builder import anchor_order

FULLY = "Fully Available (10–15 hrs/week)"
MODERATELY = "Moderately Available (5–10 hrs/week)"
LIGHTLY = "Lightly Available (1–4 hrs/week)"


def test_identical_candidates_take_input_order(make_participant):
    pool = ParticipantPool([make_participant(pid, size=2) for pid in "abc"])
    builder = TeamBuilder(EligibilityFilter())

    assert builder.build(pool, pool.live_indices(), 2) == [0, 1]


def test_anchor_is_most_experienced(make_participant):
    pool = ParticipantPool([
        make_participant("a", experience="Participated in 1–2", availability=MODERATELY),
        make_participant("b", experience="None", availability=FULLY),
        make_participant("c", experience="Finalist/Winner in at least one", availability=MODERATELY),
        make_participant("d", experience="Participated in 1–2", availability=FULLY),
    ])
    order = anchor_order(pool, pool.live_indices())
    # experience first, then availability band, then input position
    assert order == [2, 3, 0, 1]

    members = TeamBuilder(EligibilityFilter()).build(pool, pool.live_indices(), 4)
    assert members[0] == 2
    assert sorted(members) == [0, 1, 2, 3]


def test_highest_score_joins_first(make_participant):
    pool = ParticipantPool([
        make_participant("anchor", size=2, experience="Participated in 3+"),
        make_participant("same", size=2),
        make_participant("diverse", size=2, strengths=("Storytelling",), cases=("Consulting", "Finance")),
    ])
    members = TeamBuilder(EligibilityFilter()).build(pool, pool.live_indices(), 2)
    assert members == [0, 2]


def test_failed_build_leaves_pool_untouched(make_participant):
    pool = ParticipantPool([
        make_participant("high", size=2, availability=FULLY),
        make_participant("low1", size=2, availability=LIGHTLY),
        make_participant("low2", size=2, availability=LIGHTLY),
    ])
    builder = TeamBuilder(EligibilityFilter())

    assert builder.build(pool, pool.live_indices(), 2) is None
    assert len(pool) == 3
    assert pool.check_invariant()


def test_too_few_candidates(make_participant):
    pool = ParticipantPool([make_participant("a"), make_participant("b")])
    assert TeamBuilder(EligibilityFilter()).build(pool, pool.live_indices(), 4) is None


def test_materialize_team_statistics(make_participant):
    members = [
        make_participant("a", size=3, experience="Finalist/Winner in at least one",
                         cases=("Finance", "Consulting", "Marketing")),
        make_participant("b", size=3, experience="Participated in 1–2", cases=("Consulting", "Finance")),
        make_participant("c", size=3, experience="None", cases=("Marketing", "Social Impact")),
    ]
    team = materialize_team("team-9", members)

    assert team.id == "team-9"
    assert team.team_size == 3
    assert team.member_ids == ["a", "b", "c"]
    assert team.average_experience == (3 + 1 + 0) / 3
    assert team.common_case_types == ["Finance", "Consulting", "Marketing"]
    assert team.preferred_team_size_match == 100.0
    assert 0.0 <= team.compatibility_score <= 100.0
