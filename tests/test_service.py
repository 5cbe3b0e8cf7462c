import json

from matchmaking.configs import MatchingConfig
from matchmaking.engine import IterativeOrchestrator
from matchmaking.service import (
    STRICT_AVAILABILITY_NOTICE,
    STRICT_SIZE_NOTICE,
    RELAXED_AVAILABILITY_NOTICE,
    process_team_matching,
    run_matching,
)

HEADER = "Full Name,Email ID,College Name,Current Year of Study,Preferred Team Size,Who do you want on your team?"


def _roster(*rows):
    return "\n".join([HEADER, *rows]) + "\n"


PAIRS_ROSTER = _roster(
    "Asha Rao,asha@example.edu,SRCC,2nd year,2,Either UG or PG",
    "Bilal Khan,bilal@example.edu,SRCC,Second Year,2,Either UG or PG",
    "Chitra Iyer,chitra@example.edu,NMIMS,3rd year,2,Either UG or PG",
    "Dev Mehta,dev@example.edu,NMIMS,First Year,2,Either UG or PG",
    "Esha Das,esha@example.edu,SRCC,Final Year,2,Either UG or PG",
)


class _FailingOrchestrator(IterativeOrchestrator):
    def run(self, participants):
        raise RuntimeError("boom")


def test_empty_csv_reports_no_participants():
    response = process_team_matching(csv_data="")

    assert response["success"] is False
    assert response["error"] == "No valid participants found in CSV"
    assert "correct format" in response["details"]


def test_pairs_roster_envelope():
    response = process_team_matching(csv_data=PAIRS_ROSTER)

    assert response["success"] is True
    result = response["result"]
    assert len(result["teams"]) == 2
    assert len(result["unmatched"]) == 1
    assert result["statistics"]["matchingEfficiency"] == 80.0
    assert result["iterations"] == 1

    warnings = response["warnings"]
    assert "No postgraduate participants found" in warnings
    assert STRICT_SIZE_NOTICE in warnings
    assert STRICT_AVAILABILITY_NOTICE in warnings
    assert "5 participants prefer team size 2 - 1 will be unmatched due to strict size matching" in warnings
    assert "1 participants could not be matched to teams" in warnings
    assert not any(w.startswith("Low matching efficiency") for w in warnings)

    assert response["iterativeStats"]["totalIterations"] == 1
    assert response["parseStats"]["totalParsed"] == 5
    # the envelope is plain JSON
    json.dumps(response)


def test_skipped_rows_are_reported():
    csv_data = _roster(
        "Asha Rao,asha@example.edu,SRCC,2nd year,2,Either UG or PG",
        "No Email,,SRCC,2nd year,2,Either UG or PG",
        "Asha Again,ASHA@example.edu,SRCC,2nd year,2,Either UG or PG",
        "Bilal Khan,bilal@example.edu,SRCC,Second Year,2,Either UG or PG",
    )
    response = process_team_matching(csv_data=csv_data)

    stats = response["parseStats"]
    assert stats["totalRows"] == 4
    assert stats["totalParsed"] == 2
    assert stats["skippedRows"] == 2
    assert len(stats["errors"]) == 2
    assert len(response["result"]["teams"]) == 1


def test_single_pass_has_no_iterative_stats():
    config = MatchingConfig(use_iterative_matching=False, strict_availability_matching=False)
    response = process_team_matching(csv_data=PAIRS_ROSTER, config=config)

    assert response["success"] is True
    assert "iterativeStats" not in response
    assert "iterations" not in response["result"]
    assert [t["id"] for t in response["result"]["teams"]] == ["team-1", "team-2"]
    assert RELAXED_AVAILABILITY_NOTICE in response["warnings"]


def test_low_efficiency_warning(make_participant):
    participants = [make_participant("a", size=4), make_participant("b", size=3)]
    response = process_team_matching(participants=participants)

    assert response["success"] is True
    assert "Low matching efficiency (0.0%) - consider adjusting team size preferences" in response["warnings"]


def test_invalid_config_is_reported():
    response = process_team_matching(csv_data=PAIRS_ROSTER, config=MatchingConfig(log_level="loud"))

    assert response["success"] is False
    assert response["error"] == "Failed to process team matching"
    assert "log_level" in response["details"]


def test_iterative_failure_falls_back_to_single_pass(make_participant):
    participants = [make_participant(f"p{i}", size=2) for i in range(4)]
    outcome = run_matching(participants, MatchingConfig(), orchestrator=_FailingOrchestrator())

    assert outcome["iterative_stats"] is None
    assert [t.id for t in outcome["result"].teams] == ["team-1", "team-2"]
