"""
Team matching service.

The single entrypoint used by the CLI runner and the dashboard. It parses a
roster (or takes participants directly), checks data quality, runs the
engine and wraps everything in a JSON-serializable response envelope:

    {success, result, parseStats, warnings, iterativeStats?, error?, details?}

Error handling:
- No participants: success=False with error/details, never raised
- Exception inside iterative matching: logged, then one single-round pass
- Any other exception: success=False with the exception text as details
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from .configs import MatchingConfig, LOG_LEVEL_MAP
from .engine import (
    IterativeOrchestrator,
    SingleRoundMatcher,
    CounterIdGenerator,
    ScoringWeights,
    partition_cohorts,
)
from .evaluation import compute_iterative_stats
from .ingestion import ParseStats, load_roster_csv, read_roster_text, parse_participants
from .schema import Participant, MatchingResult, AvailabilityLevel

logger = logging.getLogger(__name__)

LOW_EFFICIENCY_THRESHOLD = 80.0

NO_PARTICIPANTS_ERROR = "No valid participants found in CSV"
NO_PARTICIPANTS_DETAILS = (
    "Please check that your CSV file has the correct format and contains valid participant data."
)
PROCESSING_ERROR = "Failed to process team matching"

STRICT_SIZE_NOTICE = (
    "STRICT TEAM SIZE MATCHING: Students will only be matched with their preferred team size"
)
STRICT_AVAILABILITY_NOTICE = (
    "STRICT AVAILABILITY MATCHING: Only compatible availability levels will be matched "
    "(High↔High/Medium, Medium↔High/Medium/Low, Low↔Medium/Low)"
)
RELAXED_AVAILABILITY_NOTICE = (
    "RELAXED AVAILABILITY MATCHING: Availability must be compatible with at least one team member"
)


def apply_log_level(log_level: str) -> None:
    """Map the minimal/detailed/verbose option onto the package logger."""
    logging.getLogger("matchmaking").setLevel(LOG_LEVEL_MAP[log_level])


def data_quality_warnings(participants: Sequence[Participant], config: MatchingConfig) -> List[str]:
    """
    Warnings about the roster itself, collected before matching.

    Args:
        participants: Parsed participants
        config: Matching options

    Returns:
        List of warning messages
    """
    warnings = []

    missing_names = sum(1 for p in participants if not p.full_name.strip())
    missing_emails = sum(1 for p in participants if not p.email.strip())
    missing_colleges = sum(1 for p in participants if not p.college_name.strip())
    if missing_names:
        warnings.append(f"{missing_names} participants have missing names")
    if missing_emails:
        warnings.append(f"{missing_emails} participants have missing emails")
    if missing_colleges:
        warnings.append(f"{missing_colleges} participants have missing college names")

    ug, pg = partition_cohorts(participants)
    logger.info(f"Education distribution: {len(ug)} UG, {len(pg)} PG")
    if not ug:
        warnings.append("No undergraduate participants found")
    if not pg:
        warnings.append("No postgraduate participants found")

    for flag in ("strict_education_separation", "strict_team_size_matching"):
        if not getattr(config, flag):
            warnings.append(f"{flag}=false is not supported; strict matching was used")

    warnings.append(STRICT_SIZE_NOTICE)
    size_counts: Dict[int, int] = {}
    for p in participants:
        size_counts[p.preferred_team_size] = size_counts.get(p.preferred_team_size, 0) + 1
    for size, count in sorted(size_counts.items()):
        if count % size:
            warnings.append(
                f"{count} participants prefer team size {size} - {count % size} "
                f"will be unmatched due to strict size matching"
            )

    if config.strict_availability_matching:
        warnings.append(STRICT_AVAILABILITY_NOTICE)
    else:
        warnings.append(RELAXED_AVAILABILITY_NOTICE)

    availability_counts = {level.value: 0 for level in AvailabilityLevel}
    for p in participants:
        availability_counts[p.availability_level.value] += 1
    logger.info(f"Availability distribution: {availability_counts}")

    return warnings


def result_warnings(result: MatchingResult) -> List[str]:
    """Warnings about the outcome of matching."""
    warnings = []
    if result.unmatched:
        warnings.append(f"{len(result.unmatched)} participants could not be matched to teams")
    if result.statistics.matching_efficiency < LOW_EFFICIENCY_THRESHOLD:
        warnings.append(
            f"Low matching efficiency ({result.statistics.matching_efficiency:.1f}%) - "
            f"consider adjusting team size preferences"
        )
    return warnings


def run_matching(
    participants: Sequence[Participant],
    config: MatchingConfig,
    weights: Optional[ScoringWeights] = None,
    orchestrator: Optional[IterativeOrchestrator] = None
) -> Dict[str, Any]:
    """
    Run the engine according to the configuration.

    Args:
        participants: Participants to match
        config: Matching options
        weights: Scoring weights (defaults when None)
        orchestrator: Pre-built orchestrator; built from config when None

    Returns:
        Dictionary with "result" and, for iterative runs, "iterative_stats"
    """
    weights = weights or ScoringWeights()

    def single_pass() -> MatchingResult:
        matcher = SingleRoundMatcher(
            level=config.constraint_level,
            weights=weights,
            team_sizes=config.team_sizes,
            next_team_id=CounterIdGenerator(),
        )
        return matcher.match(participants)

    if not config.use_iterative_matching:
        result = single_pass()
        logger.info(
            f"Single-pass matching complete: {len(result.teams)} teams formed, "
            f"{len(result.unmatched)} unmatched"
        )
        return {"result": result, "iterative_stats": None}

    if orchestrator is None:
        orchestrator = IterativeOrchestrator(
            max_iterations=config.resolve_max_iterations(len(participants)),
            min_participants_per_iteration=config.min_participants_per_iteration,
            max_consecutive_failures=config.max_consecutive_failures,
            level=config.constraint_level,
            weights=weights,
            team_sizes=config.team_sizes,
            next_team_id=CounterIdGenerator(),
        )

    try:
        result = orchestrator.run(participants)
        iterative_stats = compute_iterative_stats(result)
        logger.info(
            f"Iterative matching complete: {len(result.teams)} teams formed over "
            f"{result.iterations} iterations, {len(result.unmatched)} unmatched"
        )
    except Exception as e:
        logger.exception(f"Error in iterative matching, falling back to single-pass: {e}")
        result = single_pass()
        iterative_stats = None
        logger.info(
            f"Fallback single-pass matching complete: {len(result.teams)} teams formed, "
            f"{len(result.unmatched)} unmatched"
        )

    return {"result": result, "iterative_stats": iterative_stats}


def process_team_matching(
    participants: Optional[Sequence[Participant]] = None,
    csv_data: Optional[str] = None,
    csv_path: Optional[str] = None,
    config: Optional[MatchingConfig] = None,
    weights: Optional[ScoringWeights] = None,
    parse_stats: Optional[ParseStats] = None,
    delimiter: str = ","
) -> Dict[str, Any]:
    """
    Parse a roster, form teams and build the response envelope.

    Exactly one of participants, csv_data or csv_path should be given.

    Args:
        participants: Already normalized participants
        csv_data: Roster CSV text
        csv_path: Path to a roster CSV file
        config: Matching options (defaults when None)
        weights: Scoring weights (defaults when None)
        parse_stats: Parse statistics for pre-parsed participants
        delimiter: CSV field delimiter

    Returns:
        Response envelope dictionary
    """
    config = config or MatchingConfig()

    try:
        config.validate()
        apply_log_level(config.log_level)

        logger.info("=" * 60)
        logger.info("TEAM MATCHING")
        logger.info("=" * 60)
        logger.info(
            f"Options: strict_education_separation={config.strict_education_separation}, "
            f"strict_team_size_matching={config.strict_team_size_matching}, "
            f"strict_availability_matching={config.strict_availability_matching}, "
            f"use_iterative_matching={config.use_iterative_matching}"
        )

        if participants is None:
            if csv_path is not None:
                try:
                    df = load_roster_csv(csv_path, delimiter=delimiter)
                except ValueError as e:
                    logger.warning(str(e))
                    df = read_roster_text("")
            else:
                df = read_roster_text(csv_data or "", delimiter=delimiter)
            participants, parse_stats = parse_participants(df)
        else:
            participants = list(participants)
            if parse_stats is None:
                parse_stats = ParseStats(total_rows=len(participants), total_parsed=len(participants))

        if not participants:
            logger.warning(NO_PARTICIPANTS_ERROR)
            return {
                "success": False,
                "error": NO_PARTICIPANTS_ERROR,
                "details": NO_PARTICIPANTS_DETAILS,
            }

        logger.info(f"Parsed {parse_stats.total_parsed} participants from {parse_stats.total_rows} rows")

        warnings = data_quality_warnings(participants, config)

        logger.info("\n" + "=" * 60)
        logger.info(f"Starting {'iterative' if config.use_iterative_matching else 'single-pass'} matching")
        logger.info("=" * 60)
        outcome = run_matching(participants, config, weights)
        result = outcome["result"]

        if not result.check_conservation(len(participants)):
            raise RuntimeError("Matching result does not account for every participant exactly once")

        warnings.extend(result_warnings(result))

        response = {
            "success": True,
            "result": result.to_dict(),
            "parseStats": parse_stats.to_dict(),
            "warnings": warnings,
        }
        if outcome["iterative_stats"] is not None:
            response["iterativeStats"] = outcome["iterative_stats"].to_dict()
        return response

    except Exception as e:
        logger.exception(f"Error in team matching process: {e}")
        return {
            "success": False,
            "error": PROCESSING_ERROR,
            "details": str(e),
        }
