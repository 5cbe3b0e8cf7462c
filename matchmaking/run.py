"""
Command-line runner for team matching.

Usage:
    python -m matchmaking.run --config configs/config.yaml --input roster.csv

The runner performs the following steps:
1. Load and validate configuration
2. Load the roster (or generate a synthetic one)
3. Run the matching service
4. Evaluate the formed teams
5. Save the response envelope and the quality report
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from .configs import load_config, validate_config, get_config_value, MatchingConfig
from .engine import ScoringWeights
from .evaluation import create_team_quality_report
from .ingestion import load_roster_csv, parse_participants, create_synthetic_roster
from .schema import MatchingResult
from .service import process_team_matching

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_matching_job(
    config_path: str,
    input_path: Optional[str] = None,
    synthetic: Optional[int] = None,
    seed: Optional[int] = None,
    output_dir: Optional[str] = None,
    single_pass: bool = False,
    log_level: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run a complete matching job.

    Args:
        config_path: Path to the configuration YAML file
        input_path: Roster CSV; a synthetic roster is used when None
        synthetic: Number of synthetic participants (overrides config)
        seed: Seed for the synthetic roster (overrides config)
        output_dir: Directory for outputs (overrides config)
        single_pass: Disable iterative matching
        log_level: minimal/detailed/verbose (overrides config)

    Returns:
        Dictionary with success flag, output paths and the response envelope
    """
    # =========================================================================
    # 1. Load and validate configuration
    # =========================================================================
    logger.info("=" * 60)
    logger.info("TEAM MATCHING RUN")
    logger.info("=" * 60)

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))

    matching_config = MatchingConfig.from_config(config)
    if single_pass:
        matching_config.use_iterative_matching = False
    if log_level is not None:
        matching_config.log_level = log_level
    weights = ScoringWeights.from_config(config)
    weights.validate()

    # =========================================================================
    # 2. Load roster
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 1: Loading Roster")
    logger.info("=" * 60)

    delimiter = get_config_value(config, "ingestion.delimiter", ",")
    if input_path is not None:
        df = load_roster_csv(input_path, delimiter=delimiter)
        source = input_path
    else:
        n = synthetic or get_config_value(config, "ingestion.synthetic_participants", 40)
        roster_seed = seed if seed is not None else get_config_value(config, "ingestion.synthetic_seed", 42)
        logger.info(f"No roster given, generating {n} synthetic participants (seed={roster_seed})")
        df = create_synthetic_roster(n, seed=roster_seed)
        source = f"synthetic(n={n}, seed={roster_seed})"

    participants, parse_stats = parse_participants(df)

    # =========================================================================
    # 3. Match
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 2: Matching")
    logger.info("=" * 60)

    response = process_team_matching(
        participants=participants,
        config=matching_config,
        weights=weights,
        parse_stats=parse_stats,
    )

    # =========================================================================
    # 4. Save outputs
    # =========================================================================
    out_dir = Path(output_dir or get_config_value(config, "global.output_dir", "artifacts"))
    out_dir.mkdir(parents=True, exist_ok=True)

    result_path = out_dir / "matching_result.json"
    with open(result_path, "w", encoding="utf-8") as f:
        json.dump(response, f, indent=2, ensure_ascii=False)
    logger.info(f"Saved response to {result_path}")

    if not response["success"]:
        logger.error(f"{response['error']}: {response.get('details', '')}")
        return {"success": False, "output_dir": str(out_dir), "response": response}

    for warning in response["warnings"]:
        logger.warning(warning)

    # =========================================================================
    # 5. Evaluate
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 3: Evaluation")
    logger.info("=" * 60)

    result = MatchingResult.from_dict(response["result"])
    report = create_team_quality_report(result, matching_config.constraint_level)
    report_path = out_dir / "team_quality_report.json"
    report.save(str(report_path))
    logger.info("\n" + result.summary())
    logger.info("\n" + report.summary())

    metadata = {
        "run_timestamp": datetime.now().isoformat(),
        "config_path": config_path,
        "roster_source": source,
        "matching_config": matching_config.to_dict(),
        "scoring_weights": weights.to_dict(),
    }
    metadata_path = out_dir / "metadata.json"
    with open(metadata_path, "w") as f:
        json.dump(metadata, f, indent=2)

    logger.info("\n" + "=" * 60)
    logger.info("RUN COMPLETE")
    logger.info("=" * 60)

    return {
        "success": True,
        "output_dir": str(out_dir),
        "response": response,
        "report": report.to_dict(),
        "metadata": metadata,
    }


def main():
    """Main entry point for the runner."""
    parser = argparse.ArgumentParser(
        description="Form case competition teams from a registration roster"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Roster CSV file (a synthetic roster is generated when omitted)"
    )
    parser.add_argument(
        "--synthetic",
        type=int,
        default=None,
        help="Number of synthetic participants when no input is given"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the synthetic roster"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory (overrides config)"
    )
    parser.add_argument(
        "--single-pass",
        action="store_true",
        help="Run one matching round instead of iterative matching"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["minimal", "detailed", "verbose"],
        default=None,
        help="Matching diagnostics verbosity (overrides config)"
    )

    args = parser.parse_args()

    try:
        result = run_matching_job(
            args.config,
            input_path=args.input,
            synthetic=args.synthetic,
            seed=args.seed,
            output_dir=args.output_dir,
            single_pass=args.single_pass,
            log_level=args.log_level,
        )
        if result["success"]:
            logger.info("\nMatching completed successfully!")
            return 0
        else:
            logger.error("\nMatching failed!")
            return 1
    except Exception as e:
        logger.exception(f"Matching failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
