"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates the matching, scoring and ingestion sections.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("minimal", "detailed", "verbose")


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in ["global", "matching"]:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    matching = config.get("matching") or {}

    log_level = matching.get("log_level", "detailed")
    if log_level not in LOG_LEVELS:
        issues.append(f"matching.log_level must be one of {LOG_LEVELS}, got {log_level}")

    min_per_iteration = matching.get("min_participants_per_iteration", 2)
    if not isinstance(min_per_iteration, int) or min_per_iteration < 2:
        issues.append(f"matching.min_participants_per_iteration must be an integer >= 2, got {min_per_iteration}")

    max_iterations = matching.get("max_iterations")
    if max_iterations is not None and (not isinstance(max_iterations, int) or max_iterations < 1):
        issues.append(f"matching.max_iterations must be a positive integer or null, got {max_iterations}")

    team_sizes = matching.get("team_sizes", [2, 3, 4])
    if not team_sizes or any(s not in (2, 3, 4) for s in team_sizes):
        issues.append(f"matching.team_sizes must be a subset of [2, 3, 4], got {team_sizes}")

    # Flags that only exist in strict form
    for flag in ["strict_education_separation", "strict_team_size_matching"]:
        if matching.get(flag, True) is not True:
            issues.append(f"matching.{flag}=false is not supported; strict matching will be used")

    scoring = config.get("scoring") or {}
    for name, value in scoring.items():
        if not isinstance(value, (int, float)) or value < 0:
            issues.append(f"scoring.{name} must be a non-negative number, got {value}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "matching.max_iterations")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    value = config
    for key in path.split("."):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
