"""
Matching options.

MatchingConfig carries the recognized options of a matching run. The
log_level option only changes diagnostic verbosity, never which teams are
formed.
"""

import json
import logging
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

from ..engine.eligibility import ConstraintLevel
from ..engine.iterative import default_max_iterations
from .loader import LOG_LEVELS

logger = logging.getLogger(__name__)

# log_level option -> stdlib logging level
LOG_LEVEL_MAP = {
    "minimal": logging.WARNING,
    "detailed": logging.INFO,
    "verbose": logging.DEBUG,
}


@dataclass
class MatchingConfig:
    """
    Configuration for a matching run.

    Attributes:
        strict_education_separation: Keep UG and PG cohorts apart (only mode)
        strict_team_size_matching: Exact preferred team size (only mode)
        strict_availability_matching: Availability must fit every member;
            False fits any member instead
        use_iterative_matching: Re-run rounds on the unmatched pool
        max_iterations: Round limit; None derives max(10, n)
        max_iterations_ceiling: Hard cap applied to the derived limit
        min_participants_per_iteration: Stop when fewer remain (>= 2)
        max_consecutive_failures: Zero-progress rounds tolerated near the end
        team_sizes: Bucket sizes, processed in this order
        log_level: "minimal", "detailed" or "verbose"
    """
    strict_education_separation: bool = True
    strict_team_size_matching: bool = True
    strict_availability_matching: bool = True
    use_iterative_matching: bool = True
    max_iterations: Optional[int] = None
    max_iterations_ceiling: Optional[int] = 30
    min_participants_per_iteration: int = 2
    max_consecutive_failures: int = 8
    log_level: str = "detailed"
    team_sizes: List[int] = field(default_factory=lambda: [2, 3, 4])

    def validate(self) -> None:
        """Validate configuration values."""
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level}")
        if self.min_participants_per_iteration < 2:
            raise ValueError(
                f"min_participants_per_iteration must be >= 2, got {self.min_participants_per_iteration}"
            )
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.max_iterations_ceiling is not None and self.max_iterations_ceiling < 1:
            raise ValueError(f"max_iterations_ceiling must be >= 1, got {self.max_iterations_ceiling}")
        if self.max_consecutive_failures < 1:
            raise ValueError(f"max_consecutive_failures must be >= 1, got {self.max_consecutive_failures}")
        if not self.team_sizes or any(s not in (2, 3, 4) for s in self.team_sizes):
            raise ValueError(f"team_sizes must be a subset of [2, 3, 4], got {self.team_sizes}")

    @property
    def constraint_level(self) -> ConstraintLevel:
        if self.strict_availability_matching:
            return ConstraintLevel.STRICT
        return ConstraintLevel.RELAXED

    @property
    def logging_level(self) -> int:
        return LOG_LEVEL_MAP[self.log_level]

    def resolve_max_iterations(self, n_participants: int) -> int:
        """Explicit max_iterations, or max(10, n) capped by the ceiling."""
        if self.max_iterations is not None:
            return self.max_iterations
        return default_max_iterations(n_participants, self.max_iterations_ceiling)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MatchingConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingConfig":
        """Create from main config dictionary."""
        matching = config.get("matching", {}) or {}
        defaults = cls()
        return cls(**{k: matching.get(k, v) for k, v in asdict(defaults).items()})

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved matching config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "MatchingConfig":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)
