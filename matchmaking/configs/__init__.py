"""
Configuration module.

YAML loading/validation helpers and the MatchingConfig options dataclass.
"""

from .loader import load_config, validate_config, get_config_value
from .matching import MatchingConfig, LOG_LEVEL_MAP

__all__ = [
    "load_config",
    "validate_config",
    "get_config_value",
    "MatchingConfig",
    "LOG_LEVEL_MAP",
]
