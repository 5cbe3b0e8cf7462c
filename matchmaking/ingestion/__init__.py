"""
Roster ingestion module.

Loads registration CSV exports and normalizes each row into a Participant.
"""

from .loaders import load_roster_csv, read_roster_text
from .parser import parse_participants, parse_row, ParseStats
from .synthetic import create_synthetic_roster

__all__ = [
    "load_roster_csv",
    "read_roster_text",
    "parse_participants",
    "parse_row",
    "ParseStats",
    "create_synthetic_roster",
]
