"""
Roster loading from CSV.

This module only reads raw rows; normalization into Participant records is
handled by the parser module.
"""

import io
import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)


def _read_csv(source, delimiter: str) -> pd.DataFrame:
    # every cell as text, blank cells as ""
    return pd.read_csv(source, sep=delimiter, dtype=str, keep_default_na=False, skipinitialspace=True)


def load_roster_csv(filepath: str, delimiter: str = ",") -> pd.DataFrame:
    """
    Load a registration roster from a CSV file.

    Args:
        filepath: Path to the roster file
        delimiter: Field delimiter (default: comma)

    Returns:
        DataFrame with one raw row per registration

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no rows
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Roster file not found: {filepath}")

    logger.info(f"Loading roster from {filepath} (delimiter: {repr(delimiter)})")
    try:
        df = _read_csv(path, delimiter)
    except pd.errors.EmptyDataError as e:
        raise ValueError(f"Roster file is empty: {filepath}") from e

    if df.empty:
        raise ValueError(f"Roster file is empty: {filepath}")

    logger.info(f"Loaded {len(df)} rows with {len(df.columns)} columns")
    return df


def read_roster_text(csv_data: str, delimiter: str = ",") -> pd.DataFrame:
    """
    Read a roster from CSV text (e.g. an uploaded file).

    Args:
        csv_data: Full CSV content including the header row
        delimiter: Field delimiter

    Returns:
        DataFrame with one raw row per registration; empty if there are no rows
    """
    if not csv_data or not csv_data.strip():
        return pd.DataFrame()
    try:
        df = _read_csv(io.StringIO(csv_data), delimiter)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    logger.info(f"Read {len(df)} roster rows with {len(df.columns)} columns")
    return df
