"""
Configuration constants for the FARS fatality pipeline.
"""

import os
from pathlib import Path
from typing import List, Optional, Tuple

# ======================================================
#  DATA SOURCES / CONSTANTS
# ======================================================
# One bzip2-compressed accident table per year, e.g. ``accident_2015.csv.bz2``.
FILENAME_PATTERN: str = "accident_{year}.csv.bz2"

# Environment override for the directory holding the yearly files
DATA_DIR_ENV: str = "FARS_DATA_DIR"

# Columns consulted by the pipeline (names are exact)
MONTH_COL: str = "MONTH"
STATE_COL: str = "STATE"
LONGITUDE_COL: str = "LONGITUDE"
LATITUDE_COL: str = "LATITUDE"
YEAR_COL: str = "year"
COUNT_COL: str = "n"

# Values above these thresholds are "unknown" markers, not coordinates
LONGITUDE_SENTINEL: float = 900
LATITUDE_SENTINEL: float = 90

MONTHS: List[int] = list(range(1, 13))

SUMMARY_CAPTION: str = "Fatalities by Month"

# ======================================================
#  UI DEFAULTS
# ======================================================
GLOBAL_YEAR_MIN: int = 2013
GLOBAL_YEAR_MAX: int = 2015
DEFAULT_YEARS: Tuple[int, ...] = (2013, 2014, 2015)
DEFAULT_STATE: int = 1
DEFAULT_MAP_YEAR: int = 2015


def resolve_data_dir(override: Optional[str | Path] = None) -> Path:
    """Select the directory holding the yearly accident files.

    The lookup order is:

    1. An explicit ``override`` (e.g. a ``--data-dir`` argument).
    2. The ``FARS_DATA_DIR`` environment variable, if set.
    3. A ``data`` folder at the repository root.

    The directory is not required to exist; missing files surface later as
    ``SourceNotFound`` naming the full path.
    """
    if override:
        return Path(override).expanduser().resolve()
    env = os.getenv(DATA_DIR_ENV)
    if env:
        return Path(env).expanduser().resolve()
    # Repo root /data (two levels up from this file)
    return Path(__file__).resolve().parent.parent / "data"
