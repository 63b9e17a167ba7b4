"""Locate and read one year's FARS accident table."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import pandas as pd

from .config import FILENAME_PATTERN
from .errors import SourceNotFound

logger = logging.getLogger(__name__)


def normalize_year(year: int | str) -> int:
    """Coerce a year given as an int or a numeric-looking string to ``int``.

    Raises ``ValueError`` for values such as ``"abc"`` or ``2015.5``.
    """
    if isinstance(year, str):
        year = year.strip()
        return int(year)
    as_int = int(year)
    if as_int != year:
        raise ValueError(f"Year must be a whole number, got {year!r}")
    return as_int


def make_filename(year: int | str, data_dir: str | Path) -> str:
    """Return the path of the accident file for ``year`` inside ``data_dir``.

    Pure formatting: the file is not required to exist.
    """
    filename = FILENAME_PATTERN.format(year=normalize_year(year))
    return str(Path(data_dir) / filename)


def read_table(path: str | Path) -> pd.DataFrame:
    """Load an accident table (``.csv`` or ``.csv.bz2``).

    Parameters
    ----------
    path : str or Path
        Location of the file, usually from :func:`make_filename`.

    Returns
    -------
    pd.DataFrame
        The full table as read from disk.

    Raises
    ------
    SourceNotFound
        If ``path`` does not exist.  Checked before parsing so the message
        names the missing file.
    """
    path = Path(path)
    if not path.exists():
        raise SourceNotFound(str(path))

    # Mixed-type columns in the older files trigger DtypeWarning noise
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        df = pd.read_csv(path, compression="infer", low_memory=False)

    logger.debug("Read %d rows from %s", len(df), path)
    return df
