"""Multi-year ingestion of FARS accident tables.

Each requested year is loaded independently and reduced to the two columns
the monthly summary needs, ``MONTH`` and ``year``.  A year that cannot be
loaded (unknown year id, missing file, missing ``MONTH`` column) never
aborts the batch: it is recorded as a failed :class:`YearResult`, an
:class:`~fars.errors.InvalidYearWarning` is issued, and the remaining years
are processed as usual.  :func:`present_frames` then keeps only the
successful loads for aggregation.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from .config import MONTH_COL, YEAR_COL
from .errors import InvalidYearWarning
from .reader import make_filename, normalize_year, read_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearResult:
    """Outcome of loading one requested year."""

    year: int | str
    frame: Optional[pd.DataFrame] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.frame is not None


def project_year(table: pd.DataFrame, year: int) -> pd.DataFrame:
    """Build a new ``MONTH``/``year`` frame from a loaded table.

    The source table is left untouched; row order is preserved.  Blank months
    stay as ``<NA>`` in a nullable integer column.
    """
    months = (
        pd.to_numeric(table[MONTH_COL], errors="coerce")
        .astype("Int64")
        .reset_index(drop=True)
    )
    return pd.DataFrame(
        {
            MONTH_COL: months,
            YEAR_COL: pd.Series([year] * len(months), dtype="int64"),
        }
    )


def read_year(year: int | str, data_dir: str | Path) -> YearResult:
    """Load and project a single year, capturing any failure in the result."""
    try:
        year_int = normalize_year(year)
        table = read_table(make_filename(year_int, data_dir))
        frame = project_year(table, year_int)
    except Exception as exc:
        return YearResult(year=year, error=f"{type(exc).__name__}: {exc}")
    return YearResult(year=year_int, frame=frame)


def read_years(years: Iterable[int | str], data_dir: str | Path) -> List[YearResult]:
    """Load every requested year, one :class:`YearResult` per entry.

    Parameters
    ----------
    years : iterable of int or str
        Four-digit years; numeric strings are accepted.  Order is kept.
    data_dir : str or Path
        Directory holding the ``accident_<year>.csv.bz2`` files.

    Returns
    -------
    List[YearResult]
        Results in request order.  Failed years carry ``frame=None`` and the
        reason in ``error``; an ``InvalidYearWarning`` is issued for each.
    """
    results: List[YearResult] = []
    for year in years:
        result = read_year(year, data_dir)
        if not result.ok:
            logger.warning("Skipping year %s (%s)", year, result.error)
            warnings.warn(f"invalid year: {year}", InvalidYearWarning, stacklevel=2)
        else:
            logger.info("Loaded %d rows for %s", len(result.frame), result.year)
        results.append(result)
    return results


def present_frames(results: Iterable[YearResult]) -> List[pd.DataFrame]:
    """Drop failed years, keeping the frames of successful loads in order."""
    return [result.frame for result in results if result.ok]
