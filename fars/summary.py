"""Monthly fatality counts by year.

This module turns the per-year frames produced by :mod:`fars.ingest` into a
month-by-year matrix:

* :func:`combine_years` stacks the successful per-year frames.
* :func:`count_by_month` counts rows per ``(year, MONTH)`` pair.
* :func:`pivot_counts` reshapes the long counts into one column per year.

The primary entry point is :func:`summarize_years`.  Years that fail to load
are simply absent from the result; month/year combinations without rows are
left missing rather than filled with zero.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd

from .config import COUNT_COL, MONTH_COL, MONTHS, SUMMARY_CAPTION, YEAR_COL
from .ingest import present_frames, read_years

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Aggregation helpers
# ---------------------------------------------------------------------------


def combine_years(frames: Sequence[pd.DataFrame]) -> pd.DataFrame:
    """Row-wise union of per-year ``MONTH``/``year`` frames.

    An empty sequence gives an empty frame with the same two columns.
    """
    if not frames:
        return pd.DataFrame(
            {
                MONTH_COL: pd.Series(dtype="Int64"),
                YEAR_COL: pd.Series(dtype="int64"),
            }
        )
    return pd.concat(list(frames), ignore_index=True)


def count_by_month(combined: pd.DataFrame) -> pd.DataFrame:
    """Count rows per ``(year, MONTH)`` group.

    Parameters
    ----------
    combined : pd.DataFrame
        Output of :func:`combine_years`.

    Returns
    -------
    pd.DataFrame
        Long table with columns ``year``, ``MONTH`` and ``n``.  Only groups
        with at least one row appear; rows with a blank month form their own
        ``<NA>`` group.
    """
    if combined.empty:
        return pd.DataFrame(
            {
                YEAR_COL: pd.Series(dtype="int64"),
                MONTH_COL: pd.Series(dtype="Int64"),
                COUNT_COL: pd.Series(dtype="int64"),
            }
        )
    return (
        combined.groupby([YEAR_COL, MONTH_COL], dropna=False)
        .size()
        .reset_index(name=COUNT_COL)
    )


def pivot_counts(counts: pd.DataFrame, *, all_months: bool = False) -> pd.DataFrame:
    """Reshape long ``year``/``MONTH``/``n`` counts into a month-by-year matrix.

    Parameters
    ----------
    counts : pd.DataFrame
        Output of :func:`count_by_month`.
    all_months : bool, optional
        If ``True``, keep a row for every calendar month even when no year
        has data for it.  Such rows hold missing values, not zeros.

    Returns
    -------
    pd.DataFrame
        Indexed by ``MONTH`` (nullable ``Int64``, ascending, a blank-month
        ``<NA>`` row last) with one nullable ``Int64`` column per year
        (ascending).  Combinations without rows are ``<NA>``.
    """
    known = counts[counts[MONTH_COL].notna()]
    unknown = counts[counts[MONTH_COL].isna()]

    if known.empty:
        wide = pd.DataFrame(index=pd.Index([], dtype="Int64"))
    else:
        wide = known.pivot(index=MONTH_COL, columns=YEAR_COL, values=COUNT_COL)
        wide.index = wide.index.astype("Int64")
    if all_months:
        months = sorted(set(MONTHS) | {int(month) for month in wide.index})
        wide = wide.reindex(pd.Index(months, dtype="Int64"))

    if not unknown.empty:
        blank = pd.DataFrame([unknown.set_index(YEAR_COL)[COUNT_COL]])
        blank.index = pd.Index([pd.NA], dtype="Int64")
        wide = pd.concat([wide, blank]) if len(wide.index) else blank

    wide = wide.sort_index(axis=1).astype("Int64")
    wide.index.name = MONTH_COL
    wide.columns.name = YEAR_COL
    return wide


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


def summarize_years(
    years: Iterable[int | str],
    data_dir: str | Path,
    *,
    all_months: bool = False,
) -> pd.DataFrame:
    """Count fatalities by month for each requested year.

    Parameters
    ----------
    years : iterable of int or str
        Four-digit years to include.
    data_dir : str or Path
        Directory holding the yearly accident files.
    all_months : bool, optional
        Passed to :func:`pivot_counts`.

    Returns
    -------
    pd.DataFrame
        The month-by-year matrix.  Years whose file is missing or unreadable
        are skipped with an ``InvalidYearWarning``; the matrix covers the
        remaining years, and is empty when none loaded.
    """
    results = read_years(years, data_dir)
    frames = present_frames(results)
    failed = [result.year for result in results if not result.ok]

    counts = count_by_month(combine_years(frames))
    matrix = pivot_counts(counts, all_months=all_months)
    logger.info(
        "Summarized %d year(s) into %d month rows; skipped: %s",
        len(matrix.columns),
        len(matrix.index),
        failed or "none",
    )
    return matrix


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------


def _format_cell(value) -> str:
    return "" if pd.isna(value) else str(int(value))


def _format_month(month) -> str:
    return "NA" if pd.isna(month) else str(int(month))


def render_summary(matrix: pd.DataFrame, caption: str = SUMMARY_CAPTION) -> str:
    """Render the matrix as a captioned, center-aligned pipe table."""
    header: List[str] = [matrix.index.name or MONTH_COL]
    header += [str(col) for col in matrix.columns]
    body = [
        [_format_month(month)] + [_format_cell(value) for value in matrix.iloc[pos].tolist()]
        for pos, month in enumerate(matrix.index)
    ]

    widths = [max(len(line[i]) for line in [header, *body]) for i in range(len(header))]
    widths = [max(width, 3) for width in widths]

    def _line(cells: List[str]) -> str:
        return "| " + " | ".join(c.center(w) for c, w in zip(cells, widths)) + " |"

    rule = "|" + "|".join(":" + "-" * w + ":" for w in widths) + "|"
    lines = [f"Table: {caption}", "", _line(header), rule]
    lines += [_line(cells) for cells in body]
    return "\n".join(lines)
