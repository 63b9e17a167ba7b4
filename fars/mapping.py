"""Per-state accident locations for one year.

:func:`map_state` loads a year's table, checks the state code against the
codes present in that table, keeps the state's rows and replaces the
provider's "unknown" coordinate markers (longitude above 900, latitude above
90) with missing values.  The result is a :class:`StateMap`: the cleaned
points plus the bounding :class:`Viewport` a renderer should use.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

from .config import (
    LATITUDE_COL,
    LATITUDE_SENTINEL,
    LONGITUDE_COL,
    LONGITUDE_SENTINEL,
    STATE_COL,
)
from .errors import InvalidState
from .reader import make_filename, normalize_year, read_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoRecord:
    """One accident location; ``None`` marks an unknown coordinate."""

    longitude: Optional[float]
    latitude: Optional[float]


@dataclass(frozen=True)
class Viewport:
    """Bounding ranges of the known coordinates."""

    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    @classmethod
    def from_series(cls, longitude: pd.Series, latitude: pd.Series) -> Optional["Viewport"]:
        lon = longitude.dropna()
        lat = latitude.dropna()
        if lon.empty or lat.empty:
            return None
        return cls(
            lon_min=float(lon.min()),
            lon_max=float(lon.max()),
            lat_min=float(lat.min()),
            lat_max=float(lat.max()),
        )


@dataclass(frozen=True)
class StateMap:
    """Cleaned accident locations for one state and year."""

    state: int
    year: int
    records: Tuple[GeoRecord, ...]
    viewport: Optional[Viewport]

    def to_frame(self) -> pd.DataFrame:
        """Return the records as a ``LONGITUDE``/``LATITUDE`` float frame."""
        return pd.DataFrame(
            {
                LONGITUDE_COL: [r.longitude for r in self.records],
                LATITUDE_COL: [r.latitude for r in self.records],
            },
            dtype="float64",
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_state(state: int | str) -> int:
    """Coerce a state code given as an int or numeric string to ``int``.

    Anything else (``"abc"``, ``None``) is an ``InvalidState``.
    """
    try:
        if isinstance(state, str):
            return int(state.strip())
        return int(state)
    except (TypeError, ValueError):
        raise InvalidState(state) from None


def mask_sentinel(values: pd.Series, threshold: float) -> pd.Series:
    """Return a copy of ``values`` with entries above ``threshold`` missing."""
    numeric = pd.to_numeric(values, errors="coerce")
    return numeric.mask(numeric > threshold)


def sanitize_coordinates(
    longitude: pd.Series, latitude: pd.Series
) -> Tuple[pd.Series, pd.Series]:
    """Replace sentinel longitudes (> 900) and latitudes (> 90) with NaN."""
    return (
        mask_sentinel(longitude, LONGITUDE_SENTINEL),
        mask_sentinel(latitude, LATITUDE_SENTINEL),
    )


def _optional_float(value) -> Optional[float]:
    value = float(value)
    return None if math.isnan(value) else value


def validate_state(table: pd.DataFrame, state: int | str) -> int:
    """Return the normalized state code, or raise ``InvalidState``.

    The code must be one of the distinct ``STATE`` values in ``table``.
    """
    state_num = normalize_state(state)
    observed = pd.to_numeric(table[STATE_COL], errors="coerce").dropna().unique()
    if state_num not in {int(code) for code in observed}:
        raise InvalidState(state_num)
    return state_num


def filter_state(table: pd.DataFrame, state: int) -> pd.DataFrame:
    """Rows of ``table`` whose ``STATE`` equals ``state``, in source order."""
    codes = pd.to_numeric(table[STATE_COL], errors="coerce")
    return table.loc[codes == state]


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


def build_state_map(rows: pd.DataFrame, state: int, year: int) -> Optional[StateMap]:
    """Clean one state's rows into a :class:`StateMap`.

    Returns ``None`` when ``rows`` is empty; that is a normal outcome, not
    an error.
    """
    if rows.empty:
        logger.info("no accidents to plot")
        return None

    longitude, latitude = sanitize_coordinates(rows[LONGITUDE_COL], rows[LATITUDE_COL])
    records = tuple(
        GeoRecord(longitude=_optional_float(lon), latitude=_optional_float(lat))
        for lon, lat in zip(longitude, latitude)
    )
    viewport = Viewport.from_series(longitude, latitude)
    if viewport is None:
        logger.warning("State %s in %s has no known coordinates", state, year)
    return StateMap(state=state, year=year, records=records, viewport=viewport)


def map_state(
    state: int | str, year: int | str, data_dir: str | Path
) -> Optional[StateMap]:
    """Accident locations for ``state`` in ``year``.

    Parameters
    ----------
    state : int or str
        FARS numeric state code.
    year : int or str
        Four-digit year.
    data_dir : str or Path
        Directory holding the yearly accident files.

    Returns
    -------
    StateMap or None
        ``None`` when the state has no rows that year.

    Raises
    ------
    SourceNotFound
        If the year's file does not exist.
    InvalidState
        If ``state`` does not appear in the year's ``STATE`` column.
    """
    year_num = normalize_year(year)
    table = read_table(make_filename(year_num, data_dir))
    state_num = validate_state(table, state)
    rows = filter_state(table, state_num)
    logger.info("State %s has %d accidents in %s", state_num, len(rows), year_num)
    return build_state_map(rows, state_num, year_num)
