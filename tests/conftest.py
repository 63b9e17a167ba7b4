from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

ROWS_2014 = {
    "STATE": [1, 1, 2, 1, 6],
    "ST_CASE": [10001, 10002, 20001, 10003, 60001],
    "MONTH": [1, 1, 2, 12, 12],
    "LATITUDE": [32.1, 32.2, 61.2, 32.3, 36.7],
    "LONGITUDE": [-86.1, -86.2, -149.9, -86.3, -119.8],
}

# State 1 carries one unknown latitude and one unknown longitude marker
ROWS_2015 = {
    "STATE": [1, 1, 1, 6, 6, 2],
    "ST_CASE": [10001, 10002, 10003, 60001, 60002, 20001],
    "MONTH": [1, 3, 3, 3, 7, 12],
    "LATITUDE": [32.5, 99.9999, 33.1, 34.0, 37.5, 58.3],
    "LONGITUDE": [-86.5, -87.0, 999.9999, -118.2, -122.4, -134.4],
}


def write_year(data_dir: Path, year: int, rows: dict) -> Path:
    path = data_dir / f"accident_{year}.csv.bz2"
    pd.DataFrame(rows).to_csv(path, index=False, compression="bz2")
    return path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory with accident files for 2014 and 2015 only."""
    write_year(tmp_path, 2014, ROWS_2014)
    write_year(tmp_path, 2015, ROWS_2015)
    return tmp_path
