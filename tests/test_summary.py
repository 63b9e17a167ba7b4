from __future__ import annotations

import warnings
from pathlib import Path

import pandas as pd
import pytest

from fars.errors import InvalidYearWarning
from fars.ingest import project_year
from fars.summary import (
    combine_years,
    count_by_month,
    pivot_counts,
    render_summary,
    summarize_years,
)

from conftest import write_year


def test_summary_has_month_rows_and_year_columns(data_dir: Path):
    matrix = summarize_years([2014, 2015], data_dir)

    assert list(matrix.columns) == [2014, 2015]
    assert matrix.index.name == "MONTH"
    assert matrix.index.tolist() == [1, 2, 3, 7, 12]
    assert matrix.loc[1, 2014] == 2
    assert matrix.loc[12, 2014] == 2
    assert matrix.loc[3, 2015] == 3
    assert pd.isna(matrix.loc[3, 2014])
    assert pd.isna(matrix.loc[2, 2015])


def test_column_sums_match_ingested_rows(data_dir: Path):
    matrix = summarize_years([2014, 2015], data_dir)

    assert matrix[2014].sum() == 5
    assert matrix[2015].sum() == 6


def test_columns_are_sorted_regardless_of_request_order(data_dir: Path):
    matrix = summarize_years(["2015", 2014], data_dir)

    assert list(matrix.columns) == [2014, 2015]


def test_summary_is_deterministic(data_dir: Path):
    first = summarize_years([2015, 2014], data_dir)
    second = summarize_years([2015, 2014], data_dir)

    pd.testing.assert_frame_equal(first, second)


def test_missing_year_is_dropped_with_warning(data_dir: Path):
    with pytest.warns(InvalidYearWarning, match="invalid year: 2013"):
        matrix = summarize_years([2013, 2015], data_dir)

    assert list(matrix.columns) == [2015]
    assert matrix[2015].sum() == 6


def test_all_years_missing_gives_empty_matrix(tmp_path: Path):
    with pytest.warns(InvalidYearWarning):
        matrix = summarize_years([2013, 2014], tmp_path)

    assert matrix.empty
    assert len(matrix.columns) == 0


def test_no_years_gives_empty_matrix_without_warnings(data_dir: Path):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        matrix = summarize_years([], data_dir)

    assert matrix.empty
    assert len(matrix.columns) == 0


def test_all_months_keeps_missing_months_empty(data_dir: Path):
    matrix = summarize_years([2014, 2015], data_dir, all_months=True)

    assert matrix.index.tolist() == list(range(1, 13))
    assert matrix.loc[4].isna().all()
    assert not (matrix.fillna(-1) == 0).any().any()


def test_count_by_month_never_emits_zero_counts():
    combined = combine_years(
        [
            pd.DataFrame({"MONTH": [5, 5, 6], "year": [2010, 2010, 2010]}),
            pd.DataFrame({"MONTH": [6], "year": [2011]}),
        ]
    )

    counts = count_by_month(combined)

    assert counts.to_dict("records") == [
        {"year": 2010, "MONTH": 5, "n": 2},
        {"year": 2010, "MONTH": 6, "n": 1},
        {"year": 2011, "MONTH": 6, "n": 1},
    ]


def test_empty_input_flows_through_every_step():
    combined = combine_years([])
    counts = count_by_month(combined)

    assert list(combined.columns) == ["MONTH", "year"]
    assert counts.empty
    assert pivot_counts(counts).empty
    assert pivot_counts(counts, all_months=True).index.tolist() == list(range(1, 13))


def test_render_summary_is_captioned_and_centered(data_dir: Path):
    matrix = summarize_years([2014, 2015], data_dir)

    lines = render_summary(matrix).splitlines()

    assert lines[0] == "Table: Fatalities by Month"
    assert lines[2] == "| MONTH | 2014 | 2015 |"
    assert lines[3] == "|:-----:|:----:|:----:|"
    assert len(lines) == 4 + len(matrix.index)
    month_three = [cell.strip() for cell in lines[6].strip("|").split("|")]
    assert month_three == ["3", "", "3"]


def test_render_summary_custom_caption():
    rendered = render_summary(pivot_counts(count_by_month(combine_years([]))), caption="Empty")

    assert rendered.splitlines()[0] == "Table: Empty"


@pytest.fixture
def blank_month_dir(tmp_path: Path) -> Path:
    write_year(
        tmp_path,
        2016,
        {
            "STATE": [1, 1, 6],
            "MONTH": [1, None, 2],
            "LATITUDE": [32.0, 33.0, 34.0],
            "LONGITUDE": [-86.0, -87.0, -118.0],
        },
    )
    return tmp_path


def test_project_year_keeps_blank_month_as_integer_na():
    table = pd.DataFrame({"MONTH": [1.0, float("nan"), 2.0]})

    frame = project_year(table, 2016)

    assert str(frame["MONTH"].dtype) == "Int64"
    assert frame["MONTH"].isna().tolist() == [False, True, False]
    assert frame["year"].tolist() == [2016, 2016, 2016]


def test_blank_month_rows_are_counted(blank_month_dir: Path):
    matrix = summarize_years([2016], blank_month_dir)

    assert matrix[2016].sum() == 3
    assert str(matrix.index.dtype) == "Int64"
    assert matrix.index[:2].tolist() == [1, 2]
    assert pd.isna(matrix.index[-1])
    assert matrix.iloc[-1][2016] == 1


def test_blank_month_row_follows_all_months(blank_month_dir: Path):
    matrix = summarize_years([2016], blank_month_dir, all_months=True)

    assert len(matrix.index) == 13
    assert matrix.index[:12].tolist() == list(range(1, 13))
    assert pd.isna(matrix.index[-1])
    assert matrix[2016].sum() == 3


def test_render_summary_labels_blank_month(blank_month_dir: Path):
    matrix = summarize_years([2016], blank_month_dir)

    last = [cell.strip() for cell in render_summary(matrix).splitlines()[-1].strip("|").split("|")]

    assert last == ["NA", "1"]
