import pandas as pd
from shiny import reactive, render
from shiny.express import input, ui
from shinywidgets import render_plotly

# Import organized modules
from fars.config import (
    DEFAULT_MAP_YEAR,
    DEFAULT_STATE,
    DEFAULT_YEARS,
    GLOBAL_YEAR_MAX,
    GLOBAL_YEAR_MIN,
    SUMMARY_CAPTION,
    resolve_data_dir,
)
from fars.errors import FarsError
from fars.mapping import map_state
from fars.plotting import create_state_map
from fars.summary import summarize_years

DATA_DIR = resolve_data_dir()

# Helpers for UI mapping
YEAR_CHOICES = {
    str(year): str(year) for year in range(GLOBAL_YEAR_MIN, GLOBAL_YEAR_MAX + 1)
}
DEFAULT_YEAR_SELECTION = [str(year) for year in DEFAULT_YEARS]


@reactive.calc
def summary_matrix():
    years = input.years()
    if not years:
        return pd.DataFrame()
    return summarize_years(years, DATA_DIR)


@reactive.calc
def selected_state_map():
    if input.state() is None:
        return None
    # Errors surface as a notification; the plot stays empty.
    try:
        state_map = map_state(input.state(), input.map_year(), DATA_DIR)
    except FarsError as exc:
        ui.notification_show(str(exc), type="error")
        return None
    if state_map is None:
        ui.notification_show("no accidents to plot", type="message")
    return state_map


# ======================================================
#  UI LAYOUT
# ======================================================
ui.page_opts(
    title="FARS fatalities",
    fillable=False,
    full_width=True,
    lang="en",
)

with ui.sidebar(open="always", position="right"):
    ui.input_checkbox_group(
        "years",
        "Summary years",
        YEAR_CHOICES,
        selected=DEFAULT_YEAR_SELECTION,
    )
    ui.input_numeric("state", "State code", value=DEFAULT_STATE, min=1, step=1)
    ui.input_select(
        "map_year", "Map year", YEAR_CHOICES, selected=str(DEFAULT_MAP_YEAR)
    )
    ui.input_action_button(
        "reset_filters",
        "Reset filters",
        class_="btn-primary mt-3",
    )


@reactive.effect
@reactive.event(input.reset_filters)
def _reset_filters():
    ui.update_checkbox_group("years", selected=DEFAULT_YEAR_SELECTION)
    ui.update_numeric("state", value=DEFAULT_STATE)
    ui.update_select("map_year", selected=str(DEFAULT_MAP_YEAR))


with ui.card():
    ui.card_header(SUMMARY_CAPTION)

    @render.table
    def summary_table():
        matrix = summary_matrix()
        if matrix.empty:
            return pd.DataFrame()
        # Missing cells mean no recorded fatalities; show them blank
        display = matrix.astype("object").where(matrix.notna(), "")
        display.columns = [str(col) for col in display.columns]
        return display.reset_index()


with ui.card():
    ui.card_header("Fatal accidents by state")

    @render_plotly
    def state_plot():
        state_map = selected_state_map()
        if state_map is None:
            return None
        return create_state_map(state_map)
