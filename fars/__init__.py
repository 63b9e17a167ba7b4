"""Fatality counts and accident maps from yearly FARS ``accident_<year>.csv.bz2`` files.

Read a batch of years into a month-by-year count matrix with
:func:`fars.summary.summarize_years`, or pull one state's cleaned accident
coordinates for a year with :func:`fars.mapping.map_state` and draw them with
:func:`fars.plotting.create_state_map`.
"""
