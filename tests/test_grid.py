"""Month and week grid generation."""

from datetime import date, timedelta

import pytest

from models.events import Granularity
from services.grid import add_months, grid_for, month_grid, shift_anchor, week_grid


@pytest.mark.parametrize("year", [2023, 2024, 2025, 2026])
@pytest.mark.parametrize("month", range(1, 13))
def test_month_grid_covers_whole_weeks(year, month):
    grid = month_grid(date(year, month, 15))

    assert len(grid) % 7 == 0
    assert grid[0].weekday() == 0
    assert grid[-1].weekday() == 6
    for a, b in zip(grid, grid[1:]):
        assert b - a == timedelta(days=1)

    first = date(year, month, 1)
    next_month = add_months(first, 1)
    day = first
    while day < next_month:
        assert day in grid
        day += timedelta(days=1)


def test_month_grid_march_2024():
    grid = month_grid(date(2024, 3, 15))

    # March 1st 2024 is a Friday, March 31st a Sunday
    assert grid[0] == date(2024, 2, 26)
    assert grid[-1] == date(2024, 3, 31)
    assert len(grid) == 35


def test_month_grid_six_weeks():
    # September 2024 starts on a Sunday and ends on a Monday
    grid = month_grid(date(2024, 9, 1))
    assert len(grid) == 42
    assert grid[0] == date(2024, 8, 26)
    assert grid[-1] == date(2024, 10, 6)


def test_month_grid_four_weeks_for_monday_february():
    grid = month_grid(date(2021, 2, 10))
    assert len(grid) == 28
    assert grid[0] == date(2021, 2, 1)


def test_week_grid_starts_monday():
    for offset in range(14):
        anchor = date(2024, 3, 11) + timedelta(days=offset)
        grid = week_grid(anchor)
        assert len(grid) == 7
        assert grid[0].weekday() == 0
        assert anchor in grid
        assert grid == [grid[0] + timedelta(days=i) for i in range(7)]


def test_week_grid_sunday_belongs_to_previous_monday():
    assert week_grid(date(2024, 3, 17))[0] == date(2024, 3, 11)


def test_grids_are_idempotent():
    anchor = date(2024, 12, 31)
    assert month_grid(anchor) == month_grid(anchor)
    assert week_grid(anchor) == week_grid(anchor)


def test_grid_for_unknown_granularity():
    with pytest.raises(ValueError):
        grid_for(date(2024, 3, 15), "day")


def test_grid_for_dispatch():
    anchor = date(2024, 3, 15)
    assert grid_for(anchor, Granularity.MONTH) == month_grid(anchor)
    assert grid_for(anchor, Granularity.WEEK) == week_grid(anchor)


def test_shift_anchor_month_clamps_day():
    assert shift_anchor(date(2024, 1, 31), Granularity.MONTH, 1) == date(2024, 2, 29)
    assert shift_anchor(date(2024, 3, 31), Granularity.MONTH, -1) == date(2024, 2, 29)
    assert shift_anchor(date(2024, 12, 15), Granularity.MONTH, 1) == date(2025, 1, 15)
    assert shift_anchor(date(2024, 1, 15), Granularity.MONTH, -1) == date(2023, 12, 15)


def test_shift_anchor_week():
    assert shift_anchor(date(2024, 3, 15), Granularity.WEEK, 1) == date(2024, 3, 22)
    assert shift_anchor(date(2024, 3, 15), Granularity.WEEK, -2) == date(2024, 3, 1)
