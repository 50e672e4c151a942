# tests/test_tamil_calendar.py
from datetime import date

import pytest

from app.core.tamil_calendar import (
    TAMIL_MONTHS,
    YEAR_NAMES,
    calc_tamil_date,
    tamil_day,
    tamil_month_index,
    tamil_weekday,
    tamil_year_name,
)
from conftest import make_stub, sunrise_at


@pytest.mark.parametrize("lon,idx", [(0.0, 0), (10.0, 0), (30.0, 1), (275.0, 9), (359.0, 11)])
def test_month_from_sun_rasi(lon, idx):
    assert tamil_month_index(lon) == idx


def test_tables():
    assert len(TAMIL_MONTHS) == 12
    assert len(YEAR_NAMES) == 60
    assert TAMIL_MONTHS[0] == "Chithirai"
    assert TAMIL_MONTHS[9] == "Thai"


@pytest.mark.parametrize(
    "d,idx,day",
    [
        (date(2026, 4, 20), 0, 7),    # Chithirai from 14 Apr
        (date(2026, 2, 1), 9, 18),    # Thai from 15 Jan
        (date(2026, 1, 5), 8, 21),    # Margazhi from 16 Dec of the previous year
        (date(2026, 4, 13), 0, 32),   # Sun already in Mesha a day early: clamped
    ],
)
def test_tamil_day(d, idx, day):
    assert tamil_day(d, idx) == day


@pytest.mark.parametrize(
    "d,name",
    [
        (date(2026, 4, 20), "Parabhava"),
        (date(2026, 4, 13), "Vishvavasu"),
        (date(1987, 4, 14), "Prabhava"),
        (date(1987, 1, 1), "Akshaya"),
        (date(2047, 4, 14), "Prabhava"),
    ],
)
def test_year_name_cycle(d, name):
    assert tamil_year_name(d) == name


def test_weekday_names():
    assert tamil_weekday(date(2026, 1, 4)) == "Nyairu"
    assert tamil_weekday(date(2026, 4, 20)) == "Thingal"


def test_calc_tamil_date_chithirai():
    d = date(2026, 4, 20)
    eph = make_stub(d, sun0=10.0)
    td = calc_tamil_date(eph, d, sunrise_at(d))
    assert td.month == "Chithirai"
    assert td.month_index == 0
    assert td.day == 7
    assert td.year == "Parabhava"
    assert td.weekday == "Thingal"
