# tests/test_karanam.py
from datetime import date, timedelta

import pytest

from app.core.karanam import (
    RECURRING_KARANAMS,
    calc_karanam,
    is_vishti,
    karanam_name,
    karanam_number,
)
from conftest import make_stub


def test_fixed_karanams():
    assert karanam_name(1) == "Kimstughna"
    assert karanam_name(58) == "Sakuni"
    assert karanam_name(59) == "Chatushpada"
    assert karanam_name(60) == "Naga"


def test_recurring_cycle_of_seven():
    assert karanam_name(2) == RECURRING_KARANAMS[0] == "Bava"
    assert karanam_name(9) == karanam_name(2)
    assert [karanam_name(n) for n in range(2, 9)] == list(RECURRING_KARANAMS)
    assert karanam_name(57) == "Vishti"


def test_out_of_range_defaults_to_bava():
    assert karanam_name(0) == "Bava"
    assert karanam_name(61) == "Bava"


def test_vishti_flag():
    vishti = [n for n in range(1, 61) if is_vishti(n)]
    assert vishti == [8, 15, 22, 29, 36, 43, 50, 57]


@pytest.mark.parametrize("angle,number", [(0.0, 1), (5.99, 1), (6.0, 2), (342.0, 58), (354.0, 60), (359.9, 60)])
def test_karanam_number(angle, number):
    assert karanam_number(angle) == number


def test_calc_karanam_solver_end(base, one_minute):
    eph = make_stub(date(2026, 1, 4), moon_rate=0.5)
    k = calc_karanam(eph, base)
    assert k.number == 1
    assert k.name == "Kimstughna"
    assert k.is_vishti is False
    assert k.estimated is False
    assert timedelta(0) <= (base + timedelta(hours=12)) - k.end_time <= one_minute


def test_calc_karanam_fallback_capped_to_one_unit(base):
    eph = make_stub(date(2026, 1, 4), moon0=3.0)
    k = calc_karanam(eph, base)
    assert k.estimated is True
    # 3° left at nominal 0.5°/h
    assert k.end_time == base + timedelta(hours=6)
