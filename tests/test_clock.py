from datetime import date

import pytest

from equipcare.clock import Clock, FixedClock, SystemClock, get_clock


def test_clock_is_an_interface():
    with pytest.raises(TypeError):
        Clock()


def test_fixed_clock():
    assert FixedClock(date(2024, 2, 29)).today() == date(2024, 2, 29)


def test_default_clock_is_system_date():
    clock = get_clock()
    assert isinstance(clock, SystemClock)
    assert clock.today() == date.today()
