"""Tests for display formatting."""

import pytest

from ohmsim.utils import format_unit


@pytest.mark.parametrize("value, unit, expected", [
    (0.0, "V", "0 V"),
    (1e-13, "A", "0 A"),
    (4.7e-12, "F", "4.7 pF"),
    (2.2e-9, "F", "2.2 nF"),
    (3.3e-6, "A", "3.3 µA"),
    (0.009, "A", "9 mA"),
    (-0.0125, "A", "-12.5 mA"),
    (9.0, "V", "9 V"),
    (1500.0, "W", "1.5 kW"),
    (1.23456, "V", "1.235 V"),
])
def test_format_unit(value, unit, expected):
    assert format_unit(value, unit) == expected


def test_precision():
    assert format_unit(1.23456, "V", precision=1) == "1.2 V"
