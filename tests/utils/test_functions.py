import math

from geodetics.utils.functions import *


def test_round_half_up():
    assert round_half_up(1.59, 1) == 1.6
    assert round_half_up(1.51, 1) == 1.5
    assert round_half_up(1.55, 1) == 1.6
    assert round_half_up(1.65, 1) == 1.7

    assert round_half_up(-1.59, 1) == -1.6
    assert round_half_up(-1.51, 1) == -1.5
    assert round_half_up(-1.55, 1) == -1.5
    assert round_half_up(-1.65, 1) == -1.6


def test_wrap360():
    assert wrap360(0.) == 0.
    assert wrap360(45.) == 45.
    assert wrap360(360.) == 0.
    assert wrap360(-90.) == 270.
    assert wrap360(720.5) == 0.5
    assert wrap360(-450.) == 270.
    assert math.isnan(wrap360(math.nan))


def test_format_number():
    assert format_number(1.) == '1'
    assert format_number(-0.) == '0'
    assert format_number(448251.795) == '448252'
    assert format_number(0.1, 3) == '0.100'
    assert format_number(1., 3) == '1'
    assert format_number(1., 3, compact=False) == '1.000'
    assert format_number(math.nan, 2) == 'nan'
