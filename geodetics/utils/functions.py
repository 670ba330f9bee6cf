"""Module for miscellaneous multi-use functions"""

__all__ = [
    'format_number', 'round_half_up', 'wrap360',
]

import math


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)


def wrap360(degrees: float) -> float:
    """Wraps an angle (e.g. a bearing) to [0, 360); NaN stays NaN"""
    if 0. <= degrees < 360.:
        return degrees

    return ((degrees % 360.) + 360.) % 360.


def format_number(value: float, decimals: int = 0, compact: bool = True) -> str:
    """
    Formats a number to a fixed count of decimals.

    Args:
        value:
            The value to format

        decimals: (int) (Default 0)
            The number of decimals

        compact: (bool) (Default True)
            If True, integral values are written without decimals, e.g. 0.0 -> '0'

    Returns:
        str
    """
    if compact and math.isfinite(value) and float(value).is_integer():
        return str(int(value))

    return f'{value:.{decimals}f}'
