from __future__ import annotations

import calendar

import numpy as np

DEGREE_CELSIUS = "℃"


def month_name(index: int) -> str:
    """
    Full English month name for a zero-based month index,
    e.g. 0 -> 'January', 11 -> 'December'.
    """
    if not 0 <= int(index) <= 11:
        raise ValueError(f"Month index out of range: {index!r}")
    return calendar.month_name[int(index) + 1]


def format_year(year: int) -> str:
    return str(int(year))


def format_number(value: float) -> str:
    """
    Shortest positional text that round-trips the float, never in exponent
    form: 8.0 -> '8', 1e-05 -> '0.00001'.
    """
    return np.format_float_positional(float(value), unique=True, trim="-")


def format_tick(value: float) -> str:
    return f"{value:.1f}"


def format_celsius(value: float) -> str:
    return f"{value:.1f}{DEGREE_CELSIUS}"


def format_signed_celsius(value: float) -> str:
    return f"{value:+.1f}{DEGREE_CELSIUS}"


def format_date_header(year: int, month: int) -> str:
    """Tooltip header such as '1950 - July'; `month` is one-based."""
    return f"{format_year(year)} - {month_name(int(month) - 1)}"
