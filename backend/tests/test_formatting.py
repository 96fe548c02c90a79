import math

from mortgage_roi.formatting import (
    UNBOUNDED,
    UNDEFINED,
    break_even_label,
    format_currency,
    format_number,
    format_percent,
)


def test_format_currency():
    assert format_currency(1234567.891) == "$1,234,567.89"
    assert format_currency(0) == "$0.00"
    assert format_currency(-2500) == "-$2,500.00"
    assert format_currency(99.6, decimals=0) == "$100"


def test_format_currency_custom_symbol():
    assert format_currency(10, symbol="€") == "€10.00"


def test_format_percent_and_number():
    assert format_percent(6.5) == "6.50%"
    assert format_percent(7, decimals=1) == "7.0%"
    assert format_number(3.14159, decimals=3) == "3.142"


def test_undefined_values_render_as_dash():
    for value in (None, math.nan, math.inf, -math.inf):
        assert format_currency(value) == UNDEFINED
        assert format_percent(value) == UNDEFINED
        assert format_number(value) == UNDEFINED


def test_break_even_label():
    assert break_even_label(5.4321, 100.0) == "5.43%"
    assert break_even_label(5.4321, 100.0, decimals=1) == "5.4%"
    assert break_even_label(5.0, 0.0) == UNBOUNDED
    assert break_even_label(5.0, -10.0) == UNBOUNDED
    assert break_even_label(math.nan, 100.0) == UNDEFINED
    assert break_even_label(None, 100.0) == UNDEFINED
    assert break_even_label(1500.0, 100.0) == UNBOUNDED
    assert break_even_label(50.0, 100.0, cap=25.0) == UNBOUNDED
