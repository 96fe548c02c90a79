"""Stateless number formatting for display and export.

Every function takes the value plus its precision; undefined values
(None, nan, inf) render as an em dash.
"""
from __future__ import annotations

import math
from typing import Optional

UNDEFINED = "—"
UNBOUNDED = "∞"

BREAK_EVEN_RATE_CAP = 1000.0  # percent; anything above is treated as unbounded


def _is_defined(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def format_currency(value: Optional[float], symbol: str = "$", decimals: int = 2) -> str:
    """Format number as $X,XXX.XX."""
    if not _is_defined(value):
        return UNDEFINED
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def format_percent(value: Optional[float], decimals: int = 2) -> str:
    if not _is_defined(value):
        return UNDEFINED
    return f"{value:.{decimals}f}%"


def format_number(value: Optional[float], decimals: int = 2) -> str:
    if not _is_defined(value):
        return UNDEFINED
    return f"{value:.{decimals}f}"


def break_even_label(
    rate: Optional[float],
    interest_delta_sum: float,
    decimals: int = 2,
    cap: float = BREAK_EVEN_RATE_CAP,
) -> str:
    """Label for a break-even annual return.

    No interest saved yet means any return favours investing, so the rate is
    unbounded. A rate above ``cap`` is also shown as unbounded.
    """
    if interest_delta_sum <= 0:
        return UNBOUNDED
    if not _is_defined(rate):
        return UNDEFINED
    if rate > cap:
        return UNBOUNDED
    return format_percent(rate, decimals)
