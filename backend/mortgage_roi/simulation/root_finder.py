"""Bounded bisection root-finder.

Every solve runs a fixed number of halvings instead of stopping on a
tolerance, so the cost of a solve is known up front. Failure to bracket a
root is reported as nan, never raised.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from mortgage_roi.simulation.annuity import payment_from_rate

EXACT_MATCH_TOLERANCE = 1e-6


@dataclass(frozen=True)
class BisectionLimits:
    """Search bounds and fixed work for one call site."""
    seed_high: float
    expansion_guard: int
    iterations: int


RATE_SOLVE_LIMITS = BisectionLimits(seed_high=0.5, expansion_guard=20, iterations=60)
BREAK_EVEN_MONTH_LIMITS = BisectionLimits(seed_high=0.5, expansion_guard=30, iterations=60)
BREAK_EVEN_SCHEDULE_LIMITS = BisectionLimits(seed_high=1.0, expansion_guard=20, iterations=70)


def bisect(
    objective: Callable[[float], float],
    target: float,
    limits: BisectionLimits,
    low: float = 0.0,
) -> float:
    """Find x >= low with objective(x) ~= target.

    The objective only needs to be monotonic; whether it rises or falls is
    read from its value at ``low``. ``high`` starts at ``limits.seed_high``
    and doubles until the target is bracketed.
    """
    diff_low = objective(low) - target
    if not math.isfinite(diff_low):
        return math.nan
    if abs(diff_low) < EXACT_MATCH_TOLERANCE:
        return low

    high = limits.seed_high
    diff_high = objective(high) - target
    guard = 0
    while math.isfinite(diff_high) and diff_low * diff_high > 0 and guard < limits.expansion_guard:
        high *= 2
        diff_high = objective(high) - target
        guard += 1

    if not math.isfinite(diff_high) or diff_low * diff_high > 0:
        return math.nan

    for _ in range(limits.iterations):
        mid = (low + high) / 2
        diff_mid = objective(mid) - target
        if not math.isfinite(diff_mid):
            return math.nan
        if diff_low * diff_mid <= 0:
            high = mid
        else:
            low = mid
            diff_low = diff_mid

    return (low + high) / 2


def solve_monthly_rate(principal: float, months: float, payment: float) -> float:
    """Implied monthly rate for a loan with known principal, term and payment."""
    if not (math.isfinite(principal) and math.isfinite(months) and math.isfinite(payment)):
        return math.nan
    if payment <= 0 or principal <= 0 or months <= 0:
        return math.nan

    return bisect(
        lambda rate: payment_from_rate(principal, rate, months),
        payment,
        RATE_SOLVE_LIMITS,
    )
