"""Break-even reinvestment rates.

Two searches built on the shared bisection routine:

* as of a single month, using closed-form annuity future values;
* over the whole schedule, re-running the monthly simulation at each trial
  rate. This is the expensive one: every bisection step is a full pass.

Both return an annual percentage, or nan when no rate equalizes the two
strategies within the search bounds.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from mortgage_roi.models.loan import SolvedLoan
from mortgage_roi.simulation.annuity import annuity_future_value, growth_factor
from mortgage_roi.simulation.ledger import StrategySetup, run_months, strategy_setup
from mortgage_roi.simulation.root_finder import (
    BREAK_EVEN_MONTH_LIMITS,
    BREAK_EVEN_SCHEDULE_LIMITS,
    bisect,
)

logger = logging.getLogger(__name__)


def _interest_credit(index: int, lower_interest_index: Optional[int], saved: float) -> float:
    return saved if lower_interest_index == index else 0.0


def solve_break_even_at_month(
    months: int,
    initial_delta: float,
    alt_payment: float,
    alt_term_months: int,
    seed_primary: float,
    seed_alt: float,
    interest_saved: float,
    lower_interest_index: Optional[int],
) -> float:
    """Annual return at which both strategies have equal net value at ``months``.

    Net value of a strategy is its portfolio gain (future value minus
    everything contributed) plus the interest saved, when its loan is the
    cheaper one.
    """
    if not math.isfinite(interest_saved) or interest_saved <= 0:
        return math.nan
    if not math.isfinite(initial_delta):
        return math.nan

    alt_months = max(0, months - alt_term_months)
    credit_primary = _interest_credit(0, lower_interest_index, interest_saved)
    credit_alt = _interest_credit(1, lower_interest_index, interest_saved)

    def net_diff(monthly_rate: float) -> float:
        growth = growth_factor(monthly_rate, months)
        value = annuity_future_value(initial_delta, months, monthly_rate)
        value_alt = annuity_future_value(alt_payment, alt_months, monthly_rate)
        if seed_primary:
            value += seed_primary * growth
        if seed_alt:
            value_alt += seed_alt * growth
        gain = value - (initial_delta * months + seed_primary)
        gain_alt = value_alt - (alt_payment * alt_months + seed_alt)
        return (gain + credit_primary) - (gain_alt + credit_alt)

    monthly_rate = bisect(net_diff, 0.0, BREAK_EVEN_MONTH_LIMITS)
    if not math.isfinite(monthly_rate):
        return math.nan
    return ((1.0 + monthly_rate) ** 12 - 1.0) * 100


def terminal_net_difference(
    loan_a: SolvedLoan,
    loan_b: SolvedLoan,
    monthly_return_rate: float,
    setup: StrategySetup | None = None,
) -> float:
    """Primary minus alternate net value after the last month of the schedule."""
    if setup is None:
        setup = strategy_setup(loan_a, loan_b)
    end = None
    for end in run_months(loan_a, loan_b, monthly_return_rate, setup):
        pass
    if end is None:
        return math.nan

    saved = end.interest_delta_sum
    net_primary = end.portfolio_value + _interest_credit(0, setup.lower_interest_index, saved)
    net_alt = end.portfolio_value_alt + _interest_credit(1, setup.lower_interest_index, saved)
    return net_primary - net_alt


def solve_break_even_over_schedule(loan_a: SolvedLoan, loan_b: SolvedLoan) -> float:
    """Annual return at which both strategies end the schedule with equal net value."""
    setup = strategy_setup(loan_a, loan_b)

    def net_diff(annual_rate: float) -> float:
        monthly_rate = (1.0 + annual_rate) ** (1.0 / 12.0) - 1.0
        return terminal_net_difference(loan_a, loan_b, monthly_rate, setup)

    annual_rate = bisect(net_diff, 0.0, BREAK_EVEN_SCHEDULE_LIMITS)
    if not math.isfinite(annual_rate):
        logger.debug("No break-even return for %s vs %s", loan_a.label, loan_b.label)
    return annual_rate * 100
