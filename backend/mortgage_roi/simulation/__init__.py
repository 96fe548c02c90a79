"""Numerical engine: annuity math, root-finding, loan solving, schedules, outcomes."""
from mortgage_roi.simulation.annuity import (
    annuity_future_value,
    monthly_effective_rate,
    parse_number,
    payment_from_rate,
    principal_from_payment,
)
from mortgage_roi.simulation.root_finder import BisectionLimits, bisect, solve_monthly_rate
from mortgage_roi.simulation.loan_solver import solve_loan
from mortgage_roi.simulation.break_even import (
    solve_break_even_at_month,
    solve_break_even_over_schedule,
)
from mortgage_roi.simulation.schedule import build_schedule
from mortgage_roi.simulation.outcome import compare_options, summarize_outcome

__all__ = [
    "annuity_future_value",
    "monthly_effective_rate",
    "parse_number",
    "payment_from_rate",
    "principal_from_payment",
    "BisectionLimits",
    "bisect",
    "solve_monthly_rate",
    "solve_loan",
    "solve_break_even_at_month",
    "solve_break_even_over_schedule",
    "build_schedule",
    "compare_options",
    "summarize_outcome",
]
