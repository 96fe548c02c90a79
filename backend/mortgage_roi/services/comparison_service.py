"""Comparison orchestration service.

Solves both loan options, then runs the schedule engine and the outcome
aggregator on the solved pair. Loan errors are carried in the result.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone

from mortgage_roi.config import settings
from mortgage_roi.models.comparison import ComparisonRequest, ComparisonResult, OptionResult
from mortgage_roi.models.loan import LoanError
from mortgage_roi.simulation.annuity import monthly_effective_rate, parse_number
from mortgage_roi.simulation.loan_solver import solve_loan
from mortgage_roi.simulation.outcome import compare_options, lowest_interest_label, summarize_outcome
from mortgage_roi.simulation.schedule import build_schedule

logger = logging.getLogger(__name__)


def resolve_return_rate(request: ComparisonRequest) -> float:
    """Annual return percent from the request, falling back to the configured default."""
    if request.return_rate is None:
        return settings.DEFAULT_RETURN_RATE_PERCENT
    return parse_number(request.return_rate)


def run_comparison(
    request: ComparisonRequest, tax_rate: float | None = None,
) -> ComparisonResult:
    """Compare two loan options end to end.

    When either option fails to solve, the result carries the per-option
    errors and no schedule.
    """
    if tax_rate is None:
        tax_rate = settings.CAPITAL_GAINS_TAX_RATE

    option_results: list[OptionResult] = []
    for index, option in enumerate(request.options):
        solved = solve_loan(option)
        if isinstance(solved, LoanError):
            logger.warning(
                "Option %d (%s) not solved — %s: %s",
                index + 1, option.label, solved.kind.value, solved.error_message,
            )
            option_results.append(OptionResult(label=option.label, error=solved))
        else:
            option_results.append(OptionResult(label=option.label, loan=solved))

    return_rate = resolve_return_rate(request)
    result = ComparisonResult(
        options=option_results,
        return_rate_percent=return_rate if math.isfinite(return_rate) else None,
        computed_at=datetime.now(timezone.utc),
    )
    if not result.solved:
        return result

    loan_a, loan_b = (option.loan for option in option_results)
    schedule = build_schedule(loan_a, loan_b, monthly_effective_rate(return_rate))

    result.schedule = schedule
    result.outcome = summarize_outcome(schedule, loan_a, loan_b, tax_rate)
    result.comparisons = compare_options(schedule, loan_a, loan_b, tax_rate)
    result.lowest_interest_label = lowest_interest_label(loan_a, loan_b)

    logger.info(
        "Comparison complete — %d months, return %.2f%%, winner: %s",
        len(schedule.rows),
        return_rate,
        result.outcome.winner_index if result.outcome else None,
    )
    return result
