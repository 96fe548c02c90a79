"""Outcome aggregator — collapses the schedule into headline figures.

Reads the terminal row and the row at which the shorter loan is paid off.
Pure arithmetic over ScheduleResult; undefined inputs yield None rather
than raising.
"""
from __future__ import annotations

import math
from typing import Optional

from mortgage_roi.formatting import UNDEFINED, format_percent
from mortgage_roi.models.loan import SolvedLoan
from mortgage_roi.models.outcome import OptionComparison, OutcomeSummary
from mortgage_roi.models.schedule import ScheduleResult, ScheduleRow
from mortgage_roi.simulation.break_even import solve_break_even_over_schedule

CAPITAL_GAINS_TAX_RATE = 0.15


def capital_gains_tax(gain: Optional[float], tax_rate: float = CAPITAL_GAINS_TAX_RATE) -> float:
    """Flat tax on a positive gain; losses and undefined gains owe nothing."""
    if gain is None or not math.isfinite(gain) or gain <= 0:
        return 0.0
    return gain * tax_rate


def _interest_credit(index: int, schedule: ScheduleResult, saved: float) -> float:
    return saved if schedule.lower_interest_index == index else 0.0


def find_crossover_month(
    schedule: ScheduleResult,
    loan_a: SolvedLoan,
    loan_b: SolvedLoan,
    tax_rate: Optional[float] = CAPITAL_GAINS_TAX_RATE,
) -> Optional[int]:
    """First month where the leading strategy changes.

    Each strategy is valued as its (after-tax, unless ``tax_rate`` is None)
    portfolio plus equity built in its loan. Returns None when both loans
    share a term or the lead never flips.
    """
    if loan_a.active_months == loan_b.active_months:
        return None

    prev_diff = None
    for row in schedule.rows:
        if row.portfolio_value is None or row.portfolio_value_alt is None:
            return None
        value = row.portfolio_value
        value_alt = row.portfolio_value_alt
        if tax_rate is not None:
            value -= capital_gains_tax(row.portfolio_gain, tax_rate)
            value_alt -= capital_gains_tax(row.portfolio_gain_alt, tax_rate)
        equity = loan_a.principal - row.balance_a
        equity_alt = loan_b.principal - row.balance_b
        diff = (value + equity) - (value_alt + equity_alt)

        if prev_diff is not None and prev_diff * diff < 0:
            return row.month
        prev_diff = diff

    return None


def _payoff_row(schedule: ScheduleResult, month: int) -> Optional[ScheduleRow]:
    if 1 <= month <= len(schedule.rows):
        return schedule.rows[month - 1]
    return None


def summarize_outcome(
    schedule: ScheduleResult,
    loan_a: SolvedLoan,
    loan_b: SolvedLoan,
    tax_rate: float = CAPITAL_GAINS_TAX_RATE,
) -> Optional[OutcomeSummary]:
    """Net after-tax wealth of each strategy, the winner, and crossover months."""
    end = schedule.end
    if end is None or end.portfolio_value is None or end.portfolio_value_alt is None:
        return None

    saved = end.interest_delta_sum
    tax_1 = capital_gains_tax(end.portfolio_gain, tax_rate)
    tax_2 = capital_gains_tax(end.portfolio_gain_alt, tax_rate)
    net_1 = end.portfolio_value - tax_1 + _interest_credit(0, schedule, saved)
    net_2 = end.portfolio_value_alt - tax_2 + _interest_credit(1, schedule, saved)
    if not (math.isfinite(net_1) and math.isfinite(net_2)):
        return None

    diff = net_1 - net_2
    winner_index = None if diff == 0 else (0 if diff > 0 else 1)

    payoff_month = min(loan_a.active_months, loan_b.active_months)
    payoff_row = _payoff_row(schedule, payoff_month)
    longer_index = 0 if loan_a.active_months >= loan_b.active_months else 1

    if payoff_row is not None:
        portfolio_total = (payoff_row.portfolio_value or 0.0) + (payoff_row.portfolio_value_alt or 0.0)
        payoff_balance = payoff_row.balance_a if longer_index == 0 else payoff_row.balance_b
    else:
        portfolio_total = end.portfolio_value + end.portfolio_value_alt
        payoff_balance = None

    return OutcomeSummary(
        winner_index=winner_index,
        difference=abs(diff),
        net_option_1=net_1,
        net_option_2=net_2,
        tax_option_1=tax_1,
        tax_option_2=tax_2,
        portfolio_total=portfolio_total,
        payoff_month=payoff_row.month if payoff_row else None,
        payoff_years=payoff_row.month / 12 if payoff_row else None,
        payoff_balance=payoff_balance,
        crossover_month_with_tax=find_crossover_month(schedule, loan_a, loan_b, tax_rate),
        crossover_month_no_tax=find_crossover_month(schedule, loan_a, loan_b, None),
    )


def compare_options(
    schedule: ScheduleResult,
    loan_a: SolvedLoan,
    loan_b: SolvedLoan,
    tax_rate: float = CAPITAL_GAINS_TAX_RATE,
) -> list[OptionComparison]:
    """Per-option totals for the comparison table.

    The schedule-wide break-even return is only reported when the two
    monthly payments differ.
    """
    end = schedule.end
    loans = (loan_a, loan_b)
    total_payments = (
        sum(row.payment_a for row in schedule.rows),
        sum(row.payment_b for row in schedule.rows),
    )

    show_break_even = schedule.higher_payment_index is not None
    break_even_rate = solve_break_even_over_schedule(loan_a, loan_b) if show_break_even else math.nan
    label = format_percent(break_even_rate) if show_break_even else UNDEFINED

    comparisons = []
    for index, loan in enumerate(loans):
        if end is not None:
            value = end.portfolio_value if index == 0 else end.portfolio_value_alt
            gain = end.portfolio_gain if index == 0 else end.portfolio_gain_alt
            saved = end.interest_delta_sum if index == schedule.lower_interest_index else None
        else:
            value = gain = saved = None

        tax = capital_gains_tax(gain, tax_rate)
        pmi_end_month = schedule.pmi.end_month_a if index == 0 else schedule.pmi.end_month_b
        pmi_total = None
        if loan.monthly_pmi is not None and pmi_end_month:
            pmi_total = loan.monthly_pmi * pmi_end_month

        comparisons.append(OptionComparison(
            label=loan.label,
            payment=loan.payment_with_pmi,
            total_payment=total_payments[index],
            total_interest=loan.total_interest,
            delta_sum=end.delta_sum if end is not None else None,
            interest_saved=saved,
            portfolio_value=value,
            portfolio_gain=gain,
            tax_amount=tax,
            after_tax_portfolio_value=value - tax if value is not None else None,
            after_tax_portfolio_gain=gain - tax if gain is not None else None,
            break_even_rate=break_even_rate if math.isfinite(break_even_rate) else None,
            break_even_label=label,
            pmi_amount=loan.monthly_pmi,
            pmi_end_month=pmi_end_month,
            pmi_total=pmi_total,
        ))
    return comparisons


def lowest_interest_label(loan_a: SolvedLoan, loan_b: SolvedLoan) -> str:
    """Label of the option with less lifetime interest, or 'either option'."""
    if loan_a.total_interest == loan_b.total_interest:
        return "either option"
    return loan_a.label if loan_a.total_interest < loan_b.total_interest else loan_b.label
