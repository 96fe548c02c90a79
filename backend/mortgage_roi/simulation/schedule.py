"""Schedule engine — the monthly ledger for a pair of solved loans.

Wraps the ledger simulation into ScheduleRow models, tallies PMI months,
and attaches the break-even return as of each month.
"""
from __future__ import annotations

import math
from typing import Optional

from mortgage_roi.formatting import break_even_label
from mortgage_roi.models.loan import SolvedLoan
from mortgage_roi.models.schedule import PmiSummary, ScheduleResult, ScheduleRow
from mortgage_roi.simulation.break_even import solve_break_even_at_month
from mortgage_roi.simulation.ledger import run_months, strategy_setup


def finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _pmi_total(loan: SolvedLoan, months: int) -> Optional[float]:
    if loan.monthly_pmi is None:
        return None
    return loan.monthly_pmi * months


def build_schedule(
    loan_a: SolvedLoan, loan_b: SolvedLoan, monthly_return_rate: float,
) -> ScheduleResult:
    """Run one forward pass over max(term_a, term_b) months.

    Args:
        loan_a: Loan funded by the primary strategy, which invests the
            monthly payment difference from month 1.
        loan_b: Loan funded by the alternate strategy, which invests loan
            B's freed-up payment once loan B is paid off.
        monthly_return_rate: Monthly reinvestment rate; nan leaves the
            portfolio columns undefined.
    """
    setup = strategy_setup(loan_a, loan_b)
    alt_term = loan_b.active_months

    rows: list[ScheduleRow] = []
    pmi_months = [0, 0]
    pmi_end = [None, None]

    for state in run_months(loan_a, loan_b, monthly_return_rate, setup):
        for i, active in enumerate((state.pmi_active_a, state.pmi_active_b)):
            if active:
                pmi_months[i] += 1
                pmi_end[i] = state.month

        rate = solve_break_even_at_month(
            months=state.month,
            initial_delta=setup.initial_delta,
            alt_payment=setup.alt_payment,
            alt_term_months=alt_term,
            seed_primary=setup.seed_primary,
            seed_alt=setup.seed_alt,
            interest_saved=state.interest_delta_sum,
            lower_interest_index=setup.lower_interest_index,
        )

        rows.append(ScheduleRow(
            month=state.month,
            payment_a=state.payment_a,
            payment_b=state.payment_b,
            principal_paid_a=state.principal_paid_a,
            principal_paid_b=state.principal_paid_b,
            interest_paid_a=state.interest_paid_a,
            interest_paid_b=state.interest_paid_b,
            pmi_paid_a=state.pmi_paid_a,
            pmi_paid_b=state.pmi_paid_b,
            balance_a=state.balance_a,
            balance_b=state.balance_b,
            delta_sum=state.delta_sum,
            interest_delta_sum=state.interest_delta_sum,
            portfolio_value=finite_or_none(state.portfolio_value),
            portfolio_gain=finite_or_none(state.portfolio_gain),
            portfolio_value_alt=finite_or_none(state.portfolio_value_alt),
            portfolio_gain_alt=finite_or_none(state.portfolio_gain_alt),
            break_even_rate=finite_or_none(rate),
            break_even_label=break_even_label(rate, state.interest_delta_sum),
        ))

    return ScheduleResult(
        rows=rows,
        higher_payment_index=setup.higher_payment_index,
        lower_payment_index=setup.lower_payment_index,
        lower_interest_index=setup.lower_interest_index,
        monthly_return_rate=finite_or_none(monthly_return_rate),
        initial_delta=setup.initial_delta,
        seed_primary=setup.seed_primary,
        seed_alt=setup.seed_alt,
        pmi=PmiSummary(
            months_a=pmi_months[0],
            months_b=pmi_months[1],
            end_month_a=pmi_end[0],
            end_month_b=pmi_end[1],
            total_a=_pmi_total(loan_a, pmi_months[0]),
            total_b=_pmi_total(loan_b, pmi_months[1]),
        ),
        end=rows[-1] if rows else None,
    )
