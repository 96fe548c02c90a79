"""Month-by-month amortization and portfolio simulation for a pair of loans.

``run_months`` is the single source of truth for the monthly ledger: the
schedule builder wraps its output into rows, and the schedule-wide
break-even solver re-runs it at trial rates.

Portfolios grow as an ordinary annuity: one month of growth is applied to
the existing value, then that month's contribution is added.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional

from mortgage_roi.models.loan import SolvedLoan
from mortgage_roi.simulation.loan_solver import PMI_LTV_THRESHOLD


@dataclass(frozen=True)
class StrategySetup:
    """Which loan pays more / costs more, and what each portfolio starts with.

    Index 0 is loan A, 1 is loan B, None means the two are equal.
    """
    higher_payment_index: Optional[int]
    lower_payment_index: Optional[int]
    lower_interest_index: Optional[int]
    higher_interest_index: Optional[int]
    initial_delta: float
    seed_primary: float
    seed_alt: float
    alt_payment: float


@dataclass
class MonthState:
    """Raw simulation state at the end of one month."""
    month: int
    payment_a: float
    payment_b: float
    principal_paid_a: float
    principal_paid_b: float
    interest_paid_a: float
    interest_paid_b: float
    pmi_paid_a: float
    pmi_paid_b: float
    balance_a: float
    balance_b: float
    pmi_active_a: bool
    pmi_active_b: bool
    delta_sum: float
    interest_delta_sum: float
    portfolio_value: float
    portfolio_value_alt: float
    contribution_sum: float
    contribution_sum_alt: float

    @property
    def portfolio_gain(self) -> float:
        return self.portfolio_value - self.contribution_sum

    @property
    def portfolio_gain_alt(self) -> float:
        if not math.isfinite(self.portfolio_value_alt):
            return math.nan
        if self.contribution_sum_alt == 0:
            return 0.0
        return self.portfolio_value_alt - self.contribution_sum_alt


@dataclass
class _MonthStep:
    payment: float = 0.0
    principal_paid: float = 0.0
    interest: float = 0.0
    pmi_paid: float = 0.0
    pmi_active: bool = False


class _Amortizer:
    """Running balance of one loan."""

    def __init__(self, loan: SolvedLoan):
        self.loan = loan
        self.balance = loan.principal
        self.last_month = loan.active_months
        self.pmi = loan.monthly_pmi or 0.0
        self.pmi_threshold = loan.principal * PMI_LTV_THRESHOLD

    def step(self, month: int) -> _MonthStep:
        if month > self.last_month:
            self.balance = 0.0
            return _MonthStep()

        pmi_active = self.pmi > 0 and self.balance > self.pmi_threshold
        pmi_paid = self.pmi if pmi_active else 0.0
        interest = self.balance * self.loan.monthly_rate
        principal_paid = min(max(self.loan.monthly_payment - interest, 0.0), self.balance)
        self.balance = max(self.balance - principal_paid, 0.0)
        return _MonthStep(
            payment=self.loan.monthly_payment + pmi_paid,
            principal_paid=principal_paid,
            interest=interest,
            pmi_paid=pmi_paid,
            pmi_active=pmi_active,
        )


def _compare(a: float, b: float, prefer_larger: bool) -> Optional[int]:
    if a == b:
        return None
    return 0 if (a > b) == prefer_larger else 1


def strategy_setup(loan_a: SolvedLoan, loan_b: SolvedLoan) -> StrategySetup:
    """Derive payment/interest ordering and the two portfolio seeds.

    The primary portfolio starts with loan B's closing costs plus any
    principal loan A avoided borrowing; the alternate one mirrors it.
    """
    higher_payment = _compare(loan_a.monthly_payment, loan_b.monthly_payment, prefer_larger=True)
    lower_interest = _compare(loan_a.total_interest, loan_b.total_interest, prefer_larger=False)

    closing_a = loan_a.closing_costs or 0.0
    closing_b = loan_b.closing_costs or 0.0
    principal_delta = loan_b.principal - loan_a.principal

    alt_payment = loan_b.monthly_payment
    if not (math.isfinite(alt_payment) and alt_payment > 0):
        alt_payment = 0.0

    return StrategySetup(
        higher_payment_index=higher_payment,
        lower_payment_index=None if higher_payment is None else 1 - higher_payment,
        lower_interest_index=lower_interest,
        higher_interest_index=None if lower_interest is None else 1 - lower_interest,
        initial_delta=abs(loan_a.monthly_payment - loan_b.monthly_payment),
        seed_primary=closing_b + max(-principal_delta, 0.0),
        seed_alt=closing_a + max(principal_delta, 0.0),
        alt_payment=alt_payment,
    )


def run_months(
    loan_a: SolvedLoan,
    loan_b: SolvedLoan,
    monthly_return_rate: float,
    setup: StrategySetup | None = None,
) -> Iterator[MonthState]:
    """Yield the simulation state for months 1..max(term_a, term_b).

    A nan ``monthly_return_rate`` leaves both portfolios nan while the
    amortization and delta columns are still produced.
    """
    if setup is None:
        setup = strategy_setup(loan_a, loan_b)

    track_a = _Amortizer(loan_a)
    track_b = _Amortizer(loan_b)
    n_months = max(track_a.last_month, track_b.last_month)
    grow = math.isfinite(monthly_return_rate)

    delta_sum = 0.0
    interest_delta_sum = 0.0
    value = setup.seed_primary if grow else math.nan
    value_alt = setup.seed_alt if grow else math.nan
    contributed = setup.seed_primary
    contributed_alt = setup.seed_alt
    contribution_primary = setup.initial_delta if math.isfinite(setup.initial_delta) else 0.0

    for month in range(1, n_months + 1):
        step_a = track_a.step(month)
        step_b = track_b.step(month)

        if setup.higher_payment_index == 0:
            delta_sum += step_a.payment - step_b.payment
        else:
            delta_sum += step_b.payment - step_a.payment

        cost_a = step_a.interest + step_a.pmi_paid
        cost_b = step_b.interest + step_b.pmi_paid
        if setup.higher_interest_index == 0:
            interest_delta_sum += cost_a - cost_b
        elif setup.higher_interest_index == 1:
            interest_delta_sum += cost_b - cost_a

        # Loan B's payment is freed up for investing once its term ends
        contribution_alt = setup.alt_payment if month > track_b.last_month else 0.0

        if grow:
            value = value * (1.0 + monthly_return_rate) + contribution_primary
            value_alt = value_alt * (1.0 + monthly_return_rate) + contribution_alt
            contributed += contribution_primary
            contributed_alt += contribution_alt

        yield MonthState(
            month=month,
            payment_a=step_a.payment,
            payment_b=step_b.payment,
            principal_paid_a=step_a.principal_paid,
            principal_paid_b=step_b.principal_paid,
            interest_paid_a=step_a.interest,
            interest_paid_b=step_b.interest,
            pmi_paid_a=step_a.pmi_paid,
            pmi_paid_b=step_b.pmi_paid,
            balance_a=track_a.balance,
            balance_b=track_b.balance,
            pmi_active_a=step_a.pmi_active,
            pmi_active_b=step_b.pmi_active,
            delta_sum=delta_sum,
            interest_delta_sum=interest_delta_sum,
            portfolio_value=value,
            portfolio_value_alt=value_alt,
            contribution_sum=contributed,
            contribution_sum_alt=contributed_alt,
        )
