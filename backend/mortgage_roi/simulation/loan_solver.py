"""Loan solver — fills in the one blank field of a loan option.

Exactly one of principal, years, rate and payment must be blank. The blank
value is derived from the other three, then totals and the PMI payoff month
are computed from the fully determined loan.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from mortgage_roi.models.loan import LoanError, LoanErrorKind, LoanInput, SolvedLoan
from mortgage_roi.simulation.annuity import (
    parse_number,
    payment_from_rate,
    principal_from_payment,
    principal_from_purchase,
)
from mortgage_roi.simulation.root_finder import solve_monthly_rate

PMI_LTV_THRESHOLD = 0.78  # PMI drops once balance <= 78% of original principal

CORE_FIELDS = ("principal", "years", "rate", "payment")

INPUT_SHAPE_MESSAGE = (
    "Leave exactly one of the following fields blank: principal, years, rate, payment."
)
PAYMENT_TOO_LOW_MESSAGE = "Payment is too low for this loan."
INVALID_NUMBERS_MESSAGE = "Please enter valid numbers."


@dataclass(frozen=True)
class ParsedLoanInput:
    """Numeric view of a LoanInput; blank fields are nan."""
    principal: float
    years: float
    rate: float
    payment: float
    closing_costs: float
    pmi: float
    missing_fields: tuple[str, ...]

    @property
    def missing_field(self) -> Optional[str]:
        return self.missing_fields[0] if self.missing_fields else None


def parse_loan_input(loan_input: LoanInput) -> ParsedLoanInput:
    """Parse raw fields and record which core fields are blank."""
    values = {name: parse_number(getattr(loan_input, name)) for name in CORE_FIELDS}

    derived = principal_from_purchase(
        parse_number(loan_input.purchase_price), parse_number(loan_input.down_percent),
    )
    if math.isfinite(derived):
        values["principal"] = derived

    return ParsedLoanInput(
        closing_costs=parse_number(loan_input.closing_costs),
        pmi=parse_number(loan_input.pmi),
        missing_fields=tuple(name for name in CORE_FIELDS if not math.isfinite(values[name])),
        **values,
    )


def find_pmi_payoff_month(
    principal: float, monthly_rate: float, payment: float, term_months: float,
) -> Optional[int]:
    """First month whose ending balance is at or below the PMI threshold."""
    if not principal > 0:
        return None
    threshold = principal * PMI_LTV_THRESHOLD
    balance = principal
    for month in range(1, int(math.floor(term_months + 1e-9)) + 1):
        interest = balance * monthly_rate
        principal_paid = min(payment - interest, balance)
        balance = max(balance - principal_paid, 0.0)
        if balance <= threshold:
            return month
    return None


def _solve_years(principal: float, rate: float, payment: float) -> Union[float, LoanError]:
    monthly_rate = rate / 100 / 12
    if payment == 0 or monthly_rate <= -1:
        return math.nan
    if monthly_rate == 0:
        return principal / payment / 12

    inner = 1 - principal * monthly_rate / payment
    if inner <= 0:
        return LoanError(
            kind=LoanErrorKind.payment_too_low,
            error_message=PAYMENT_TOO_LOW_MESSAGE,
            missing_field="years",
        )
    months = -math.log(inner) / math.log(1 + monthly_rate)
    return months / 12


def solve_loan(loan_input: LoanInput) -> Union[SolvedLoan, LoanError]:
    """Solve a loan option, returning a SolvedLoan or a LoanError."""
    parsed = parse_loan_input(loan_input)
    if len(parsed.missing_fields) != 1:
        return LoanError(
            kind=LoanErrorKind.input_shape,
            error_message=INPUT_SHAPE_MESSAGE,
            missing_field=parsed.missing_field,
        )

    missing = parsed.missing_field
    principal, years, rate, payment = parsed.principal, parsed.years, parsed.rate, parsed.payment

    if missing == "payment":
        payment = payment_from_rate(principal, rate / 100 / 12, years * 12)
    elif missing == "principal":
        principal = principal_from_payment(payment, rate / 100 / 12, years * 12)
    elif missing == "years":
        solved = _solve_years(principal, rate, payment)
        if isinstance(solved, LoanError):
            return solved
        years = solved
    else:
        rate = solve_monthly_rate(principal, years * 12, payment) * 12 * 100

    term_months = years * 12
    monthly_rate = rate / 100 / 12
    final_payment = payment_from_rate(principal, monthly_rate, term_months)
    total_payment = final_payment * term_months

    pmi = parsed.pmi
    pmi_payoff_month = None
    if pmi > 0 and math.isfinite(final_payment) and math.isfinite(monthly_rate):
        pmi_payoff_month = find_pmi_payoff_month(principal, monthly_rate, final_payment, term_months)
    pmi_total = pmi * pmi_payoff_month if pmi_payoff_month is not None else 0.0
    total_interest = total_payment - principal + pmi_total

    if not all(math.isfinite(v) for v in (principal, years, rate, final_payment, total_payment)):
        return LoanError(
            kind=LoanErrorKind.invalid_numbers,
            error_message=INVALID_NUMBERS_MESSAGE,
            missing_field=missing,
        )

    pmi_value = pmi if math.isfinite(pmi) else None
    return SolvedLoan(
        label=loan_input.label,
        missing_field=missing,
        principal=principal,
        years=years,
        term_months=term_months,
        annual_rate_percent=rate,
        monthly_rate=monthly_rate,
        monthly_payment=final_payment,
        monthly_pmi=pmi_value,
        payment_with_pmi=final_payment + (pmi_value or 0.0),
        closing_costs=parsed.closing_costs if math.isfinite(parsed.closing_costs) else None,
        pmi_payoff_month=pmi_payoff_month,
        total_payment=total_payment,
        total_interest=total_interest,
    )
