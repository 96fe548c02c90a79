from typing import Optional

from pydantic import BaseModel


class ScheduleRow(BaseModel):
    """Both loans and both investment strategies for a single month.

    ``None`` marks a value that is undefined, e.g. portfolio values when no
    reinvestment rate was given.
    """
    month: int
    payment_a: float
    payment_b: float
    principal_paid_a: float
    principal_paid_b: float
    interest_paid_a: float
    interest_paid_b: float
    pmi_paid_a: float = 0.0
    pmi_paid_b: float = 0.0
    balance_a: float
    balance_b: float
    delta_sum: float
    interest_delta_sum: float
    portfolio_value: Optional[float] = None
    portfolio_gain: Optional[float] = None
    portfolio_value_alt: Optional[float] = None
    portfolio_gain_alt: Optional[float] = None
    break_even_rate: Optional[float] = None
    break_even_label: str


class PmiSummary(BaseModel):
    """Months PMI was charged per loan and the resulting totals."""
    months_a: int = 0
    months_b: int = 0
    end_month_a: Optional[int] = None
    end_month_b: Optional[int] = None
    total_a: Optional[float] = None
    total_b: Optional[float] = None


class ScheduleResult(BaseModel):
    """The monthly ledger plus metadata shared by every downstream view."""
    rows: list[ScheduleRow]
    higher_payment_index: Optional[int] = None
    lower_payment_index: Optional[int] = None
    lower_interest_index: Optional[int] = None
    monthly_return_rate: Optional[float] = None
    initial_delta: float
    seed_primary: float
    seed_alt: float
    pmi: PmiSummary
    end: Optional[ScheduleRow] = None
