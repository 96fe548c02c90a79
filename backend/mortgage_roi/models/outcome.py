from typing import Optional

from pydantic import BaseModel


class OutcomeSummary(BaseModel):
    """Headline comparison of the two strategies at the end of the schedule."""
    winner_index: Optional[int] = None      # None when net wealth is tied
    difference: float
    net_option_1: float
    net_option_2: float
    tax_option_1: float
    tax_option_2: float
    portfolio_total: Optional[float] = None
    payoff_month: Optional[int] = None
    payoff_years: Optional[float] = None
    payoff_balance: Optional[float] = None
    crossover_month_with_tax: Optional[int] = None
    crossover_month_no_tax: Optional[int] = None


class OptionComparison(BaseModel):
    """Side-by-side totals for one option."""
    label: str
    payment: float                          # P&I + PMI
    total_payment: float
    total_interest: float
    delta_sum: Optional[float] = None
    interest_saved: Optional[float] = None
    portfolio_value: Optional[float] = None
    portfolio_gain: Optional[float] = None
    tax_amount: float = 0.0
    after_tax_portfolio_value: Optional[float] = None
    after_tax_portfolio_gain: Optional[float] = None
    break_even_rate: Optional[float] = None
    break_even_label: str
    pmi_amount: Optional[float] = None
    pmi_end_month: Optional[int] = None
    pmi_total: Optional[float] = None
