import math
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

RawNumber = Union[str, float, None]


class LoanInput(BaseModel):
    """One loan option as entered: any numeric field may be blank."""
    label: str = ""
    principal: RawNumber = None
    years: RawNumber = None
    rate: RawNumber = None          # annual percent, e.g. "6" for 6%
    payment: RawNumber = None       # monthly P&I
    closing_costs: RawNumber = None
    pmi: RawNumber = None           # monthly PMI premium
    purchase_price: RawNumber = None
    down_percent: RawNumber = None


class LoanErrorKind(str, Enum):
    input_shape = "input_shape"
    payment_too_low = "payment_too_low"
    invalid_numbers = "invalid_numbers"


class LoanError(BaseModel):
    """A loan that could not be solved. Returned, never raised."""
    kind: LoanErrorKind
    error_message: str
    missing_field: Optional[str] = None


class SolvedLoan(BaseModel):
    """A fully determined loan. Payment figures exclude PMI unless named."""
    label: str = ""
    missing_field: str
    principal: float
    years: float
    term_months: float
    annual_rate_percent: float
    monthly_rate: float
    monthly_payment: float
    monthly_pmi: Optional[float] = None
    payment_with_pmi: float
    closing_costs: Optional[float] = None
    pmi_payoff_month: Optional[int] = None
    total_payment: float
    total_interest: float

    model_config = {"frozen": True}

    @property
    def active_months(self) -> int:
        """Whole months in which a payment is due."""
        return int(math.floor(self.term_months + 1e-9))
