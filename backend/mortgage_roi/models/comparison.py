from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from mortgage_roi.models.loan import LoanError, LoanInput, RawNumber, SolvedLoan
from mortgage_roi.models.outcome import OptionComparison, OutcomeSummary
from mortgage_roi.models.schedule import ScheduleResult


class ComparisonRequest(BaseModel):
    """Two loan options and the expected annual return, all as entered.

    Omitting ``return_rate`` uses the configured default; a blank value
    leaves the portfolio projections undefined.
    """
    options: list[LoanInput] = Field(min_length=2, max_length=2)
    return_rate: RawNumber = None


class OptionResult(BaseModel):
    """Either the solved loan or the reason it could not be solved."""
    label: str
    loan: Optional[SolvedLoan] = None
    error: Optional[LoanError] = None


class ComparisonResult(BaseModel):
    options: list[OptionResult]
    return_rate_percent: Optional[float] = None
    schedule: Optional[ScheduleResult] = None
    outcome: Optional[OutcomeSummary] = None
    comparisons: list[OptionComparison] = []
    lowest_interest_label: Optional[str] = None
    computed_at: datetime

    @property
    def solved(self) -> bool:
        return all(option.loan is not None for option in self.options)
