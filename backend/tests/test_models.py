import pytest
from pydantic import ValidationError

from mortgage_roi.models.comparison import ComparisonRequest
from mortgage_roi.models.loan import LoanError, LoanErrorKind, LoanInput, SolvedLoan
from mortgage_roi.simulation.loan_solver import solve_loan


def test_loan_input_all_blank():
    loan_input = LoanInput()
    assert loan_input.label == ""
    assert loan_input.principal is None
    assert loan_input.purchase_price is None


def test_loan_input_accepts_text_and_numbers():
    loan_input = LoanInput(label="A", principal="350,000", years=30, rate="6", payment="")
    assert loan_input.principal == "350,000"
    assert loan_input.years == 30
    assert loan_input.payment == ""


def test_solved_loan_is_frozen():
    loan = solve_loan(LoanInput(principal="350000", years="30", rate="6"))
    assert isinstance(loan, SolvedLoan)
    with pytest.raises(ValidationError):
        loan.principal = 1.0


def test_solved_loan_active_months():
    loan = solve_loan(LoanInput(principal="350000", years="15", rate="5.5"))
    assert loan.active_months == 180


def test_loan_error_serializes_kind():
    error = LoanError(kind=LoanErrorKind.payment_too_low, error_message="x", missing_field="years")
    data = error.model_dump(mode="json")
    assert data["kind"] == "payment_too_low"
    assert data["missing_field"] == "years"


def test_comparison_request_requires_two_options():
    with pytest.raises(ValidationError):
        ComparisonRequest(options=[LoanInput()])
    with pytest.raises(ValidationError):
        ComparisonRequest(options=[LoanInput(), LoanInput(), LoanInput()])


def test_comparison_request_return_rate_defaults_to_none():
    request = ComparisonRequest(options=[LoanInput(), LoanInput()])
    assert request.return_rate is None
