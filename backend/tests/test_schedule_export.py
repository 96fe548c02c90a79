import math
from io import BytesIO

from openpyxl import load_workbook

from mortgage_roi.models.loan import LoanInput
from mortgage_roi.simulation.loan_solver import solve_loan
from mortgage_roi.simulation.schedule import build_schedule
from mortgage_roi.services.schedule_export import SHEET_NAME, export_schedule_xlsx, schedule_frame


def _schedule(monthly_rate=0.008):
    a = solve_loan(LoanInput(principal="200000", years="30", rate="6"))
    b = solve_loan(LoanInput(principal="200000", years="15", rate="5.5"))
    return build_schedule(a, b, monthly_rate)


def test_schedule_frame_columns():
    df = schedule_frame(_schedule())
    assert len(df) == 360
    assert list(df.columns)[:3] == ["month", "payment_a", "payment_b"]
    assert df["month"].iloc[-1] == 360


def test_schedule_frame_undefined_portfolio_is_nan():
    df = schedule_frame(_schedule(math.nan))
    assert df["portfolio_value"].isna().all()


def test_export_uses_option_labels():
    content = export_schedule_xlsx(_schedule(), "Thirty", "Fifteen")
    ws = load_workbook(BytesIO(content))[SHEET_NAME]
    headers = [cell.value for cell in ws[1]]
    assert headers[0] == "Month"
    assert "Thirty balance" in headers
    assert "Fifteen portfolio value" in headers


def test_export_blank_labels_fall_back():
    content = export_schedule_xlsx(_schedule(), "", "")
    ws = load_workbook(BytesIO(content))[SHEET_NAME]
    headers = [cell.value for cell in ws[1]]
    assert "Option 1 payment" in headers
    assert "Option 2 payment" in headers
