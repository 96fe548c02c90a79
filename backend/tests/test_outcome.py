"""Tests for the outcome aggregator: net wealth, winner, payoff, crossover."""
import math

from mortgage_roi.models.loan import LoanInput, SolvedLoan
from mortgage_roi.simulation.annuity import monthly_effective_rate
from mortgage_roi.simulation.loan_solver import solve_loan
from mortgage_roi.simulation.outcome import (
    capital_gains_tax,
    compare_options,
    find_crossover_month,
    lowest_interest_label,
    summarize_outcome,
)
from mortgage_roi.simulation.schedule import build_schedule

_MONTHLY_10PCT = monthly_effective_rate(10)


def _make_loan(**overrides) -> SolvedLoan:
    defaults = dict(
        label="30-year",
        principal="350000",
        years="30",
        rate="6",
        payment="",
        closing_costs="0",
        pmi="0",
    )
    defaults.update(overrides)
    loan = solve_loan(LoanInput(**defaults))
    assert isinstance(loan, SolvedLoan)
    return loan


def _scenario_c():
    a = _make_loan()
    b = _make_loan(label="15-year", years="15", rate="5.5")
    return a, b, build_schedule(a, b, _MONTHLY_10PCT)


# --- Tax ---


def test_capital_gains_tax():
    assert capital_gains_tax(1000.0) == 150.0
    assert capital_gains_tax(1000.0, 0.2) == 200.0
    assert capital_gains_tax(-500.0) == 0.0
    assert capital_gains_tax(None) == 0.0
    assert capital_gains_tax(math.nan) == 0.0


# --- Scenario C ---


def test_scenario_c_has_finite_crossover():
    a, b, schedule = _scenario_c()
    outcome = summarize_outcome(schedule, a, b)
    assert outcome is not None
    assert outcome.crossover_month_with_tax is not None
    assert 1 < outcome.crossover_month_with_tax <= 180
    assert outcome.crossover_month_no_tax is not None


def test_scenario_c_net_wealth():
    a, b, schedule = _scenario_c()
    outcome = summarize_outcome(schedule, a, b)
    end = schedule.end
    expected_1 = end.portfolio_value - 0.15 * end.portfolio_gain
    expected_2 = end.portfolio_value_alt - 0.15 * end.portfolio_gain_alt + end.interest_delta_sum
    assert abs(outcome.net_option_1 - expected_1) < 1e-6
    assert abs(outcome.net_option_2 - expected_2) < 1e-6
    assert outcome.winner_index == 0
    assert abs(outcome.difference - (expected_1 - expected_2)) < 1e-6


def test_scenario_c_payoff_figures():
    a, b, schedule = _scenario_c()
    outcome = summarize_outcome(schedule, a, b)
    payoff_row = schedule.rows[179]
    assert outcome.payoff_month == 180
    assert outcome.payoff_years == 15
    assert outcome.payoff_balance == payoff_row.balance_a
    assert outcome.portfolio_total == payoff_row.portfolio_value + payoff_row.portfolio_value_alt


def test_crossover_is_a_sign_flip():
    a, b, schedule = _scenario_c()
    month = find_crossover_month(schedule, a, b)

    def diff(row):
        v1 = row.portfolio_value - capital_gains_tax(row.portfolio_gain)
        v2 = row.portfolio_value_alt - capital_gains_tax(row.portfolio_gain_alt)
        return (v1 + a.principal - row.balance_a) - (v2 + b.principal - row.balance_b)

    before = diff(schedule.rows[month - 2])
    at = diff(schedule.rows[month - 1])
    assert before * at < 0


def test_equal_terms_have_no_crossover():
    a = _make_loan()
    b = _make_loan(rate="5")
    schedule = build_schedule(a, b, _MONTHLY_10PCT)
    outcome = summarize_outcome(schedule, a, b)
    assert outcome.crossover_month_with_tax is None
    assert outcome.crossover_month_no_tax is None


def test_identical_loans_tie():
    a = _make_loan()
    schedule = build_schedule(a, a, _MONTHLY_10PCT)
    outcome = summarize_outcome(schedule, a, a)
    assert outcome.winner_index is None
    assert outcome.difference == 0


def test_undefined_return_rate_has_no_outcome():
    a = _make_loan()
    b = _make_loan(years="15", rate="5.5")
    schedule = build_schedule(a, b, math.nan)
    assert summarize_outcome(schedule, a, b) is None
    assert find_crossover_month(schedule, a, b) is None


# --- Comparison rows ---


def test_compare_options_totals():
    a, b, schedule = _scenario_c()
    rows = compare_options(schedule, a, b)
    assert [r.label for r in rows] == ["30-year", "15-year"]
    assert abs(rows[0].total_payment - a.monthly_payment * 360) < 1e-4
    assert abs(rows[1].total_payment - b.monthly_payment * 180) < 1e-4
    assert rows[0].interest_saved is None
    assert rows[1].interest_saved == schedule.end.interest_delta_sum
    assert rows[0].portfolio_value == schedule.end.portfolio_value
    assert rows[1].portfolio_value == schedule.end.portfolio_value_alt
    assert abs(rows[0].tax_amount - 0.15 * schedule.end.portfolio_gain) < 1e-6
    assert rows[0].after_tax_portfolio_value == rows[0].portfolio_value - rows[0].tax_amount


def test_compare_options_break_even_label():
    a, b, schedule = _scenario_c()
    rows = compare_options(schedule, a, b)
    for row in rows:
        assert row.break_even_rate is not None
        assert row.break_even_label == f"{row.break_even_rate:.2f}%"


def test_compare_options_equal_payments_hide_break_even():
    a = _make_loan()
    schedule = build_schedule(a, a, _MONTHLY_10PCT)
    rows = compare_options(schedule, a, a)
    assert all(r.break_even_rate is None for r in rows)
    assert all(r.break_even_label == "—" for r in rows)


def test_compare_options_pmi_totals():
    a = _make_loan(principal="100000", pmi="80")
    b = _make_loan(principal="100000", years="15", rate="5.5")
    schedule = build_schedule(a, b, _MONTHLY_10PCT)
    rows = compare_options(schedule, a, b)
    assert rows[0].pmi_amount == 80
    assert rows[0].pmi_end_month == a.pmi_payoff_month
    assert rows[0].pmi_total == 80 * a.pmi_payoff_month
    assert rows[1].pmi_total is None


def test_lowest_interest_label():
    a = _make_loan()
    b = _make_loan(label="15-year", years="15", rate="5.5")
    assert lowest_interest_label(a, b) == "15-year"
    assert lowest_interest_label(a, a) == "either option"
