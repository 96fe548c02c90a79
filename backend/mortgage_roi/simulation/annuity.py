"""Annuity primitives: parsing, PMT and its inverses, future value.

Undefined results are returned as ``math.nan`` so they propagate through
arithmetic; callers test with ``math.isfinite``.
"""
from __future__ import annotations

import math
from typing import Any


def parse_number(value: Any) -> float:
    """Parse a raw field value. Blank, non-numeric, or non-finite -> nan."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return math.nan
        try:
            parsed = float(text)
        except ValueError:
            return math.nan
    else:
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            return math.nan
    return parsed if math.isfinite(parsed) else math.nan


def payment_from_rate(principal: float, monthly_rate: float, months: float) -> float:
    """Standard PMT formula for a fixed-rate amortizing loan.

    PMT = P * r / (1 - (1+r)^-n)
    """
    if not months > 0 or not math.isfinite(principal):
        return math.nan
    if monthly_rate == 0:
        return principal / months
    if not monthly_rate > -1.0:
        return math.nan
    try:
        return principal * monthly_rate / (1.0 - (1.0 + monthly_rate) ** -months)
    except (OverflowError, ZeroDivisionError):
        return math.nan


def principal_from_payment(payment: float, monthly_rate: float, months: float) -> float:
    """Inverse PMT: the principal a fixed payment amortizes over ``months``."""
    if not math.isfinite(payment) or not months > 0:
        return math.nan
    if monthly_rate == 0:
        return payment * months
    if not monthly_rate > -1.0:
        return math.nan
    try:
        return payment * (1.0 - (1.0 + monthly_rate) ** -months) / monthly_rate
    except (OverflowError, ZeroDivisionError):
        return math.nan


def annuity_future_value(payment: float, months: float, monthly_rate: float) -> float:
    """Future value of ``months`` end-of-period contributions.

    Returns 0.0 rather than nan when there is nothing to contribute.
    """
    if not math.isfinite(payment) or not months > 0:
        return 0.0
    if monthly_rate == 0:
        return payment * months
    if not monthly_rate > -1.0:
        return math.nan
    try:
        return payment * ((1.0 + monthly_rate) ** months - 1.0) / monthly_rate
    except OverflowError:
        return math.inf


def growth_factor(monthly_rate: float, months: float) -> float:
    """(1 + r)^n, inf on overflow."""
    if not monthly_rate > -1.0:
        return math.nan
    try:
        return (1.0 + monthly_rate) ** months
    except OverflowError:
        return math.inf


def monthly_effective_rate(annual_percent: float) -> float:
    """Convert an annual percent return to the equivalent monthly rate."""
    if not math.isfinite(annual_percent) or annual_percent <= -100.0:
        return math.nan
    return (1.0 + annual_percent / 100.0) ** (1.0 / 12.0) - 1.0


def principal_from_purchase(purchase_price: float, down_percent: float) -> float:
    """Loan amount left after a percentage down payment, floored at zero."""
    if not (math.isfinite(purchase_price) and math.isfinite(down_percent)):
        return math.nan
    return max(purchase_price * (1.0 - down_percent / 100.0), 0.0)
