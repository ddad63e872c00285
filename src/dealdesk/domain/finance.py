# src/dealdesk/domain/finance.py
"""
Financing cost of holding a deal.

All inputs are plain numbers; nothing here validates or clamps. Bad inputs
(negative, NaN) flow through arithmetically and show up in the result.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dealdesk.domain.factors import CalculationFactors
    from dealdesk.domain.property import Property

# Amortisation term used for every financed deal, independent of how long
# the property is actually held.
LOAN_TERM_YEARS = 30


def safe_div(numerator: float, denominator: float) -> float:
    """
    IEEE-754 division: x/0 -> +/-inf, 0/0 -> nan, never ZeroDivisionError.
    """
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.inf if sign > 0 else -math.inf
    return numerator / denominator


def _pow(base: float, exp: float) -> float:
    try:
        return base ** exp
    except OverflowError:
        return math.inf


def monthly_payment(principal: float, annual_rate_percent: float, years: float) -> float:
    """
    Level payment on an amortising loan.

    r = annual_rate_percent / 12 / 100, n = years * 12
    payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

    At 0% the formula is 0/0, so the payment is simply principal / n.
    """
    r = annual_rate_percent / 12 / 100
    n = years * 12
    if annual_rate_percent == 0:
        return safe_div(principal, n)
    growth = _pow(1 + r, n)
    return safe_div(principal * r * growth, growth - 1)


def rehab_financing_costs(prop: Property, factors: CalculationFactors) -> float:
    # Simple (non-amortised) interest on the rehab amount for the hold.
    return (prop.renovation_cost * factors.interest_rate * factors.holding_period) / (12 * 100)


def financing_costs(prop: Property, factors: CalculationFactors) -> float:
    if factors.purchase_model == "cash":
        return 0.0

    loan_amount = prop.price * (1 - factors.down_payment_percentage / 100)
    payment = monthly_payment(loan_amount, factors.interest_rate, LOAN_TERM_YEARS)
    base_financing = payment * factors.holding_period

    return base_financing + rehab_financing_costs(prop, factors)
