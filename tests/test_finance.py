import math

import pytest
from hypothesis import given, strategies as st

from dealdesk.domain.factors import CalculationFactors
from dealdesk.domain.finance import (
    LOAN_TERM_YEARS,
    financing_costs,
    monthly_payment,
    rehab_financing_costs,
    safe_div,
)
from .fixtures.listings import oak_flip


def test_monthly_payment_zero_rate_is_straight_line():
    assert monthly_payment(12_000, 0, 1) == 1000
    assert monthly_payment(360_000, 0, 30) == pytest.approx(1000.0)


def test_monthly_payment_matches_amortisation_formula():
    principal, rate, years = 90_000.0, 5.0, 30
    r = rate / 12 / 100
    n = years * 12
    expected = principal * r * (1 + r) ** n / ((1 + r) ** n - 1)

    assert monthly_payment(principal, rate, years) == expected
    # 90k at 5% over 30 years is roughly $483/mo
    assert monthly_payment(principal, rate, years) == pytest.approx(483.14, abs=0.01)


@given(
    principal=st.floats(min_value=1_000.0, max_value=2_000_000.0),
    delta=st.floats(min_value=1.0, max_value=100_000.0),
    rate=st.floats(min_value=0.1, max_value=20.0),
    years=st.integers(min_value=1, max_value=40),
)
def test_monthly_payment_increases_with_principal(principal, delta, rate, years):
    assert monthly_payment(principal + delta, rate, years) > monthly_payment(principal, rate, years)


@given(
    rate=st.floats(min_value=0.1, max_value=20.0),
    bump=st.floats(min_value=0.01, max_value=5.0),
    years=st.integers(min_value=1, max_value=40),
)
def test_monthly_payment_increases_with_rate(rate, bump, years):
    assert monthly_payment(250_000.0, rate + bump, years) > monthly_payment(250_000.0, rate, years)


def test_financing_costs_financed_example(financed_factors):
    prop = oak_flip()  # price 100k, rehab 20k

    payment = monthly_payment(100_000 * (1 - 10 / 100), 5, LOAN_TERM_YEARS)
    base = payment * 6
    rehab = 20_000 * 5 * 6 / (12 * 100)

    assert rehab_financing_costs(prop, financed_factors) == pytest.approx(500.0)
    assert financing_costs(prop, financed_factors) == base + rehab
    assert financing_costs(prop, financed_factors) == pytest.approx(3398.8, abs=0.1)


def test_financing_ignores_rehab_financing_percentage(financed_factors):
    prop = oak_flip()
    half = financed_factors.model_copy(update={"rehab_financing_percentage": 50})
    assert financing_costs(prop, half) == financing_costs(prop, financed_factors)


@given(
    price=st.floats(min_value=0.0, max_value=5_000_000.0),
    reno=st.floats(min_value=0.0, max_value=1_000_000.0),
    rate=st.floats(min_value=0.0, max_value=25.0),
    months=st.floats(min_value=0.0, max_value=60.0),
)
def test_cash_purchases_have_no_financing_cost(price, reno, rate, months):
    prop = oak_flip().model_copy(update={"price": price, "renovation_cost": reno})
    factors = CalculationFactors(purchase_model="cash", interest_rate=rate, holding_period=months)
    assert financing_costs(prop, factors) == 0


def test_financing_zero_rate_has_no_rehab_interest():
    prop = oak_flip()
    factors = CalculationFactors(interest_rate=0, down_payment_percentage=20, holding_period=12)
    # 80k over 360 payments, 12 months held, no interest on rehab
    assert financing_costs(prop, factors) == pytest.approx(80_000 / 360 * 12)


def test_financing_nan_input_propagates():
    prop = oak_flip()
    factors = CalculationFactors(interest_rate=float("nan"))
    assert math.isnan(financing_costs(prop, factors))


def test_safe_div_follows_ieee():
    assert safe_div(1.0, 0.0) == math.inf
    assert safe_div(-1.0, 0.0) == -math.inf
    assert safe_div(1.0, -0.0) == -math.inf
    assert math.isnan(safe_div(0.0, 0.0))
    assert safe_div(3.0, 2.0) == 1.5
