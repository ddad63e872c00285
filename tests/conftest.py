# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from dealdesk.api.http import app  # ensures imports resolve; run tests from repo root
from dealdesk.domain.factors import CalculationFactors


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def cash_factors() -> CalculationFactors:
    # No financing, 5% misc: net profit is ARV - price - rehab - 5% of rehab.
    return CalculationFactors(purchase_model="cash", misc_costs_percentage=5)


@pytest.fixture
def financed_factors() -> CalculationFactors:
    return CalculationFactors(
        purchase_model="financed",
        interest_rate=5,
        down_payment_percentage=10,
        holding_period=6,
        misc_costs_percentage=5,
    )
