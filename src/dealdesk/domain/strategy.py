# src/dealdesk/domain/strategy.py
from __future__ import annotations

from typing import Literal, get_args

Strategy = Literal["fix-and-flip", "turnkey-rental", "brrr", "wholesale"]
PurchaseModel = Literal["financed", "cash"]

STRATEGIES: tuple[Strategy, ...] = get_args(Strategy)
PURCHASE_MODELS: tuple[PurchaseModel, ...] = get_args(PurchaseModel)

# Which cost categories count toward a strategy's totals. Anything else found
# in a cost set (e.g. left over from a previous strategy) is ignored.
STRATEGY_CATEGORIES: dict[Strategy, tuple[str, ...]] = {
    "fix-and-flip": ("acquisition", "rehab", "holding", "selling"),
    "turnkey-rental": ("acquisition", "setup", "operating"),
    "brrr": ("acquisition", "rehab", "refinance", "operating"),
    "wholesale": ("wholesale",),
}

CATEGORY_LABELS: dict[str, str] = {
    "acquisition": "Acquisition",
    "rehab": "Rehabilitation",
    "holding": "Holding",
    "selling": "Selling",
    "setup": "Setup",
    "operating": "Operating",
    "refinance": "Refinance",
    "wholesale": "Wholesale",
}

STRATEGY_LABELS: dict[Strategy, str] = {
    "fix-and-flip": "Buy, Fix, and Flip",
    "turnkey-rental": "Turnkey Rental",
    "brrr": "BRRR",
    "wholesale": "Wholesale",
}


def relevant_categories(strategy: str) -> tuple[str, ...]:
    """Category keys for a strategy; unknown strategies have none."""
    return STRATEGY_CATEGORIES.get(strategy, ())  # type: ignore[call-overload]
