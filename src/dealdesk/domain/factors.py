# src/dealdesk/domain/factors.py
"""
CalculationFactors: the per-session configuration every metric is computed
under, plus the (non-mutating) transitions a session applies to it.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from dealdesk.adapters.config import config
from dealdesk.domain.costs import (
    CostModelError,
    CostPresets,
    CostSet,
    coerce_amount,
    default_cost_presets,
    item_key,
    normalize_cost_set,
)
from dealdesk.domain.strategy import PURCHASE_MODELS, STRATEGIES, PurchaseModel, Strategy


class MiscCostsBreakdown(BaseModel):
    """
    Itemised monthly overhead shown next to the misc-cost percentage.

    Informational only: net profit uses `misc_costs_percentage`, never this.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    utilities: float = 150.0
    insurance: float = 100.0
    property_taxes: float = 200.0
    maintenance: float = 100.0
    property_management: float = 0.0
    other: float = 0.0

    def total(self) -> float:
        total = 0.0
        for amount in self.model_dump().values():
            total = total + amount
        return total


class CalculationFactors(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    purchase_model: PurchaseModel = "financed"
    strategy: Strategy = "fix-and-flip"
    interest_rate: float = 5.0
    down_payment_percentage: float = 10.0
    # Carried for the UI; the financing formula does not read it.
    rehab_financing_percentage: float = 100.0
    holding_period: float = 6.0
    misc_costs_percentage: float = 5.0
    misc_costs_breakdown: MiscCostsBreakdown = Field(default_factory=MiscCostsBreakdown)
    cost_presets: CostPresets = Field(default_factory=default_cost_presets)
    current_costs: CostSet = Field(default_factory=dict)
    use_defaults: bool = True

    @field_validator("current_costs")
    @classmethod
    def _canonical_item_keys(cls, v: CostSet) -> CostSet:
        return normalize_cost_set(v)

    @model_validator(mode="after")
    def _fill_current_costs(self) -> "CalculationFactors":
        # An empty cost set means "not chosen yet": seed it from the presets.
        if not self.current_costs:
            seeded = self.cost_presets.cost_set(self.strategy, self.purchase_model)
            object.__setattr__(self, "current_costs", seeded)
        return self


def default_factors() -> CalculationFactors:
    """Factors a fresh session starts with (configurable via DEALDESK_* env)."""
    return CalculationFactors(
        purchase_model=config.DEFAULT_PURCHASE_MODEL,
        strategy=config.DEFAULT_STRATEGY,
        interest_rate=config.DEFAULT_INTEREST_RATE,
        down_payment_percentage=config.DEFAULT_DOWN_PAYMENT_PCT,
        rehab_financing_percentage=config.DEFAULT_REHAB_FINANCING_PCT,
        holding_period=config.DEFAULT_HOLDING_PERIOD_MONTHS,
        misc_costs_percentage=config.DEFAULT_MISC_COSTS_PCT,
    )


def _replace(factors: CalculationFactors, **changes: Any) -> CalculationFactors:
    return factors.model_copy(update=changes)


def switch_strategy(factors: CalculationFactors, strategy: Strategy) -> CalculationFactors:
    """
    Change strategy. With defaults on, current costs are replaced wholesale by
    the preset for (strategy, purchase model); with defaults off they are kept
    as-is, stale categories included.
    """
    if strategy not in STRATEGIES:
        raise CostModelError(f"unknown strategy: {strategy!r}")
    if factors.use_defaults:
        current = factors.cost_presets.cost_set(strategy, factors.purchase_model)
    else:
        current = factors.current_costs
    return _replace(factors, strategy=strategy, current_costs=current)


def switch_purchase_model(factors: CalculationFactors, purchase_model: PurchaseModel) -> CalculationFactors:
    if purchase_model not in PURCHASE_MODELS:
        raise CostModelError(f"unknown purchase model: {purchase_model!r}")
    if factors.use_defaults:
        current = factors.cost_presets.cost_set(factors.strategy, purchase_model)
    else:
        current = factors.current_costs
    return _replace(factors, purchase_model=purchase_model, current_costs=current)


def set_use_defaults(factors: CalculationFactors, enabled: bool) -> CalculationFactors:
    # Turning defaults on throws away any edits; turning them off keeps them.
    if enabled:
        current = factors.cost_presets.cost_set(factors.strategy, factors.purchase_model)
        return _replace(factors, use_defaults=True, current_costs=current)
    return _replace(factors, use_defaults=False)


def save_presets(factors: CalculationFactors, presets: CostPresets) -> CalculationFactors:
    if factors.use_defaults:
        current = presets.cost_set(factors.strategy, factors.purchase_model)
    else:
        current = factors.current_costs
    return _replace(factors, cost_presets=presets, current_costs=current)


def update_current_cost(
    factors: CalculationFactors,
    category: str,
    item: str,
    value: Any,
) -> CalculationFactors:
    """
    Edit one item of the session's current costs (copy-on-write).

    `item` may be given as ``closing_costs`` or ``closingCosts``; either way
    the existing entry is replaced, never duplicated.
    """
    if category not in factors.current_costs:
        raise CostModelError(f"current costs have no {category!r} category")
    key = item_key(category, item)
    amount = coerce_amount(value)
    if amount < 0:
        raise CostModelError(f"cost amounts must be non-negative, got {amount}")
    current = dict(factors.current_costs)
    current[category] = {**current[category], key: amount}
    return _replace(factors, current_costs=current)


def update_misc_breakdown(factors: CalculationFactors, item: str, value: Any) -> CalculationFactors:
    if item not in MiscCostsBreakdown.model_fields:
        raise CostModelError(f"unknown misc cost item {item!r}")
    breakdown = factors.misc_costs_breakdown.model_copy(update={item: coerce_amount(value)})
    return _replace(factors, misc_costs_breakdown=breakdown)
