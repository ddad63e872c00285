# src/dealdesk/domain/costs.py
"""
Cost model: itemised cost categories, per-strategy cost sets and the
strategy x purchase-model preset tree.

Two shapes of "current costs" exist:

- ``StrategyCosts``: the typed, complete set for one strategy (tagged union).
- ``CostSet``: the loose ``{category: {item: amount}}`` mapping a session
  edits. It may still hold categories from a previous strategy; totals only
  ever look at the categories relevant to the active strategy.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Annotated, Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from dealdesk.domain.strategy import (
    PURCHASE_MODELS,
    STRATEGY_CATEGORIES,
    PurchaseModel,
    Strategy,
    relevant_categories,
)

CostSet = dict[str, dict[str, float]]


class CostModelError(ValueError):
    """Structural problem in a cost set or preset tree."""


# ---------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------

Amount = Annotated[float, Field(ge=0)]


class CostCategory(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def amounts(self) -> dict[str, float]:
        # keyed the way the web client stores them: closingCosts, not closing_costs
        return self.model_dump(by_alias=True)


class AcquisitionCosts(CostCategory):
    closing_costs: Amount = 0.0
    inspection_costs: Amount = 0.0


class RehabCosts(CostCategory):
    renovation_budget: Amount = 0.0
    permits_and_fees: Amount = 0.0
    contingency: Amount = 0.0


class HoldingCosts(CostCategory):
    property_taxes: Amount = 0.0
    utilities: Amount = 0.0
    insurance: Amount = 0.0
    hoa_fees: Amount = 0.0
    loan_interest: Amount = 0.0


class SellingCosts(CostCategory):
    realtor_commission: Amount = 0.0
    closing_costs: Amount = 0.0
    staging_costs: Amount = 0.0


class SetupCosts(CostCategory):
    repairs: Amount = 0.0
    property_management_setup: Amount = 0.0


class RefinanceCosts(CostCategory):
    appraisal_fees: Amount = 0.0
    closing_costs: Amount = 0.0
    prepayment_penalties: Amount = 0.0


class OperatingCosts(CostCategory):
    property_taxes: Amount = 0.0
    insurance: Amount = 0.0
    property_management: Amount = 0.0
    maintenance_reserve: Amount = 0.0
    vacancy_reserve: Amount = 0.0


class WholesaleCategoryCosts(CostCategory):
    assignment_fee: Amount = 0.0
    buyer_rehab_budget: Amount = 0.0
    marketing_fees: Amount = 0.0


CATEGORY_MODELS: dict[str, type[CostCategory]] = {
    "acquisition": AcquisitionCosts,
    "rehab": RehabCosts,
    "holding": HoldingCosts,
    "selling": SellingCosts,
    "setup": SetupCosts,
    "refinance": RefinanceCosts,
    "operating": OperatingCosts,
    "wholesale": WholesaleCategoryCosts,
}


def _resolve_field(model: type[CostCategory], field: str) -> str:
    fields = model.model_fields
    if field in fields:
        return field
    for name, info in fields.items():
        if info.alias == field:
            return name
    raise CostModelError(f"unknown cost item {field!r} for {model.__name__}")


def item_key(category: str, item: str) -> str:
    """
    Canonical key for `item` inside a loose cost set.

    Known categories accept either spelling and always answer with the
    camelCase one; items of unknown categories pass through untouched.
    """
    model = CATEGORY_MODELS.get(category)
    if model is None:
        return item
    name = _resolve_field(model, item)
    return model.model_fields[name].alias or name


def normalize_cost_set(cost_set: Mapping[str, Mapping[str, Any]]) -> CostSet:
    normalized: CostSet = {}
    for category, items in cost_set.items():
        normalized[category] = {item_key(category, item): amount for item, amount in items.items()}
    return normalized


# ---------------------------------------------------------------------
# Per-strategy cost sets (tagged union on `strategy`)
# ---------------------------------------------------------------------

class _StrategyCostsBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def categories(self) -> dict[str, CostCategory]:
        names = relevant_categories(self.strategy)  # type: ignore[attr-defined]
        return {name: getattr(self, name) for name in names}


class FixAndFlipCosts(_StrategyCostsBase):
    strategy: Literal["fix-and-flip"] = "fix-and-flip"
    acquisition: AcquisitionCosts
    rehab: RehabCosts
    holding: HoldingCosts
    selling: SellingCosts


class TurnkeyRentalCosts(_StrategyCostsBase):
    strategy: Literal["turnkey-rental"] = "turnkey-rental"
    acquisition: AcquisitionCosts
    setup: SetupCosts
    operating: OperatingCosts


class BrrrCosts(_StrategyCostsBase):
    strategy: Literal["brrr"] = "brrr"
    acquisition: AcquisitionCosts
    rehab: RehabCosts
    refinance: RefinanceCosts
    operating: OperatingCosts


class WholesaleCosts(_StrategyCostsBase):
    strategy: Literal["wholesale"] = "wholesale"
    wholesale: WholesaleCategoryCosts


StrategyCosts = Annotated[
    Union[FixAndFlipCosts, TurnkeyRentalCosts, BrrrCosts, WholesaleCosts],
    Field(discriminator="strategy"),
]

_strategy_costs_adapter: TypeAdapter[Any] = TypeAdapter(StrategyCosts)


def to_cost_set(costs: _StrategyCostsBase) -> CostSet:
    return {name: cat.amounts() for name, cat in costs.categories().items()}


def from_cost_set(strategy: Strategy, cost_set: Mapping[str, Mapping[str, float]]) -> _StrategyCostsBase:
    """
    Build the typed cost set for `strategy` out of a loose cost set.

    Categories irrelevant to `strategy` are dropped; a missing relevant
    category is a structural error.
    """
    names = relevant_categories(strategy)
    if not names:
        raise CostModelError(f"unknown strategy: {strategy!r}")
    missing = [n for n in names if n not in cost_set]
    if missing:
        raise CostModelError(f"cost set for {strategy} is missing categories: {', '.join(missing)}")
    payload: dict[str, Any] = {"strategy": strategy}
    payload.update({n: dict(cost_set[n]) for n in names})
    try:
        return _strategy_costs_adapter.validate_python(payload)
    except ValidationError as err:
        raise CostModelError(str(err)) from err


# ---------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------

def _category_amounts(costs: CostCategory | Mapping[str, float] | None) -> list[float]:
    if costs is None:
        return []
    if isinstance(costs, CostCategory):
        return list(costs.amounts().values())
    return list(costs.values())


def total_for_category(costs: CostCategory | Mapping[str, float] | None) -> float:
    """
    Sum of all item amounts in a category. Missing or empty -> 0.

    Summed strictly left to right; builtin sum() on floats is compensated
    on newer interpreters and would drift from the reference totals.
    """
    total = 0.0
    for amount in _category_amounts(costs):
        total = total + amount
    return total


def _lookup_category(current_costs: Any, category: str) -> Any:
    if isinstance(current_costs, BaseModel):
        return getattr(current_costs, category, None)
    if isinstance(current_costs, Mapping):
        return current_costs.get(category)
    return None


def category_totals(current_costs: Any, strategy: str) -> dict[str, float]:
    return {
        name: total_for_category(_lookup_category(current_costs, name))
        for name in relevant_categories(strategy)
    }


def total_for_strategy(current_costs: Any, strategy: str) -> float:
    total = 0.0
    for name in relevant_categories(strategy):
        total = total + total_for_category(_lookup_category(current_costs, name))
    return total


# ---------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------

C = TypeVar("C", bound=_StrategyCostsBase)


class PresetPair(BaseModel, Generic[C]):
    model_config = ConfigDict(frozen=True, extra="forbid")

    financed: C
    cash: C


_STRATEGY_ATTRS: dict[str, str] = {
    "fix-and-flip": "fix_and_flip",
    "turnkey-rental": "turnkey_rental",
    "brrr": "brrr",
    "wholesale": "wholesale",
}


class CostPresets(BaseModel):
    """Default cost sets for every (strategy, purchase model) pair."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    fix_and_flip: PresetPair[FixAndFlipCosts] = Field(alias="fix-and-flip")
    turnkey_rental: PresetPair[TurnkeyRentalCosts] = Field(alias="turnkey-rental")
    brrr: PresetPair[BrrrCosts]
    wholesale: PresetPair[WholesaleCosts]

    def pair(self, strategy: str) -> PresetPair[Any]:
        attr = _STRATEGY_ATTRS.get(strategy)
        if attr is None:
            raise CostModelError(f"unknown strategy: {strategy!r}")
        return getattr(self, attr)

    def get(self, strategy: str, purchase_model: str) -> _StrategyCostsBase:
        if purchase_model not in PURCHASE_MODELS:
            raise CostModelError(f"unknown purchase model: {purchase_model!r}")
        return getattr(self.pair(strategy), purchase_model)

    def cost_set(self, strategy: str, purchase_model: str) -> CostSet:
        return to_cost_set(self.get(strategy, purchase_model))


def coerce_amount(value: Any) -> float:
    """Editor input -> amount. Blank, garbage and NaN all become 0."""
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    if value is None or isinstance(value, bool):
        return float(bool(value))
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount):
        return 0.0
    return amount


def with_preset_value(
    presets: CostPresets,
    strategy: Strategy,
    purchase_model: PurchaseModel,
    category: str,
    field: str,
    value: Any,
) -> CostPresets:
    """
    Return a new preset tree with exactly one leaf changed.

    Every level from the root to the leaf is copied; all other branches are
    shared with `presets`, which is left untouched.
    """
    pair = presets.pair(strategy)
    costs = presets.get(strategy, purchase_model)
    if category not in STRATEGY_CATEGORIES[strategy]:
        raise CostModelError(f"{strategy} has no {category!r} category")

    cat_model: CostCategory = getattr(costs, category)
    name = _resolve_field(type(cat_model), field)
    amount = coerce_amount(value)
    if amount < 0:
        raise CostModelError(f"cost amounts must be non-negative, got {amount}")

    new_cat = cat_model.model_copy(update={name: amount})
    new_costs = costs.model_copy(update={category: new_cat})
    new_pair = pair.model_copy(update={purchase_model: new_costs})
    return presets.model_copy(update={_STRATEGY_ATTRS[strategy]: new_pair})


# Verbatim default tables (camelCase item names, as stored by the web client).
_FLIP_REHAB = {"renovationBudget": 25000, "permitsAndFees": 1500, "contingency": 2500}
_RENTAL_OPERATING = {
    "propertyTaxes": 200,
    "insurance": 100,
    "propertyManagement": 100,
    "maintenanceReserve": 200,
    "vacancyReserve": 100,
}
_WHOLESALE = {"assignmentFee": 5000, "buyerRehabBudget": 25000, "marketingFees": 1000}

_DEFAULT_PRESETS: dict[str, Any] = {
    "fix-and-flip": {
        "financed": {
            "acquisition": {"closingCosts": 3000, "inspectionCosts": 500},
            "rehab": _FLIP_REHAB,
            "holding": {
                "propertyTaxes": 2000,
                "utilities": 1200,
                "insurance": 800,
                "hoaFees": 0,
                "loanInterest": 3000,
            },
            "selling": {"realtorCommission": 15000, "closingCosts": 3000, "stagingCosts": 1500},
        },
        "cash": {
            "acquisition": {"closingCosts": 2000, "inspectionCosts": 500},
            "rehab": _FLIP_REHAB,
            "holding": {
                "propertyTaxes": 2000,
                "utilities": 1200,
                "insurance": 800,
                "hoaFees": 0,
                "loanInterest": 0,
            },
            "selling": {"realtorCommission": 15000, "closingCosts": 3000, "stagingCosts": 1500},
        },
    },
    "turnkey-rental": {
        "financed": {
            "acquisition": {"closingCosts": 3000, "inspectionCosts": 500},
            "setup": {"repairs": 5000, "propertyManagementSetup": 500},
            "operating": _RENTAL_OPERATING,
        },
        "cash": {
            "acquisition": {"closingCosts": 2000, "inspectionCosts": 500},
            "setup": {"repairs": 5000, "propertyManagementSetup": 500},
            "operating": _RENTAL_OPERATING,
        },
    },
    "brrr": {
        "financed": {
            "acquisition": {"closingCosts": 3000, "inspectionCosts": 500},
            "rehab": _FLIP_REHAB,
            "refinance": {"appraisalFees": 500, "closingCosts": 3000, "prepaymentPenalties": 0},
            "operating": _RENTAL_OPERATING,
        },
        "cash": {
            "acquisition": {"closingCosts": 2000, "inspectionCosts": 500},
            "rehab": _FLIP_REHAB,
            "refinance": {"appraisalFees": 500, "closingCosts": 3000, "prepaymentPenalties": 0},
            "operating": _RENTAL_OPERATING,
        },
    },
    "wholesale": {
        "financed": {"wholesale": _WHOLESALE},
        "cash": {"wholesale": _WHOLESALE},
    },
}


def default_cost_presets() -> CostPresets:
    return CostPresets.model_validate(_DEFAULT_PRESETS)
