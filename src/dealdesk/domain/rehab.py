# src/dealdesk/domain/rehab.py
"""
Rehab estimator: builds the renovation cost a listing is analysed with.

An estimate is either the sum of the selected line items or a single flat
amount (a quick estimate or a typed-in figure). Choosing a flat amount
clears every selection, and touching a selected line item drops the flat
amount again, so exactly one of the two is ever in effect.

All transitions return a new estimate; nothing is edited in place.
"""
from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dealdesk.domain.costs import coerce_amount
from dealdesk.domain.property import Property

QuickEstimate = Literal["light", "medium", "full"]

QUICK_ESTIMATES: dict[str, float] = {
    "light": 5000.0,
    "medium": 15000.0,
    "full": 35000.0,
}


class RehabEstimateError(LookupError):
    """Unknown rehab category, line item or quick-estimate level."""


class RehabItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    base_cost: float
    cost: float
    quantity: int | None = None
    allow_multiple: bool = False
    unit: str = "units"
    selected: bool = False


class RehabCategory(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    items: tuple[RehabItem, ...]

    def total(self) -> float:
        total = 0.0
        for item in self.items:
            if item.selected:
                total = total + item.cost
        return total


class RehabEstimate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    categories: tuple[RehabCategory, ...]
    custom_amount: float | None = None

    def itemized_total(self) -> float:
        total = 0.0
        for category in self.categories:
            total = total + category.total()
        return total

    def total(self) -> float:
        if self.custom_amount:
            return self.custom_amount
        return self.itemized_total()


def _item(name: str, base_cost: float, quantity: int | None = None, unit: str = "units") -> dict[str, Any]:
    cost = base_cost * quantity if quantity is not None else base_cost
    return {
        "name": name,
        "base_cost": base_cost,
        "cost": cost,
        "quantity": quantity,
        "allow_multiple": quantity is not None,
        "unit": unit,
    }


_DEFAULT_TABLE: list[dict[str, Any]] = [
    {
        "name": "Exterior",
        "items": [
            _item("Roof Replacement", 8000),
            _item("Siding", 6000),
            _item("Windows", 500, quantity=1),
            _item("Exterior Doors", 400, quantity=1),
            _item("Landscaping", 2000),
            _item("Driveway", 3500),
        ],
    },
    {
        "name": "Interior",
        "items": [
            _item("Kitchen Remodel", 15000),
            _item("Bathroom Remodel", 8000, quantity=1),
            _item("Flooring", 6, quantity=1000, unit="sq ft"),
            _item("Paint", 3000),
            _item("Drywall Repair", 2500),
            _item("Interior Doors", 200, quantity=1),
        ],
    },
    {
        "name": "Systems",
        "items": [
            _item("HVAC", 7000),
            _item("Electrical", 5000),
            _item("Plumbing", 4500),
            _item("Water Heater", 1200),
            _item("Insulation", 2000),
        ],
    },
]


def default_rehab_estimate() -> RehabEstimate:
    """Fresh estimator: the standard line-item table, nothing selected."""
    return RehabEstimate.model_validate({"categories": _DEFAULT_TABLE})


# ---------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------

def _locate(estimate: RehabEstimate, category: str, item: str) -> tuple[int, int]:
    for ci, cat in enumerate(estimate.categories):
        if cat.name != category:
            continue
        for ii, it in enumerate(cat.items):
            if it.name == item:
                return ci, ii
        raise RehabEstimateError(f"{category} has no {item!r} item")
    raise RehabEstimateError(f"unknown rehab category {category!r}")


def _replace_item(
    estimate: RehabEstimate,
    category: str,
    item: str,
    custom_amount: float | None,
    **changes: Any,
) -> RehabEstimate:
    ci, ii = _locate(estimate, category, item)
    cat = estimate.categories[ci]
    items = list(cat.items)
    items[ii] = items[ii].model_copy(update=changes)
    cats = list(estimate.categories)
    cats[ci] = cat.model_copy(update={"items": tuple(items)})
    return estimate.model_copy(update={"categories": tuple(cats), "custom_amount": custom_amount})


def _clear_selection(estimate: RehabEstimate) -> tuple[RehabCategory, ...]:
    return tuple(
        cat.model_copy(update={"items": tuple(it.model_copy(update={"selected": False}) for it in cat.items)})
        for cat in estimate.categories
    )


def _whole_number(value: Any) -> int:
    # Editor fields are whole numbers; fractions are truncated like parseInt.
    amount = coerce_amount(value)
    if not math.isfinite(amount):
        return 0
    return int(amount)


def toggle_item(estimate: RehabEstimate, category: str, item: str) -> RehabEstimate:
    ci, ii = _locate(estimate, category, item)
    selected = estimate.categories[ci].items[ii].selected
    return _replace_item(estimate, category, item, None, selected=not selected)


def set_item_quantity(estimate: RehabEstimate, category: str, item: str, quantity: Any) -> RehabEstimate:
    """Change a multi-unit item's quantity; its cost follows as base cost x quantity."""
    ci, ii = _locate(estimate, category, item)
    current = estimate.categories[ci].items[ii]
    if not current.allow_multiple:
        raise RehabEstimateError(f"{item!r} is not priced per unit")
    qty = max(1, _whole_number(quantity) or 1)
    custom = None if current.selected else estimate.custom_amount
    return _replace_item(estimate, category, item, custom, quantity=qty, cost=current.base_cost * qty)


def set_item_cost(estimate: RehabEstimate, category: str, item: str, cost: Any) -> RehabEstimate:
    """
    Override an item's cost. For multi-unit items the per-unit base cost is
    derived back from it, so later quantity changes scale from the new price.
    """
    ci, ii = _locate(estimate, category, item)
    current = estimate.categories[ci].items[ii]
    amount = float(max(0, _whole_number(cost)))
    base = amount / current.quantity if current.quantity else amount
    custom = None if current.selected else estimate.custom_amount
    return _replace_item(estimate, category, item, custom, cost=amount, base_cost=base)


def apply_quick_estimate(estimate: RehabEstimate, level: str) -> RehabEstimate:
    if level not in QUICK_ESTIMATES:
        raise RehabEstimateError(f"unknown quick estimate {level!r}")
    return estimate.model_copy(
        update={"categories": _clear_selection(estimate), "custom_amount": QUICK_ESTIMATES[level]}
    )


def set_custom_amount(estimate: RehabEstimate, value: Any) -> RehabEstimate:
    return estimate.model_copy(
        update={"categories": _clear_selection(estimate), "custom_amount": coerce_amount(value)}
    )


def with_rehab_estimate(prop: Property, estimate: RehabEstimate) -> Property:
    return prop.model_copy(update={"renovation_cost": estimate.total()})
