# src/dealdesk/domain/metrics.py
"""
Deal metrics: net profit and ROI for one property under one set of
calculation factors.

These are pure functions of (Property, CalculationFactors). They never raise
on degenerate numbers: a zero investment gives inf/nan, and callers decide
how to filter or display that.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from dealdesk.domain.costs import category_totals, total_for_strategy
from dealdesk.domain.factors import CalculationFactors
from dealdesk.domain.finance import financing_costs, rehab_financing_costs, safe_div
from dealdesk.domain.property import Property, SavedProperty


def misc_costs(prop: Property, factors: CalculationFactors) -> float:
    return prop.renovation_cost * (factors.misc_costs_percentage / 100)


def total_costs(prop: Property, factors: CalculationFactors) -> float:
    return prop.price + prop.renovation_cost + financing_costs(prop, factors) + misc_costs(prop, factors)


def net_profit(prop: Property, factors: CalculationFactors) -> float:
    # Overhead is approximated by misc_costs_percentage only; the itemised
    # current_costs are a separate, informational breakdown and are not
    # subtracted here.
    return prop.estimated_arv - total_costs(prop, factors)


def roi(arv: float, purchase_price: float, renovation_cost: float) -> float:
    """Gross ROI in percent: (ARV - price - rehab) / (price + rehab) * 100."""
    profit = arv - (purchase_price + renovation_cost)
    investment = purchase_price + renovation_cost
    return safe_div(profit, investment) * 100


def total_investment(prop: Property) -> float:
    return prop.price + prop.renovation_cost


def property_roi(prop: Property) -> float:
    return roi(prop.estimated_arv, prop.price, prop.renovation_cost)


def profit_roi(prop: Property, factors: CalculationFactors) -> float:
    """ROI on the listing card: net profit (after financing and misc) / investment."""
    return safe_div(net_profit(prop, factors), total_investment(prop)) * 100


@dataclass
class DealMetrics:
    financing_costs: float
    rehab_financing_costs: float
    misc_costs: float
    total_costs: float
    net_profit: float
    roi: float
    profit_roi: float
    total_investment: float
    # Informational: itemised strategy costs, never part of net_profit.
    strategy_costs_total: float
    strategy_costs: dict[str, float] = field(default_factory=dict)


def compute_deal_metrics(prop: Property, factors: CalculationFactors) -> DealMetrics:
    financing = financing_costs(prop, factors)
    misc = misc_costs(prop, factors)
    costs = prop.price + prop.renovation_cost + financing + misc
    profit = prop.estimated_arv - costs
    investment = total_investment(prop)

    return DealMetrics(
        financing_costs=financing,
        rehab_financing_costs=rehab_financing_costs(prop, factors) if factors.purchase_model != "cash" else 0.0,
        misc_costs=misc,
        total_costs=costs,
        net_profit=profit,
        roi=property_roi(prop),
        profit_roi=safe_div(profit, investment) * 100,
        total_investment=investment,
        strategy_costs_total=total_for_strategy(factors.current_costs, factors.strategy),
        strategy_costs=category_totals(factors.current_costs, factors.strategy),
    )


def save_property(prop: Property, factors: CalculationFactors) -> SavedProperty:
    """Snapshot profit and ROI under the factors in force right now."""
    return SavedProperty(
        **prop.model_dump(exclude={"profit", "roi"}),
        profit=net_profit(prop, factors),
        roi=property_roi(prop),
    )
