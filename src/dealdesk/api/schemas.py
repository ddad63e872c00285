# src/dealdesk/api/schemas.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dealdesk.domain.factors import CalculationFactors, default_factors
from dealdesk.domain.property import Property
from dealdesk.domain.search import SearchFilters
from dealdesk.domain.strategy import PurchaseModel, Strategy


class MetricsRequest(BaseModel):
    property: Property
    factors: CalculationFactors = Field(default_factory=default_factors)


class MetricsResponse(BaseModel):
    """
    Deal metrics for one listing.

    Non-finite values are returned as null: JSON has no inf/nan.
    """
    model_config = ConfigDict(extra="allow")

    financing_costs: float | None
    rehab_financing_costs: float | None
    misc_costs: float | None
    total_costs: float | None
    net_profit: float | None
    roi: float | None
    profit_roi: float | None
    total_investment: float | None
    strategy_costs_total: float | None
    strategy_costs: dict[str, float]
    formatted: dict[str, Any] = Field(default_factory=dict)


class SearchRequest(BaseModel):
    properties: list[Property]
    filters: SearchFilters = Field(default_factory=SearchFilters)
    factors: CalculationFactors = Field(default_factory=default_factors)
    saved_ids: list[int | str] = Field(default_factory=list)


class SearchResultItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    property: dict[str, Any]
    net_profit: float | None
    roi: float | None


class StrategySwitchRequest(BaseModel):
    factors: CalculationFactors = Field(default_factory=default_factors)
    strategy: Strategy


class PurchaseModelSwitchRequest(BaseModel):
    factors: CalculationFactors = Field(default_factory=default_factors)
    purchase_model: PurchaseModel
