# src/dealdesk/api/http.py
from __future__ import annotations

import math
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException

from dealdesk.adapters.config import config
from dealdesk.adapters.format import format_currency, format_percent
from dealdesk.adapters.logging_utils import get_logger
from dealdesk.domain.costs import CostModelError, default_cost_presets
from dealdesk.domain.factors import CalculationFactors, switch_purchase_model, switch_strategy
from dealdesk.domain.metrics import compute_deal_metrics, net_profit, property_roi
from dealdesk.domain.rehab import default_rehab_estimate
from dealdesk.domain.strategy import CATEGORY_LABELS
from dealdesk.services.search import search_properties
from .schemas import (
    MetricsRequest,
    MetricsResponse,
    PurchaseModelSwitchRequest,
    SearchRequest,
    SearchResultItem,
    StrategySwitchRequest,
)

logger = get_logger(__name__)

app = FastAPI(title="dealdesk")


def _json_num(x: float) -> float | None:
    # JSON has no inf/nan; surface them as null rather than failing the response.
    return x if math.isfinite(x) else None


def _dump_factors(factors: CalculationFactors) -> dict[str, Any]:
    return factors.model_dump(mode="json", by_alias=True)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": config.ENV}


@app.get("/presets")
def presets() -> dict[str, Any]:
    return default_cost_presets().model_dump(mode="json", by_alias=True)


@app.get("/rehab/estimator")
def rehab_estimator() -> dict[str, Any]:
    return default_rehab_estimate().model_dump(mode="json", by_alias=True)


@app.post("/metrics", response_model=MetricsResponse)
def metrics_endpoint(payload: MetricsRequest) -> MetricsResponse:
    m = compute_deal_metrics(payload.property, payload.factors)
    raw = asdict(m)
    body: dict[str, Any] = {
        k: (_json_num(v) if isinstance(v, float) else v) for k, v in raw.items()
    }
    body["formatted"] = {
        "net_profit": format_currency(m.net_profit),
        "financing_costs": format_currency(m.financing_costs),
        "total_investment": format_currency(m.total_investment),
        "roi": format_percent(m.roi),
        "profit_roi": format_percent(m.profit_roi),
    }
    body["formatted"]["strategy_costs"] = {
        f"{CATEGORY_LABELS.get(k, k)} Costs": format_currency(v) for k, v in m.strategy_costs.items()
    }
    return MetricsResponse(**body)


@app.post("/search", response_model=list[SearchResultItem])
def search_endpoint(payload: SearchRequest) -> list[SearchResultItem]:
    results = search_properties(
        payload.properties,
        payload.filters,
        payload.factors,
        saved_ids=set(payload.saved_ids),
    )
    return [
        SearchResultItem(
            property=p.model_dump(mode="json", by_alias=True),
            net_profit=_json_num(net_profit(p, payload.factors)),
            roi=_json_num(property_roi(p)),
        )
        for p in results
    ]


@app.post("/factors/strategy")
def switch_strategy_endpoint(payload: StrategySwitchRequest) -> dict[str, Any]:
    try:
        factors = switch_strategy(payload.factors, payload.strategy)
    except CostModelError as e:
        logger.warning("strategy switch rejected", extra={"context": {"error": str(e)}})
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _dump_factors(factors)


@app.post("/factors/purchase-model")
def switch_purchase_model_endpoint(payload: PurchaseModelSwitchRequest) -> dict[str, Any]:
    try:
        factors = switch_purchase_model(payload.factors, payload.purchase_model)
    except CostModelError as e:
        logger.warning("purchase model switch rejected", extra={"context": {"error": str(e)}})
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _dump_factors(factors)
