# src/dealdesk/analysis/batch.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd

from dealdesk.domain.factors import CalculationFactors
from dealdesk.domain.metrics import compute_deal_metrics
from dealdesk.domain.property import Property

FRAME_COLUMNS = [
    "id",
    "address",
    "zip_code",
    "price",
    "estimated_arv",
    "renovation_cost",
    "financing_costs",
    "misc_costs",
    "total_costs",
    "net_profit",
    "roi",
    "profit_roi",
]


@dataclass
class ListingSummary:
    """
    Reduction over a batch of listings.

    Non-finite values (e.g. ROI on a zero-investment listing) are excluded
    from the statistics but still counted in `n_listings`.
    """
    n_listings: int
    mean_net_profit: float
    p50_net_profit: float
    p90_net_profit: float
    mean_roi: float
    p50_roi: float
    p90_roi: float


def listing_metrics_frame(
    properties: Iterable[Property],
    factors: CalculationFactors,
) -> pd.DataFrame:
    """
    One row per listing, computed with the scalar engine so the numbers are
    identical to what a single-listing call returns.
    """
    rows = []
    for prop in properties:
        m = compute_deal_metrics(prop, factors)
        rows.append(
            {
                "id": prop.id,
                "address": prop.address,
                "zip_code": prop.zip_code,
                "price": prop.price,
                "estimated_arv": prop.estimated_arv,
                "renovation_cost": prop.renovation_cost,
                "financing_costs": m.financing_costs,
                "misc_costs": m.misc_costs,
                "total_costs": m.total_costs,
                "net_profit": m.net_profit,
                "roi": m.roi,
                "profit_roi": m.profit_roi,
            }
        )
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _finite(x: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    return np.where(np.isfinite(x), x, np.nan)


def summarize_listings(frame: pd.DataFrame) -> ListingSummary:
    n = int(frame.shape[0])
    profit = _finite(frame["net_profit"].to_numpy(dtype=float))
    roi = _finite(frame["roi"].to_numpy(dtype=float))

    def _stat(x: np.ndarray, fn) -> float:
        if x.size == 0 or np.all(np.isnan(x)):
            return float("nan")
        return float(fn(x))

    return ListingSummary(
        n_listings=n,
        mean_net_profit=_stat(profit, np.nanmean),
        p50_net_profit=_stat(profit, lambda x: np.nanquantile(x, 0.50)),
        p90_net_profit=_stat(profit, lambda x: np.nanquantile(x, 0.90)),
        mean_roi=_stat(roi, np.nanmean),
        p50_roi=_stat(roi, lambda x: np.nanquantile(x, 0.50)),
        p90_roi=_stat(roi, lambda x: np.nanquantile(x, 0.90)),
    )
