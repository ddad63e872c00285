# src/dealdesk/services/search.py
"""
Listing search: conjunctive filtering plus a single-key, stable sort.

ROI and net profit are recomputed from the factors passed in on every call;
nothing is cached between searches, so editing the cost model re-ranks
listings immediately.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Collection, Iterable, Sequence
from datetime import timezone

from dealdesk.adapters.logging_utils import get_logger
from dealdesk.domain.factors import CalculationFactors
from dealdesk.domain.metrics import net_profit, property_roi
from dealdesk.domain.property import Property
from dealdesk.domain.search import SearchFilters

logger = get_logger(__name__)


# ---------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------

def matches_text(prop: Property, term: str) -> bool:
    if term.lower() in prop.address.lower():
        return True
    # zip codes are digits; compared as-is
    return prop.zip_code is not None and term in prop.zip_code


def _within(value: float, bounds: tuple[float, float]) -> bool:
    lo, hi = bounds
    return lo <= value <= hi


def matches_filters(
    prop: Property,
    filters: SearchFilters,
    factors: CalculationFactors,
    saved_ids: Collection[int | str] | None = None,
) -> bool:
    if filters.favorites_only and (saved_ids is None or prop.id not in saved_ids):
        return False

    return (
        matches_text(prop, filters.search_term)
        and _within(prop.price, filters.price_range)
        and prop.bedrooms >= filters.bedrooms
        and property_roi(prop) >= filters.min_roi
        and (not filters.property_types or prop.property_type in filters.property_types)
        and _within(prop.year_built, filters.year_built_range)
        and net_profit(prop, factors) >= filters.min_net_profit
        and (filters.deal_type == "all" or prop.deal_type == filters.deal_type)
    )


def filter_properties(
    properties: Iterable[Property],
    filters: SearchFilters,
    factors: CalculationFactors,
    saved_ids: Collection[int | str] | None = None,
) -> list[Property]:
    return [p for p in properties if matches_filters(p, filters, factors, saved_ids)]


# ---------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------

def _date_added_key(prop: Property) -> float:
    # Same direction as every other key: "desc" lists the newest first. The
    # web client's comparator ran the other way for this key only, so its
    # default order showed the oldest listings first.
    # Missing date sorts as the epoch, i.e. oldest.
    if prop.date_added is None:
        return 0.0
    dt = prop.date_added
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def sort_key_for(sort_by: str, factors: CalculationFactors) -> Callable[[Property], float] | None:
    keys: dict[str, Callable[[Property], float]] = {
        "dateAdded": _date_added_key,
        "price": lambda p: p.price,
        "roi": property_roi,
        "netProfit": lambda p: net_profit(p, factors),
        "bedrooms": lambda p: p.bedrooms,
        "squareFeet": lambda p: p.square_feet,
        "yearBuilt": lambda p: float(p.year_built),
    }
    return keys.get(sort_by)


def sort_properties(
    properties: Sequence[Property],
    sort_by: str,
    sort_order: str,
    factors: CalculationFactors,
) -> list[Property]:
    """
    Stable single-key sort. Equal keys keep their input order in both
    directions; there is no secondary key.

    Listings whose key is NaN (e.g. ROI with zero investment and zero ARV)
    cannot be ordered and are appended, in input order, after the rest.
    """
    key = sort_key_for(sort_by, factors)
    if key is None:
        return list(properties)

    keyed = [(key(p), p) for p in properties]
    ordered = [pair for pair in keyed if not math.isnan(pair[0])]
    unordered = [p for k, p in keyed if math.isnan(k)]

    # sorted() keeps equal elements in input order even with reverse=True.
    ordered = sorted(ordered, key=lambda pair: pair[0], reverse=(sort_order == "desc"))
    return [p for _, p in ordered] + unordered


def search_properties(
    properties: Iterable[Property],
    filters: SearchFilters,
    factors: CalculationFactors,
    saved_ids: Collection[int | str] | None = None,
) -> list[Property]:
    items = list(properties)
    matched = filter_properties(items, filters, factors, saved_ids)
    result = sort_properties(matched, filters.sort_by, filters.sort_order, factors)
    logger.debug(
        "search evaluated",
        extra={
            "context": {
                "candidates": len(items),
                "matched": len(result),
                "sort_by": filters.sort_by,
                "sort_order": filters.sort_order,
                "strategy": factors.strategy,
            }
        },
    )
    return result
