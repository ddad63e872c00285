# src/dealdesk/domain/search.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dealdesk.adapters.config import config

SortKey = Literal["dateAdded", "price", "roi", "netProfit", "bedrooms", "squareFeet", "yearBuilt"]
SortOrder = Literal["asc", "desc"]

SORT_KEYS: tuple[str, ...] = (
    "dateAdded",
    "price",
    "roi",
    "netProfit",
    "bedrooms",
    "squareFeet",
    "yearBuilt",
)


def _default_price_range() -> tuple[float, float]:
    return (0.0, config.SEARCH_MAX_PRICE)


class SearchFilters(BaseModel):
    """
    Listing search criteria. All predicates are ANDed together.

    `sort_by` is a plain string: an unrecognised key leaves the input order
    alone rather than failing the search.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    search_term: str = ""
    price_range: tuple[float, float] = Field(default_factory=_default_price_range)
    bedrooms: float = Field(default_factory=lambda: config.SEARCH_MIN_BEDROOMS)
    min_roi: float = Field(default=0.0, alias="minROI")
    property_types: tuple[str, ...] = ()
    year_built_range: tuple[int, int] = (1900, 2024)
    min_net_profit: float = 0.0
    deal_type: str = "all"
    favorites_only: bool = False
    sort_by: str = "dateAdded"
    sort_order: SortOrder = "desc"


class SavedSearch(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    filters: SearchFilters
    date_created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
