# src/dealdesk/domain/property.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ListingSource = Literal["mls", "wholesaler"]
ListingStatus = Literal["pending_review", "published", "rejected"]
DealStatus = Literal["available", "pending", "sold"]


class Property(BaseModel):
    """
    An acquisition candidate as read from the listing store.

    The store uses camelCase keys (`estimatedARV`, `squareFeet`, ...); both
    spellings are accepted. Optional money fields default to 0 here, which is
    where the engine's callers coalesce them.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: int | str
    address: str
    price: float
    bedrooms: float = 0.0
    bathrooms: float = 0.0
    square_feet: float = 0.0
    year_built: int = 0
    property_type: str = "single_family"
    source: ListingSource = "mls"
    status: ListingStatus = "pending_review"
    photos: list[str] = Field(default_factory=list)
    image: str | None = None

    estimated_arv: float = Field(default=0.0, alias="estimatedARV")
    renovation_cost: float = 0.0
    rent_potential: float | None = None

    deal_type: str | None = None
    zip_code: str | None = None
    last_sold_date: str | None = None
    last_sold_price: float | None = None
    date_added: datetime | None = None
    description: str | None = None
    notes: str | None = None
    wholesaler_id: str | None = Field(default=None, alias="wholesaler_id")
    deal_status: DealStatus | None = Field(default=None, alias="deal_status")


class SavedProperty(Property):
    """
    Property plus the profit/ROI computed when it was saved.

    A snapshot: it is not refreshed when calculation factors change later.
    """
    profit: float
    roi: float
