# tests/fixtures/listings.py

from datetime import datetime

from dealdesk.domain.property import Property
from dealdesk.domain.search import SearchFilters


def _listing(**overrides) -> Property:
    base = dict(
        id=0,
        address="1 Test St",
        price=100_000.0,
        bedrooms=3,
        bathrooms=2,
        square_feet=1400,
        year_built=1990,
        property_type="single_family",
        status="published",
        estimated_arv=150_000.0,
        renovation_cost=10_000.0,
        deal_type="flip",
        zip_code="48009",
    )
    base.update(overrides)
    return Property(**base)


def oak_flip() -> Property:
    """ROI 50%, cash net profit 59,000."""
    return _listing(
        id=1,
        address="12 Oak St",
        zip_code="48009",
        price=100_000.0,
        estimated_arv=180_000.0,
        renovation_cost=20_000.0,
        bedrooms=3,
        square_feet=1500,
        year_built=1990,
        deal_type="flip",
        date_added=datetime(2024, 1, 10),
    )


def elm_rental() -> Property:
    """ROI 0%, cash net profit -2,500."""
    return _listing(
        id=2,
        address="45 Elm Ave",
        zip_code="48201",
        price=150_000.0,
        estimated_arv=200_000.0,
        renovation_cost=50_000.0,
        bedrooms=2,
        square_feet=1100,
        year_built=1975,
        property_type="multi_family",
        deal_type="rental",
        date_added=datetime(2024, 3, 1),
    )


def pine_flip() -> Property:
    """ROI ~11.1%, cash net profit 9,500, no date_added."""
    return _listing(
        id=3,
        address="9 Pine Rd",
        zip_code="48009",
        price=80_000.0,
        estimated_arv=100_000.0,
        renovation_cost=10_000.0,
        bedrooms=4,
        square_feet=1800,
        year_built=2005,
        deal_type="flip",
    )


def oak_condo() -> Property:
    """ROI ~5.6%, cash net profit 10,000."""
    return _listing(
        id=4,
        address="77 Oak Ct",
        zip_code="48075",
        price=180_000.0,
        estimated_arv=190_000.0,
        renovation_cost=0.0,
        bedrooms=3,
        square_feet=1200,
        year_built=2010,
        property_type="condo",
        deal_type="wholesale",
        date_added=datetime(2024, 2, 1),
    )


def all_listings() -> list[Property]:
    return [oak_flip(), elm_rental(), pine_flip(), oak_condo()]


def permissive_filters(**overrides) -> SearchFilters:
    """Filters that let every fixture listing through unless overridden."""
    base = dict(
        search_term="",
        price_range=(0.0, 1e9),
        bedrooms=0,
        min_roi=float("-inf"),
        property_types=(),
        year_built_range=(0, 9999),
        min_net_profit=float("-inf"),
        deal_type="all",
    )
    base.update(overrides)
    return SearchFilters(**base)


def ids(properties) -> list:
    return [p.id for p in properties]
