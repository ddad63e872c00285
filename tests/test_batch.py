import math

import pytest

from dealdesk.analysis.batch import FRAME_COLUMNS, listing_metrics_frame, summarize_listings
from dealdesk.domain.metrics import net_profit, property_roi
from .fixtures.listings import all_listings, oak_flip


def test_frame_matches_scalar_engine(financed_factors):
    listings = all_listings()
    frame = listing_metrics_frame(listings, financed_factors)

    assert list(frame.columns) == FRAME_COLUMNS
    assert list(frame["id"]) == [1, 2, 3, 4]
    for prop, (_, row) in zip(listings, frame.iterrows()):
        assert row["net_profit"] == net_profit(prop, financed_factors)
        assert row["roi"] == property_roi(prop)


def test_summary_over_fixture_listings(cash_factors):
    frame = listing_metrics_frame(all_listings(), cash_factors)
    s = summarize_listings(frame)

    assert s.n_listings == 4
    assert s.mean_net_profit == pytest.approx((59_000 - 2_500 + 9_500 + 10_000) / 4)
    assert s.p50_net_profit == pytest.approx(9_750.0)


def test_summary_ignores_non_finite(cash_factors):
    blank = oak_flip().model_copy(update={"id": 9, "price": 0.0, "renovation_cost": 0.0})
    frame = listing_metrics_frame([oak_flip(), blank], cash_factors)
    s = summarize_listings(frame)

    assert s.n_listings == 2
    assert math.isinf(frame["roi"].iloc[1])
    assert s.mean_roi == pytest.approx(50.0)


def test_summary_of_empty_batch(cash_factors):
    s = summarize_listings(listing_metrics_frame([], cash_factors))
    assert s.n_listings == 0
    assert math.isnan(s.mean_net_profit)
    assert math.isnan(s.p90_roi)
