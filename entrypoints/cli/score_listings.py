# entrypoints/cli/score_listings.py
"""
Score a JSON file of listings under a set of calculation factors.

  python entrypoints/cli/score_listings.py listings.json --strategy brrr \
      --purchase-model cash --min-roi 15 --sort-by netProfit

Input is a JSON array of listing records (camelCase or snake_case keys).
Prints a ranked table plus a batch summary, or writes JSON with --output.
"""
from __future__ import annotations

import argparse
import json
import math
import os
import sys
from pathlib import Path
from typing import Any, Sequence

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "src")))

import pandas as pd
from loguru import logger
from pydantic import ValidationError

from dealdesk.adapters.format import format_currency, format_percent
from dealdesk.analysis.batch import listing_metrics_frame, summarize_listings
from dealdesk.domain.factors import (
    CalculationFactors,
    default_factors,
    switch_purchase_model,
    switch_strategy,
)
from dealdesk.domain.property import Property
from dealdesk.domain.search import SORT_KEYS, SearchFilters
from dealdesk.domain.strategy import PURCHASE_MODELS, STRATEGIES, STRATEGY_LABELS
from dealdesk.services.search import search_properties


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rank listings by deal economics under the given factors."
    )
    parser.add_argument("listings", type=str, help="Path to a JSON array of listings.")

    fac = parser.add_argument_group("calculation factors")
    fac.add_argument("--strategy", choices=STRATEGIES, default=None)
    fac.add_argument("--purchase-model", choices=PURCHASE_MODELS, default=None)
    fac.add_argument("--interest-rate", type=float, default=None, help="Annual %%, e.g. 5")
    fac.add_argument("--down-payment", type=float, default=None, help="Down payment %%")
    fac.add_argument("--holding-period", type=float, default=None, help="Months held")
    fac.add_argument("--misc-pct", type=float, default=None, help="Misc costs as %% of rehab")

    flt = parser.add_argument_group("filters")
    flt.add_argument("--search", type=str, default="")
    flt.add_argument("--min-price", type=float, default=0.0)
    flt.add_argument("--max-price", type=float, default=None)
    flt.add_argument("--min-bedrooms", type=float, default=0.0)
    flt.add_argument("--min-roi", type=float, default=-math.inf)
    flt.add_argument("--min-net-profit", type=float, default=-math.inf)
    flt.add_argument("--property-type", dest="property_types", nargs="*", default=[])
    flt.add_argument("--deal-type", type=str, default="all")
    flt.add_argument("--sort-by", choices=SORT_KEYS, default="netProfit")
    flt.add_argument("--sort-order", choices=("asc", "desc"), default="desc")

    parser.add_argument("--output", type=str, default=None, help="Write ranked listings as JSON here.")
    return parser.parse_args(argv)


def build_factors(args: argparse.Namespace) -> CalculationFactors:
    factors = default_factors()
    changes: dict[str, Any] = {}
    if args.interest_rate is not None:
        changes["interest_rate"] = args.interest_rate
    if args.down_payment is not None:
        changes["down_payment_percentage"] = args.down_payment
    if args.holding_period is not None:
        changes["holding_period"] = args.holding_period
    if args.misc_pct is not None:
        changes["misc_costs_percentage"] = args.misc_pct

    factors = factors.model_copy(update=changes)
    # Switching refreshes current costs from presets (defaults are on).
    if args.purchase_model:
        factors = switch_purchase_model(factors, args.purchase_model)
    if args.strategy:
        factors = switch_strategy(factors, args.strategy)
    return factors


def build_filters(args: argparse.Namespace) -> SearchFilters:
    return SearchFilters(
        search_term=args.search,
        price_range=(args.min_price, args.max_price if args.max_price is not None else math.inf),
        bedrooms=args.min_bedrooms,
        min_roi=args.min_roi,
        property_types=tuple(args.property_types),
        year_built_range=(0, 9999),
        min_net_profit=args.min_net_profit,
        deal_type=args.deal_type,
        sort_by=args.sort_by,
        sort_order=args.sort_order,
    )


def load_listings(path: str | Path) -> list[Property]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise SystemExit(f"{path}: expected a JSON array of listings")

    listings: list[Property] = []
    for idx, rec in enumerate(raw):
        try:
            listings.append(Property.model_validate(rec))
        except ValidationError as exc:
            logger.warning("Skipping invalid listing", index=idx, errors=exc.error_count())
    return listings


def _json_value(v: Any) -> Any:
    if hasattr(v, "item"):
        v = v.item()
    if isinstance(v, float) and not math.isfinite(v):
        return None
    return v


def _print_table(frame: pd.DataFrame) -> None:
    for _, row in frame.iterrows():
        print(
            f"{str(row['id']):>8}  {row['address'][:40]:<40}  "
            f"{format_currency(row['price']):>12}  "
            f"profit {format_currency(row['net_profit']):>12}  "
            f"roi {format_percent(row['roi']):>8}"
        )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    factors = build_factors(args)
    filters = build_filters(args)

    listings = load_listings(args.listings)
    logger.info(
        "Scoring listings",
        n_listings=len(listings),
        strategy=factors.strategy,
        purchase_model=factors.purchase_model,
    )

    ranked = search_properties(listings, filters, factors)
    frame = listing_metrics_frame(ranked, factors)

    if args.output:
        records = [{k: _json_value(v) for k, v in row.items()} for row in frame.to_dict(orient="records")]
        Path(args.output).write_text(
            json.dumps(records, indent=2),
            encoding="utf-8",
        )
        logger.info("Wrote ranked listings", path=args.output, n_ranked=len(frame))
    else:
        _print_table(frame)

    summary = summarize_listings(frame)
    print(f"Strategy: {STRATEGY_LABELS[factors.strategy]} ({factors.purchase_model})")
    print(f"Listings ranked: {summary.n_listings} of {len(listings)}")
    print(f"  mean / p50 / p90 net profit: {format_currency(summary.mean_net_profit)}, "
          f"{format_currency(summary.p50_net_profit)}, {format_currency(summary.p90_net_profit)}")
    print(f"  mean / p50 / p90 ROI       : {format_percent(summary.mean_roi)}, "
          f"{format_percent(summary.p50_roi)}, {format_percent(summary.p90_roi)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
