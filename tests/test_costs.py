import functools
import operator

import pytest
from hypothesis import given, strategies as st
from pydantic import ValidationError

from dealdesk.domain.costs import (
    AcquisitionCosts,
    CostModelError,
    CostPresets,
    FixAndFlipCosts,
    WholesaleCosts,
    category_totals,
    coerce_amount,
    default_cost_presets,
    from_cost_set,
    item_key,
    normalize_cost_set,
    to_cost_set,
    total_for_category,
    total_for_strategy,
    with_preset_value,
)
from dealdesk.domain.strategy import PURCHASE_MODELS, STRATEGIES, STRATEGY_CATEGORIES


amounts = st.floats(min_value=0.0, max_value=1e7, allow_nan=False, allow_infinity=False)
categories = st.dictionaries(st.text(min_size=1, max_size=12), amounts, max_size=8)


def test_empty_category_totals_zero():
    assert total_for_category({}) == 0
    assert total_for_category(None) == 0
    assert total_for_category(AcquisitionCosts()) == 0


@given(costs=categories)
def test_category_total_is_sum_of_items(costs):
    expected = functools.reduce(operator.add, costs.values(), 0.0)
    assert total_for_category(costs) == expected
    assert total_for_category(costs) == pytest.approx(sum(costs.values()))


@given(extra=categories, stale=st.sampled_from(["setup", "operating", "refinance", "wholesale"]))
def test_irrelevant_categories_never_count(extra, stale):
    current = default_cost_presets().cost_set("fix-and-flip", "financed")
    clean_total = total_for_strategy(current, "fix-and-flip")

    polluted = {**current, stale: extra}
    assert total_for_strategy(polluted, "fix-and-flip") == clean_total


@pytest.mark.parametrize(
    "strategy, purchase_model, expected",
    [
        ("fix-and-flip", "financed", 59_000.0),
        ("fix-and-flip", "cash", 55_000.0),
        ("turnkey-rental", "financed", 9_700.0),
        ("turnkey-rental", "cash", 8_700.0),
        ("brrr", "financed", 36_700.0),
        ("brrr", "cash", 35_700.0),
        ("wholesale", "financed", 31_000.0),
        ("wholesale", "cash", 31_000.0),
    ],
)
def test_default_preset_totals(strategy, purchase_model, expected):
    presets = default_cost_presets()
    assert total_for_strategy(presets.get(strategy, purchase_model), strategy) == expected
    assert total_for_strategy(presets.cost_set(strategy, purchase_model), strategy) == expected


def test_every_preset_pair_is_complete():
    presets = default_cost_presets()
    for strategy in STRATEGIES:
        for purchase_model in PURCHASE_MODELS:
            costs = presets.get(strategy, purchase_model)
            assert costs.strategy == strategy
            assert tuple(costs.categories()) == STRATEGY_CATEGORIES[strategy]


def test_presets_reject_missing_category():
    raw = default_cost_presets().model_dump(by_alias=True)
    del raw["fix-and-flip"]["financed"]["selling"]
    with pytest.raises(ValidationError):
        CostPresets.model_validate(raw)


def test_absent_category_totals_zero():
    current = {"acquisition": {"closing_costs": 1000.0}}
    assert total_for_strategy(current, "brrr") == 1000.0
    assert category_totals(current, "brrr") == {
        "acquisition": 1000.0,
        "rehab": 0.0,
        "refinance": 0.0,
        "operating": 0.0,
    }


def test_unknown_strategy_totals_zero():
    current = default_cost_presets().cost_set("wholesale", "cash")
    assert total_for_strategy(current, "land-banking") == 0


def test_cost_set_round_trip_keeps_strategy():
    presets = default_cost_presets()
    loose = presets.cost_set("wholesale", "cash")
    typed = from_cost_set("wholesale", loose)

    assert isinstance(typed, WholesaleCosts)
    assert to_cost_set(typed) == loose


def test_from_cost_set_drops_stale_and_rejects_missing():
    presets = default_cost_presets()
    flip = presets.cost_set("fix-and-flip", "financed")

    typed = from_cost_set("fix-and-flip", {**flip, "setup": {"repairs": 1.0}})
    assert isinstance(typed, FixAndFlipCosts)

    with pytest.raises(CostModelError, match="selling"):
        from_cost_set("fix-and-flip", {k: v for k, v in flip.items() if k != "selling"})


def test_with_preset_value_changes_exactly_one_leaf():
    presets = default_cost_presets()
    updated = with_preset_value(presets, "fix-and-flip", "financed", "acquisition", "closing_costs", 4200)

    assert updated.get("fix-and-flip", "financed").acquisition.closing_costs == 4200
    # original untouched
    assert presets.get("fix-and-flip", "financed").acquisition.closing_costs == 3000

    old_ff = presets.get("fix-and-flip", "financed")
    new_ff = updated.get("fix-and-flip", "financed")
    assert new_ff.acquisition.inspection_costs == old_ff.acquisition.inspection_costs
    # untouched branches are shared, not copied
    assert new_ff.rehab is old_ff.rehab
    assert updated.fix_and_flip.cash is presets.fix_and_flip.cash
    assert updated.brrr is presets.brrr
    assert updated.turnkey_rental is presets.turnkey_rental
    assert updated.wholesale is presets.wholesale


def test_with_preset_value_accepts_camel_case_item_and_editor_input():
    presets = default_cost_presets()
    updated = with_preset_value(presets, "wholesale", "cash", "wholesale", "assignmentFee", "7500")
    assert updated.get("wholesale", "cash").wholesale.assignment_fee == 7500

    cleared = with_preset_value(presets, "wholesale", "cash", "wholesale", "assignmentFee", "abc")
    assert cleared.get("wholesale", "cash").wholesale.assignment_fee == 0


@pytest.mark.parametrize(
    "strategy, category, field, value",
    [
        ("turnkey-rental", "rehab", "contingency", 1),  # category not in strategy
        ("brrr", "refinance", "broker_fee", 1),  # unknown item
        ("brrr", "refinance", "appraisal_fees", -10),  # negative amount
        ("flip-it", "acquisition", "closing_costs", 1),  # unknown strategy
    ],
)
def test_with_preset_value_rejects_bad_addresses(strategy, category, field, value):
    with pytest.raises(CostModelError):
        with_preset_value(default_cost_presets(), strategy, "financed", category, field, value)


@pytest.mark.parametrize(
    "raw, expected",
    [("", 0.0), ("  ", 0.0), ("abc", 0.0), (None, 0.0), ("12.5", 12.5), (7, 7.0), (float("nan"), 0.0)],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


def test_item_key_answers_with_client_spelling():
    assert item_key("holding", "hoa_fees") == "hoaFees"
    assert item_key("holding", "hoaFees") == "hoaFees"
    assert item_key("rehab", "contingency") == "contingency"
    # categories outside the cost model are left alone
    assert item_key("landscaping", "sod_install") == "sod_install"
    with pytest.raises(CostModelError):
        item_key("selling", "realtor_fee")


def test_normalize_cost_set_merges_spellings():
    assert normalize_cost_set({"setup": {"repairs": 1.0, "property_management_setup": 2.0}}) == {
        "setup": {"repairs": 1.0, "propertyManagementSetup": 2.0}
    }
