"""Tests for what-if scenarios."""

from __future__ import annotations

import pytest

from seller_margin_app.models import ScenarioConfig, ScenarioParams
from seller_margin_app.scenarios import (
    SCENARIO_PRESETS,
    calculate_all_scenarios,
    calculate_custom_scenario,
    calculate_scenario,
    find_best_case_scenario,
    find_worst_case_scenario,
)

PARAMS = ScenarioParams(
    base_material_cost=1000,
    base_labour_cost=500,
    base_shipping_cost=300,
    base_sale_price=4000,
    platform_fees=400,
    vat_rate=0,
    is_vat_registered=False,
    base_profit=1800,
    base_margin=45.0,
)


def test_presets() -> None:
    assert len(SCENARIO_PRESETS) == 8
    names = [s.name for s in SCENARIO_PRESETS]
    assert "Supplier Price +10%" in names
    assert "Sale Price -20%" in names


def test_supplier_price_increase() -> None:
    result = calculate_scenario(PARAMS, ScenarioConfig("Supplier Price +10%", material_cost_change=10))
    assert result.new_cost == 1900
    assert result.new_sale_price == 4000
    assert result.profit == 1700
    assert result.profit_change == -100


def test_sale_price_cut_scales_fees() -> None:
    result = calculate_scenario(PARAMS, ScenarioConfig("Sale Price -20%", sale_price_change=-20))
    # fees scale with price: 3200 x 400 / 4000 = 320
    assert result.new_sale_price == 3200
    assert result.profit == 3200 - 1800 - 320
    assert result.margin == pytest.approx(33.75)
    assert result.margin_change == pytest.approx(-11.25)


def test_all_scenarios_and_extremes() -> None:
    results = calculate_all_scenarios(PARAMS)
    assert [r.scenario for r in results] == list(SCENARIO_PRESETS)
    assert find_worst_case_scenario(results).scenario.name == "Sale Price -20%"
    assert find_best_case_scenario(results).scenario.name == "Premium Price +15%"


def test_custom_preset_list() -> None:
    presets = [ScenarioConfig("Labour +50%", labour_cost_change=50)]
    results = calculate_all_scenarios(PARAMS, presets)
    assert len(results) == 1
    assert results[0].new_cost == 2050


def test_custom_scenario_without_changes_matches_base() -> None:
    result = calculate_custom_scenario(PARAMS)
    assert result.scenario.name == "Custom"
    assert result.profit == PARAMS.base_profit
    assert result.profit_change == 0
    assert result.margin_change == pytest.approx(0)


def test_custom_scenario_combines_changes() -> None:
    result = calculate_custom_scenario(PARAMS, material_cost_change=-20, sale_price_change=15)
    assert result.new_cost == 800 + 500 + 300
    assert result.profit == 4600 - 1600 - 460


def test_zero_base_price_has_no_fees() -> None:
    params = ScenarioParams(1000, 0, 0, 0, 0, 0, False, -1000, 0)
    result = calculate_scenario(params, SCENARIO_PRESETS[0])
    assert result.profit == -1100
    assert result.margin == 0


def test_extremes_of_empty_list() -> None:
    assert find_worst_case_scenario([]) is None
    assert find_best_case_scenario([]) is None
