"""
What-if analysis for a priced product.

A scenario applies percentage changes to material, labour and shipping
costs and to the sale price, then reports the new profit and margin and
how far they moved from the base case.

Platform fees are not recomputed from the fee schedule at the new price.
They are scaled in proportion to the sale price (``platform_fees /
base_sale_price``), which is exact for purely percentage-based schedules
and an approximation when fixed fees are present.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .fees import compute_profit
from .models import ScenarioConfig, ScenarioParams, ScenarioResult
from .money import round_half_up

SCENARIO_PRESETS: Tuple[ScenarioConfig, ...] = (
    ScenarioConfig("Supplier Price +10%", material_cost_change=10),
    ScenarioConfig("Supplier Price +20%", material_cost_change=20),
    ScenarioConfig("Shipping Cost +25%", shipping_cost_change=25),
    ScenarioConfig("Sale Price -10%", sale_price_change=-10),
    ScenarioConfig("Sale Price -20%", sale_price_change=-20),
    ScenarioConfig("Premium Price +15%", sale_price_change=15),
    ScenarioConfig(
        "Cost Increase +15%",
        material_cost_change=15,
        labour_cost_change=15,
        shipping_cost_change=15,
    ),
    ScenarioConfig("Bulk Discount -20% cost", material_cost_change=-20),
)


def _apply_change(base: int, change: float) -> int:
    return round_half_up(base * (1 + change / 100))


def calculate_scenario(params: ScenarioParams, scenario: ScenarioConfig) -> ScenarioResult:
    """Recalculate profit and margin with the scenario's changes applied."""
    new_material_cost = _apply_change(params.base_material_cost, scenario.material_cost_change)
    new_labour_cost = _apply_change(params.base_labour_cost, scenario.labour_cost_change)
    new_shipping_cost = _apply_change(params.base_shipping_cost, scenario.shipping_cost_change)
    new_sale_price = _apply_change(params.base_sale_price, scenario.sale_price_change)
    new_cost = new_material_cost + new_labour_cost + new_shipping_cost

    fee_ratio = params.platform_fees / params.base_sale_price if params.base_sale_price > 0 else 0
    new_fees = round_half_up(new_sale_price * fee_ratio)

    result = compute_profit(
        revenue=new_sale_price,
        product_cost=new_cost,
        platform_fees=new_fees,
        vat_rate=params.vat_rate,
        is_vat_registered=params.is_vat_registered,
    )
    return ScenarioResult(
        scenario=scenario,
        profit=result.profit,
        margin=result.margin,
        profit_change=result.profit - params.base_profit,
        margin_change=result.margin - params.base_margin,
        new_sale_price=new_sale_price,
        new_cost=new_cost,
    )


def calculate_all_scenarios(
    params: ScenarioParams,
    presets: Iterable[ScenarioConfig] = SCENARIO_PRESETS,
) -> List[ScenarioResult]:
    return [calculate_scenario(params, scenario) for scenario in presets]


def calculate_custom_scenario(
    params: ScenarioParams,
    material_cost_change: float = 0.0,
    labour_cost_change: float = 0.0,
    shipping_cost_change: float = 0.0,
    sale_price_change: float = 0.0,
) -> ScenarioResult:
    """Run an ad-hoc scenario, e.g. from slider values."""
    scenario = ScenarioConfig(
        name="Custom",
        material_cost_change=material_cost_change,
        labour_cost_change=labour_cost_change,
        shipping_cost_change=shipping_cost_change,
        sale_price_change=sale_price_change,
    )
    return calculate_scenario(params, scenario)


def find_worst_case_scenario(results: Sequence[ScenarioResult]) -> Optional[ScenarioResult]:
    if not results:
        return None
    return min(results, key=lambda r: r.profit)


def find_best_case_scenario(results: Sequence[ScenarioResult]) -> Optional[ScenarioResult]:
    if not results:
        return None
    return max(results, key=lambda r: r.profit)
