"""
FastAPI application exposing the pricing calculations.

Each endpoint takes a JSON body of minor-unit integers, described by a
pydantic model in ``schemas.py``, so malformed or out-of-range input is
rejected with a 422 before any calculation runs.  Fields left out of a
request fall back to the configured settings, so a body only needs the
facts that differ from the seller's defaults.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Tuple

from fastapi import Depends, FastAPI, HTTPException

from .batch import (
    calculate_batch_pricing,
    calculate_break_even_quantity,
    find_most_profitable_quantity,
    find_optimal_bulk_quantity,
)
from .discounts import calculate_discount_analysis, discount_summary
from .errors import SellerMarginError
from .fees import compute_fees, compute_profit
from .models import FeeTerm, RoundingPolicy, ScenarioParams
from .overhead import (
    calculate_overhead_allocation,
    calculate_profit_with_overhead,
    get_overhead_preset,
    overhead_by_category,
)
from .platforms import (
    DEFAULT_PLATFORM_TEMPLATES,
    compute_payment_fees,
    get_platform_template,
    make_batch_fee_calculator,
    make_fee_calculator,
)
from .report import format_summary
from .rounding import generate_boost_plan, round_price
from .scenarios import (
    calculate_all_scenarios,
    calculate_custom_scenario,
    find_best_case_scenario,
    find_worst_case_scenario,
)
from .schemas import (
    BatchRequest,
    DiscountRequest,
    FeesRequest,
    OverheadRequest,
    PricingRequest,
    ProfitRequest,
    ScenarioRequest,
    SolverRequest,
)
from .settings import Settings, get_settings
from .solver import calculate_break_even_price, calculate_target_price, profit_at_price

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="[%(asctime)s] %(levelname)s %(message)s",
)

app = FastAPI(title="Seller Margin Calculator")


def _fee_schedule(payload: PricingRequest, settings: Settings) -> Tuple[FeeTerm, ...]:
    """Fees from an explicit ``fees`` list, else from the named platform."""
    terms = payload.fee_terms()
    if terms is not None:
        return terms
    return get_platform_template(payload.platform or settings.DEFAULT_PLATFORM).fees


def _vat(payload: PricingRequest, settings: Settings) -> Tuple[float, bool]:
    vat_rate = payload.vat_rate if payload.vat_rate is not None else settings.VAT_RATE
    is_vat_registered = (
        payload.vat_registered if payload.vat_registered is not None else settings.VAT_REGISTERED
    )
    return vat_rate, is_vat_registered


def _payment_method(payload: PricingRequest, settings: Settings) -> str:
    return payload.payment_method or settings.PAYMENT_METHOD


def _target_margin(payload: SolverRequest, settings: Settings) -> float:
    return payload.target_margin if payload.target_margin is not None else settings.TARGET_MARGIN


def _rounding_policy(payload: SolverRequest, settings: Settings) -> RoundingPolicy:
    rounding = payload.rounding
    if rounding is None:
        return RoundingPolicy(mode=settings.ROUNDING_MODE, increment=settings.ROUNDING_INCREMENT)
    return RoundingPolicy(
        mode=rounding.mode or settings.ROUNDING_MODE,
        increment=rounding.increment if rounding.increment is not None else settings.ROUNDING_INCREMENT,
        custom_ending=rounding.custom_ending,
    )


def _solver_inputs(payload: SolverRequest, settings: Settings) -> Dict[str, Any]:
    vat_rate, is_vat_registered = _vat(payload, settings)
    return {
        "product_cost": payload.product_cost,
        "shipping_cost": payload.shipping_cost,
        "seller_pays_shipping": payload.seller_pays_shipping,
        "fee_schedule": _fee_schedule(payload, settings),
        "vat_rate": vat_rate,
        "is_vat_registered": is_vat_registered,
    }


def _run(operation: str, func, *args: Any) -> Any:
    """Call ``func`` and turn engine errors into 400 responses."""
    logger.info("Running %s", operation)
    try:
        return func(*args)
    except SellerMarginError as exc:
        logger.warning("%s rejected: %s", operation, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/health")
async def health() -> Dict[str, str]:
    """Return a simple health indicator."""
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}


@app.get("/platforms")
async def platforms() -> List[Dict[str, Any]]:
    """List the built-in marketplace fee templates."""
    return [asdict(template) for template in DEFAULT_PLATFORM_TEMPLATES.values()]


@app.post("/fees")
async def fees(payload: FeesRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Itemise platform and payment fees for a sale."""

    def _calculate() -> Dict[str, Any]:
        platform = compute_fees(
            payload.item_price,
            payload.shipping_cost,
            payload.quantity,
            _fee_schedule(payload, settings),
        )
        payment = compute_payment_fees(
            payload.item_price + payload.shipping_cost, _payment_method(payload, settings)
        )
        return {
            "platform": asdict(platform),
            "payment": asdict(payment),
            "total": platform.total + payment.total,
        }

    return _run("fees", _calculate)


@app.post("/profit")
async def profit(payload: ProfitRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Fees, profit and margin for a product at a given sale price."""

    def _calculate() -> Dict[str, Any]:
        inputs = _solver_inputs(payload, settings)
        sale_price = payload.sale_price
        fee_shipping = payload.shipping_cost if payload.seller_pays_shipping else 0
        breakdown = compute_fees(sale_price, fee_shipping, 1, inputs["fee_schedule"])
        payment = compute_payment_fees(sale_price + fee_shipping, _payment_method(payload, settings))
        result = compute_profit(
            revenue=sale_price + fee_shipping,
            product_cost=payload.product_cost,
            platform_fees=breakdown.total + payment.total,
            vat_rate=inputs["vat_rate"],
            is_vat_registered=inputs["is_vat_registered"],
        )
        summary = format_summary(
            payload.title,
            sale_price,
            payload.product_cost,
            breakdown,
            result,
            settings.CURRENCY,
            _target_margin(payload, settings),
        )
        return {
            "fees": asdict(breakdown),
            "payment_fees": asdict(payment),
            "result": asdict(result),
            "currency": settings.CURRENCY,
            "summary": summary,
        }

    return _run("profit", _calculate)


@app.post("/break-even")
async def break_even(payload: SolverRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Sale price at which profit is zero, plus its rounded listing price."""

    def _calculate() -> Dict[str, Any]:
        inputs = _solver_inputs(payload, settings)
        price = calculate_break_even_price(**inputs)
        rounded = round_price(price, _rounding_policy(payload, settings))
        return {
            "price": price,
            "rounded_price": rounded,
            "result": asdict(profit_at_price(price, **inputs)),
        }

    return _run("break-even", _calculate)


@app.post("/target-price")
async def target_price(payload: SolverRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Sale price achieving the requested margin."""

    def _calculate() -> Dict[str, Any]:
        inputs = _solver_inputs(payload, settings)
        target_margin = _target_margin(payload, settings)
        price = calculate_target_price(target_margin=target_margin, **inputs)
        rounded = round_price(price, _rounding_policy(payload, settings))
        return {
            "target_margin": target_margin,
            "price": price,
            "rounded_price": rounded,
            "result": asdict(profit_at_price(price, **inputs)),
        }

    return _run("target-price", _calculate)


@app.post("/boost-plan")
async def boost_plan(payload: SolverRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Three-step price ladder from just above break-even to the target price."""

    def _calculate() -> Dict[str, Any]:
        inputs = _solver_inputs(payload, settings)
        break_even_price = calculate_break_even_price(**inputs)
        target = calculate_target_price(target_margin=_target_margin(payload, settings), **inputs)
        steps = generate_boost_plan(break_even_price, target, _rounding_policy(payload, settings))
        return {
            "break_even_price": break_even_price,
            "target_price": target,
            "steps": [asdict(step) for step in steps],
        }

    return _run("boost-plan", _calculate)


@app.post("/discounts")
async def discounts(payload: DiscountRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Profit at common discount levels and the deepest profitable discount."""

    def _calculate() -> Dict[str, Any]:
        inputs = _solver_inputs(payload, settings)
        fee_shipping = payload.shipping_cost if payload.seller_pays_shipping else 0
        fee_calculator = make_fee_calculator(
            inputs["fee_schedule"], fee_shipping, _payment_method(payload, settings)
        )
        analysis = calculate_discount_analysis(
            payload.sale_price,
            payload.product_cost,
            payload.shipping_cost,
            payload.seller_pays_shipping,
            fee_calculator,
            inputs["vat_rate"],
            inputs["is_vat_registered"],
            payload.discount_percentages,
        )
        data = asdict(analysis)
        data["summary"] = discount_summary(analysis)
        return data

    return _run("discounts", _calculate)


@app.post("/batch")
async def batch(payload: BatchRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Per-unit economics across order quantities."""

    def _calculate() -> Dict[str, Any]:
        vat_rate, is_vat_registered = _vat(payload, settings)
        fee_calculator = make_batch_fee_calculator(
            _fee_schedule(payload, settings),
            payload.shipping_cost,
            _payment_method(payload, settings),
        )
        tiers = calculate_batch_pricing(
            payload.base_unit_cost,
            payload.fixed_costs,
            payload.sale_price,
            fee_calculator,
            vat_rate,
            is_vat_registered,
            [tier.to_tier() for tier in payload.bulk_discount_tiers],
            payload.quantities,
        )
        most_profitable = find_most_profitable_quantity(tiers)
        optimal = find_optimal_bulk_quantity(tiers)
        break_even_quantity = calculate_break_even_quantity(
            payload.base_unit_cost,
            payload.sale_price,
            payload.fixed_costs,
            fee_calculator(payload.sale_price, 1),
            vat_rate,
            is_vat_registered,
        )
        return {
            "tiers": [asdict(tier) for tier in tiers],
            "most_profitable": asdict(most_profitable) if most_profitable else None,
            "optimal_bulk": asdict(optimal) if optimal else None,
            # JSON has no infinity; null means the cost structure never breaks even
            "break_even_quantity": None if math.isinf(break_even_quantity) else break_even_quantity,
        }

    return _run("batch", _calculate)


@app.post("/scenarios")
async def scenarios(payload: ScenarioRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Preset what-if scenarios, plus an optional custom one."""

    def _calculate() -> Dict[str, Any]:
        vat_rate, is_vat_registered = _vat(payload, settings)
        platform_fees = payload.platform_fees
        if platform_fees is None:
            platform_fees = compute_fees(payload.sale_price, 0, 1, _fee_schedule(payload, settings)).total
        base = compute_profit(
            payload.sale_price,
            payload.material_cost + payload.labour_cost + payload.shipping_cost,
            platform_fees,
            vat_rate,
            is_vat_registered,
        )
        params = ScenarioParams(
            base_material_cost=payload.material_cost,
            base_labour_cost=payload.labour_cost,
            base_shipping_cost=payload.shipping_cost,
            base_sale_price=payload.sale_price,
            platform_fees=platform_fees,
            vat_rate=vat_rate,
            is_vat_registered=is_vat_registered,
            base_profit=base.profit,
            base_margin=base.margin,
        )
        results = calculate_all_scenarios(params)
        worst = find_worst_case_scenario(results)
        best = find_best_case_scenario(results)
        custom = None
        if payload.custom is not None:
            custom = asdict(calculate_custom_scenario(params, **payload.custom.model_dump()))
        return {
            "base": asdict(base),
            "results": [asdict(r) for r in results],
            "worst_case": asdict(worst) if worst else None,
            "best_case": asdict(best) if best else None,
            "custom": custom,
        }

    return _run("scenarios", _calculate)


@app.post("/overhead")
async def overhead(payload: OverheadRequest) -> Dict[str, Any]:
    """Monthly overheads spread across expected sales."""

    def _calculate() -> Dict[str, Any]:
        if payload.items is not None:
            items = tuple(item.to_item() for item in payload.items)
        else:
            items = get_overhead_preset(payload.preset or "home_seller")
        allocation = calculate_overhead_allocation(items, payload.estimated_monthly_sales)
        adjusted = None
        if payload.base_profit is not None:
            adjusted = calculate_profit_with_overhead(
                payload.base_profit, allocation.per_unit_allocation, payload.quantity
            )._asdict()
        return {
            "allocation": asdict(allocation),
            "by_category": overhead_by_category(items),
            "profit_with_overhead": adjusted,
        }

    return _run("overhead", _calculate)
