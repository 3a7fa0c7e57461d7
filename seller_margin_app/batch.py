"""
Order-quantity economics.

Shows how per-unit cost, profit and margin move as the order quantity
grows: fixed costs are spread over more units and supplier bulk discounts
kick in at their minimum quantities.
"""

from __future__ import annotations

import math
from typing import Callable, List, Optional, Sequence, Union

from .fees import compute_profit
from .models import BatchTier, BulkDiscountTier
from .money import round_half_up

BatchFeeCalculator = Callable[[int, int], int]

DEFAULT_QUANTITIES = (1, 5, 10, 25, 50, 100)


def _unit_cost_for(quantity: int, base_unit_cost: int, tiers: Sequence[BulkDiscountTier]) -> int:
    # Highest minimum quantity the order reaches wins
    for tier in sorted(tiers, key=lambda t: t.min_qty, reverse=True):
        if quantity >= tier.min_qty:
            return round_half_up(base_unit_cost * (1 - tier.discount_percent / 100))
    return base_unit_cost


def calculate_batch_pricing(
    base_unit_cost: int,
    fixed_costs: int,
    sale_price: int,
    fee_calculator: BatchFeeCalculator,
    vat_rate: float,
    is_vat_registered: bool,
    bulk_discount_tiers: Sequence[BulkDiscountTier] = (),
    quantities: Optional[Sequence[int]] = None,
) -> List[BatchTier]:
    """Per-unit economics for each order quantity.

    ``fee_calculator(price, quantity)`` returns the total fees for an
    order of ``quantity`` units at ``price`` each.  Every quantity must
    be at least 1.
    """
    if quantities is None:
        quantities = DEFAULT_QUANTITIES

    tiers: List[BatchTier] = []
    for quantity in quantities:
        unit_cost = _unit_cost_for(quantity, base_unit_cost, bulk_discount_tiers)
        fixed_cost_per_unit = round_half_up(fixed_costs / quantity)
        total_unit_cost = unit_cost + fixed_cost_per_unit
        fees_per_unit = round_half_up(fee_calculator(sale_price, quantity) / quantity)

        result = compute_profit(
            revenue=sale_price,
            product_cost=total_unit_cost,
            platform_fees=fees_per_unit,
            vat_rate=vat_rate,
            is_vat_registered=is_vat_registered,
        )
        tiers.append(
            BatchTier(
                quantity=quantity,
                unit_cost=total_unit_cost,
                profit_per_unit=result.profit,
                total_profit=result.profit * quantity,
                margin=result.margin,
            )
        )
    return tiers


def find_most_profitable_quantity(tiers: Sequence[BatchTier]) -> Optional[BatchTier]:
    """Tier with the highest margin; higher total profit breaks ties."""
    best: Optional[BatchTier] = None
    for tier in tiers:
        if best is None or tier.margin > best.margin:
            best = tier
        elif tier.margin == best.margin and tier.total_profit > best.total_profit:
            best = tier
    return best


def find_optimal_bulk_quantity(tiers: Sequence[BatchTier]) -> Optional[BatchTier]:
    """Tier with the highest profit per unit."""
    best: Optional[BatchTier] = None
    for tier in tiers:
        if best is None or tier.profit_per_unit > best.profit_per_unit:
            best = tier
    return best


def calculate_break_even_quantity(
    base_unit_cost: int,
    sale_price: int,
    fixed_costs: int,
    fee_per_unit: int,
    vat_rate: float,
    is_vat_registered: bool,
) -> Union[int, float]:
    """Units needed before per-unit profit covers the fixed costs.

    Returns ``math.inf`` when a unit makes no profit, since no quantity
    can then recover the fixed costs.
    """
    result = compute_profit(
        revenue=sale_price,
        product_cost=base_unit_cost,
        platform_fees=fee_per_unit,
        vat_rate=vat_rate,
        is_vat_registered=is_vat_registered,
    )
    if result.profit <= 0:
        return math.inf
    return math.ceil(fixed_costs / result.profit)
