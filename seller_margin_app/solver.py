"""
Inverse pricing: which sale price breaks even or hits a target margin.

Fee schedules mix percentage and fixed terms and every fee is rounded to
a whole minor unit, so profit is only piecewise linear in price.  Both
solvers therefore iterate: start from a guess, measure profit or margin
at that price, and step towards the goal.  The step is damped to stop
the price oscillating around the rounding steps.

Neither solver fails.  If the tolerance is not reached within
``MAX_ITERATIONS`` the last price computed is returned as a best effort.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .fees import compute_fees, compute_profit
from .models import FeeTerm, ProfitResult
from .money import round_half_up

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
BREAK_EVEN_TOLERANCE = 1  # minor units
MARGIN_TOLERANCE = 0.1  # percentage points
DAMPING = 0.8


def profit_at_price(
    price: int,
    product_cost: int,
    shipping_cost: int,
    seller_pays_shipping: bool,
    fee_schedule: Sequence[FeeTerm],
    vat_rate: float,
    is_vat_registered: bool,
) -> ProfitResult:
    """Profit and margin of a single-item sale at ``price``.

    When the seller pays shipping it is charged to the buyer on top of
    the item price, so it counts towards both the fee basis and revenue.
    """
    fee_shipping = shipping_cost if seller_pays_shipping else 0
    fees = compute_fees(price, fee_shipping, 1, fee_schedule)
    return compute_profit(
        revenue=price + fee_shipping,
        product_cost=product_cost,
        platform_fees=fees.total,
        vat_rate=vat_rate,
        is_vat_registered=is_vat_registered,
    )


def calculate_break_even_price(
    product_cost: int,
    shipping_cost: int,
    seller_pays_shipping: bool,
    fee_schedule: Sequence[FeeTerm],
    vat_rate: float,
    is_vat_registered: bool,
) -> int:
    """Find the sale price at which profit is zero (within one minor unit)."""
    price = round_half_up(product_cost * 1.2)
    for _ in range(MAX_ITERATIONS):
        result = profit_at_price(
            price,
            product_cost,
            shipping_cost,
            seller_pays_shipping,
            fee_schedule,
            vat_rate,
            is_vat_registered,
        )
        if abs(result.profit) <= BREAK_EVEN_TOLERANCE:
            return price
        price = max(round_half_up(price - result.profit * DAMPING), 1)
    logger.debug(
        "Break-even price did not converge after %d iterations; using %d",
        MAX_ITERATIONS,
        price,
    )
    return price


def calculate_target_price(
    product_cost: int,
    shipping_cost: int,
    seller_pays_shipping: bool,
    fee_schedule: Sequence[FeeTerm],
    vat_rate: float,
    is_vat_registered: bool,
    target_margin: float,
) -> int:
    """Find the sale price that yields ``target_margin`` percent (within 0.1 points)."""
    price = round_half_up(product_cost * (1 + target_margin / 50))
    for _ in range(MAX_ITERATIONS):
        result = profit_at_price(
            price,
            product_cost,
            shipping_cost,
            seller_pays_shipping,
            fee_schedule,
            vat_rate,
            is_vat_registered,
        )
        if abs(result.margin - target_margin) <= MARGIN_TOLERANCE:
            return price
        adjustment = (target_margin - result.margin) / 100
        price = max(round_half_up(price * (1 + adjustment)), 1)
    logger.debug(
        "Target price for %.1f%% margin did not converge after %d iterations; using %d",
        target_margin,
        MAX_ITERATIONS,
        price,
    )
    return price
