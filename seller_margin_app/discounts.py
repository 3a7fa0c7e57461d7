"""
Discount analysis.

Answers two questions for a listing: how much profit is left at each of
a set of common discount levels, and how deep a discount can go before
the sale stops making money.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence

from .fees import compute_profit
from .models import DiscountAnalysis, DiscountResult
from .money import round_half_up

logger = logging.getLogger(__name__)

FeeCalculator = Callable[[int], int]

DEFAULT_DISCOUNT_PERCENTAGES = (10, 15, 20, 25, 30, 40, 50)
BREAK_EVEN_PRECISION = 0.5  # percentage points


def _discounted_price(sale_price: int, discount_percent: float) -> int:
    return round_half_up(sale_price * (1 - discount_percent / 100))


def _profit_at(
    price: int,
    product_cost: int,
    shipping_cost: int,
    seller_pays_shipping: bool,
    fee_calculator: FeeCalculator,
    vat_rate: float,
    is_vat_registered: bool,
):
    fees = fee_calculator(price)
    revenue = price + (shipping_cost if seller_pays_shipping else 0)
    return fees, compute_profit(revenue, product_cost, fees, vat_rate, is_vat_registered)


def find_break_even_discount(
    sale_price: int,
    product_cost: int,
    shipping_cost: int,
    seller_pays_shipping: bool,
    fee_calculator: FeeCalculator,
    vat_rate: float,
    is_vat_registered: bool,
) -> float:
    """Largest discount percentage that still leaves a profit.

    Bisects the 0-100% range to half a percentage point and floors the
    answer to one decimal place.  Returns ``0`` straight away when the
    undiscounted sale already makes no profit.
    """
    _, undiscounted = _profit_at(
        sale_price,
        product_cost,
        shipping_cost,
        seller_pays_shipping,
        fee_calculator,
        vat_rate,
        is_vat_registered,
    )
    if undiscounted.profit <= 0:
        return 0

    low, high = 0.0, 100.0
    while high - low > BREAK_EVEN_PRECISION:
        mid = (low + high) / 2
        _, result = _profit_at(
            _discounted_price(sale_price, mid),
            product_cost,
            shipping_cost,
            seller_pays_shipping,
            fee_calculator,
            vat_rate,
            is_vat_registered,
        )
        if result.profit > 0:
            low = mid
        else:
            high = mid
    return math.floor(low * 10) / 10


def calculate_discount_analysis(
    sale_price: int,
    product_cost: int,
    shipping_cost: int,
    seller_pays_shipping: bool,
    fee_calculator: FeeCalculator,
    vat_rate: float,
    is_vat_registered: bool,
    discount_percentages: Optional[Sequence[float]] = None,
) -> DiscountAnalysis:
    """Evaluate profit at each discount level.

    Parameters
    ----------
    sale_price: int
        Undiscounted sale price in minor units.
    product_cost: int
        Cost of the product in minor units.
    shipping_cost: int
        Shipping cost, added to revenue when ``seller_pays_shipping``.
    fee_calculator: callable
        ``fee_calculator(price) -> total fees`` at a given sale price.
    discount_percentages: sequence of float, optional
        Discount levels to test; defaults to ``DEFAULT_DISCOUNT_PERCENTAGES``.

    Returns
    -------
    DiscountAnalysis
        One result per discount level, the break-even discount and the
        highest tested discount that stays profitable.
    """
    if discount_percentages is None:
        discount_percentages = DEFAULT_DISCOUNT_PERCENTAGES

    results: List[DiscountResult] = []
    max_profitable_discount = 0
    for discount_percent in discount_percentages:
        discounted_price = _discounted_price(sale_price, discount_percent)
        fees, result = _profit_at(
            discounted_price,
            product_cost,
            shipping_cost,
            seller_pays_shipping,
            fee_calculator,
            vat_rate,
            is_vat_registered,
        )
        is_profitable = result.profit > 0
        if is_profitable:
            max_profitable_discount = max(max_profitable_discount, discount_percent)
        results.append(
            DiscountResult(
                discount_percent=discount_percent,
                discounted_price=discounted_price,
                original_price=sale_price,
                discount=sale_price - discounted_price,
                fees=fees,
                profit=result.profit,
                margin=result.margin,
                is_profitable=is_profitable,
            )
        )

    break_even_discount = find_break_even_discount(
        sale_price,
        product_cost,
        shipping_cost,
        seller_pays_shipping,
        fee_calculator,
        vat_rate,
        is_vat_registered,
    )
    logger.debug(
        "Discount analysis: break-even %.1f%%, max profitable %s%%",
        break_even_discount,
        max_profitable_discount,
    )
    return DiscountAnalysis(
        results=tuple(results),
        break_even_discount=break_even_discount,
        max_profitable_discount=max_profitable_discount,
    )


def discount_summary(analysis: DiscountAnalysis) -> str:
    """One-line description of how far the listing can be discounted."""
    profitable = [r for r in analysis.results if r.is_profitable]
    if not profitable:
        return "Not profitable at any discount level"
    if len(profitable) == len(analysis.results):
        deepest = max(r.discount_percent for r in analysis.results)
        return f"Profitable at all tested discounts (up to {deepest:g}%)"
    return f"Profitable up to {analysis.break_even_discount:g}% discount"
