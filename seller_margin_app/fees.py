"""
Marketplace fee and profit calculations.

These two functions are the base every other calculation builds on.
``compute_fees`` itemises a fee schedule against the facts of a sale and
``compute_profit`` turns revenue, cost and fees into profit and margin,
optionally on VAT-exclusive receipts.

All amounts are integer minor units.
"""

from __future__ import annotations

from typing import List, Sequence

from .models import FeeBreakdown, FeeLine, FeeTerm, ProfitResult
from .money import round_half_up


def _fee_amount(term: FeeTerm, item_price: int, shipping_cost: int, quantity: int) -> int:
    if term.type == "percentage":
        if term.base == "item":
            basis = item_price
        elif term.base == "shipping":
            basis = shipping_cost
        else:
            basis = item_price + shipping_cost
        return round_half_up(basis * term.value / 100)
    # Fixed fees: per item when based on the item, otherwise once per order
    if term.base == "item":
        return round_half_up(term.value * quantity)
    return round_half_up(term.value)


def compute_fees(
    item_price: int,
    shipping_cost: int,
    quantity: int,
    fee_schedule: Sequence[FeeTerm],
) -> FeeBreakdown:
    """Itemise the platform fees charged on a sale.

    Parameters
    ----------
    item_price: int
        Price of the item in minor units.
    shipping_cost: int
        Shipping charged on the order in minor units.
    quantity: int
        Number of items; multiplies per-item fixed fees.
    fee_schedule: sequence of FeeTerm
        Fee rules in display order.

    Returns
    -------
    FeeBreakdown
        The total and one line per fee with a positive amount.  Fees that
        come to zero are left out of the breakdown.
    """
    lines: List[FeeLine] = []
    for term in fee_schedule:
        amount = _fee_amount(term, item_price, shipping_cost, quantity)
        if amount > 0:
            lines.append(FeeLine(label=term.label, amount=amount))
    total = sum(line.amount for line in lines)
    return FeeBreakdown(total=total, breakdown=tuple(lines))


def compute_profit(
    revenue: int,
    product_cost: int,
    platform_fees: int,
    vat_rate: float,
    is_vat_registered: bool,
) -> ProfitResult:
    """Calculate profit and margin for a sale.

    A VAT-registered seller keeps only the VAT-exclusive part of the
    revenue, so profit and margin are measured against
    ``receipts_ex_vat`` instead of the gross revenue.  Margin is ``0``
    whenever the revenue basis is zero.
    """
    if is_vat_registered and vat_rate > 0:
        receipts_ex_vat = round_half_up(revenue / (1 + vat_rate / 100))
        profit = receipts_ex_vat - product_cost - platform_fees
        margin = (profit / receipts_ex_vat) * 100 if receipts_ex_vat > 0 else 0.0
        return ProfitResult(profit=profit, margin=margin, receipts_ex_vat=receipts_ex_vat)

    profit = revenue - product_cost - platform_fees
    margin = (profit / revenue) * 100 if revenue > 0 else 0.0
    return ProfitResult(profit=profit, margin=margin)
