"""
Plain-text summaries of a calculation.

Builds the human-readable block returned by the API's ``summary`` field:
costs, itemised fees and the resulting profit and margin, with amounts
formatted in the configured currency.
"""

from __future__ import annotations

from typing import List

from .models import FeeBreakdown, ProfitResult
from .money import format_money


def format_summary(
    title: str,
    sale_price: int,
    product_cost: int,
    fees: FeeBreakdown,
    result: ProfitResult,
    currency: str = "GBP",
    target_margin: float = 0.0,
) -> str:
    """Construct the summary text for one priced product.

    The verdict line compares the margin against ``target_margin``; a
    loss is always reported as such.
    """
    lines: List[str] = [
        f"Product: {title}",
        "",
        "Costs",
        f"Sale price: {format_money(sale_price, currency)}",
        f"Product cost: {format_money(product_cost, currency)}",
        "",
        "Fees",
    ]
    for line in fees.breakdown:
        lines.append(f"{line.label}: {format_money(line.amount, currency)}")
    lines.append(f"Total fees: {format_money(fees.total, currency)}")
    lines.append("")
    lines.append("Result")
    if result.receipts_ex_vat is not None:
        lines.append(f"Receipts ex VAT: {format_money(result.receipts_ex_vat, currency)}")
    lines.append(f"Profit: {format_money(result.profit, currency)}  ({result.margin:.2f}%)")
    lines.append("")
    if result.profit <= 0:
        lines.append("\U0001f534 Loss-making at this price")
    elif result.margin >= target_margin:
        lines.append("\U0001f7e2 Meets target margin")
    else:
        lines.append("\U0001f7e0 Below target margin")
    return "\n".join(lines)
