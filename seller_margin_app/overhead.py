"""Monthly overhead allocation per unit sold."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Sequence, Tuple

from .errors import InvalidInputError
from .models import OverheadAllocation, OverheadItem
from .money import round_half_up

OVERHEAD_PRESETS: Mapping[str, Tuple[OverheadItem, ...]] = MappingProxyType(
    {
        "home_seller": (
            OverheadItem("etsy_sub", "Etsy Plus subscription", 1000, "software"),
            OverheadItem("packaging", "Packaging supplies", 2000, "other"),
            OverheadItem("utilities", "Home office utilities", 3000, "utilities"),
        ),
        "small_business": (
            OverheadItem("rent", "Studio/workspace rent", 30000, "rent"),
            OverheadItem("utilities", "Utilities", 8000, "utilities"),
            OverheadItem("insurance", "Business insurance", 5000, "insurance"),
            OverheadItem("software", "Software subscriptions", 3000, "software"),
            OverheadItem("marketing", "Marketing/ads", 5000, "marketing"),
        ),
        "studio": (
            OverheadItem("rent", "Studio rent", 50000, "rent"),
            OverheadItem("utilities", "Utilities", 15000, "utilities"),
            OverheadItem("insurance", "Insurance", 8000, "insurance"),
            OverheadItem("equipment", "Equipment maintenance", 5000, "other"),
            OverheadItem("software", "Software/tools", 5000, "software"),
            OverheadItem("marketing", "Marketing", 10000, "marketing"),
        ),
    }
)


class ProfitWithOverhead(NamedTuple):
    adjusted_profit: int
    total_overhead: int
    profit_before_overhead: int


def get_overhead_preset(key: str) -> Tuple[OverheadItem, ...]:
    try:
        return OVERHEAD_PRESETS[key]
    except KeyError:
        raise InvalidInputError(f"Unknown overhead preset: {key}") from None


def calculate_overhead_allocation(
    items: Sequence[OverheadItem],
    estimated_monthly_sales: int,
) -> OverheadAllocation:
    """Spread monthly overheads across the expected number of sales.

    The per-unit share is ``0`` when no sales are expected.
    """
    total_monthly = sum(item.amount for item in items)
    per_unit = (
        round_half_up(total_monthly / estimated_monthly_sales) if estimated_monthly_sales > 0 else 0
    )
    return OverheadAllocation(
        total_monthly=total_monthly,
        total_yearly=total_monthly * 12,
        per_unit_allocation=per_unit,
        items=tuple(items),
    )


def calculate_profit_with_overhead(
    base_profit: int,
    overhead_per_unit: int,
    quantity: int,
) -> ProfitWithOverhead:
    total_overhead = overhead_per_unit * quantity
    return ProfitWithOverhead(
        adjusted_profit=base_profit - total_overhead,
        total_overhead=total_overhead,
        profit_before_overhead=base_profit,
    )


def overhead_by_category(items: Sequence[OverheadItem]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for item in items:
        category = item.category or "other"
        totals[category] = totals.get(category, 0) + item.amount
    return totals
