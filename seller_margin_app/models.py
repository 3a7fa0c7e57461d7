"""
Value types shared by the calculation modules.

Every type here is a frozen dataclass created per call.  Amounts are
integer minor units; margins and percentage changes are floats in
percent (``48.0`` means 48%).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

FeeType = Literal["percentage", "fixed"]
FeeBase = Literal["item", "shipping", "subtotal", "order"]
RoundingMode = Literal["none", "nearest_99", "nearest_50", "nearest_00", "increment"]


@dataclass(frozen=True)
class FeeTerm:
    """One fee rule.

    ``value`` is a percentage (0-100) for ``percentage`` fees and a
    minor-unit amount for ``fixed`` fees.
    """

    label: str
    type: FeeType
    base: FeeBase
    value: float


@dataclass(frozen=True)
class FeeLine:
    label: str
    amount: int


@dataclass(frozen=True)
class FeeBreakdown:
    total: int
    breakdown: Tuple[FeeLine, ...] = ()


@dataclass(frozen=True)
class ProfitResult:
    profit: int
    margin: float
    receipts_ex_vat: Optional[int] = None


@dataclass(frozen=True)
class RoundingPolicy:
    mode: RoundingMode = "none"
    increment: Optional[int] = None
    custom_ending: Optional[int] = None


@dataclass(frozen=True)
class BoostStep:
    step: str
    price: int


@dataclass(frozen=True)
class DiscountResult:
    discount_percent: float
    discounted_price: int
    original_price: int
    discount: int
    fees: int
    profit: int
    margin: float
    is_profitable: bool


@dataclass(frozen=True)
class DiscountAnalysis:
    results: Tuple[DiscountResult, ...]
    break_even_discount: float
    max_profitable_discount: float


@dataclass(frozen=True)
class BulkDiscountTier:
    min_qty: int
    discount_percent: float


@dataclass(frozen=True)
class BatchTier:
    quantity: int
    unit_cost: int
    profit_per_unit: int
    total_profit: int
    margin: float


@dataclass(frozen=True)
class ScenarioConfig:
    name: str
    material_cost_change: float = 0.0
    labour_cost_change: float = 0.0
    shipping_cost_change: float = 0.0
    sale_price_change: float = 0.0


@dataclass(frozen=True)
class ScenarioParams:
    base_material_cost: int
    base_labour_cost: int
    base_shipping_cost: int
    base_sale_price: int
    platform_fees: int
    vat_rate: float
    is_vat_registered: bool
    base_profit: int
    base_margin: float


@dataclass(frozen=True)
class ScenarioResult:
    scenario: ScenarioConfig
    profit: int
    margin: float
    profit_change: int
    margin_change: float
    new_sale_price: int
    new_cost: int


@dataclass(frozen=True)
class OverheadItem:
    id: str
    name: str
    amount: int
    category: str = "other"


@dataclass(frozen=True)
class OverheadAllocation:
    total_monthly: int
    total_yearly: int
    per_unit_allocation: int
    items: Tuple[OverheadItem, ...] = ()


@dataclass(frozen=True)
class PaymentMethodConfig:
    key: str
    label: str
    percentage_fee: float
    fixed_fee: int
    included_in_platforms: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PlatformTemplate:
    key: str
    name: str
    fees: Tuple[FeeTerm, ...] = field(default_factory=tuple)
    vat_on_shipping: bool = True
    is_custom: bool = False
