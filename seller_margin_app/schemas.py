"""Request bodies for the HTTP API, validated with pydantic.

Amounts are integer minor units and may not be negative; quantities
start at one.  Fields left as ``None`` fall back to the configured
settings in ``app.py``.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from .models import BulkDiscountTier, FeeTerm, OverheadItem

Amount = Annotated[int, Field(ge=0)]
Quantity = Annotated[int, Field(ge=1)]
Percent = Annotated[float, Field(ge=0, le=100)]


class FeeTermIn(BaseModel):
    """One fee rule supplied inline instead of a platform key."""

    label: str = ""
    type: Literal["percentage", "fixed"] = "percentage"
    base: Literal["item", "shipping", "subtotal", "order"] = "subtotal"
    value: float = Field(default=0.0, ge=0)

    def to_term(self) -> FeeTerm:
        return FeeTerm(label=self.label, type=self.type, base=self.base, value=self.value)


class RoundingIn(BaseModel):
    mode: Optional[Literal["none", "nearest_99", "nearest_50", "nearest_00", "increment"]] = None
    increment: Optional[int] = Field(default=None, gt=0)
    custom_ending: Optional[int] = Field(default=None, ge=0, le=99)


class PricingRequest(BaseModel):
    """Fee schedule and VAT fields shared by every calculation."""

    platform: Optional[str] = None
    fees: Optional[List[FeeTermIn]] = None
    payment_method: Optional[str] = None
    vat_rate: Optional[float] = Field(default=None, ge=0)
    vat_registered: Optional[bool] = None

    def fee_terms(self) -> Optional[Tuple[FeeTerm, ...]]:
        if self.fees is None:
            return None
        return tuple(term.to_term() for term in self.fees)


class FeesRequest(PricingRequest):
    item_price: Amount
    shipping_cost: Amount = 0
    quantity: Quantity = 1


class SolverRequest(PricingRequest):
    product_cost: Amount
    shipping_cost: Amount = 0
    seller_pays_shipping: bool = False
    target_margin: Optional[float] = Field(default=None, lt=100)
    rounding: Optional[RoundingIn] = None


class ProfitRequest(SolverRequest):
    sale_price: Amount
    title: str = "Untitled"


class DiscountRequest(SolverRequest):
    sale_price: Amount
    discount_percentages: Optional[List[Percent]] = None


class BulkTierIn(BaseModel):
    min_qty: Quantity
    discount_percent: Percent

    def to_tier(self) -> BulkDiscountTier:
        return BulkDiscountTier(min_qty=self.min_qty, discount_percent=self.discount_percent)


class BatchRequest(PricingRequest):
    base_unit_cost: Amount
    sale_price: Amount
    fixed_costs: Amount = 0
    shipping_cost: Amount = 0
    quantities: Optional[List[Quantity]] = None
    bulk_discount_tiers: List[BulkTierIn] = Field(default_factory=list)


class CustomScenarioIn(BaseModel):
    """Percentage changes applied to the base figures (``-20`` is a 20% cut)."""

    material_cost_change: float = 0.0
    labour_cost_change: float = 0.0
    shipping_cost_change: float = 0.0
    sale_price_change: float = 0.0


class ScenarioRequest(PricingRequest):
    sale_price: Amount
    material_cost: Amount = 0
    labour_cost: Amount = 0
    shipping_cost: Amount = 0
    platform_fees: Optional[Amount] = None
    custom: Optional[CustomScenarioIn] = None


class OverheadItemIn(BaseModel):
    id: str
    name: str
    amount: Amount
    category: str = "other"

    def to_item(self) -> OverheadItem:
        return OverheadItem(id=self.id, name=self.name, amount=self.amount, category=self.category)


class OverheadRequest(BaseModel):
    """Monthly overheads, from a named preset or listed item by item."""

    preset: Optional[str] = None
    items: Optional[List[OverheadItemIn]] = None
    estimated_monthly_sales: Amount
    base_profit: Optional[int] = None
    quantity: Quantity = 1
