"""
Default marketplace fee schedules and payment-processing fees.

The registries below are read-only views.  Callers that maintain their
own fee templates pass a fee schedule directly to the calculation
functions; these defaults exist for the common marketplaces.

``make_fee_calculator`` and ``make_batch_fee_calculator`` build the
``fee_calculator`` closures used by the discount and batch analyses from
a fee schedule plus an optional external payment method.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, List, Mapping, Sequence

from .errors import UnknownPlatformError
from .fees import compute_fees
from .models import FeeBreakdown, FeeLine, FeeTerm, PaymentMethodConfig, PlatformTemplate
from .money import round_half_up

DEFAULT_PLATFORM_TEMPLATES: Mapping[str, PlatformTemplate] = MappingProxyType(
    {
        "etsy": PlatformTemplate(
            key="etsy",
            name="Etsy",
            fees=(
                FeeTerm("Transaction fee", "percentage", "subtotal", 6.5),
                FeeTerm("Payment processing", "percentage", "subtotal", 4),
                FeeTerm("Payment fixed fee", "fixed", "order", 20),
                FeeTerm("Listing fee", "fixed", "item", 15),
            ),
        ),
        "ebay": PlatformTemplate(
            key="ebay",
            name="eBay",
            fees=(
                FeeTerm("Final value fee", "percentage", "subtotal", 10),
                FeeTerm("Payment processing", "percentage", "subtotal", 2.9),
            ),
        ),
        "amazon": PlatformTemplate(
            key="amazon",
            name="Amazon",
            fees=(FeeTerm("Referral fee", "percentage", "item", 15),),
            vat_on_shipping=False,
        ),
        "shopify": PlatformTemplate(
            key="shopify",
            name="Shopify",
            fees=(
                FeeTerm("Transaction fee", "percentage", "subtotal", 2.9),
                FeeTerm("Payment processing", "percentage", "subtotal", 2.9),
            ),
        ),
        "tiktok": PlatformTemplate(
            key="tiktok",
            name="TikTok Shop",
            fees=(
                FeeTerm("Commission", "percentage", "item", 5),
                FeeTerm("Payment processing", "percentage", "subtotal", 2.9),
            ),
        ),
        "custom": PlatformTemplate(key="custom", name="Custom", fees=(), is_custom=True),
    }
)

PAYMENT_METHODS: Mapping[str, PaymentMethodConfig] = MappingProxyType(
    {
        "platform_included": PaymentMethodConfig(
            key="platform_included",
            label="Included in Platform",
            percentage_fee=0,
            fixed_fee=0,
            included_in_platforms=("etsy", "ebay", "shopify", "tiktok"),
        ),
        "paypal": PaymentMethodConfig("paypal", "PayPal", 3.6, 30),
        "stripe": PaymentMethodConfig("stripe", "Stripe", 2.9, 30),
        "square": PaymentMethodConfig("square", "Square", 2.7, 20),
        "manual": PaymentMethodConfig("manual", "Cash / Manual", 0, 0),
    }
)

# Methods whose fees are already part of the platform schedule or do not exist
_FEE_FREE_METHODS = {"platform_included", "manual"}


def get_platform_template(key: str) -> PlatformTemplate:
    try:
        return DEFAULT_PLATFORM_TEMPLATES[key]
    except KeyError:
        raise UnknownPlatformError(f"Unknown platform: {key}") from None


def platform_includes_payment_processing(platform_key: str) -> bool:
    """Return True if the platform's own fees already cover card processing."""
    return platform_key in PAYMENT_METHODS["platform_included"].included_in_platforms


def compute_payment_fees(order_total: int, payment_method: str) -> FeeBreakdown:
    """Fees charged by an external payment processor on ``order_total``."""
    config = PAYMENT_METHODS.get(payment_method)
    if config is None or payment_method in _FEE_FREE_METHODS:
        return FeeBreakdown(total=0)

    percentage_fee = round_half_up(order_total * config.percentage_fee / 100)
    lines: List[FeeLine] = []
    if percentage_fee > 0:
        lines.append(FeeLine(f"{config.label} ({config.percentage_fee:g}%)", percentage_fee))
    if config.fixed_fee > 0:
        lines.append(FeeLine(f"{config.label} fixed fee", config.fixed_fee))
    return FeeBreakdown(total=percentage_fee + config.fixed_fee, breakdown=tuple(lines))


def make_batch_fee_calculator(
    fee_schedule: Sequence[FeeTerm],
    shipping_cost: int = 0,
    payment_method: str = "platform_included",
) -> Callable[[int, int], int]:
    """Build ``fee_calculator(price, quantity)`` for the batch analysis.

    Platform fees are charged on the order (``price * quantity`` plus
    shipping) and payment fees on the same order total.
    """
    schedule = tuple(fee_schedule)

    def fee_calculator(price: int, quantity: int) -> int:
        item_total = price * quantity
        platform = compute_fees(item_total, shipping_cost, quantity, schedule)
        payment = compute_payment_fees(item_total + shipping_cost, payment_method)
        return platform.total + payment.total

    return fee_calculator


def make_fee_calculator(
    fee_schedule: Sequence[FeeTerm],
    shipping_cost: int = 0,
    payment_method: str = "platform_included",
) -> Callable[[int], int]:
    """Build single-item ``fee_calculator(price)`` for the discount analysis."""
    batch_calculator = make_batch_fee_calculator(fee_schedule, shipping_cost, payment_method)

    def fee_calculator(price: int) -> int:
        return batch_calculator(price, 1)

    return fee_calculator
