"""Tests for the break-even and target-margin price solvers."""

from __future__ import annotations

import logging

import pytest

from seller_margin_app.models import FeeTerm
from seller_margin_app.platforms import DEFAULT_PLATFORM_TEMPLATES
from seller_margin_app.solver import (
    MAX_ITERATIONS,
    calculate_break_even_price,
    calculate_target_price,
    profit_at_price,
)

TEN_PERCENT = (FeeTerm("Platform fee", "percentage", "subtotal", 10),)
ETSY = DEFAULT_PLATFORM_TEMPLATES["etsy"].fees
AMAZON = DEFAULT_PLATFORM_TEMPLATES["amazon"].fees


def test_break_even_with_flat_percentage() -> None:
    price = calculate_break_even_price(1000, 200, False, TEN_PERCENT, 0, False)
    assert 1000 < price < 1200
    assert abs(profit_at_price(price, 1000, 200, False, TEN_PERCENT, 0, False).profit) <= 1


def test_break_even_with_seller_paid_shipping() -> None:
    price = calculate_break_even_price(1000, 500, True, TEN_PERCENT, 0, False)
    assert abs(profit_at_price(price, 1000, 500, True, TEN_PERCENT, 0, False).profit) <= 1


def test_break_even_with_composite_schedule() -> None:
    price = calculate_break_even_price(2000, 350, True, ETSY, 0, False)
    assert price > 0
    assert abs(profit_at_price(price, 2000, 350, True, ETSY, 0, False).profit) <= 1


def test_break_even_with_fixed_fee_only() -> None:
    fees = [FeeTerm("Fixed fee", "fixed", "order", 50)]
    price = calculate_break_even_price(1000, 0, False, fees, 0, False)
    assert 1050 <= price <= 1052
    assert abs(profit_at_price(price, 1000, 0, False, fees, 0, False).profit) <= 1


def test_break_even_without_fees_is_product_cost() -> None:
    assert calculate_break_even_price(1000, 0, False, [], 0, False) == 1000


def test_break_even_is_higher_for_vat_registered_sellers() -> None:
    with_vat = calculate_break_even_price(1000, 0, False, TEN_PERCENT, 20, True)
    without_vat = calculate_break_even_price(1000, 0, False, TEN_PERCENT, 0, False)
    assert with_vat > without_vat
    assert abs(profit_at_price(with_vat, 1000, 0, False, TEN_PERCENT, 20, True).profit) <= 1


def test_break_even_price_never_drops_below_one() -> None:
    price = calculate_break_even_price(0, 0, False, [FeeTerm("Fixed", "fixed", "order", 10)], 0, False)
    assert price >= 1


@pytest.mark.parametrize("target_margin", [5, 30, 50, 80])
def test_target_price_hits_margin(target_margin: float) -> None:
    price = calculate_target_price(1000, 0, False, TEN_PERCENT, 0, False, target_margin)
    margin = profit_at_price(price, 1000, 0, False, TEN_PERCENT, 0, False).margin
    assert abs(margin - target_margin) <= 0.1


def test_target_price_with_seller_paid_shipping() -> None:
    price = calculate_target_price(1000, 500, True, TEN_PERCENT, 0, False, 30)
    margin = profit_at_price(price, 1000, 500, True, TEN_PERCENT, 0, False).margin
    assert abs(margin - 30) <= 0.5


@pytest.mark.parametrize(
    "fees, shipping_cost, seller_pays_shipping",
    [(ETSY, 350, True), (AMAZON, 0, False)],
)
def test_target_price_across_platforms(fees, shipping_cost: int, seller_pays_shipping: bool) -> None:
    price = calculate_target_price(2000, shipping_cost, seller_pays_shipping, fees, 0, False, 40)
    margin = profit_at_price(price, 2000, shipping_cost, seller_pays_shipping, fees, 0, False).margin
    assert abs(margin - 40) <= 0.1


def test_target_price_is_higher_with_vat() -> None:
    with_vat = calculate_target_price(1000, 0, False, TEN_PERCENT, 20, True, 30)
    without_vat = calculate_target_price(1000, 0, False, TEN_PERCENT, 0, False, 30)
    assert with_vat > without_vat


def test_unreachable_target_returns_a_price() -> None:
    # 100% margin is impossible with a non-zero cost; the solver still answers
    price = calculate_target_price(1000, 0, False, TEN_PERCENT, 0, False, 100)
    assert isinstance(price, int)
    assert price >= 1


def test_break_even_returns_last_price_when_iteration_cap_is_hit(caplog) -> None:
    # A fee equal to the whole item price means profit is -product_cost at every price
    whole_price = [FeeTerm("Everything", "percentage", "item", 100)]
    caplog.set_level(logging.DEBUG, logger="seller_margin_app.solver")
    price = calculate_break_even_price(1000, 0, False, whole_price, 0, False)
    assert isinstance(price, int)
    # Starts at 1200 and climbs 800 per iteration
    assert price == 1200 + MAX_ITERATIONS * 800
    assert "did not converge" in caplog.text
