"""Tests for discount analysis and the break-even discount search."""

from __future__ import annotations

import pytest

from seller_margin_app.discounts import (
    DEFAULT_DISCOUNT_PERCENTAGES,
    calculate_discount_analysis,
    discount_summary,
    find_break_even_discount,
)
from seller_margin_app.models import FeeTerm
from seller_margin_app.platforms import make_fee_calculator

TEN_PERCENT = make_fee_calculator([FeeTerm("Platform fee", "percentage", "item", 10)])


def test_default_levels_and_results() -> None:
    analysis = calculate_discount_analysis(2000, 1000, 0, False, TEN_PERCENT, 0, False)
    assert [r.discount_percent for r in analysis.results] == list(DEFAULT_DISCOUNT_PERCENTAGES)

    first = analysis.results[0]
    assert first.discounted_price == 1800
    assert first.original_price == 2000
    assert first.discount == 200
    assert first.fees == 180
    assert first.profit == 620
    assert first.margin == pytest.approx(34.444, abs=0.001)
    assert first.is_profitable


def test_max_profitable_discount() -> None:
    analysis = calculate_discount_analysis(2000, 1000, 0, False, TEN_PERCENT, 0, False)
    # 40% leaves 1200 - 120 - 1000 = 80; 50% leaves a loss
    assert analysis.max_profitable_discount == 40
    assert not analysis.results[-1].is_profitable


def test_max_profitable_discount_ignores_input_order() -> None:
    analysis = calculate_discount_analysis(2000, 1000, 0, False, TEN_PERCENT, 0, False, [40, 10])
    assert [r.discount_percent for r in analysis.results] == [40, 10]
    assert all(r.is_profitable for r in analysis.results)
    assert analysis.max_profitable_discount == 40


def test_break_even_discount_bisects_to_boundary() -> None:
    discount = find_break_even_discount(2000, 1000, 0, False, TEN_PERCENT, 0, False)
    # True boundary is where 0.9 x price == 1000, about 44.4% off
    assert discount == 44.1


def test_break_even_discount_is_zero_when_already_unprofitable() -> None:
    calls = []

    def fee_calculator(price: int) -> int:
        calls.append(price)
        return 100

    assert find_break_even_discount(1000, 1000, 0, False, fee_calculator, 0, False) == 0
    assert calls == [1000]


def test_seller_paid_shipping_adds_to_revenue() -> None:
    without = calculate_discount_analysis(2000, 1000, 300, False, TEN_PERCENT, 0, False, [10])
    with_shipping = calculate_discount_analysis(2000, 1000, 300, True, TEN_PERCENT, 0, False, [10])
    assert with_shipping.results[0].profit == without.results[0].profit + 300


def test_vat_reduces_profit() -> None:
    analysis = calculate_discount_analysis(2400, 1000, 0, False, TEN_PERCENT, 20, True, [0])
    # 2400 / 1.2 = 2000 receipts, fees 240
    assert analysis.results[0].profit == 760


def test_summary_messages() -> None:
    partial = calculate_discount_analysis(2000, 1000, 0, False, TEN_PERCENT, 0, False)
    assert discount_summary(partial) == "Profitable up to 44.1% discount"

    everywhere = calculate_discount_analysis(2000, 1000, 0, False, TEN_PERCENT, 0, False, [10, 20])
    assert discount_summary(everywhere) == "Profitable at all tested discounts (up to 20%)"

    nowhere = calculate_discount_analysis(2000, 5000, 0, False, TEN_PERCENT, 0, False)
    assert nowhere.max_profitable_discount == 0
    assert nowhere.break_even_discount == 0
    assert discount_summary(nowhere) == "Not profitable at any discount level"
