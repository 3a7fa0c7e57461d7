"""Tests for margin-safe price rounding and boost plans."""

from __future__ import annotations

import pytest

from seller_margin_app.models import RoundingPolicy
from seller_margin_app.rounding import generate_boost_plan, round_price

NEAREST_99 = RoundingPolicy("nearest_99")
NEAREST_50 = RoundingPolicy("nearest_50")
NEAREST_00 = RoundingPolicy("nearest_00")
NONE = RoundingPolicy("none")


@pytest.mark.parametrize(
    "price, policy, expected",
    [
        (1234, NONE, 1234),
        (1000, NEAREST_99, 1099),
        (1098, NEAREST_99, 1099),
        (1099, NEAREST_99, 1199),
        (1100, NEAREST_99, 1199),
        (0, NEAREST_99, 99),
        (99, NEAREST_99, 199),
        (1000, RoundingPolicy("nearest_99", custom_ending=95), 1095),
        (1095, RoundingPolicy("nearest_99", custom_ending=95), 1195),
        (1025, NEAREST_50, 1050),
        (1050, NEAREST_50, 1150),
        (1099, NEAREST_50, 1150),
        (25, NEAREST_50, 50),
        (1000, NEAREST_00, 1000),
        (1001, NEAREST_00, 1100),
        (0, NEAREST_00, 0),
        (99, NEAREST_00, 100),
        (99999, NEAREST_99, 100099),
        (99999, NEAREST_00, 100000),
        (1000, RoundingPolicy("increment", increment=50), 1000),
        (1025, RoundingPolicy("increment", increment=50), 1050),
        (1051, RoundingPolicy("increment", increment=50), 1100),
        (2250, RoundingPolicy("increment", increment=500), 2500),
        (5001, RoundingPolicy("increment", increment=1000), 6000),
        (1010, RoundingPolicy("increment", increment=25), 1025),
    ],
)
def test_round_price(price: int, policy: RoundingPolicy, expected: int) -> None:
    assert round_price(price, policy) == expected


def test_real_world_price_in_every_mode() -> None:
    assert round_price(2347, NEAREST_99) == 2399
    assert round_price(2347, NEAREST_50) == 2350
    assert round_price(2347, NEAREST_00) == 2400
    assert round_price(2347, RoundingPolicy("increment", increment=50)) == 2350


def test_increment_without_size_leaves_price_unchanged() -> None:
    assert round_price(1234, RoundingPolicy("increment")) == 1234


@pytest.mark.parametrize(
    "policy",
    [NEAREST_99, NEAREST_50, NEAREST_00, RoundingPolicy("increment", increment=100)],
)
def test_rounding_never_lowers_price(policy: RoundingPolicy) -> None:
    for price in range(0, 2001, 7):
        assert round_price(price, policy) >= price


def test_boost_plan_steps() -> None:
    plan = generate_boost_plan(2000, 3000, NONE)
    assert [s.step for s in plan] == ["Launch", "Growth", "Target"]
    assert [s.price for s in plan] == [2100, 2550, 3000]


def test_boost_plan_applies_rounding() -> None:
    plan = generate_boost_plan(2000, 3000, NEAREST_99)
    assert all(s.price % 100 == 99 for s in plan)


def test_boost_plan_rounds_fractional_growth_midpoint() -> None:
    # Midpoint 2598.5 sits just below the .99 ending, so it rounds to 2599
    plan = generate_boost_plan(2000, 3097, NEAREST_99)
    assert [s.price for s in plan] == [2199, 2599, 3099]
    assert all(isinstance(s.price, int) for s in plan)


def test_boost_plan_without_rounding_takes_midpoint_up() -> None:
    plan = generate_boost_plan(2000, 3001, NONE)
    assert [s.price for s in plan] == [2100, 2551, 3001]


def test_boost_plan_lifts_duplicate_rungs() -> None:
    plan = generate_boost_plan(1000, 1050, NEAREST_00)
    prices = [s.price for s in plan]
    assert prices == [1100, 1200, 1300]


def test_boost_plan_large_range() -> None:
    prices = [s.price for s in generate_boost_plan(1000, 10000, NEAREST_99)]
    assert 1000 < prices[0] < 2000
    assert 4000 < prices[1] < 7000
    assert prices[2] >= 10000


@pytest.mark.parametrize("policy", [NONE, NEAREST_99, NEAREST_50, NEAREST_00])
@pytest.mark.parametrize("break_even, target", [(1000, 1100), (1000, 1200), (2200, 3000), (1500, 1000)])
def test_boost_plan_is_strictly_increasing(policy: RoundingPolicy, break_even: int, target: int) -> None:
    plan = generate_boost_plan(break_even, target, policy)
    assert len(plan) == 3
    assert plan[0].price < plan[1].price < plan[2].price
    assert plan[0].price > break_even
