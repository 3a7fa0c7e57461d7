"""
Psychological price rounding and the three-step boost plan.

Rounding here only ever moves a price up, so a price solved for
break-even or a target margin never loses margin when it is turned into
a listing price such as ``£12.99``.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from .models import BoostStep, RoundingPolicy
from .money import round_half_up

BOOST_BUFFER = 0.05
BOOST_STEP_NAMES = ("Launch", "Growth", "Target")


def _target_ending(policy: RoundingPolicy):
    if policy.mode == "nearest_99":
        return policy.custom_ending if policy.custom_ending is not None else 99
    if policy.mode == "nearest_50":
        return 50
    if policy.mode == "nearest_00":
        return 0
    return None


def round_price(price: int, policy: RoundingPolicy) -> int:
    """Round ``price`` up according to ``policy``.

    ``increment`` rounds up to the next multiple of the increment.  The
    ending modes move to the next price with the chosen minor-unit ending
    (``.99``, ``.50``, ``.00`` or ``custom_ending``); a price already at
    a non-zero ending advances a whole major unit.  ``none`` and
    unrecognised modes return the price unchanged.
    """
    if policy.mode == "none":
        return price

    if policy.mode == "increment":
        if not policy.increment or policy.increment <= 0:
            return price
        return math.ceil(price / policy.increment) * policy.increment

    ending = _target_ending(policy)
    if ending is None:
        return price

    major_units, minor_part = divmod(price, 100)
    if ending > 0 and minor_part >= ending:
        return (major_units + 1) * 100 + ending
    if ending == 0 and minor_part > 0:
        return (major_units + 1) * 100
    return major_units * 100 + ending


def generate_boost_plan(
    break_even_price: int,
    target_price: int,
    policy: RoundingPolicy,
) -> Tuple[BoostStep, ...]:
    """Build a Launch / Growth / Target price ladder.

    Launch sits 5% above break-even, Growth halfway between Launch and
    Target.  The Growth midpoint is rounded while still fractional; with
    no rounding policy it is taken up to the next whole minor unit.  After
    rounding, any rung that fails to climb above the one before it is
    lifted to one major unit above it.
    """
    launch = break_even_price + round_half_up(break_even_price * BOOST_BUFFER)
    growth = launch + (target_price - launch) * 0.5
    prices: List[int] = [
        round_price(launch, policy),
        int(math.ceil(round_price(growth, policy))),
        round_price(target_price, policy),
    ]
    for i in range(1, len(prices)):
        if prices[i] <= prices[i - 1]:
            prices[i] = prices[i - 1] + 100
    return tuple(BoostStep(step=name, price=p) for name, p in zip(BOOST_STEP_NAMES, prices))
