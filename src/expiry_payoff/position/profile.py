"""
Payoff profile: value curve and key points for a set of legs, with an optional what-if comparison.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from expiry_payoff.config import MAX_SWEEP_POINTS
from expiry_payoff.errors import InvalidInputError
from expiry_payoff.position.key_points import KeyPoint, find_key_points
from expiry_payoff.position.leg import OptionLeg, combine_legs
from expiry_payoff.position.sweep import PriceSweep, clamp_sweep, infer_sweep
from expiry_payoff.position.value_curve import ValuePoint, evaluate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayoffProfile:
    """Everything a chart needs: combined legs, cost, sweep, curve and its key points."""

    legs: List[OptionLeg]
    cost: float
    sweep: PriceSweep
    curve: List[ValuePoint]
    key_points: List[KeyPoint]
    comparison_curve: List[ValuePoint] = field(default_factory=list)
    comparison_key_points: List[KeyPoint] = field(default_factory=list)


def build_profile(
    legs: Sequence[OptionLeg],
    cost: float = 0.0,
    sweep: Optional[PriceSweep] = None,
    comparison_legs: Optional[Sequence[OptionLeg]] = None,
    max_points: int = MAX_SWEEP_POINTS,
) -> PayoffProfile:
    """
    Combine legs, evaluate them over sweep and find key points against cost.
    If sweep is None it is inferred from the strikes of the combined legs and comparison_legs.
    comparison_legs are added on top of legs to produce a second (what-if) curve on the same sweep.
    """
    combined = combine_legs(legs)
    if not combined:
        raise InvalidInputError("No valid options provided: every leg nets out to zero contracts")
    extra = list(comparison_legs or [])
    if sweep is None:
        sweep = infer_sweep([leg.strike for leg in combined + extra])
    sweep = clamp_sweep(sweep, max_points)

    curve = evaluate(combined, sweep)
    key_points = find_key_points(curve, cost)

    comparison_curve: List[ValuePoint] = []
    comparison_key_points: List[KeyPoint] = []
    if extra:
        comparison = combine_legs(list(legs) + extra)
        if comparison:
            comparison_curve = evaluate(comparison, sweep)
            comparison_key_points = find_key_points(comparison_curve, cost)
        else:
            logger.info("Comparison legs cancel the position entirely; no comparison curve")

    return PayoffProfile(
        legs=combined,
        cost=cost,
        sweep=sweep,
        curve=curve,
        key_points=key_points,
        comparison_curve=comparison_curve,
        comparison_key_points=comparison_key_points,
    )
