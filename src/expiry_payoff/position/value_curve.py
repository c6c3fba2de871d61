"""
Value at expiration: intrinsic value of an options portfolio over a sweep of underlying prices.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

from expiry_payoff.errors import InvalidInputError
from expiry_payoff.position.leg import OptionLeg, OptionType
from expiry_payoff.position.sweep import PriceSweep, validate_sweep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValuePoint:
    """Portfolio intrinsic value at one closing price (both rounded to cents)."""

    closing_price: float
    total_intrinsic_value: float


def intrinsic_per_share(leg: OptionLeg, price: float) -> float:
    """Intrinsic value of one share of the leg at underlying price (at expiration)."""
    k = leg.strike
    if leg.option_type == OptionType.CALL:
        return max(0.0, price - k)
    return max(0.0, k - price)


def leg_value(leg: OptionLeg, price: float) -> float:
    """Leg contribution to portfolio value; short legs are negative when in the money."""
    return intrinsic_per_share(leg, price) * leg.contract_multiplier * leg.quantity


def validate_legs(legs: Sequence[OptionLeg]) -> None:
    """Raise InvalidInputError for an empty list or any leg that cannot be evaluated."""
    if not legs:
        raise InvalidInputError("legs must be a non-empty list of option legs")
    for leg in legs:
        if not isinstance(leg.option_type, OptionType):
            raise InvalidInputError(f"Invalid option type {leg.option_type!r}: expected call or put")
        if not (math.isfinite(leg.strike) and leg.strike > 0):
            raise InvalidInputError(f"Invalid strike {leg.strike!r}: must be greater than 0")
        if isinstance(leg.quantity, bool) or not isinstance(leg.quantity, int):
            raise InvalidInputError(f"Invalid quantity {leg.quantity!r}: must be a whole number of contracts")
        if leg.quantity == 0:
            raise InvalidInputError(f"Invalid quantity for {leg.option_type.value}{leg.strike:g}: must not be 0")
        if not (math.isfinite(leg.contract_multiplier) and leg.contract_multiplier > 0):
            raise InvalidInputError(
                f"Invalid contract multiplier {leg.contract_multiplier!r}: must be greater than 0"
            )


def evaluate(legs: Sequence[OptionLeg], sweep: PriceSweep) -> List[ValuePoint]:
    """
    Portfolio intrinsic value at every swept price.
    Legs are summed in input order; duplicate (type, strike) legs simply add up.
    Returns one ValuePoint per price, in increasing price order.
    """
    validate_legs(legs)
    validate_sweep(sweep)
    out: List[ValuePoint] = []
    for price in sweep.prices():
        total = 0.0
        for leg in legs:
            total += leg_value(leg, price)
        out.append(ValuePoint(closing_price=round(price, 2), total_intrinsic_value=round(total, 2)))
    logger.debug("Evaluated %d legs at %d prices", len(legs), len(out))
    return out
