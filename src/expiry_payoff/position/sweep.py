"""
Price sweep: the grid of underlying prices a payoff curve is evaluated on.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Iterator

from expiry_payoff.config import MAX_SWEEP_POINTS, PRICE_STEP, STRIKE_MARGIN
from expiry_payoff.errors import InvalidInputError

logger = logging.getLogger(__name__)

# (max - min) / step is floored; absorb float error such as 0.3 / 0.1 = 2.9999999999999996
_COUNT_TOLERANCE = 1e-9

# Prices are reported in cents; a finer step would repeat a rounded price
MIN_PRICE_STEP = 0.01


@dataclass(frozen=True)
class PriceSweep:
    """Inclusive price range walked from min_price in price_step increments, never past max_price."""

    min_price: float
    max_price: float
    price_step: float

    def point_count(self) -> int:
        """Number of swept prices: floor((max - min) / step) + 1."""
        span = (self.max_price - self.min_price) / self.price_step
        return int(math.floor(span + _COUNT_TOLERANCE)) + 1

    def prices(self) -> Iterator[float]:
        """Swept prices in increasing order. Computed by index so the grid does not drift."""
        for i in range(self.point_count()):
            yield min(float(self.min_price) + i * self.price_step, float(self.max_price))


def validate_sweep(sweep: PriceSweep) -> None:
    """Raise InvalidInputError unless min < max and step is at least one cent (all finite)."""
    if not (math.isfinite(sweep.min_price) and math.isfinite(sweep.max_price)):
        raise InvalidInputError("min_price and max_price must be finite numbers")
    if sweep.min_price >= sweep.max_price:
        raise InvalidInputError("min_price must be less than max_price")
    if not (math.isfinite(sweep.price_step) and sweep.price_step > 0):
        raise InvalidInputError("price_step must be greater than 0")
    if sweep.price_step < MIN_PRICE_STEP:
        raise InvalidInputError(f"price_step must be at least {MIN_PRICE_STEP}")


def infer_sweep(
    strikes: Iterable[float],
    margin: float = STRIKE_MARGIN,
    step: float = PRICE_STEP,
) -> PriceSweep:
    """
    Sweep from the lowest strike minus margin to the highest strike plus margin.
    Non-finite strikes are ignored. The lower bound is floored at 0 (no negative underlying).
    """
    finite = [float(s) for s in strikes if s is not None and math.isfinite(s)]
    if not finite:
        raise InvalidInputError("Unable to infer range: no valid strikes found")
    if not (math.isfinite(margin) and margin >= 0):
        raise InvalidInputError("margin must be a non-negative number")
    sweep = PriceSweep(
        min_price=max(0.0, min(finite) - margin),
        max_price=max(finite) + margin,
        price_step=step,
    )
    validate_sweep(sweep)
    logger.debug(
        "Inferred sweep %s-%s step %s from %d strikes",
        sweep.min_price,
        sweep.max_price,
        sweep.price_step,
        len(finite),
    )
    return sweep


def clamp_sweep(sweep: PriceSweep, max_points: int = MAX_SWEEP_POINTS) -> PriceSweep:
    """
    Return sweep unchanged if it yields at most max_points prices; otherwise widen the step
    over the same range so it does.
    A step finer than one cent is first widened to one cent.
    """
    if max_points < 2:
        raise InvalidInputError("max_points must be at least 2")
    if math.isfinite(sweep.price_step) and 0 < sweep.price_step < MIN_PRICE_STEP:
        logger.warning("Sweep step %s is below one cent; widening to %s", sweep.price_step, MIN_PRICE_STEP)
        sweep = replace(sweep, price_step=MIN_PRICE_STEP)
    validate_sweep(sweep)
    count = sweep.point_count()
    if count <= max_points:
        return sweep
    step = (sweep.max_price - sweep.min_price) / (max_points - 1)
    logger.warning(
        "Sweep %s-%s step %s yields %d points; widening step to %s (max %d points)",
        sweep.min_price,
        sweep.max_price,
        sweep.price_step,
        count,
        step,
        max_points,
    )
    return PriceSweep(min_price=sweep.min_price, max_price=sweep.max_price, price_step=step)
