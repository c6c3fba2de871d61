"""
Key points on a value curve: local lows/highs, break-even crossings and open curve ends.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from expiry_payoff.position.value_curve import ValuePoint

logger = logging.getLogger(__name__)


class KeyPointKind(Enum):
    LOW_POINT = "low_point"
    HIGH_POINT = "high_point"
    ZERO_CROSSING = "zero_crossing"
    CURVE_ENDPOINT = "curve_endpoint"


class _Trend(Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


@dataclass(frozen=True)
class KeyPoint:
    """A labelled point on the curve. Break-even points may fall between grid prices."""

    kind: KeyPointKind
    closing_price: float
    total_intrinsic_value: float
    description: str


def _trend_between(prev: ValuePoint, current: ValuePoint) -> _Trend:
    if current.total_intrinsic_value > prev.total_intrinsic_value:
        return _Trend.UP
    if current.total_intrinsic_value < prev.total_intrinsic_value:
        return _Trend.DOWN
    return _Trend.FLAT


def _at(point: ValuePoint, kind: KeyPointKind, description: str) -> KeyPoint:
    return KeyPoint(
        kind=kind,
        closing_price=point.closing_price,
        total_intrinsic_value=point.total_intrinsic_value,
        description=description,
    )


def _turning_point(
    new_trend: _Trend,
    old_trend: _Trend,
    prev: ValuePoint,
    last_non_flat: Optional[ValuePoint],
) -> KeyPoint:
    """Low point when turning up, high point when turning down. A flat run is anchored where it began."""
    if new_trend == _Trend.UP:
        kind, label = KeyPointKind.LOW_POINT, "Low point"
    else:
        kind, label = KeyPointKind.HIGH_POINT, "High point"
    if old_trend == _Trend.FLAT and last_non_flat is not None:
        return _at(last_non_flat, kind, f"{label} (after flat)")
    return _at(prev, kind, label)


def _zero_crossing(prev: ValuePoint, current: ValuePoint, cost: float, arrived_here: bool) -> Optional[KeyPoint]:
    """
    Break-even between two neighbouring points, linearly interpolated.
    P/L landing on zero counts on the point where it arrives. Leaving zero counts too,
    unless that zero was already reported on arrival (arrived_here).
    """
    pl0 = prev.total_intrinsic_value - cost
    pl1 = current.total_intrinsic_value - cost
    crosses = (pl0 < 0 <= pl1) or (pl0 > 0 >= pl1) or (pl0 == 0 and pl1 != 0 and not arrived_here)
    if not crosses:
        return None
    denominator = abs(pl1 - pl0)
    if denominator == 0:
        return None
    price = prev.closing_price + (current.closing_price - prev.closing_price) * abs(pl0) / denominator
    return KeyPoint(
        kind=KeyPointKind.ZERO_CROSSING,
        closing_price=round(price, 2),
        total_intrinsic_value=round(float(cost), 2),
        description="Break-even",
    )


def find_key_points(curve: Sequence[ValuePoint], cost: float) -> List[KeyPoint]:
    """
    Classify structurally significant points of curve relative to cost.
    cost: net debit (positive) or credit (negative); P&L = value - cost.
    Curves shorter than 3 points have no interior structure and return [].
    Result is sorted by closing price; a point may appear under more than one kind.
    """
    if len(curve) < 3:
        return []

    points: List[KeyPoint] = []
    first, last = curve[0], curve[-1]
    if first.total_intrinsic_value - cost != curve[1].total_intrinsic_value - cost:
        points.append(_at(first, KeyPointKind.CURVE_ENDPOINT, "Curve start"))

    trend: Optional[_Trend] = None
    last_non_flat: Optional[ValuePoint] = None
    crossed = False
    for i in range(1, len(curve)):
        prev, current = curve[i - 1], curve[i]
        new_trend = _trend_between(prev, current)
        if trend is not None and new_trend != trend and new_trend != _Trend.FLAT:
            points.append(_turning_point(new_trend, trend, prev, last_non_flat))
        trend = new_trend

        crossing = _zero_crossing(prev, current, cost, arrived_here=crossed)
        crossed = crossing is not None
        if crossing is not None:
            points.append(crossing)

        if new_trend != _Trend.FLAT:
            last_non_flat = current

    if last.total_intrinsic_value - cost != curve[-2].total_intrinsic_value - cost:
        points.append(_at(last, KeyPointKind.CURVE_ENDPOINT, "Curve end"))

    # sorted() is stable: ties keep emission order
    points = sorted(points, key=lambda p: p.closing_price)
    logger.debug("Found %d key points on %d-point curve (cost %s)", len(points), len(curve), cost)
    return points
