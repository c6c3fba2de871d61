"""Unit tests for price sweeps (grid, range inference, clamping)."""

import math

import pytest

from expiry_payoff.errors import InvalidInputError
from expiry_payoff.position.sweep import PriceSweep, clamp_sweep, infer_sweep


def test_prices_include_max_when_step_divides_range() -> None:
    sweep = PriceSweep(700, 900, 50)
    assert sweep.point_count() == 5
    assert list(sweep.prices()) == [700, 750, 800, 850, 900]


def test_prices_stop_short_of_max_on_uneven_step() -> None:
    sweep = PriceSweep(0, 100, 30)
    assert sweep.point_count() == 4
    assert list(sweep.prices()) == [0, 30, 60, 90]


def test_prices_never_pass_max_on_float_step() -> None:
    prices = list(PriceSweep(0.0, 0.3, 0.1).prices())
    assert len(prices) == 4
    assert prices[-1] == pytest.approx(0.3)
    assert max(prices) <= 0.3


def test_infer_sweep_adds_margin_around_strikes() -> None:
    sweep = infer_sweep([700, 620, 660], margin=50, step=10)
    assert sweep == PriceSweep(570, 750, 10)


def test_infer_sweep_floors_at_zero() -> None:
    assert infer_sweep([30], margin=50, step=5) == PriceSweep(0.0, 80, 5)


def test_infer_sweep_ignores_non_finite_strikes() -> None:
    assert infer_sweep([float("nan"), 100, None], margin=10, step=1) == PriceSweep(90, 110, 1)


@pytest.mark.parametrize(
    "strikes, margin, step",
    [
        ([], 50, 10),
        ([float("nan")], 50, 10),
        ([100], -1, 10),
        ([100], 0, 10),
        ([100], 50, 0),
    ],
)
def test_infer_sweep_rejects_bad_input(strikes, margin, step) -> None:
    with pytest.raises(InvalidInputError):
        infer_sweep(strikes, margin=margin, step=step)


def test_clamp_sweep_keeps_small_sweep() -> None:
    sweep = PriceSweep(500, 1000, 10)
    assert clamp_sweep(sweep, max_points=1000) is sweep


def test_clamp_sweep_widens_step() -> None:
    sweep = PriceSweep(0, 1000, 0.01)
    clamped = clamp_sweep(sweep, max_points=1001)
    assert clamped.min_price == 0 and clamped.max_price == 1000
    assert clamped.price_step == pytest.approx(1.0)
    assert clamped.point_count() == 1001


def test_clamp_sweep_logs_warning(caplog) -> None:
    with caplog.at_level("WARNING", logger="expiry_payoff.position.sweep"):
        clamp_sweep(PriceSweep(0, 100, 0.1), max_points=11)
    assert "widening step" in caplog.text


def test_clamp_sweep_rejects_bad_input() -> None:
    with pytest.raises(InvalidInputError):
        clamp_sweep(PriceSweep(0, 100, 1), max_points=1)
    with pytest.raises(InvalidInputError):
        clamp_sweep(PriceSweep(100, 0, 1), max_points=100)


def test_point_count_matches_floor_formula() -> None:
    for lo, hi, step in [(0, 10, 3), (12.5, 99.5, 7.25), (1, 2, 0.5)]:
        assert PriceSweep(lo, hi, step).point_count() == math.floor((hi - lo) / step) + 1


def test_clamp_sweep_widens_sub_cent_step() -> None:
    clamped = clamp_sweep(PriceSweep(100, 100.02, 0.004), max_points=1000)
    assert clamped == PriceSweep(100, 100.02, 0.01)
    prices = [round(p, 2) for p in clamped.prices()]
    assert prices == [100.0, 100.01, 100.02]
    assert len(set(prices)) == len(prices)
