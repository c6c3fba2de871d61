"""Payoff at expiration: legs, price sweep, value curve, key points and profile builder."""

from expiry_payoff.position.key_points import KeyPoint, KeyPointKind, find_key_points
from expiry_payoff.position.leg import OptionLeg, OptionType, combine_legs
from expiry_payoff.position.profile import PayoffProfile, build_profile
from expiry_payoff.position.sweep import PriceSweep, clamp_sweep, infer_sweep
from expiry_payoff.position.value_curve import ValuePoint, evaluate

__all__ = [
    "OptionLeg",
    "OptionType",
    "combine_legs",
    "PriceSweep",
    "infer_sweep",
    "clamp_sweep",
    "ValuePoint",
    "evaluate",
    "KeyPoint",
    "KeyPointKind",
    "find_key_points",
    "PayoffProfile",
    "build_profile",
]
