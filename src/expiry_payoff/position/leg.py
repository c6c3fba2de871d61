"""Option leg: call/put, strike, signed quantity, contract multiplier."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from expiry_payoff.config import CONTRACT_MULTIPLIER


class OptionType(Enum):
    """Call or put; values match the usual C/P right letters."""
    CALL = "C"
    PUT = "P"


@dataclass(frozen=True)
class OptionLeg:
    """One option leg. Positive quantity = long, negative = short; magnitude = number of contracts."""

    option_type: OptionType
    strike: float
    quantity: int
    contract_multiplier: float = CONTRACT_MULTIPLIER  # shares per contract

    def is_call(self) -> bool:
        return self.option_type == OptionType.CALL

    def is_long(self) -> bool:
        return self.quantity > 0


def _combine_key(leg: OptionLeg) -> Tuple[OptionType, float, float]:
    """(type, strike, multiplier): legs sharing this key differ only in quantity."""
    return (leg.option_type, leg.strike, leg.contract_multiplier)


def combine_legs(legs: Iterable[OptionLeg]) -> List[OptionLeg]:
    """
    Merge legs with the same type and strike by summing quantities.
    Keeps first-seen order; legs that net out to zero contracts are dropped.
    """
    combined: Dict[Tuple[OptionType, float, float], OptionLeg] = {}
    for leg in legs:
        key = _combine_key(leg)
        if key in combined:
            prev = combined[key]
            combined[key] = replace(prev, quantity=prev.quantity + leg.quantity)
        else:
            combined[key] = leg
    return [leg for leg in combined.values() if leg.quantity != 0]
