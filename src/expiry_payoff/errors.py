"""Errors raised by the payoff core."""


class InvalidInputError(ValueError):
    """Legs or price sweep violate a precondition. The message is safe to show to the user as-is."""
