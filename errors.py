"""
Exceptions raised by the boosting code.
"""


class BoostingError(Exception):
    """Base error for everything raised by the boosting modules."""


class InvalidArgument(BoostingError, ValueError):
    """Raised before training starts when the inputs are malformed."""


class DomainError(BoostingError, ArithmeticError):
    """Raised when a weak learner is so degenerate that its classifier weight is undefined."""
