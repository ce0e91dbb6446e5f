"""Exception hierarchy for europricer.

Every failure raised by the package is a caller-fixable contract violation;
nothing here is transient, so nothing is retried.
"""


class PricingError(Exception):
    """Base exception for the pricing engine."""


class InvalidArgument(PricingError, ValueError):
    """Raised when an input violates a pricer's contract."""


class NumericDegenerate(PricingError, ArithmeticError):
    """Raised when a closed-form evaluation would produce a non-finite price."""
