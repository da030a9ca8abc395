"""
Exception types raised by the classifier family.

Bounds violations (a class, feature or value index outside the declared
range) raise the builtin IndexError rather than a custom type.
"""


class BayesClassifierError(Exception):
    """Root of all classifier errors."""


class ConfigurationError(BayesClassifierError, ValueError):
    """Malformed construction parameters (shapes, arities, class count)."""


class DegenerateEstimateError(BayesClassifierError, ArithmeticError):
    """A probability estimate would divide by zero (e.g. no training rows)."""


class NotTrainedError(BayesClassifierError, RuntimeError):
    """A classifier was queried before train() was called."""
