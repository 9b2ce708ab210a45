"""Exception types raised by the baseline estimator."""

from __future__ import annotations


class BaselineError(Exception):
    """Base class for baseline estimation failures."""


class ArgumentCountError(BaselineError, TypeError):
    """Unsupported option names or option container passed to the smoother."""


class NumericalError(BaselineError, ArithmeticError):
    """The penalized system could not be factored or produced non-finite values."""
