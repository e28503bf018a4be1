"""Exceptions raised on contract violations.

Every precondition failure in this library is a programmer error: a missing
handle, a division by zero, a logarithm of zero, a non-positive denominator
bound, or use of a handle after its final release. They all derive from
ContractError so callers can let them propagate and fail fast.
"""


class ContractError(ValueError):
    pass


class ComplexZeroDivisionError(ContractError, ZeroDivisionError):
    """Division or reciprocal with a zero divisor."""


class ReleasedHandleError(ContractError):
    """A handle was used (or released again) after its final release."""
