from __future__ import annotations
from fractions import Fraction
import math
import operator

import numpy as np

Q = Fraction  # rational type alias

INT64 = np.iinfo(np.int64)

# every integer of magnitude <= 2^53 is exactly representable as a double
DOUBLE_EXACT_INT = 1 << (np.finfo(np.float64).nmant + 1)

def is_machine_int(n: int) -> bool:
    """True iff n fits a signed 64-bit machine word."""
    return INT64.min <= n <= INT64.max

def as_int(x) -> int:
    """Coerce an index-able value (int, numpy integer) to a Python int."""
    if isinstance(x, bool):
        raise TypeError("bool is not accepted as an integer component")
    return operator.index(x)

def float_to_q(x: float) -> Q:
    """Exact rational value of a finite double (no decimal detour)."""
    return Q.from_float(float(x))

def float_to_q_limited(x: float, max_denominator: int) -> Q:
    """
    Closest rational to x with denominator <= max_denominator.
    Continued-fraction expansion of the exact binary value, as done by
    Fraction.limit_denominator.
    """
    return float_to_q(x).limit_denominator(max_denominator)

def int_to_double(n: int) -> float:
    """
    Nearest double to n. Integers beyond the binary64 range saturate to +-inf
    instead of raising.
    """
    try:
        return float(n)
    except OverflowError:
        return math.inf if n > 0 else -math.inf

def q_to_double(q: Q) -> float:
    """
    Correctly rounded double of a rational. Saturates to +-inf when the value
    is outside the binary64 range.
    """
    try:
        return q.numerator / q.denominator
    except OverflowError:
        return math.inf if q.numerator > 0 else -math.inf

def round_half_away(q: Q) -> int:
    """
    Round a rational to the nearest integer, ties away from zero.

    Works on the exact numerator/denominator, so there is no precision loss
    for values outside the double range:
      floor(|q| + 1/2) with the sign of q restored.
    """
    n, d = abs(q.numerator), q.denominator
    r = (2 * n + d) // (2 * d)
    return -r if q.numerator < 0 else r
