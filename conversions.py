"""Cross-tier coercions.

    GaussianInt ──(exact)──▶ RationalComplex ──(round to double)──▶ FloatComplex
        └──────────────(to double, exact for small ints)───────────▶
    FloatComplex ──(round half away from zero)──▶ GaussianInt
    FloatComplex ──(best rational, bounded denominator)──▶ RationalComplex
    RationalComplex ──(round half away from zero, exact)──▶ GaussianInt

Rounding into the integer tier works on exact rationals: a RationalComplex is
rounded from its numerator/denominator directly and a double is first taken
to its exact binary value. No conversion goes through a double unless the
target is the floating tier, so rationals outside the double range still
round correctly.
"""

from __future__ import annotations
import math

from arithmetic import DOUBLE_EXACT_INT, Q, as_int, float_to_q, float_to_q_limited, int_to_double, q_to_double, round_half_away
from config import get_config
from errors import ContractError
from float_complex import FloatComplex
from gaussian_int import GaussianInt
from rational_complex import RationalComplex
from refcount import check_handle


def gint_to_grat(c: GaussianInt) -> RationalComplex:
    """Exact: each component becomes n/1."""
    check_handle(c, GaussianInt, "gint_to_grat")
    return RationalComplex(Q(c.re), Q(c.im))

def gint_to_gflt(c: GaussianInt) -> FloatComplex:
    """
    Nearest double per component. Exact while |n| <= 2^53 (see
    gint_to_gflt_is_exact); components beyond the double range become +-inf.
    """
    check_handle(c, GaussianInt, "gint_to_gflt")
    return FloatComplex(int_to_double(c.re), int_to_double(c.im))

def _int_is_double_exact(n: int) -> bool:
    if abs(n) <= DOUBLE_EXACT_INT:
        return True
    x = int_to_double(n)
    return math.isfinite(x) and int(x) == n

def gint_to_gflt_is_exact(c: GaussianInt) -> bool:
    """True iff gint_to_gflt(c) loses nothing."""
    check_handle(c, GaussianInt, "gint_to_gflt_is_exact")
    return _int_is_double_exact(c.re) and _int_is_double_exact(c.im)

def grat_to_gflt(c: RationalComplex) -> FloatComplex:
    """Correctly rounded double per component; saturates to +-inf."""
    check_handle(c, RationalComplex, "grat_to_gflt")
    return FloatComplex(q_to_double(c.re), q_to_double(c.im))

def grat_to_gint(c: RationalComplex) -> GaussianInt:
    """Nearest Gaussian integer, ties away from zero, computed exactly."""
    check_handle(c, RationalComplex, "grat_to_gint")
    return GaussianInt(round_half_away(c.re), round_half_away(c.im))

def _finite_q(x: float, op: str) -> Q:
    if not math.isfinite(x):
        raise ContractError(f"{op}: cannot convert non-finite component {x!r}")
    return float_to_q(x)

def gflt_to_gint(c: FloatComplex) -> GaussianInt:
    """Nearest Gaussian integer, ties away from zero. NaN/inf are rejected."""
    check_handle(c, FloatComplex, "gflt_to_gint")
    return GaussianInt(round_half_away(_finite_q(c.re, "gflt_to_gint")),
                       round_half_away(_finite_q(c.im, "gflt_to_gint")))

def gflt_to_grat(c: FloatComplex, max_denominator=None) -> RationalComplex:
    """
    Best rational approximation of each component with denominator at most
    max_denominator (continued fractions). Defaults to
    Config.default_max_denominator.
    """
    check_handle(c, FloatComplex, "gflt_to_grat")
    if max_denominator is None:
        max_denominator = get_config().default_max_denominator
    try:
        max_denominator = as_int(max_denominator)
    except TypeError as e:
        raise ContractError(f"gflt_to_grat: max_denominator {e}") from e
    if max_denominator <= 0:
        raise ContractError(f"gflt_to_grat: max_denominator must be positive, got {max_denominator}")
    for x in (c.re, c.im):
        _finite_q(x, "gflt_to_grat")
    return RationalComplex(float_to_q_limited(c.re, max_denominator),
                           float_to_q_limited(c.im, max_denominator))
