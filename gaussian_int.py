"""Gaussian integers: a + bi with a, b arbitrary-precision ints.

Z[i] is not closed under division, so gint_div widens to the rational
closure and returns a RationalComplex. Callers that want an integer quotient
convert explicitly (conversions.grat_to_gint) after checking
grat_is_gaussian_int.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from arithmetic import Q, as_int, is_machine_int
from constants import ConstantRegistry
from errors import ComplexZeroDivisionError, ContractError
from formats import render_complex
from rational_complex import RationalComplex, grat_div, grat_from_fractions
from refcount import Handle, RefCount, check_handle, release_handle


@dataclass(frozen=True, eq=False)
class GaussianInt(Handle):
    re: int
    im: int
    _rc: RefCount = field(default_factory=RefCount, init=False, repr=False, compare=False)

    def __add__(self, other):
        if not isinstance(other, GaussianInt):
            return NotImplemented
        return gint_add(self, other)

    def __sub__(self, other):
        if not isinstance(other, GaussianInt):
            return NotImplemented
        return gint_sub(self, other)

    def __mul__(self, other):
        if not isinstance(other, GaussianInt):
            return NotImplemented
        return gint_mul(self, other)

    def __truediv__(self, other):
        if not isinstance(other, GaussianInt):
            return NotImplemented
        return gint_div(self, other)

    def __neg__(self):
        return gint_negate(self)

    def __eq__(self, other):
        if not isinstance(other, GaussianInt):
            return NotImplemented
        return gint_eq(self, other)

    def __hash__(self):
        return hash((self.re, self.im))

    def __str__(self):
        return gint_to_string(self)


def _check(c, op: str) -> None:
    check_handle(c, GaussianInt, op)

def _component(x, op: str) -> int:
    if x is None:
        raise ContractError(f"{op}: component cannot be None")
    try:
        return as_int(x)
    except TypeError as e:
        raise ContractError(f"{op}: {e}") from e

# Creation

def gint_from_machine_ints(real, imag) -> GaussianInt:
    """From two signed 64-bit integers; use gint_from_bigints for wider values."""
    re = _component(real, "gint_from_machine_ints")
    im = _component(imag, "gint_from_machine_ints")
    if not (is_machine_int(re) and is_machine_int(im)):
        raise ContractError(f"gint_from_machine_ints: ({re}, {im}) outside the int64 range")
    return GaussianInt(re, im)

def gint_from_bigints(real, imag) -> GaussianInt:
    return GaussianInt(_component(real, "gint_from_bigints"),
                       _component(imag, "gint_from_bigints"))

_CONSTANTS = ConstantRegistry("gint", {
    "zero":    lambda: GaussianInt(0, 0),
    "one":     lambda: GaussianInt(1, 0),
    "i":       lambda: GaussianInt(0, 1),
    "neg_one": lambda: GaussianInt(-1, 0),
    "neg_i":   lambda: GaussianInt(0, -1),
})

def gint_zero() -> GaussianInt:
    return _CONSTANTS.get("zero")

def gint_one() -> GaussianInt:
    return _CONSTANTS.get("one")

def gint_i() -> GaussianInt:
    return _CONSTANTS.get("i")

def gint_neg_one() -> GaussianInt:
    return _CONSTANTS.get("neg_one")

def gint_neg_i() -> GaussianInt:
    return _CONSTANTS.get("neg_i")

def gint_is_constant(c: GaussianInt) -> bool:
    return _CONSTANTS.is_interned(c)

# Lifecycle

def gint_retain(c: GaussianInt) -> GaussianInt:
    _check(c, "gint_retain")
    return c.retain()

def gint_release(c: GaussianInt) -> None:
    """Drop one reference; None is accepted and ignored."""
    release_handle(c, GaussianInt, "gint_release")

def gint_copy(c: GaussianInt) -> GaussianInt:
    _check(c, "gint_copy")
    return GaussianInt(c.re, c.im)

# Arithmetic

def gint_add(a: GaussianInt, b: GaussianInt) -> GaussianInt:
    _check(a, "gint_add")
    _check(b, "gint_add")
    return GaussianInt(a.re + b.re, a.im + b.im)

def gint_sub(a: GaussianInt, b: GaussianInt) -> GaussianInt:
    _check(a, "gint_sub")
    _check(b, "gint_sub")
    return GaussianInt(a.re - b.re, a.im - b.im)

def gint_mul(a: GaussianInt, b: GaussianInt) -> GaussianInt:
    # schoolbook: (ac-bd) + (ad+bc)i
    _check(a, "gint_mul")
    _check(b, "gint_mul")
    return GaussianInt(a.re * b.re - a.im * b.im,
                       a.re * b.im + a.im * b.re)

def gint_div(a: GaussianInt, b: GaussianInt) -> RationalComplex:
    """Exact quotient in Q(i); equals grat_div(gint_to_grat(a), gint_to_grat(b))."""
    _check(a, "gint_div")
    _check(b, "gint_div")
    if gint_is_zero(b):
        raise ComplexZeroDivisionError("gint_div: division by zero")
    num = grat_from_fractions(Q(a.re), Q(a.im))
    den = grat_from_fractions(Q(b.re), Q(b.im))
    try:
        return grat_div(num, den)
    finally:
        num.release()
        den.release()

def gint_negate(c: GaussianInt) -> GaussianInt:
    _check(c, "gint_negate")
    return GaussianInt(-c.re, -c.im)

def gint_conj(c: GaussianInt) -> GaussianInt:
    _check(c, "gint_conj")
    return GaussianInt(c.re, -c.im)

# Accessors and predicates

def gint_real(c: GaussianInt) -> int:
    _check(c, "gint_real")
    return c.re

def gint_imag(c: GaussianInt) -> int:
    _check(c, "gint_imag")
    return c.im

def gint_eq(a: GaussianInt, b: GaussianInt) -> bool:
    _check(a, "gint_eq")
    _check(b, "gint_eq")
    return a.re == b.re and a.im == b.im

def gint_is_zero(c: GaussianInt) -> bool:
    _check(c, "gint_is_zero")
    return c.re == 0 and c.im == 0

def gint_is_real(c: GaussianInt) -> bool:
    _check(c, "gint_is_real")
    return c.im == 0

def gint_is_imag(c: GaussianInt) -> bool:
    _check(c, "gint_is_imag")
    return c.re == 0

def gint_to_string(c: GaussianInt) -> str:
    """e.g. "3+4i", "2-3i", "i", "-i", "5", "0"."""
    _check(c, "gint_to_string")
    return render_complex(str(c.re), str(c.im),
                          re_zero=c.re == 0, im_zero=c.im == 0,
                          im_one=c.im == 1, im_neg_one=c.im == -1,
                          im_neg=c.im < 0)
