"""Rational complex numbers: a + bi with a, b exact reduced fractions.

Components are `Q` (fractions.Fraction), which normalises on every operation,
so each produced component is already in lowest terms with a positive
denominator; nothing here reduces explicitly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import numbers

from arithmetic import Q, as_int, is_machine_int
from constants import ConstantRegistry
from errors import ComplexZeroDivisionError, ContractError
from formats import render_complex
from refcount import Handle, RefCount, check_handle, release_handle


@dataclass(frozen=True, eq=False)
class RationalComplex(Handle):
    re: Q
    im: Q
    _rc: RefCount = field(default_factory=RefCount, init=False, repr=False, compare=False)

    def __add__(self, other):
        if not isinstance(other, RationalComplex):
            return NotImplemented
        return grat_add(self, other)

    def __sub__(self, other):
        if not isinstance(other, RationalComplex):
            return NotImplemented
        return grat_sub(self, other)

    def __mul__(self, other):
        if not isinstance(other, RationalComplex):
            return NotImplemented
        return grat_mul(self, other)

    def __truediv__(self, other):
        if not isinstance(other, RationalComplex):
            return NotImplemented
        return grat_div(self, other)

    def __neg__(self):
        return grat_negate(self)

    def __eq__(self, other):
        if not isinstance(other, RationalComplex):
            return NotImplemented
        return grat_eq(self, other)

    def __hash__(self):
        return hash((self.re, self.im))

    def __str__(self):
        return grat_to_string(self)


def _check(c, op: str) -> None:
    check_handle(c, RationalComplex, op)

def _component(x, op: str) -> Q:
    if x is None:
        raise ContractError(f"{op}: component cannot be None")
    if isinstance(x, bool) or not isinstance(x, numbers.Rational):
        raise ContractError(f"{op}: expected an exact rational component, got {type(x).__name__}")
    if isinstance(x, numbers.Integral):
        return Q(as_int(x))
    return x if type(x) is Q else Q(x.numerator, x.denominator)

# Creation

def grat_from_ints(real_num, real_den, imag_num, imag_den) -> RationalComplex:
    """(real_num/real_den) + (imag_num/imag_den)i from machine integers."""
    try:
        parts = [as_int(n) for n in (real_num, real_den, imag_num, imag_den)]
    except TypeError as e:
        raise ContractError(f"grat_from_ints: {e}") from e
    if not all(is_machine_int(n) for n in parts):
        raise ContractError(f"grat_from_ints: {tuple(parts)} outside the int64 range")
    rn, rd, in_, id_ = parts
    if rd == 0 or id_ == 0:
        raise ContractError("grat_from_ints: denominator cannot be zero")
    return RationalComplex(Q(rn, rd), Q(in_, id_))

def grat_from_fractions(real, imag) -> RationalComplex:
    return RationalComplex(_component(real, "grat_from_fractions"),
                           _component(imag, "grat_from_fractions"))

_CONSTANTS = ConstantRegistry("grat", {
    "zero":    lambda: RationalComplex(Q(0), Q(0)),
    "one":     lambda: RationalComplex(Q(1), Q(0)),
    "i":       lambda: RationalComplex(Q(0), Q(1)),
    "neg_one": lambda: RationalComplex(Q(-1), Q(0)),
    "neg_i":   lambda: RationalComplex(Q(0), Q(-1)),
})

def grat_zero() -> RationalComplex:
    return _CONSTANTS.get("zero")

def grat_one() -> RationalComplex:
    return _CONSTANTS.get("one")

def grat_i() -> RationalComplex:
    return _CONSTANTS.get("i")

def grat_neg_one() -> RationalComplex:
    return _CONSTANTS.get("neg_one")

def grat_neg_i() -> RationalComplex:
    return _CONSTANTS.get("neg_i")

def grat_is_constant(c: RationalComplex) -> bool:
    return _CONSTANTS.is_interned(c)

# Lifecycle

def grat_retain(c: RationalComplex) -> RationalComplex:
    _check(c, "grat_retain")
    return c.retain()

def grat_release(c: RationalComplex) -> None:
    """Drop one reference; None is accepted and ignored."""
    release_handle(c, RationalComplex, "grat_release")

def grat_copy(c: RationalComplex) -> RationalComplex:
    _check(c, "grat_copy")
    return RationalComplex(c.re, c.im)

# Arithmetic

def grat_add(a: RationalComplex, b: RationalComplex) -> RationalComplex:
    _check(a, "grat_add")
    _check(b, "grat_add")
    return RationalComplex(a.re + b.re, a.im + b.im)

def grat_sub(a: RationalComplex, b: RationalComplex) -> RationalComplex:
    _check(a, "grat_sub")
    _check(b, "grat_sub")
    return RationalComplex(a.re - b.re, a.im - b.im)

def grat_mul(a: RationalComplex, b: RationalComplex) -> RationalComplex:
    """(a+bi)(c+di) = (ac-bd) + (ad+bc)i"""
    _check(a, "grat_mul")
    _check(b, "grat_mul")
    return RationalComplex(a.re * b.re - a.im * b.im,
                           a.re * b.im + a.im * b.re)

def grat_div(a: RationalComplex, b: RationalComplex) -> RationalComplex:
    """
    (a+bi) / (c+di) = ((ac+bd) + (bc-ad)i) / (c^2+d^2)

    Exact: grat_mul(grat_div(a, b), b) == a for every nonzero b.
    """
    _check(a, "grat_div")
    _check(b, "grat_div")
    if grat_is_zero(b):
        raise ComplexZeroDivisionError("grat_div: division by zero")
    denom = b.re * b.re + b.im * b.im
    real = (a.re * b.re + a.im * b.im) / denom
    imag = (a.im * b.re - a.re * b.im) / denom
    return RationalComplex(real, imag)

def grat_negate(c: RationalComplex) -> RationalComplex:
    _check(c, "grat_negate")
    return RationalComplex(-c.re, -c.im)

def grat_conj(c: RationalComplex) -> RationalComplex:
    _check(c, "grat_conj")
    return RationalComplex(c.re, -c.im)

def grat_reciprocal(c: RationalComplex) -> RationalComplex:
    _check(c, "grat_reciprocal")
    if grat_is_zero(c):
        raise ComplexZeroDivisionError("grat_reciprocal: reciprocal of zero")
    one = grat_one()
    try:
        return grat_div(one, c)
    finally:
        one.release()

# Accessors and predicates

def grat_real(c: RationalComplex) -> Q:
    _check(c, "grat_real")
    return c.re

def grat_imag(c: RationalComplex) -> Q:
    _check(c, "grat_imag")
    return c.im

def grat_eq(a: RationalComplex, b: RationalComplex) -> bool:
    _check(a, "grat_eq")
    _check(b, "grat_eq")
    return a.re == b.re and a.im == b.im

def grat_is_zero(c: RationalComplex) -> bool:
    _check(c, "grat_is_zero")
    return c.re == 0 and c.im == 0

def grat_is_real(c: RationalComplex) -> bool:
    _check(c, "grat_is_real")
    return c.im == 0

def grat_is_imag(c: RationalComplex) -> bool:
    _check(c, "grat_is_imag")
    return c.re == 0

def grat_is_gaussian_int(c: RationalComplex) -> bool:
    """True iff both components are integers (denominator 1 after reduction)."""
    _check(c, "grat_is_gaussian_int")
    return c.re.denominator == 1 and c.im.denominator == 1

def grat_to_string(c: RationalComplex) -> str:
    """e.g. "3/4+1/2i", "-2/5i", "7-i"."""
    _check(c, "grat_to_string")
    return render_complex(str(c.re), str(c.im),
                          re_zero=c.re == 0, im_zero=c.im == 0,
                          im_one=c.im == Q(1), im_neg_one=c.im == Q(-1),
                          im_neg=c.im < 0)
