"""Floating-point complex numbers: an IEEE-754 binary64 pair.

Arithmetic and the transcendental functions run on numpy complex128 scalars,
so branch cuts are numpy's (C99) principal branches:
  log: imaginary part in (-pi, pi]
  sqrt: real part >= 0
NaN and infinity are ordinary values here; numpy's floating-point warnings
are silenced and results are whatever IEEE arithmetic produces. Use
gflt_is_nan / gflt_is_inf to detect them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import numbers

import numpy as np

from constants import ConstantRegistry
from errors import ContractError
from formats import format_g, render_complex
from refcount import Handle, RefCount, check_handle, release_handle


@dataclass(frozen=True, eq=False)
class FloatComplex(Handle):
    re: float
    im: float
    _rc: RefCount = field(default_factory=RefCount, init=False, repr=False, compare=False)

    def __add__(self, other):
        if not isinstance(other, FloatComplex):
            return NotImplemented
        return gflt_add(self, other)

    def __sub__(self, other):
        if not isinstance(other, FloatComplex):
            return NotImplemented
        return gflt_sub(self, other)

    def __mul__(self, other):
        if not isinstance(other, FloatComplex):
            return NotImplemented
        return gflt_mul(self, other)

    def __truediv__(self, other):
        if not isinstance(other, FloatComplex):
            return NotImplemented
        return gflt_div(self, other)

    def __pow__(self, other):
        if not isinstance(other, FloatComplex):
            return NotImplemented
        return gflt_pow(self, other)

    def __neg__(self):
        return gflt_negate(self)

    def __abs__(self):
        return gflt_abs(self)

    def __complex__(self):
        check_handle(self, FloatComplex, "__complex__")
        return complex(self.re, self.im)

    def __eq__(self, other):
        if not isinstance(other, FloatComplex):
            return NotImplemented
        return gflt_eq(self, other)

    def __hash__(self):
        return hash((self.re, self.im))

    def __str__(self):
        return gflt_to_string(self)


def _check(c, op: str) -> None:
    check_handle(c, FloatComplex, op)

def _component(x, op: str) -> float:
    if x is None:
        raise ContractError(f"{op}: component cannot be None")
    if isinstance(x, bool) or not isinstance(x, numbers.Real):
        raise ContractError(f"{op}: expected a real component, got {type(x).__name__}")
    return float(x)

def _z(c: FloatComplex) -> np.complex128:
    return np.complex128(complex(c.re, c.im))

def _wrap(z) -> FloatComplex:
    return FloatComplex(float(z.real), float(z.imag))

def _unary(ufunc, c: FloatComplex, op: str) -> FloatComplex:
    _check(c, op)
    with np.errstate(all="ignore"):
        return _wrap(ufunc(_z(c)))

# Creation

def gflt_from_doubles(real, imag) -> FloatComplex:
    return FloatComplex(_component(real, "gflt_from_doubles"),
                        _component(imag, "gflt_from_doubles"))

def gflt_from_polar(magnitude, angle) -> FloatComplex:
    """rho * e^(i theta), evaluated as rho*cos(theta) + i*rho*sin(theta)."""
    rho = _component(magnitude, "gflt_from_polar")
    theta = _component(angle, "gflt_from_polar")
    with np.errstate(all="ignore"):
        return FloatComplex(float(rho * np.cos(theta)), float(rho * np.sin(theta)))

_CONSTANTS = ConstantRegistry("gflt", {
    "zero":    lambda: FloatComplex(0.0, 0.0),
    "one":     lambda: FloatComplex(1.0, 0.0),
    "i":       lambda: FloatComplex(0.0, 1.0),
    "neg_one": lambda: FloatComplex(-1.0, 0.0),
    "neg_i":   lambda: FloatComplex(0.0, -1.0),
})

def gflt_zero() -> FloatComplex:
    return _CONSTANTS.get("zero")

def gflt_one() -> FloatComplex:
    return _CONSTANTS.get("one")

def gflt_i() -> FloatComplex:
    return _CONSTANTS.get("i")

def gflt_neg_one() -> FloatComplex:
    return _CONSTANTS.get("neg_one")

def gflt_neg_i() -> FloatComplex:
    return _CONSTANTS.get("neg_i")

def gflt_is_constant(c: FloatComplex) -> bool:
    return _CONSTANTS.is_interned(c)

# Lifecycle

def gflt_retain(c: FloatComplex) -> FloatComplex:
    _check(c, "gflt_retain")
    return c.retain()

def gflt_release(c: FloatComplex) -> None:
    """Drop one reference; None is accepted and ignored."""
    release_handle(c, FloatComplex, "gflt_release")

def gflt_copy(c: FloatComplex) -> FloatComplex:
    _check(c, "gflt_copy")
    return FloatComplex(c.re, c.im)

# Arithmetic

def gflt_add(a: FloatComplex, b: FloatComplex) -> FloatComplex:
    _check(a, "gflt_add")
    _check(b, "gflt_add")
    with np.errstate(all="ignore"):
        return _wrap(_z(a) + _z(b))

def gflt_sub(a: FloatComplex, b: FloatComplex) -> FloatComplex:
    _check(a, "gflt_sub")
    _check(b, "gflt_sub")
    with np.errstate(all="ignore"):
        return _wrap(_z(a) - _z(b))

def gflt_mul(a: FloatComplex, b: FloatComplex) -> FloatComplex:
    _check(a, "gflt_mul")
    _check(b, "gflt_mul")
    with np.errstate(all="ignore"):
        return _wrap(_z(a) * _z(b))

def gflt_div(a: FloatComplex, b: FloatComplex) -> FloatComplex:
    """IEEE division; a zero divisor yields inf/nan components, not an error."""
    _check(a, "gflt_div")
    _check(b, "gflt_div")
    with np.errstate(all="ignore"):
        return _wrap(_z(a) / _z(b))

def gflt_negate(c: FloatComplex) -> FloatComplex:
    _check(c, "gflt_negate")
    return FloatComplex(-c.re, -c.im)

def gflt_conj(c: FloatComplex) -> FloatComplex:
    _check(c, "gflt_conj")
    return FloatComplex(c.re, -c.im)

# Transcendental functions (principal branch)

def gflt_exp(c: FloatComplex) -> FloatComplex:
    return _unary(np.exp, c, "gflt_exp")

def gflt_log(c: FloatComplex) -> FloatComplex:
    _check(c, "gflt_log")
    if gflt_is_zero(c):
        raise ContractError("gflt_log: log of zero")
    return _unary(np.log, c, "gflt_log")

def gflt_pow(base: FloatComplex, exponent: FloatComplex) -> FloatComplex:
    """base ** exponent on the principal branch of log(base)."""
    _check(base, "gflt_pow")
    _check(exponent, "gflt_pow")
    with np.errstate(all="ignore"):
        return _wrap(np.power(_z(base), _z(exponent)))

def gflt_sqrt(c: FloatComplex) -> FloatComplex:
    return _unary(np.sqrt, c, "gflt_sqrt")

def gflt_sin(c: FloatComplex) -> FloatComplex:
    return _unary(np.sin, c, "gflt_sin")

def gflt_cos(c: FloatComplex) -> FloatComplex:
    return _unary(np.cos, c, "gflt_cos")

def gflt_tan(c: FloatComplex) -> FloatComplex:
    return _unary(np.tan, c, "gflt_tan")

def gflt_sinh(c: FloatComplex) -> FloatComplex:
    return _unary(np.sinh, c, "gflt_sinh")

def gflt_cosh(c: FloatComplex) -> FloatComplex:
    return _unary(np.cosh, c, "gflt_cosh")

def gflt_tanh(c: FloatComplex) -> FloatComplex:
    return _unary(np.tanh, c, "gflt_tanh")

# Accessors and predicates

def gflt_real(c: FloatComplex) -> float:
    _check(c, "gflt_real")
    return c.re

def gflt_imag(c: FloatComplex) -> float:
    _check(c, "gflt_imag")
    return c.im

def gflt_abs(c: FloatComplex) -> float:
    """Magnitude sqrt(re^2 + im^2), computed without intermediate overflow."""
    _check(c, "gflt_abs")
    with np.errstate(all="ignore"):
        return float(np.abs(_z(c)))

def gflt_arg(c: FloatComplex) -> float:
    """atan2(im, re), in [-pi, pi]."""
    _check(c, "gflt_arg")
    return float(np.arctan2(c.im, c.re))

def gflt_eq(a: FloatComplex, b: FloatComplex) -> bool:
    """IEEE equality of both components: NaN never equals anything."""
    _check(a, "gflt_eq")
    _check(b, "gflt_eq")
    return a.re == b.re and a.im == b.im

def gflt_is_zero(c: FloatComplex) -> bool:
    _check(c, "gflt_is_zero")
    return c.re == 0.0 and c.im == 0.0

def gflt_is_real(c: FloatComplex) -> bool:
    _check(c, "gflt_is_real")
    return c.im == 0.0

def gflt_is_imag(c: FloatComplex) -> bool:
    _check(c, "gflt_is_imag")
    return c.re == 0.0

def gflt_is_nan(c: FloatComplex) -> bool:
    _check(c, "gflt_is_nan")
    return bool(np.isnan(c.re) or np.isnan(c.im))

def gflt_is_inf(c: FloatComplex) -> bool:
    _check(c, "gflt_is_inf")
    return bool(np.isinf(c.re) or np.isinf(c.im))

def gflt_to_string(c: FloatComplex) -> str:
    """%g per component, e.g. "1.5+2.5i", "3-i", "1e-07i"."""
    _check(c, "gflt_to_string")
    return render_complex(format_g(c.re), format_g(c.im),
                          re_zero=c.re == 0.0, im_zero=c.im == 0.0,
                          im_one=c.im == 1.0, im_neg_one=c.im == -1.0,
                          im_neg=c.im < 0)
