import math

import numpy as np
import pytest

from errors import ContractError
from float_complex import (
    gflt_abs, gflt_add, gflt_arg, gflt_conj, gflt_cos, gflt_cosh, gflt_div, gflt_eq, gflt_exp,
    gflt_from_doubles, gflt_from_polar, gflt_i, gflt_imag, gflt_is_imag, gflt_is_inf,
    gflt_is_nan, gflt_is_real, gflt_is_zero, gflt_log, gflt_mul, gflt_neg_one, gflt_negate,
    gflt_one, gflt_pow, gflt_real, gflt_sin, gflt_sinh, gflt_sqrt, gflt_sub, gflt_tan,
    gflt_tanh, gflt_to_string, gflt_zero,
)


def f(re, im):
    return gflt_from_doubles(re, im)


def close(c, re, im, tol=1e-10):
    return abs(gflt_real(c) - re) <= tol and abs(gflt_imag(c) - im) <= tol


def test_creation_and_accessors():
    a = f(3.5, 4.5)
    assert (gflt_real(a), gflt_imag(a)) == (3.5, 4.5)
    b = gflt_from_polar(1.0, math.pi / 4)
    assert close(b, math.sqrt(2) / 2, math.sqrt(2) / 2)


def test_arithmetic():
    a, b = f(3.0, 4.0), f(1.0, -2.0)
    assert gflt_eq(gflt_add(a, b), f(4.0, 2.0))
    assert gflt_eq(gflt_sub(a, b), f(2.0, 6.0))
    assert gflt_eq(gflt_mul(a, b), f(11.0, -2.0))
    assert close(gflt_div(a, b), -1.0, 2.0)
    assert gflt_eq(gflt_negate(a), f(-3.0, -4.0))
    assert gflt_eq(gflt_conj(a), f(3.0, -4.0))


def test_abs_and_arg():
    a = f(3.0, 4.0)
    assert gflt_abs(a) == 5.0
    assert gflt_arg(a) == pytest.approx(math.atan2(4.0, 3.0), abs=1e-10)
    assert gflt_arg(f(-1.0, 0.0)) == pytest.approx(math.pi)
    assert abs(a) == 5.0


def test_exp_of_half_pi_i():
    assert close(gflt_exp(f(0.0, math.pi / 2)), 0.0, 1.0)


def test_sqrt_principal_branch():
    assert close(gflt_sqrt(f(-1.0, 0.0)), 0.0, 1.0)
    assert close(gflt_sqrt(f(-1.0, -0.0)), 0.0, -1.0)
    assert gflt_real(gflt_sqrt(f(-4.0, 3.0))) >= 0.0


def test_log_principal_branch():
    assert close(gflt_log(f(-1.0, 0.0)), 0.0, math.pi)
    assert close(gflt_log(gflt_i()), 0.0, math.pi / 2)
    with pytest.raises(ContractError):
        gflt_log(gflt_zero())


def test_pow():
    assert close(gflt_pow(gflt_i(), gflt_i()), math.exp(-math.pi / 2), 0.0)
    assert close(gflt_pow(f(2.0, 0.0), f(10.0, 0.0)), 1024.0, 0.0, tol=1e-9)
    assert close(f(0.0, 1.0) ** f(2.0, 0.0), -1.0, 0.0)


@pytest.mark.parametrize("fn, ref", [
    (gflt_sin, np.sin), (gflt_cos, np.cos), (gflt_tan, np.tan),
    (gflt_sinh, np.sinh), (gflt_cosh, np.cosh), (gflt_tanh, np.tanh),
])
def test_trig_and_hyperbolic(fn, ref):
    z = 0.3 - 1.2j
    expected = ref(np.complex128(z))
    assert close(fn(f(z.real, z.imag)), expected.real, expected.imag)


def test_trig_identity():
    z = f(0.7, -0.4)
    s, c = gflt_sin(z), gflt_cos(z)
    total = gflt_add(gflt_mul(s, s), gflt_mul(c, c))
    assert close(total, 1.0, 0.0)


def test_i_squared_within_tolerance():
    assert close(gflt_mul(gflt_i(), gflt_i()), -1.0, 0.0)
    assert close(gflt_mul(gflt_i(), gflt_i()), gflt_real(gflt_neg_one()), 0.0)


@pytest.mark.parametrize("a", [f(1.5, -2.5), f(0.0, 0.0), f(-1e300, 1e-300)])
def test_group_identities(a):
    assert gflt_eq(gflt_add(a, gflt_zero()), a)
    b = f(0.25, -3.0)
    assert gflt_eq(gflt_sub(a, b), gflt_add(a, gflt_negate(b)))
    assert gflt_is_zero(gflt_mul(a, gflt_zero()))
    assert gflt_is_zero(gflt_add(a, gflt_negate(a)))
    assert gflt_eq(gflt_mul(a, gflt_one()), a)
    assert gflt_eq(gflt_conj(gflt_conj(a)), a)
    assert gflt_is_real(gflt_mul(a, gflt_conj(a)))


def test_nan_and_inf():
    nan = f(float("nan"), 0.0)
    assert gflt_is_nan(nan)
    assert not gflt_eq(nan, nan)
    assert nan != nan
    inf = f(1.0, float("-inf"))
    assert gflt_is_inf(inf) and not gflt_is_nan(inf)
    assert gflt_eq(inf, inf)
    a = f(1.0, 2.0)
    assert gflt_eq(a, a)


def test_division_by_zero_is_ieee():
    q = gflt_div(f(1.0, 1.0), gflt_zero())
    assert gflt_is_nan(q) or gflt_is_inf(q)


def test_transcendental_of_nan_propagates():
    assert gflt_is_nan(gflt_exp(f(float("nan"), 1.0)))


def test_predicates():
    assert gflt_is_zero(gflt_zero())
    assert gflt_is_real(gflt_one())
    assert gflt_is_imag(gflt_i())
    assert gflt_is_zero(f(-0.0, 0.0))


@pytest.mark.parametrize("re, im, text", [
    (0.0, 0.0, "0"),
    (2.5, 0.0, "2.5"),
    (0.0, 1.0, "i"),
    (0.0, -1.0, "-i"),
    (0.0, 0.25, "0.25i"),
    (1.5, 1.0, "1.5+i"),
    (1.5, -1.0, "1.5-i"),
    (1.5, 2.5, "1.5+2.5i"),
    (1.5, -2.5, "1.5-2.5i"),
    (3.0, 4.0, "3+4i"),
    (1234567.0, 0.0, "1.23457e+06"),
    (0.0, 1e-7, "1e-07i"),
    (1.0 / 3.0, 0.0, "0.333333"),
])
def test_to_string(re, im, text):
    assert gflt_to_string(f(re, im)) == text


def test_from_doubles_rejects_non_reals():
    with pytest.raises(ContractError):
        f(1j, 0.0)
    with pytest.raises(ContractError):
        f(None, 0.0)
    assert gflt_real(f(np.float32(0.5), 1)) == 0.5


def test_complex_protocol():
    assert complex(f(1.0, -2.0)) == 1 - 2j
