"""Tests of the dual numbers in :mod:`uvtheory.ad`, with derivatives compared to
symbolic derivatives from sympy."""

from __future__ import annotations

import numpy as np
import pytest
import sympy as sp

import uvtheory.ad as ad
from uvtheory.ad import functions as af

X0 = 0.7
Y0 = 1.3

_x, _y = sp.symbols("x y")


def _symbolic_derivatives(expr, symbols, values):
    """Value, gradient and Hessian of a sympy expression at given values."""
    subs = dict(zip(symbols, values))
    val = float(expr.subs(subs))
    jac = np.array([float(sp.diff(expr, s).subs(subs)) for s in symbols])
    hess = np.array(
        [[float(sp.diff(expr, s, t).subs(subs)) for t in symbols] for s in symbols]
    )
    return val, jac, hess


@pytest.mark.parametrize(
    "func, sym_func",
    [
        (af.exp, sp.exp),
        (af.log, sp.log),
        (af.tanh, sp.tanh),
        (af.sqrt, sp.sqrt),
        (af.cbrt, sp.cbrt),
        (af.recip, lambda x: 1 / x),
        (lambda x: af.powi(x, 3), lambda x: x**3),
        (lambda x: af.powi(x, -2), lambda x: x ** (-2)),
        (lambda x: af.powf(x, 2.5), lambda x: x**2.5),
        (lambda x: af.powd(2.0, x), lambda x: 2.0**x),
        (lambda x: -x + 3.0 * x - 1.0, lambda x: -x + 3 * x - 1),
    ],
)
def test_unary_functions(func, sym_func):
    """Value, first and second derivative of elementary functions."""
    val, jac, hess = _symbolic_derivatives(sym_func(_x), [_x], [X0])

    (x,) = ad.initDualNumbers([X0], order=2)
    result = func(x)

    assert isinstance(result, ad.DualNumber)
    assert np.isclose(result.val, val, rtol=1e-14, atol=0.0)
    assert np.allclose(result.jac, jac, rtol=1e-12, atol=1e-14)
    assert np.allclose(result.hess, hess, rtol=1e-12, atol=1e-14)

    # The value must not depend on attached derivatives.
    assert result.val == func(X0)


@pytest.mark.parametrize(
    "func, sym_func",
    [
        (lambda x, y: x + y, lambda x, y: x + y),
        (lambda x, y: x - y, lambda x, y: x - y),
        (lambda x, y: x * y, lambda x, y: x * y),
        (lambda x, y: x / y, lambda x, y: x / y),
        (lambda x, y: 2.0 / x - y / 3.0, lambda x, y: 2 / x - y / 3),
        (lambda x, y: 1.0 - x * y + 4.0, lambda x, y: 1 - x * y + 4),
        (lambda x, y: x**y, lambda x, y: x**y),
        (
            lambda x, y: af.powd(x, y) * af.exp(x / y),
            lambda x, y: x**y * sp.exp(x / y),
        ),
        (
            lambda x, y: af.tanh(x * x + y) / af.sqrt(y),
            lambda x, y: sp.tanh(x * x + y) / sp.sqrt(y),
        ),
        (
            lambda x, y: af.log(x + af.cbrt(y * y)) * af.powi(y - x, 3),
            lambda x, y: sp.log(x + sp.cbrt(y * y)) * (y - x) ** 3,
        ),
    ],
)
def test_binary_operations(func, sym_func):
    """Gradients and Hessians of functions of two variables."""
    val, jac, hess = _symbolic_derivatives(sym_func(_x, _y), [_x, _y], [X0, Y0])

    x, y = ad.initDualNumbers([X0, Y0], order=2)
    result = func(x, y)

    assert np.isclose(result.val, val, rtol=1e-14, atol=0.0)
    assert np.allclose(result.jac, jac, rtol=1e-12, atol=1e-14)
    assert np.allclose(result.hess, hess, rtol=1e-12, atol=1e-14)

    # First order numbers carry the same gradient, but no Hessian.
    x1, y1 = ad.initDualNumbers([X0, Y0], order=1)
    result_1 = func(x1, y1)
    assert result_1.hess is None
    assert np.allclose(result_1.jac, result.jac, rtol=1e-14, atol=0.0)


def test_derivative_free_encoding():
    """Dual numbers with zero-length gradients reproduce plain float evaluation
    exactly."""

    def func(x, y):
        return af.exp(-x / y) * af.powf(y, 1.7) + af.tanh(x) / af.powi(1.0 - x, 3)

    result = func(ad.DualNumber(X0), ad.DualNumber(Y0))
    assert result.val == func(X0, Y0)
    assert result.jac.size == 0


def test_numpy_scalars():
    """Numpy scalars defer to the operators of dual numbers."""
    (x,) = ad.initDualNumbers([X0])
    for result in [
        np.float64(2.0) * x,
        np.float64(2.0) + x,
        np.float64(2.0) - x,
        np.float64(2.0) / x,
    ]:
        assert isinstance(result, ad.DualNumber)
    assert (np.float64(2.0) * x).val == 2.0 * X0
    assert np.isclose((np.float64(2.0) / x).jac[0], -2.0 / X0**2)


def test_value_of():
    (x,) = ad.initDualNumbers([X0])
    assert ad.value_of(x) == X0
    assert ad.value_of(X0) == X0
    assert ad.value_of(np.float64(X0)) == X0


def test_invalid_usage():
    """Errors for incompatible dual numbers and unsupported operands."""
    x1, y1 = ad.initDualNumbers([X0, Y0], order=1)
    (z1,) = ad.initDualNumbers([X0], order=1)
    x2, _ = ad.initDualNumbers([X0, Y0], order=2)

    with pytest.raises(ValueError):
        x1 + z1
    with pytest.raises(ValueError):
        x1 * x2
    with pytest.raises(TypeError):
        x1 + "a"
    with pytest.raises(TypeError):
        x1 * [1.0]
    with pytest.raises(TypeError):
        af.powi(x1, 2.0)
    with pytest.raises(ValueError):
        ad.initDualNumbers([X0], order=3)
    with pytest.raises(ValueError):
        ad.DualNumber(X0, np.ones(2), np.ones((3, 3)))
    with pytest.raises(ValueError):
        af.unary(x2, np.sin, np.cos)


def test_unary_lifting():
    """Lifting of a scalar function with known derivatives."""
    x1, _ = ad.initDualNumbers([X0, Y0], order=1)
    x2, _ = ad.initDualNumbers([X0, Y0], order=2)

    s1 = af.unary(x1, np.sin, np.cos)
    assert s1.val == np.sin(X0)
    assert np.allclose(s1.jac, [np.cos(X0), 0.0])

    s2 = af.unary(x2, np.sin, np.cos, lambda v: -np.sin(v))
    assert np.allclose(s2.hess, [[-np.sin(X0), 0.0], [0.0, 0.0]])

    assert af.unary(X0, np.sin, np.cos) == np.sin(X0)
