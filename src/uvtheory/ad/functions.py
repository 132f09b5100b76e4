"""Elementary functions accepting floats and
:class:`~uvtheory.ad.forward_mode.DualNumber`.

Plain floats are evaluated with the respective numpy function. For dual numbers, the
value is computed with the same numpy function and the derivatives are attached by the
chain rule.

"""

from __future__ import annotations

import numbers
from typing import Callable, Optional

import numpy as np

from .forward_mode import DualNumber, Scalar

__all__ = [
    "exp",
    "log",
    "tanh",
    "sqrt",
    "cbrt",
    "recip",
    "powi",
    "powf",
    "powd",
    "unary",
]


def unary(
    x: Scalar,
    f: Callable[[float], float],
    df: Callable[[float], float],
    d2f: Optional[Callable[[float], float]] = None,
) -> Scalar:
    """Lifts a scalar function with known derivatives to dual numbers.

    Parameters:
        x: Argument.
        f: The function.
        df: Its first derivative.
        d2f: ``default=None``

            Its second derivative. Required only if ``x`` carries a Hessian.

    Raises:
        ValueError: If ``x`` is of second order, but ``d2f`` is not given.

    Returns:
        ``f(x)`` with attached derivatives, if ``x`` is a dual number.

    """
    if not isinstance(x, DualNumber):
        return f(x)
    v = x.val
    if x.hess is None:
        return x.chain(f(v), df(v))
    if d2f is None:
        raise ValueError("Second derivative required for second-order dual numbers.")
    return x.chain(f(v), df(v), d2f(v))


def exp(var: Scalar) -> Scalar:
    if not isinstance(var, DualNumber):
        return np.exp(var)
    e = np.exp(var.val)
    return var.chain(e, e, e)


def log(var: Scalar) -> Scalar:
    if not isinstance(var, DualNumber):
        return np.log(var)
    v = var.val
    return var.chain(np.log(v), 1.0 / v, -1.0 / v**2)


def tanh(var: Scalar) -> Scalar:
    if not isinstance(var, DualNumber):
        return np.tanh(var)
    t = np.tanh(var.val)
    d1 = 1.0 - t * t
    return var.chain(t, d1, -2.0 * t * d1)


def sqrt(var: Scalar) -> Scalar:
    if not isinstance(var, DualNumber):
        return np.sqrt(var)
    v = var.val
    s = np.sqrt(v)
    return var.chain(s, 0.5 / s, -0.25 / (s * v))


def cbrt(var: Scalar) -> Scalar:
    if not isinstance(var, DualNumber):
        return np.cbrt(var)
    v = var.val
    c = np.cbrt(v)
    return var.chain(c, c / (3.0 * v), -2.0 * c / (9.0 * v**2))


def recip(var: Scalar) -> Scalar:
    """Reciprocal ``1 / var``, Inf for a zero float."""
    if not isinstance(var, DualNumber):
        return np.reciprocal(float(var))
    return 1.0 / var


def powi(var: Scalar, n: int) -> Scalar:
    """Power with an integer exponent.

    Used for fixed small exponents like 2 and 3.

    Raises:
        TypeError: If ``n`` is not an integer.

    """
    if not isinstance(n, numbers.Integral):
        raise TypeError(f"Integer exponent expected, got {type(n)}.")
    return var ** int(n)


def powf(var: Scalar, p: float) -> Scalar:
    """Power with a real exponent.

    Negative bases result in NaN, not in a complex number.

    """
    if not isinstance(var, DualNumber):
        return np.power(float(var), float(p))
    return var ** float(p)


def powd(var: Scalar, p: Scalar) -> Scalar:
    """Power with an exponent which can itself be a dual number."""
    if isinstance(var, DualNumber) or isinstance(p, DualNumber):
        return var**p
    return powf(var, p)
