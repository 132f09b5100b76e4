"""Forward-mode automatic differentiation for scalar quantities.

A :class:`DualNumber` carries a value, its gradient with respect to a fixed set of
independent variables and optionally its Hessian. All arithmetic overloads propagate
the derivatives by the chain rule, while the value itself is always computed with the
same floating point operations as the plain-float expression.

Every formula of the package is written such that it accepts either plain floats or
dual numbers. Independent variables are created with :func:`initDualNumbers`.

"""

from __future__ import annotations

import numbers
from typing import Optional, Sequence, Union

import numpy as np

__all__ = [
    "DualNumber",
    "Scalar",
    "initDualNumbers",
    "value_of",
]


def initDualNumbers(values: Sequence[float], order: int = 1) -> list[DualNumber]:
    """Seeds a sequence of independent variables.

    The gradient of the ``i``-th returned dual number is the ``i``-th unit vector.
    For second-order dual numbers, the Hessian is initialized with zeros.

    Parameters:
        values: Values of the independent variables.
        order: ``1`` for gradients only, ``2`` for gradients and Hessians.

    Raises:
        ValueError: If ``order`` is neither 1 nor 2.

    Returns:
        One dual number per entry in ``values``.

    """
    if order not in (1, 2):
        raise ValueError(f"Derivative order must be 1 or 2, got {order}.")

    n = len(values)
    seeded = []
    for i, val in enumerate(values):
        jac = np.zeros(n)
        jac[i] = 1.0
        hess = np.zeros((n, n)) if order == 2 else None
        seeded.append(DualNumber(val, jac, hess))
    return seeded


def value_of(x: Scalar) -> float:
    """Returns the value of a dual number, or the float itself."""
    if isinstance(x, DualNumber):
        return x.val
    return float(x)


class DualNumber:
    """Scalar with attached first and (optionally) second derivatives.

    Parameters:
        val: The value.
        jac: ``shape=(n,)``

            Gradient with respect to ``n`` independent variables. Defaults to a
            zero-length gradient, which represents a dual number without derivative
            information.
        hess: ``shape=(n, n)``

            Hessian. If given, the number is of second order and all results of
            operations with it carry a Hessian as well.

    Raises:
        ValueError: If the shapes of ``jac`` and ``hess`` are inconsistent.

    """

    __slots__ = ("val", "jac", "hess")

    # Makes numpy scalars defer to the reflected operators below.
    __array_ufunc__ = None

    def __init__(
        self,
        val: float,
        jac: Optional[np.ndarray] = None,
        hess: Optional[np.ndarray] = None,
    ) -> None:
        # Numpy floats follow IEEE arithmetic, division by zero gives Inf or NaN.
        self.val: float = np.float64(val)
        self.jac: np.ndarray = (
            np.zeros(0) if jac is None else np.asarray(jac, dtype=float).ravel()
        )
        self.hess: Optional[np.ndarray] = None
        if hess is not None:
            hess = np.asarray(hess, dtype=float)
            n = self.jac.size
            if hess.shape != (n, n):
                raise ValueError(
                    f"Hessian of shape {hess.shape} does not fit gradient of size {n}."
                )
            self.hess = hess

    def __repr__(self) -> str:
        return f"DualNumber(val={self.val}, jac={self.jac}, hess={self.hess})"

    @property
    def order(self) -> int:
        """Derivative order, 2 if a Hessian is carried, otherwise 1."""
        return 1 if self.hess is None else 2

    @property
    def size(self) -> int:
        """Number of independent variables."""
        return self.jac.size

    def chain(self, val: float, d1: float, d2: float = 0.0) -> DualNumber:
        """Applies the chain rule for a scalar function ``f`` evaluated at this
        number.

        Parameters:
            val: ``f(self.val)``.
            d1: ``f'(self.val)``.
            d2: ``f''(self.val)``. Ignored for first-order numbers.

        Returns:
            The dual number representing ``f(self)``.

        """
        jac = d1 * self.jac
        if self.hess is None:
            return DualNumber(val, jac)
        hess = d1 * self.hess + d2 * np.outer(self.jac, self.jac)
        return DualNumber(val, jac, hess)

    def _compatible(self, other: object) -> Union[DualNumber, float, None]:
        """Returns ``other`` in a form usable in binary operations, or None if the
        type is not supported."""
        if isinstance(other, DualNumber):
            if other.size != self.size:
                raise ValueError(
                    f"Cannot combine dual numbers with {self.size} and {other.size}"
                    + " independent variables."
                )
            if other.order != self.order:
                raise ValueError(
                    f"Cannot combine dual numbers of order {self.order} and"
                    + f" {other.order}."
                )
            return other
        if isinstance(other, numbers.Real):
            return float(other)
        return None

    def __neg__(self) -> DualNumber:
        hess = None if self.hess is None else -self.hess
        return DualNumber(-self.val, -self.jac, hess)

    def __pos__(self) -> DualNumber:
        return self

    def __add__(self, other):
        b = self._compatible(other)
        if b is None:
            return NotImplemented
        if isinstance(b, float):
            return DualNumber(self.val + b, self.jac, self.hess)
        hess = None if self.hess is None else self.hess + b.hess
        return DualNumber(self.val + b.val, self.jac + b.jac, hess)

    def __radd__(self, other):
        b = self._compatible(other)
        if b is None:
            return NotImplemented
        return DualNumber(b + self.val, self.jac, self.hess)

    def __sub__(self, other):
        b = self._compatible(other)
        if b is None:
            return NotImplemented
        if isinstance(b, float):
            return DualNumber(self.val - b, self.jac, self.hess)
        hess = None if self.hess is None else self.hess - b.hess
        return DualNumber(self.val - b.val, self.jac - b.jac, hess)

    def __rsub__(self, other):
        b = self._compatible(other)
        if b is None:
            return NotImplemented
        hess = None if self.hess is None else -self.hess
        return DualNumber(b - self.val, -self.jac, hess)

    def __mul__(self, other):
        b = self._compatible(other)
        if b is None:
            return NotImplemented
        if isinstance(b, float):
            hess = None if self.hess is None else self.hess * b
            return DualNumber(self.val * b, self.jac * b, hess)
        jac = self.val * b.jac + b.val * self.jac
        hess = None
        if self.hess is not None:
            hess = (
                self.val * b.hess
                + b.val * self.hess
                + np.outer(self.jac, b.jac)
                + np.outer(b.jac, self.jac)
            )
        return DualNumber(self.val * b.val, jac, hess)

    def __rmul__(self, other):
        b = self._compatible(other)
        if b is None:
            return NotImplemented
        hess = None if self.hess is None else b * self.hess
        return DualNumber(b * self.val, b * self.jac, hess)

    def __truediv__(self, other):
        b = self._compatible(other)
        if b is None:
            return NotImplemented
        if isinstance(b, float):
            hess = None if self.hess is None else self.hess / b
            return DualNumber(self.val / b, self.jac / b, hess)
        q = self.val / b.val
        jac = (self.jac - q * b.jac) / b.val
        hess = None
        if self.hess is not None:
            hess = (
                self.hess - q * b.hess - np.outer(b.jac, jac) - np.outer(jac, b.jac)
            ) / b.val
        return DualNumber(q, jac, hess)

    def __rtruediv__(self, other):
        b = self._compatible(other)
        if b is None:
            return NotImplemented
        v = self.val
        return self.chain(b / v, -b / v**2, 2.0 * b / v**3)

    def __pow__(self, other):
        if isinstance(other, DualNumber):
            return _pow_dual(self, self._compatible(other))
        if isinstance(other, numbers.Integral):
            p = int(other)
            v = self.val
            if p == 0:
                return self.chain(1.0, 0.0, 0.0)
            if p == 1:
                return self.chain(v, 1.0, 0.0)
            return self.chain(v**p, p * v ** (p - 1), p * (p - 1) * v ** (p - 2))
        if isinstance(other, numbers.Real):
            p = float(other)
            v = self.val
            return self.chain(
                np.power(v, p),
                p * np.power(v, p - 1.0),
                p * (p - 1.0) * np.power(v, p - 2.0),
            )
        return NotImplemented

    def __rpow__(self, other):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return _pow_dual(float(other), self)


def _pow_dual(x: Union[DualNumber, float], y: DualNumber) -> DualNumber:
    """Power with a dual exponent, ``exp(y * log(x))`` with the exact value
    ``x ** y``."""
    if isinstance(x, DualNumber):
        v = x.val
        log_x = y * x.chain(np.log(v), 1.0 / v, -1.0 / v**2)
    else:
        v = x
        log_x = y * float(np.log(v))
    e = float(np.exp(log_x.val))
    result = log_x.chain(e, e, e)
    result.val = np.float64(np.power(v, y.val))
    return result


Scalar = Union[float, DualNumber]
"""Type alias for all quantities accepted by the Helmholtz energy formulas."""
