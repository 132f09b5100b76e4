"""Module containing functionality for testing derivatives computed with dual numbers.

The derivative of a function ``f`` at ``x0`` along a direction ``d`` is correct, if the
remainder of the first-order Taylor expansion

.. math::

    e(h) = |f(x_0 + h d) - f(x_0) - h \\nabla f(x_0) \\cdot d|

decreases with order 2 in the step size ``h``. A wrong derivative results in order 1.

"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from .eos import UVTheory
from .state import StateHD

__all__ = [
    "get_EOC_taylor",
    "assert_order_at_least",
    "helmholtz_energy_functions",
    "central_difference",
]

logger = logging.getLogger(__name__)


def helmholtz_energy_functions(
    eos: UVTheory,
) -> tuple[Callable[..., float], Callable[..., np.ndarray]]:
    """Wraps the Helmholtz energy of a model into a function and its gradient.

    Both take temperature, volume and the amounts as separate float arguments.

    """

    def func(*x: float) -> float:
        return float(eos.helmholtz_energy(StateHD(x[0], x[1], tuple(x[2:]))))

    def dfunc(*x: float) -> np.ndarray:
        a = eos.helmholtz_energy(StateHD.derive(x[0], x[1], list(x[2:])))
        return a.jac

    return func, dfunc


def get_EOC_taylor(
    func: Callable[..., float],
    dfunc: Callable[..., np.ndarray],
    x0: np.ndarray,
    d: np.ndarray,
    h: np.ndarray,
    verbose: bool = False,
    tol: float = 1e-14,
) -> np.ndarray:
    """Estimate the order of convergence (EOC) of the gradient of ``func`` at point
    ``x0`` along direction ``d`` using Taylor expansion.

    Parameters:
        func: Scalar function taking the entries of ``x0`` as arguments.
        dfunc: Function returning the gradient of ``func`` with the same arguments.
        x0: Point at which the derivative is tested.
        d: Direction along which the derivative is tested. It is normalized
            internally, hence ``h`` should be scaled to ``x0``.
        h: Decreasing step sizes.
        verbose: ``default=False``

            If True, logs the errors and estimated orders.
        tol: ``default=1e-14``

            Errors below this value are considered zero.

    Returns:
        Estimated EOC for each consecutive pair of step sizes. Infinite values indicate
        an exact approximation.

    """
    x0 = np.asarray(x0, dtype=float)
    d = np.asarray(d, dtype=float)
    d = d / np.linalg.norm(d)
    h = np.asarray(h, dtype=float)

    f0 = func(*x0)
    slope = float(dfunc(*x0) @ d)
    errors = np.array([abs(func(*(x0 + h_ * d)) - f0 - h_ * slope) for h_ in h])
    # Ratios of tiny errors are dominated by round-off.
    errors[errors < tol] = 0.0

    h_ratios = h[1:] / h[:-1]
    error_ratios = np.full_like(errors[1:], np.nan)
    mask = errors[:-1] > tol
    error_ratios[mask] = errors[1:][mask] / errors[:-1][mask]

    orders = np.full_like(error_ratios, np.inf)
    finite_mask = np.isfinite(error_ratios) & (error_ratios > tol)
    orders[finite_mask] = np.log(error_ratios[finite_mask]) / np.log(
        h_ratios[finite_mask]
    )

    if verbose:
        for i in range(1, len(h)):
            logger.info(
                f"h = {h[i]:.2e}: error = {errors[i]:.2e},"
                + f" estimated order = {orders[i - 1]:.2f}"
            )

    return orders


def assert_order_at_least(
    orders: np.ndarray,
    expected_order: float,
    tol: float = 0.1,
    err_msg: str = "",
    asymptotic: Optional[int] = None,
) -> None:
    """Asserts that the average of the estimated orders is at least the expected order
    minus a tolerance.

    Order values of + infinity are treated as an exact approximation and replaced by
    the expected order.

    Parameters:
        orders: Estimated orders, see :func:`get_EOC_taylor`.
        expected_order: The expected (average) order.
        tol: ``default=0.1``

            Tolerance for the expected order.
        err_msg: ``default=''``

            Appended to error messages.
        asymptotic: ``default=None``

            If given, only the last ``asymptotic`` orders are checked.

    Raises:
        ValueError: If any order is negative or NaN.

    """
    orders = np.array(orders, dtype=float)
    if asymptotic is not None:
        orders = orders[-asymptotic:]

    if np.any(orders < 0):
        raise ValueError(f"Negative orders, derivative is wrong: {err_msg}")
    if np.any(np.isnan(orders)):
        raise ValueError(f"Estimated orders contain NAN values: {err_msg}")

    if not np.all(np.isinf(orders)):
        orders[np.isinf(orders)] = expected_order
        order_avg = np.mean(orders)
        assert order_avg >= expected_order - tol, (
            f"Expected all orders to be at least {expected_order - tol}, "
            f"but got {order_avg}: {err_msg}"
        )


def central_difference(
    func: Callable[..., float], x0: Sequence[float], i: int, rel_step: float = 1e-5
) -> float:
    """Central finite difference of ``func`` with respect to argument ``i``."""
    x0 = np.asarray(x0, dtype=float)
    step = rel_step * abs(x0[i])
    xp = x0.copy()
    xm = x0.copy()
    xp[i] += step
    xm[i] -= step
    return (func(*xp) - func(*xm)) / (2.0 * step)
