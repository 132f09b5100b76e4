"""Hard-sphere reference contributions and effective hard-sphere diameters.

The reference fluid of both divisions of the Mie potential is a hard-sphere mixture
with temperature dependent diameters.

- Barker-Henderson (BH), with the full potential up to ``sigma``:

  .. math::

      d_{BH} = \\int_0^{\\sigma} 1 - e^{-u(r) / kT}\\,dr,

- Weeks-Chandler-Andersen (WCA), with the potential shifted by ``epsilon`` up to its
  minimum ``r_m``:

  .. math::

      d_{WCA} = \\int_0^{r_m} 1 - e^{-u_0(r) / kT}\\,dr.

The integrals are evaluated with composite Gauss-Legendre quadrature in a compiled
kernel, which returns also the first and second derivative with respect to the reduced
temperature.
The diameters are hence differentiable with respect to temperature up to second order.

The shape diameter ``q`` of the WCA reference potential, with
``q^3 = 3 int_0^{r_m} (1 - exp(-u_0 / kT)) r^2 dr``, is given by the correlation of
van Westen and Gross [1], which is exact in the limit of low temperatures.

The Helmholtz energy of the hard-sphere mixture is given by the
Boublik-Mansoori-Carnahan-Starling-Leland (BMCSL) expression.

References:
    [1]: `van Westen and Gross (2021) <https://doi.org/10.1063/5.0073572>`_

"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Sequence

import numba
import numpy as np
import scipy.optimize as opt
from scipy.special import roots_legendre

from . import ad
from ._core import (
    NUMBA_CACHE,
    NUMBA_FAST_MATH,
    QUADRATURE_NODES,
    QUADRATURE_PANELS,
    REPULSION_CUTOFF,
)
from .ad import functions as af
from .parameters import UVParameters, mie_prefactor
from .state import StateHD
from .utils import safe_sum

__all__ = [
    "WCA_CONSTANTS_Q",
    "diameter_bh",
    "diameter_wca",
    "dimensionless_diameter_q_wca",
    "diameter_q_wca",
    "packing_fraction",
    "zeta",
    "zeta_23",
    "bmcsl_helmholtz_energy",
    "hard_sphere_bh",
    "hard_sphere_wca",
]

logger = logging.getLogger(__name__)


WCA_CONSTANTS_Q: np.ndarray = np.array(
    [
        [1.92840364363978, 4.43165896265079e-01, 0.0, 0.0],
        [
            5.20120816141761e-01,
            1.82526759234412e-01,
            1.10319989659929e-02,
            -7.97813995328348e-05,
        ],
        [
            0.0,
            1.29885156087242e-02,
            6.41039871789327e-03,
            1.85866741090323e-05,
        ],
    ]
)
"""Coefficients of the shape diameter correlation.

Row ``k`` is the coefficient of ``T^((k + 2) / 2)`` as a cubic polynomial in
``rep - 7``.

"""


@lru_cache(maxsize=None)
def _quadrature_rule(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Legendre nodes and weights on ``[-1, 1]``."""
    logger.debug(f"Computing {n} Gauss-Legendre nodes.")
    nodes, weights = roots_legendre(n)
    return np.ascontiguousarray(nodes), np.ascontiguousarray(weights)


@numba.njit(
    "float64[:](float64,float64,float64,float64,float64,float64,float64,"
    + "float64[:],float64[:],int64)",
    cache=NUMBA_CACHE,
    fastmath=NUMBA_FAST_MATH,
)
def _boltzmann_integrals(
    t: float,
    rep: float,
    att: float,
    prefactor: float,
    shift: float,
    lower: float,
    upper: float,
    nodes: np.ndarray,
    weights: np.ndarray,
    panels: int,
) -> np.ndarray:
    """Integrates ``1 - exp(-u / t)`` between ``lower`` and ``upper`` with a composite
    Gauss-Legendre rule.

    NJIT-ed function. All lengths are in units of ``sigma``, ``u`` in units of
    ``epsilon``.

    Parameters:
        t: Reduced temperature.
        rep: Repulsive exponent.
        att: Attractive exponent.
        prefactor: Prefactor of the Mie potential.
        shift: Constant added to the potential (1 for the WCA reference).
        lower: Lower integration bound.
        upper: Upper integration bound.
        nodes: Gauss-Legendre nodes on ``[-1, 1]``.
        weights: Gauss-Legendre weights.
        panels: Number of equally sized panels.

    Returns:
        An array with the integral, and its first and second derivative with respect
        to ``t``.

    """
    width = (upper - lower) / panels
    half = 0.5 * width
    out = np.zeros(3)
    for p in range(panels):
        mid = lower + (p + 0.5) * width
        for k in range(nodes.size):
            r = half * nodes[k] + mid
            u = prefactor * (r ** (-rep) - r ** (-att)) + shift
            e = np.exp(-u / t)
            w = half * weights[k]
            out[0] += w * (1.0 - e)
            out[1] -= w * e * u / t**2
            out[2] -= w * e * (u**2 / t**4 - 2.0 * u / t**3)
    return out


def _lower_bound(
    t: float, rep: float, att: float, prefactor: float, shift: float
) -> float:
    """Separation below which the Boltzmann factor is neglected.

    See :data:`~uvtheory._core.REPULSION_CUTOFF`.

    """
    energy = REPULSION_CUTOFF * max(t, 1.0)
    return opt.brentq(
        lambda r: prefactor * (r ** (-rep) - r ** (-att)) + shift - energy, 1e-2, 1.0
    )


def _reduced_integral(
    t: ad.Scalar, rep: float, att: float, shift: float, upper: float
) -> ad.Scalar:
    """Reduced diameter ``int_0^upper 1 - exp(-u / t) dr``.

    Below the bound of :func:`_lower_bound`, the integrand is 1. The bound moves with
    ``t``, but its contributions to the derivatives cancel up to the neglected
    Boltzmann factor.

    """
    t_val = ad.value_of(t)
    prefactor = float(mie_prefactor(rep, att))
    lower = _lower_bound(t_val, rep, att, prefactor, shift)
    nodes, weights = _quadrature_rule(QUADRATURE_NODES)
    i = _boltzmann_integrals(
        t_val,
        rep,
        att,
        prefactor,
        shift,
        lower,
        upper,
        nodes,
        weights,
        QUADRATURE_PANELS,
    )
    return af.unary(t, lambda _: i[0] + lower, lambda _: i[1], lambda _: i[2])


def diameter_bh(parameters: UVParameters, temperature: ad.Scalar) -> list[ad.Scalar]:
    """Barker-Henderson hard-sphere diameters in Angstrom."""
    d = []
    for i in range(parameters.ncomponents):
        t = temperature / float(parameters.epsilon_k[i])
        integral = _reduced_integral(
            t, float(parameters.rep[i]), float(parameters.att[i]), 0.0, 1.0
        )
        d.append(integral * float(parameters.sigma[i]))
    return d


def _rm(rep: float, att: float) -> float:
    """Reduced position of the potential minimum."""
    return (rep / att) ** (1.0 / (rep - att))


def diameter_wca(parameters: UVParameters, temperature: ad.Scalar) -> list[ad.Scalar]:
    """Weeks-Chandler-Andersen hard-sphere diameters in Angstrom."""
    d = []
    for i in range(parameters.ncomponents):
        rep = float(parameters.rep[i])
        att = float(parameters.att[i])
        t = temperature / float(parameters.epsilon_k[i])
        integral = _reduced_integral(t, rep, att, 1.0, _rm(rep, att))
        d.append(integral * float(parameters.sigma[i]))
    return d


def dimensionless_diameter_q_wca(
    t: ad.Scalar, rep: float, att: float
) -> ad.Scalar:
    """Shape diameter of the WCA reference potential in units of ``sigma``.

    .. math::

        q = r_m \\left(1 + \\sqrt{2 \\pi \\nu / n}\\,T^{1/2} + c_1 T + c_2 T^{3/2}
        + c_3 T^2\\right)^{-1 / (2 \\nu)},

    with the repulsive exponent ``nu``, the attractive exponent ``n`` and the
    coefficients :data:`WCA_CONSTANTS_Q`.

    Parameters:
        t: Reduced temperature.
        rep: Repulsive exponent.
        att: Attractive exponent.

    """
    x = rep - 7.0
    c = [c0 + c1 * x + c2 * x**2 + c3 * x**3 for c0, c1, c2, c3 in WCA_CONSTANTS_Q]
    poly = (
        af.powi(t, 2) * c[2]
        + af.powf(t, 1.5) * c[1]
        + t * c[0]
        + af.sqrt(t) * np.sqrt(2.0 * np.pi * rep / att)
        + 1.0
    )
    return af.powf(poly, -1.0 / (2.0 * rep)) * _rm(rep, att)


def diameter_q_wca(
    parameters: UVParameters, temperature: ad.Scalar
) -> list[ad.Scalar]:
    """Shape diameters of the Weeks-Chandler-Andersen reference potential in
    Angstrom."""
    q = []
    for i in range(parameters.ncomponents):
        t = temperature / float(parameters.epsilon_k[i])
        q.append(
            dimensionless_diameter_q_wca(
                t, float(parameters.rep[i]), float(parameters.att[i])
            )
            * float(parameters.sigma[i])
        )
    return q

def packing_fraction(
    partial_density: Sequence[ad.Scalar], diameter: Sequence[ad.Scalar]
) -> ad.Scalar:
    """Packing fraction ``pi / 6 sum_i rho_i d_i^3``."""
    return (np.pi / 6.0) * safe_sum(
        [rho * af.powi(d, 3) for rho, d in zip(partial_density, diameter)]
    )


def zeta(
    partial_density: Sequence[ad.Scalar], diameter: Sequence[ad.Scalar]
) -> list[ad.Scalar]:
    """Moments ``zeta_k = pi / 6 sum_i rho_i d_i^k`` for ``k = 0, 1, 2, 3``."""
    moments = [safe_sum(partial_density)]
    for k in (1, 2, 3):
        moments.append(
            safe_sum([rho * af.powi(d, k) for rho, d in zip(partial_density, diameter)])
        )
    return [(np.pi / 6.0) * m for m in moments]


def zeta_23(
    molefracs: Sequence[ad.Scalar], diameter: Sequence[ad.Scalar]
) -> ad.Scalar:
    """Ratio ``zeta_2 / zeta_3``, computed from mole fractions."""
    return safe_sum(
        [x * af.powi(d, 2) for x, d in zip(molefracs, diameter)]
    ) / safe_sum([x * af.powi(d, 3) for x, d in zip(molefracs, diameter)])


def bmcsl_helmholtz_energy(
    volume: ad.Scalar, zeta: Sequence[ad.Scalar], zeta_23: ad.Scalar
) -> ad.Scalar:
    """Helmholtz energy of a hard-sphere mixture divided by ``kT``.

    Parameters:
        volume: Volume.
        zeta: Moments ``zeta_0`` to ``zeta_3``, see :func:`zeta`.
        zeta_23: The ratio ``zeta_2 / zeta_3``, see :func:`zeta_23`.

    Returns:
        The BMCSL Helmholtz energy.

    """
    frac_1mz3 = 1.0 - zeta[3]
    return (
        volume
        * (6.0 / np.pi)
        * (
            zeta[1] * zeta[2] * 3.0 / frac_1mz3
            + af.powi(zeta[2], 2) * zeta_23 / af.powi(frac_1mz3, 2)
            + (zeta[2] * af.powi(zeta_23, 2) - zeta[0]) * af.log(frac_1mz3)
        )
    )


def _hard_sphere(state: StateHD, diameter: Sequence[ad.Scalar]) -> ad.Scalar:
    return bmcsl_helmholtz_energy(
        state.volume,
        zeta(state.partial_density, diameter),
        zeta_23(state.molefracs, diameter),
    )


def hard_sphere_bh(parameters: UVParameters, state: StateHD) -> ad.Scalar:
    """Hard-sphere contribution with Barker-Henderson diameters."""
    return _hard_sphere(state, diameter_bh(parameters, state.temperature))


def hard_sphere_wca(parameters: UVParameters, state: StateHD) -> ad.Scalar:
    """Hard-sphere contribution with Weeks-Chandler-Andersen diameters."""
    return _hard_sphere(state, diameter_wca(parameters, state.temperature))
