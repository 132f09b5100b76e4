"""Reference perturbation contributions.

The reference perturbation corrects the hard-sphere fluid towards the fluid of the
repulsive reference potential. It is expressed by differences of Percus-Yevick type
closure terms

.. math::

    g(\\eta) = \\frac{1 - \\eta / 2}{(1 - \\eta)^3},

evaluated at two effective packing fractions ``eta_a`` and ``eta_b``, which are series
in the packing fraction ``eta`` of the hard-sphere fluid. The series coefficients are
polynomials in the dimensionless difference ``tau`` between a reference length and the
mean dimensionless hard-sphere diameter of a pair.

Note:
    The pairwise arithmetic means of diameters and of the potential minimum position
    in the WCA variant are provisional combination rules.

"""

from __future__ import annotations

import numpy as np

from . import ad
from .ad import functions as af
from .hard_sphere import diameter_bh, diameter_q_wca, diameter_wca, packing_fraction
from .parameters import UVParameters
from .state import StateHD
from .utils import safe_sum

__all__ = [
    "eta_a",
    "eta_b",
    "reference_perturbation_bh",
    "reference_perturbation_wca",
]


BH_ETA_A: np.ndarray = np.array(
    [
        [-1.217417282, 6.754987582, -0.5919326153, -28.99719604],
        [1.579548775, -26.93879416, 0.3998915410, 106.9446266],
        [-1.993990512, 44.11863355, -40.10916106, -29.6130848],
        [0.0, 0.0, 0.0, 0.0],
    ]
)
"""Coefficients of the transform ``eta_a`` for the Barker-Henderson division.

Row ``k`` holds the coefficients of ``eta^(k+1)``:
``tau (c0 + c1 / rep) + tau^2 (c2 + c3 / rep)``.

"""

BH_ETA_B: np.ndarray = np.array(
    [
        [-0.960919783, -0.921097447],
        [-0.547468020, -3.508014069],
        [-2.253750186, 3.581161364],
    ]
)
"""Coefficients of the transform ``eta_b`` for the Barker-Henderson division.

Row ``k`` holds the coefficients of ``eta^(k+1)``: ``tau c0 + tau^2 c1``.

"""

WCA_ETA_A: np.ndarray = np.array(
    [
        [-0.888512176, 0.265207151, -0.851803291, -1.380304110],
        [-0.395548410, -0.626398537, -1.484059291, -3.041216688],
        [-2.905719617, -1.778798984, -1.556827067, -4.308085347],
        [0.429154871, 20.765871545, 9.341250676, -33.787719418],
    ]
)
"""Coefficients of the transform ``eta_a`` for the Weeks-Chandler-Andersen
division, see :data:`BH_ETA_A`."""

WCA_ETA_B: np.ndarray = np.array(
    [
        [-0.883143456, -0.618156214],
        [-0.589914255, -3.015264636],
        [-2.152046477, 4.7038689542],
    ]
)
"""Coefficients of the transform ``eta_b`` for the Weeks-Chandler-Andersen
division, see :data:`BH_ETA_B`."""


def _closure(eta: ad.Scalar) -> ad.Scalar:
    return (1.0 - eta * 0.5) / af.powi(1.0 - eta, 3)


def eta_a(
    eta: ad.Scalar, tau: ad.Scalar, rep: float, coefficients: np.ndarray
) -> ad.Scalar:
    """Effective packing fraction ``eta_a``.

    Parameters:
        eta: Packing fraction of the hard-sphere fluid.
        tau: Dimensionless length difference of the pair.
        rep: Repulsive exponent of the pair.
        coefficients: ``shape=(4, 4)``

            :data:`BH_ETA_A` or :data:`WCA_ETA_A`.

    """
    tau2 = af.powi(tau, 2)
    terms = [eta]
    for k, c in enumerate(coefficients):
        c_k = tau * (c[0] + c[1] / rep) + tau2 * (c[2] + c[3] / rep)
        terms.append(c_k * af.powi(eta, k + 1))
    return safe_sum(terms)


def eta_b(eta: ad.Scalar, tau: ad.Scalar, coefficients: np.ndarray) -> ad.Scalar:
    """Effective packing fraction ``eta_b``.

    Parameters:
        eta: Packing fraction of the hard-sphere fluid.
        tau: Dimensionless length difference of the pair.
        coefficients: ``shape=(3, 2)``

            :data:`BH_ETA_B` or :data:`WCA_ETA_B`.

    """
    tau2 = af.powi(tau, 2)
    terms = [eta]
    for k, c in enumerate(coefficients):
        terms.append((tau * c[0] + tau2 * c[1]) * af.powi(eta, k + 1))
    return safe_sum(terms)


def _prefactor(state: StateHD) -> ad.Scalar:
    """Common scaling ``-(sum n)^2 2 pi / (3 V)``."""
    return -af.powi(state.total_moles, 2) * (2.0 / 3.0 * np.pi) / state.volume


def reference_perturbation_bh(parameters: UVParameters, state: StateHD) -> ad.Scalar:
    """Reference perturbation for the Barker-Henderson division."""
    x = state.molefracs
    sigma = parameters.sigma
    d = diameter_bh(parameters, state.temperature)
    d_reduced = [di / float(s) for di, s in zip(d, sigma)]
    eta = packing_fraction(state.partial_density, d)

    terms = []
    n = parameters.ncomponents
    for i in range(n):
        for j in range(n):
            tau = 1.0 - (d_reduced[i] + d_reduced[j]) * 0.5
            rep_ij = float(parameters.rep_ij[i, j])
            d_ij = (d[i] + d[j]) * 0.5
            terms.append(
                x[i]
                * x[j]
                * (
                    _closure(eta_a(eta, tau, rep_ij, BH_ETA_A))
                    - _closure(eta_b(eta, tau, BH_ETA_B))
                )
                * (float(parameters.sigma_ij[i, j]) ** 3 - af.powi(d_ij, 3))
            )
    return safe_sum(terms) * _prefactor(state)


def reference_perturbation_wca(parameters: UVParameters, state: StateHD) -> ad.Scalar:
    """Reference perturbation for the Weeks-Chandler-Andersen division."""
    x = state.molefracs
    sigma = parameters.sigma
    d = diameter_wca(parameters, state.temperature)
    q = diameter_q_wca(parameters, state.temperature)
    d_reduced = [di / float(s) for di, s in zip(d, sigma)]
    q_reduced = [qi / float(s) for qi, s in zip(q, sigma)]
    rm = (parameters.rep / parameters.att) ** (
        1.0 / (parameters.rep - parameters.att)
    )
    eta = packing_fraction(state.partial_density, d)

    terms = []
    n = parameters.ncomponents
    for i in range(n):
        for j in range(n):
            rs_ij = float(rm[i] + rm[j]) * 0.5
            rep_ij = float(parameters.rep_ij[i, j])
            tau_a = rs_ij - (q_reduced[i] + q_reduced[j]) * 0.5
            tau_b = rs_ij - (d_reduced[i] + d_reduced[j]) * 0.5
            rs3 = (rs_ij * float(parameters.sigma_ij[i, j])) ** 3
            q_ij = (q[i] + q[j]) * 0.5
            d_ij = (d[i] + d[j]) * 0.5
            terms.append(
                x[i]
                * x[j]
                * (
                    _closure(eta_a(eta, tau_a, rep_ij, WCA_ETA_A))
                    * (rs3 - af.powi(q_ij, 3))
                    - _closure(eta_b(eta, tau_b, WCA_ETA_B)) * (rs3 - af.powi(d_ij, 3))
                )
            )
    return safe_sum(terms) * _prefactor(state)
