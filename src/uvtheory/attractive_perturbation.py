"""Attractive perturbation contributions.

The attractive perturbation is evaluated for the one-fluid pseudo-component of the
mixture (see :mod:`uvtheory.mixing`). Per particle, it interpolates between a
first-order perturbation term ``delta_a1u`` and the second virial limit:

.. math::

    \\frac{A}{N kT} = \\Delta a_{1u} + (1 - \\phi_u)
    (\\bar{B}_2 - \\Delta b_{2,1u}) \\rho,

with the u-fraction ``phi_u``, a saturating function of the reduced density, the
residual second virial coefficient ``B2`` of the mixture and its first-order part
``delta_b21u``.

For the Weeks-Chandler-Andersen division, the first-order term is given by a
correlation of the integral over the radial distribution function of the reference
fluid, which is a rational function of the reduced density.

For the Barker-Henderson division, the first-order term is the mean-field term of the
Mie potential beyond ``sigma``, with the radial distribution function of the
hard-sphere fluid approximated by the Sutherland closure of SAFT-VR Mie [1].

References:
    [1]: `Lafitte et al. (2013) <https://doi.org/10.1063/1.4819786>`_

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from . import ad
from ._core import CUTOFF_RADIUS
from .ad import functions as af
from .hard_sphere import diameter_bh, diameter_q_wca, diameter_wca
from .mixing import OneFluidProperties, one_fluid_properties
from .parameters import UVParameters, mean_field_constant, mie_prefactor
from .state import StateHD
from .utils import safe_sum

__all__ = [
    "AttractiveTerms",
    "u_fraction",
    "y_eff",
    "delta_b2",
    "residual_virial_coefficient",
    "correlation_integral_wca",
    "correlation_integral_bh",
    "attractive_terms_wca",
    "attractive_terms_bh",
    "attractive_perturbation_wca",
    "attractive_perturbation_bh",
]


# fmt: off
C_WCA: np.ndarray = np.array(
    [
        [-0.2622378162, 0.6585817423, 5.5318022309, 0.6902354794, -3.6825190645, -1.7263213318],
        [-0.1899241690, -0.5555205158, 9.1361398949, 0.7966155658, -6.1413017045, 4.9553415149],
        [0.1169786415, -0.2216804790, -2.0470861617, -0.3742261343, 0.9568416381, 10.1401796764],
        [0.5852642702, 2.0795520346, 19.0711829725, -2.3403594600, 2.5833371420, 432.3858674425],
        [-0.6084232211, -7.2376034572, 19.0412933614, 3.2388986513, 75.4442555789, -588.3837110653],
        [0.0512327656, 6.6667943569, 47.1109947616, -0.5011125797, -34.8918383146, 189.5498636006],
    ]
)
# fmt: on
"""Coefficients of the correlation integral for the Weeks-Chandler-Andersen division.

Row ``k`` defines coefficient ``c_k`` of the rational function in the reduced density
as ``c0 + c1 / rep + c2 / rep^2 + (c3 + c4 / rep + c5 / rep^2) tau``.

"""

CU: np.ndarray = np.array([1.4419, 1.1169, 16.8810])
"""Coefficients of the u-fraction."""

C2: np.ndarray = np.array(
    [
        [1.45805207053190e-03, 3.57786067657446e-02],
        [1.25869266841313e-04, 1.79889086453277e-03],
        [0.0, 0.0],
    ]
)
"""Coefficients of the effective Mayer function, ``c0 + c1 / rep`` per row."""

Y_EFF_EXPONENTS: tuple[float, float] = (1.05968091375869, 3.41106168592999)
"""Exponents of the inverse reduced temperature in the effective Mayer function."""

C_ETA_EFF: np.ndarray = np.array(
    [
        [0.81096, 1.7888, -37.578, 92.284],
        [1.0205, -19.341, 151.26, -463.50],
        [-1.9057, 22.845, -228.14, 973.92],
        [1.0885, -6.1962, 106.98, -677.64],
    ]
)
"""Coefficients of the effective packing fraction of the Sutherland closure.

Row ``k`` multiplies ``eta^(k+1)`` with ``c0 + c1 / l + c2 / l^2 + c3 / l^3``, where
``l`` is the Sutherland exponent.

"""


@dataclass(frozen=True)
class AttractiveTerms:
    """Per-particle terms of the attractive perturbation."""

    delta_a1u: ad.Scalar
    """First-order perturbation term, divided by ``kT``."""

    delta_b21u: ad.Scalar
    """First-order part of the second virial coefficient in Angstrom^3."""

    b2bar: ad.Scalar
    """Residual second virial coefficient of the mixture in Angstrom^3."""

    u_fraction: ad.Scalar
    """The u-fraction, between 0 and 1."""

    def helmholtz_energy(self, density: ad.Scalar) -> ad.Scalar:
        """Helmholtz energy per particle, divided by ``kT``."""
        return (
            self.delta_a1u
            + (1.0 - self.u_fraction) * (self.b2bar - self.delta_b21u) * density
        )


def _rm(rep: ad.Scalar, att: ad.Scalar) -> ad.Scalar:
    """Reduced position of the potential minimum."""
    return af.powd(rep / att, 1.0 / (rep - att))


def u_fraction(rep: ad.Scalar, reduced_density: ad.Scalar) -> ad.Scalar:
    """Saturating u-fraction ``tanh(rho (c0 + rho (c1 + c2 / rep)))``."""
    return af.tanh(
        reduced_density * CU[0]
        + af.powi(reduced_density, 2) * (CU[1] + CU[2] / rep)
    )


def y_eff(beta: ad.Scalar, rep: float, att: float, rs: float) -> ad.Scalar:
    """Effective Mayer function beyond the reference length ``rs``.

    Parameters:
        beta: Inverse reduced temperature.
        rep: Repulsive exponent.
        att: Attractive exponent.
        rs: Reduced reference length (``r_m`` for WCA, 1 for BH).

    """
    rc = CUTOFF_RADIUS
    c0 = 1.0 - 3.0 * (
        mean_field_constant(rep, att, rs) - mean_field_constant(rep, att, rc)
    ) / (rc**3 - rs**3)
    c1, c2, c3 = [c[0] + c[1] / rep for c in C2]
    a, b = Y_EFF_EXPONENTS
    beta_eff = beta * (
        1.0 - c0 / (1.0 + c1 * af.powf(beta, a) + c2 * af.powf(beta, b) + c3)
    )
    return af.exp(beta_eff) - 1.0


def delta_b2(
    reduced_temperature: ad.Scalar,
    rep: float,
    att: float,
    q: ad.Scalar,
    rs: float,
) -> ad.Scalar:
    """Reduced deviation of the second virial coefficient from its hard-sphere value
    with diameter ``q``.

    Inside the reference length ``rs``, the Mayer function is the exact one of the
    shifted reference potential. Between ``rs`` and the cutoff, the effective Mayer
    function :func:`y_eff` is used, and beyond the cutoff the mean-field limit.

    Parameters:
        reduced_temperature: Temperature divided by the pair energy.
        rep: Repulsive exponent.
        att: Attractive exponent.
        q: Reduced shape diameter of the pair.
        rs: Reduced reference length.

    """
    rc = CUTOFF_RADIUS
    beta = 1.0 / reduced_temperature
    y = af.exp(beta) - 1.0
    return (
        y_eff(beta, rep, att, rs) * ((rc**3 - rs**3) / 3.0)
        + y * (rs**3 - af.powi(q, 3)) / 3.0
        + beta * float(mean_field_constant(rep, att, rc))
    ) * (-2.0 * np.pi)


def residual_virial_coefficient(
    parameters: UVParameters,
    molefracs: Sequence[ad.Scalar],
    temperature: ad.Scalar,
    q: Optional[Sequence[ad.Scalar]] = None,
) -> ad.Scalar:
    """Residual second virial coefficient ``B2`` of the mixture in Angstrom^3.

    Parameters:
        parameters: The parameter set.
        molefracs: Mole fractions.
        temperature: Temperature.
        q: ``default=None``

            WCA shape diameters in Angstrom. If None, the pairs are treated with the
            BH division (reference length and shape diameter 1).

    """
    n = parameters.ncomponents
    sigma = [float(s) for s in parameters.sigma]
    terms = []
    for i in range(n):
        for j in range(n):
            rep = float(parameters.rep_ij[i, j])
            att = float(parameters.att_ij[i, j])
            if q is None:
                rs = 1.0
                q_ij = 1.0
            else:
                rs = float(_rm(rep, att))
                q_ij = (q[i] / sigma[i] + q[j] / sigma[j]) * 0.5
            t_ij = temperature / float(parameters.eps_k_ij[i, j])
            terms.append(
                molefracs[i]
                * molefracs[j]
                * float(parameters.sigma_ij[i, j]) ** 3
                * delta_b2(t_ij, rep, att, q_ij, rs)
            )
    return safe_sum(terms)


def correlation_integral_wca(
    reduced_density: ad.Scalar,
    mix: OneFluidProperties,
    rm: ad.Scalar,
    alpha: ad.Scalar,
) -> ad.Scalar:
    """Correlation integral of the first-order term for the WCA division.

    Parameters:
        reduced_density: Density multiplied by ``mix.sigma^3``.
        mix: One-fluid properties, including the shape diameter.
        rm: Reduced position of the potential minimum of the pseudo-component.
        alpha: Mean field constant beyond ``rm``.

    """
    tau = rm - mix.d
    rep_inv = 1.0 / mix.rep
    rep_inv2 = af.powi(rep_inv, 2)
    c = [
        ck[0]
        + ck[1] * rep_inv
        + ck[2] * rep_inv2
        + (ck[3] + ck[4] * rep_inv + ck[5] * rep_inv2) * tau
        for ck in C_WCA
    ]
    rho = reduced_density
    rho2 = af.powi(rho, 2)
    rho3 = af.powi(rho, 3)
    rational = (c[0] * rho + c[1] * rho2 + c[2] * rho3) / (
        1.0 + c[3] * rho + c[4] * rho2 + c[5] * rho3
    )
    return (
        (af.powi(mix.q, 3) - af.powi(rm, 3)) / 3.0
        - alpha
        + mie_prefactor(mix.rep, mix.att) * rational
    )


def _sutherland_terms(
    eta: ad.Scalar, x0: ad.Scalar, exponent: ad.Scalar
) -> ad.Scalar:
    """Reduced ``a1s + B`` of the Sutherland closure for one exponent, in units of
    ``2 pi rho epsilon d^3``."""
    l_inv = 1.0 / exponent
    c = [
        ck[0] + ck[1] * l_inv + ck[2] * af.powi(l_inv, 2) + ck[3] * af.powi(l_inv, 3)
        for ck in C_ETA_EFF
    ]
    eta_eff = safe_sum([ck * af.powi(eta, k + 1) for k, ck in enumerate(c)])
    a1s = -(1.0 - eta_eff * 0.5) / af.powi(1.0 - eta_eff, 3) / (exponent - 3.0)

    x0_3 = af.powd(x0, 3.0 - exponent)
    x0_4 = af.powd(x0, 4.0 - exponent)
    i_l = (1.0 - x0_3) / (exponent - 3.0)
    j_l = (1.0 - x0_4 * (exponent - 3.0) + x0_3 * (exponent - 4.0)) / (
        (exponent - 3.0) * (exponent - 4.0)
    )
    eta_1m3 = af.powi(1.0 - eta, 3)
    b = (1.0 - eta * 0.5) / eta_1m3 * i_l - eta * (1.0 + eta) * 4.5 / eta_1m3 * j_l
    return a1s + b


def correlation_integral_bh(
    reduced_density: ad.Scalar, mix: OneFluidProperties
) -> ad.Scalar:
    """Correlation integral of the first-order term for the BH division.

    The integral reduces to the negative mean field constant beyond ``sigma`` in the
    limit of zero density.

    Parameters:
        reduced_density: Density multiplied by ``mix.sigma^3``.
        mix: One-fluid properties.

    """
    d3 = af.powi(mix.d, 3)
    eta = reduced_density * d3 * (np.pi / 6.0)
    x0 = 1.0 / mix.d
    return (
        mie_prefactor(mix.rep, mix.att)
        * d3
        * (
            af.powd(x0, mix.att) * _sutherland_terms(eta, x0, mix.att)
            - af.powd(x0, mix.rep) * _sutherland_terms(eta, x0, mix.rep)
        )
    )


def attractive_terms_wca(
    parameters: UVParameters, state: StateHD
) -> AttractiveTerms:
    """Terms of the attractive perturbation for the WCA division."""
    x = state.molefracs
    d = diameter_wca(parameters, state.temperature)
    q = diameter_q_wca(parameters, state.temperature)
    mix = one_fluid_properties(parameters, x, d, q)

    t_x = state.temperature / mix.epsilon_k
    density = state.density
    rho_x = density * af.powi(mix.sigma, 3)
    rm_x = _rm(mix.rep, mix.att)
    alpha = mean_field_constant(mix.rep, mix.att, rm_x)
    scaling = mix.weighted_sigma3 * (2.0 * np.pi) / t_x

    integral = correlation_integral_wca(rho_x, mix, rm_x, alpha)
    return AttractiveTerms(
        delta_a1u=density * integral * scaling,
        delta_b21u=(-alpha - (af.powi(rm_x, 3) - af.powi(mix.q, 3)) / 3.0) * scaling,
        b2bar=residual_virial_coefficient(parameters, x, state.temperature, q),
        u_fraction=u_fraction(mix.rep, rho_x),
    )


def attractive_terms_bh(parameters: UVParameters, state: StateHD) -> AttractiveTerms:
    """Terms of the attractive perturbation for the BH division."""
    x = state.molefracs
    d = diameter_bh(parameters, state.temperature)
    mix = one_fluid_properties(parameters, x, d)

    t_x = state.temperature / mix.epsilon_k
    density = state.density
    rho_x = density * af.powi(mix.sigma, 3)
    alpha = mean_field_constant(mix.rep, mix.att, 1.0)
    scaling = mix.weighted_sigma3 * (2.0 * np.pi) / t_x

    return AttractiveTerms(
        delta_a1u=density * correlation_integral_bh(rho_x, mix) * scaling,
        delta_b21u=-alpha * scaling,
        b2bar=residual_virial_coefficient(parameters, x, state.temperature),
        u_fraction=u_fraction(mix.rep, rho_x),
    )


def attractive_perturbation_wca(
    parameters: UVParameters, state: StateHD
) -> ad.Scalar:
    """Attractive perturbation for the Weeks-Chandler-Andersen division."""
    terms = attractive_terms_wca(parameters, state)
    return state.total_moles * terms.helmholtz_energy(state.density)


def attractive_perturbation_bh(parameters: UVParameters, state: StateHD) -> ad.Scalar:
    """Attractive perturbation for the Barker-Henderson division."""
    terms = attractive_terms_bh(parameters, state)
    return state.total_moles * terms.helmholtz_energy(state.density)
