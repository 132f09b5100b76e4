"""Residual properties obtained by differentiating the Helmholtz energy.

The functions seed dual numbers in temperature, volume and amounts (see
:meth:`~uvtheory.state.StateHD.derive`), evaluate :meth:`UVTheory.helmholtz_energy`
once and read the required derivatives. No property requires hand-written derivatives
of the contributions.

Units follow the contributions: temperature in K, volume in Angstrom^3, amounts in
number of particles. Energies are divided by ``kT``.

"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from . import ad
from .eos import UVTheory
from .state import StateHD

__all__ = [
    "reduced_helmholtz_energy",
    "residual_pressure",
    "residual_chemical_potential",
    "residual_entropy",
    "second_virial_coefficient",
    "helmholtz_energy_hessian",
]


def reduced_helmholtz_energy(
    eos: UVTheory, temperature: float, volume: float, moles: Sequence[float]
) -> float:
    """Residual Helmholtz energy per particle, divided by ``kT``."""
    state = StateHD(temperature, volume, tuple(moles))
    return ad.value_of(eos.helmholtz_energy(state)) / sum(moles)


def residual_pressure(
    eos: UVTheory, temperature: float, volume: float, moles: Sequence[float]
) -> float:
    """Residual pressure ``-dA/dV`` in units of ``kT`` per Angstrom^3."""
    a = eos.helmholtz_energy(StateHD.derive(temperature, volume, moles))
    return -float(a.jac[1])


def residual_chemical_potential(
    eos: UVTheory, temperature: float, volume: float, moles: Sequence[float]
) -> np.ndarray:
    """Residual chemical potentials ``dA/dn_i`` in units of ``kT``."""
    a = eos.helmholtz_energy(StateHD.derive(temperature, volume, moles))
    return a.jac[2:].copy()


def residual_entropy(
    eos: UVTheory, temperature: float, volume: float, moles: Sequence[float]
) -> float:
    """Residual entropy ``-(A + T dA/dT)`` in units of ``k_B``.

    With ``A`` divided by ``kT``, the entropy reads ``S / k = -d(A T)/dT``.

    """
    a = eos.helmholtz_energy(StateHD.derive(temperature, volume, moles))
    return -(a.val + temperature * float(a.jac[0]))


def second_virial_coefficient(
    eos: UVTheory,
    temperature: float,
    molefracs: Sequence[float],
    density: float = 1e-10,
) -> float:
    """Second virial coefficient in Angstrom^3.

    The coefficient is the derivative of the Helmholtz energy per particle with
    respect to density, evaluated at a small density.

    Parameters:
        eos: The model.
        temperature: Temperature.
        molefracs: Composition.
        density: ``default=1e-10``

            Density in Angstrom^-3 at which the limit is approximated.

    """
    (rho,) = ad.initDualNumbers([density])
    total = sum(molefracs)
    state = StateHD(temperature, total / rho, tuple(molefracs))
    a = eos.helmholtz_energy(state) / total
    return float(a.jac[0])


def helmholtz_energy_hessian(
    eos: UVTheory, temperature: float, volume: float, moles: Sequence[float]
) -> tuple[float, np.ndarray, np.ndarray]:
    """Residual Helmholtz energy with gradient and Hessian.

    Derivatives are taken with respect to temperature, volume and each amount, in this
    order.

    Returns:
        The value, the gradient ``shape=(2 + N,)`` and the Hessian
        ``shape=(2 + N, 2 + N)``.

    """
    a = eos.helmholtz_energy(StateHD.derive(temperature, volume, moles, order=2))
    return a.val, a.jac, a.hess
