"""Thermodynamic state at which Helmholtz energy contributions are evaluated."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from . import ad
from .utils import safe_sum

__all__ = ["StateHD"]


@dataclass(frozen=True)
class StateHD:
    """State defined by temperature, volume and amounts of all components.

    The quantities can be plain floats or dual numbers, depending on which derivatives
    the caller requires. A state is created per evaluation and never modified.

    Temperature is given in K, volume in Angstrom^3 and amounts in number of particles.

    """

    temperature: ad.Scalar
    """Temperature."""

    volume: ad.Scalar
    """Volume."""

    moles: tuple[ad.Scalar, ...]
    """Amount of each component."""

    def __post_init__(self) -> None:
        # Lists would make the frozen state mutable.
        object.__setattr__(self, "moles", tuple(self.moles))

    @property
    def ncomponents(self) -> int:
        return len(self.moles)

    @property
    def total_moles(self) -> ad.Scalar:
        """Sum of all amounts.

        Plain floats are returned as numpy floats, such that an empty state results in
        NaN or Inf in the contributions instead of a division error.

        """
        total = safe_sum(self.moles)
        if isinstance(total, ad.DualNumber):
            return total
        return np.float64(total)

    @property
    def partial_density(self) -> list[ad.Scalar]:
        """Amount of each component per volume."""
        return [n / self.volume for n in self.moles]

    @property
    def density(self) -> ad.Scalar:
        """Total amount per volume."""
        return self.total_moles / self.volume

    @property
    def molefracs(self) -> list[ad.Scalar]:
        """Fraction of each component in the total amount."""
        total = self.total_moles
        return [n / total for n in self.moles]

    @classmethod
    def from_reduced(
        cls,
        reduced_temperature: float,
        reduced_density: float,
        moles: Sequence[float],
        epsilon_k: float = 1.0,
        sigma: float = 1.0,
    ) -> StateHD:
        """Creates a state from temperature and density in reduced units.

        Parameters:
            reduced_temperature: Temperature divided by ``epsilon_k``.
            reduced_density: Total density multiplied by ``sigma^3``.
            moles: Amount of each component.
            epsilon_k: ``default=1.0``

                Energy parameter in K.
            sigma: ``default=1.0``

                Size parameter in Angstrom.

        """
        total = sum(moles)
        return cls(
            reduced_temperature * epsilon_k,
            total / (reduced_density / sigma**3),
            tuple(moles),
        )

    @classmethod
    def derive(
        cls,
        temperature: float,
        volume: float,
        moles: Sequence[float],
        order: int = 1,
    ) -> StateHD:
        """Creates a state with dual numbers, where the derivatives are taken with
        respect to temperature, volume and each amount, in this order.

        Parameters:
            temperature: Temperature.
            volume: Volume.
            moles: Amount of each component.
            order: ``default=1``

                1 for gradients, 2 for gradients and Hessians.

        """
        variables = ad.initDualNumbers([temperature, volume] + list(moles), order)
        return cls(variables[0], variables[1], tuple(variables[2:]))
