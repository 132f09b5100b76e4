"""Residual Helmholtz energy of Mie fluids with UV theory.

The residual Helmholtz energy is the sum of three contributions, each available for
the Barker-Henderson (BH) and the Weeks-Chandler-Andersen (WCA) division of the Mie
potential:

1. the hard-sphere reference fluid (:mod:`uvtheory.hard_sphere`),
2. the reference perturbation (:mod:`uvtheory.reference_perturbation`),
3. the attractive perturbation (:mod:`uvtheory.attractive_perturbation`).

The set of contributions is closed. :class:`Contribution` enumerates all six, and
:func:`contribution_helmholtz_energy` evaluates any of them.

:class:`UVTheory` assembles the contributions of one division for a parameter set. It
is immutable and can be evaluated for any number of states, with plain floats or with
dual numbers (see :mod:`uvtheory.ad`).

Example:

    .. code-block:: python

        import uvtheory as uv

        parameters = uv.UVParameters.new_pure(uv.UVRecord(24.0, 6.0, 3.7039, 150.03))
        eos = uv.UVTheory(parameters)
        state = uv.StateHD.derive(600.0, 1000.0, [2.0])
        a = eos.helmholtz_energy(state)
        pressure = -a.jac[1]

"""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence, Union

import numpy as np

from . import ad
from ._core import MAX_ETA
from .attractive_perturbation import (
    attractive_perturbation_bh,
    attractive_perturbation_wca,
)
from .hard_sphere import hard_sphere_bh, hard_sphere_wca
from .parameters import UVParameters
from .reference_perturbation import (
    reference_perturbation_bh,
    reference_perturbation_wca,
)
from .state import StateHD
from .utils import safe_sum

__all__ = [
    "Perturbation",
    "Contribution",
    "contribution_helmholtz_energy",
    "UVTheoryOptions",
    "UVTheory",
]

logger = logging.getLogger(__name__)


class Perturbation(Enum):
    """Division of the Mie potential into reference and perturbation."""

    BarkerHenderson = "BH"
    WeeksChandlerAndersen = "WCA"

    @classmethod
    def from_name(cls, name: Union[str, Perturbation]) -> Perturbation:
        """Parses a division from its name or abbreviation, case-insensitive.

        Accepted are for example ``'BH'``, ``'barker_henderson'``,
        ``'BarkerHenderson'``, ``'WCA'`` or ``'weeks-chandler-andersen'``.

        Raises:
            ValueError: If the name is unknown.

        """
        if isinstance(name, Perturbation):
            return name
        key = name.replace("-", "").replace("_", "").replace(" ", "").lower()
        for p in cls:
            if key in (p.value.lower(), p.name.lower()):
                return p
        raise ValueError(f"Unknown perturbation '{name}'.")


class Contribution(Enum):
    """The contributions to the residual Helmholtz energy, per division."""

    HardSphereBH = ("Hard Sphere", Perturbation.BarkerHenderson)
    HardSphereWCA = ("Hard Sphere", Perturbation.WeeksChandlerAndersen)
    ReferencePerturbationBH = ("Reference Perturbation", Perturbation.BarkerHenderson)
    ReferencePerturbationWCA = (
        "Reference Perturbation",
        Perturbation.WeeksChandlerAndersen,
    )
    AttractivePerturbationBH = ("Attractive Perturbation", Perturbation.BarkerHenderson)
    AttractivePerturbationWCA = (
        "Attractive Perturbation",
        Perturbation.WeeksChandlerAndersen,
    )

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def perturbation(self) -> Perturbation:
        return self.value[1]

    def __str__(self) -> str:
        return self.display_name

    @classmethod
    def for_perturbation(cls, perturbation: Perturbation) -> tuple[Contribution, ...]:
        """The ordered contributions of a division: hard sphere, reference
        perturbation and attractive perturbation."""
        return tuple(c for c in cls if c.perturbation == perturbation)


_FORMULAS: dict[Contribution, Callable[[UVParameters, StateHD], ad.Scalar]] = {
    Contribution.HardSphereBH: hard_sphere_bh,
    Contribution.HardSphereWCA: hard_sphere_wca,
    Contribution.ReferencePerturbationBH: reference_perturbation_bh,
    Contribution.ReferencePerturbationWCA: reference_perturbation_wca,
    Contribution.AttractivePerturbationBH: attractive_perturbation_bh,
    Contribution.AttractivePerturbationWCA: attractive_perturbation_wca,
}


def contribution_helmholtz_energy(
    contribution: Contribution, parameters: UVParameters, state: StateHD
) -> ad.Scalar:
    """Evaluates a single contribution.

    Parameters:
        contribution: The contribution.
        parameters: The parameter set.
        state: The state, with as many amounts as components in ``parameters``.

    Returns:
        The contribution to the residual Helmholtz energy divided by ``kT``.

    """
    return _FORMULAS[contribution](parameters, state)


@dataclass(frozen=True)
class UVTheoryOptions:
    """Options of :class:`UVTheory`.

    Raises:
        ValueError: If ``max_eta`` is not in ``(0, 1]`` or if ``perturbation`` is an
            unknown name.

    """

    max_eta: float = MAX_ETA
    """Maximal packing fraction, used in :meth:`UVTheory.max_density`."""

    perturbation: Perturbation = Perturbation.WeeksChandlerAndersen
    """Division of the Mie potential. Names are accepted at construction."""

    def __post_init__(self) -> None:
        if not 0.0 < self.max_eta <= 1.0:
            raise ValueError(f"max_eta must be in (0, 1], got {self.max_eta}.")
        object.__setattr__(
            self, "perturbation", Perturbation.from_name(self.perturbation)
        )

    @classmethod
    def from_config(
        cls, config: Union[configparser.ConfigParser, Mapping[str, Any]]
    ) -> UVTheoryOptions:
        """Creates options from the ``[uvtheory]`` section of a configuration.

        Missing keys take their default values.

        Parameters:
            config: A parsed configuration, or a mapping from section names to
                sections, like :data:`uvtheory.config`.

        """
        section = config["uvtheory"] if "uvtheory" in config else {}
        kwargs: dict[str, Any] = {}
        if "max_eta" in section:
            kwargs["max_eta"] = float(section["max_eta"])
        if "perturbation" in section:
            kwargs["perturbation"] = section["perturbation"]
        return cls(**kwargs)


class UVTheory:
    """Residual Helmholtz energy of a Mie fluid mixture.

    Parameters:
        parameters: The parameter set.
        options: ``default=None``

            Options. Defaults to WCA with a maximal packing fraction of 0.5.

    """

    def __init__(
        self, parameters: UVParameters, options: Optional[UVTheoryOptions] = None
    ) -> None:
        self._parameters: UVParameters = parameters
        self._options: UVTheoryOptions = (
            UVTheoryOptions() if options is None else options
        )
        self._contributions: tuple[Contribution, ...] = Contribution.for_perturbation(
            self._options.perturbation
        )
        logger.debug(
            f"Assembled UV theory ({self._options.perturbation.name}) for"
            + f" {self.components} components: "
            + ", ".join(str(c) for c in self._contributions)
        )

    def __repr__(self) -> str:
        return (
            f"UVTheory(components={self.components},"
            + f" perturbation={self._options.perturbation.name},"
            + f" max_eta={self._options.max_eta})"
        )

    @property
    def parameters(self) -> UVParameters:
        return self._parameters

    @property
    def options(self) -> UVTheoryOptions:
        return self._options

    @property
    def components(self) -> int:
        """Number of components."""
        return self._parameters.ncomponents

    @property
    def contributions(self) -> tuple[Contribution, ...]:
        """Ordered contributions: hard sphere, reference and attractive perturbation."""
        return self._contributions

    def subset(self, indices: Sequence[int]) -> UVTheory:
        """Restricts the model to some components, keeping the options.

        See :meth:`~uvtheory.parameters.UVParameters.subset`.

        """
        return UVTheory(self._parameters.subset(indices), self._options)

    def max_density(self, moles: Sequence[ad.Scalar]) -> ad.Scalar:
        """Density at the maximal packing fraction, with ``sigma`` as diameter.

        Parameters:
            moles: Amount of each component.

        Returns:
            ``max_eta sum_i n_i / (pi / 6 sum_i n_i sigma_i^3)`` in Angstrom^-3.

        """
        sigma3 = self._parameters.sigma**3
        packed = safe_sum([float(s3) * n for s3, n in zip(sigma3, moles)]) * np.pi / 6.0
        if not isinstance(packed, ad.DualNumber):
            packed = np.float64(packed)
        return self._options.max_eta * safe_sum(list(moles)) / packed

    def _check_state(self, state: StateHD) -> None:
        if state.ncomponents != self.components:
            raise ValueError(
                f"State with {state.ncomponents} amounts given for"
                + f" {self.components} components."
            )

    def helmholtz_energy_contributions(
        self, state: StateHD
    ) -> list[tuple[str, ad.Scalar]]:
        """Evaluates every contribution separately.

        Returns:
            Pairs of display name and contribution, in the order of
            :attr:`contributions`.

        """
        self._check_state(state)
        return [
            (c.display_name, contribution_helmholtz_energy(c, self._parameters, state))
            for c in self._contributions
        ]

    def helmholtz_energy(self, state: StateHD) -> ad.Scalar:
        """Residual Helmholtz energy divided by ``kT``.

        Parameters:
            state: The state, with as many amounts as components.

        Raises:
            ValueError: If the number of amounts does not match the number of
                components.

        Returns:
            The sum of all contributions, a float or a dual number depending on the
            state.

        """
        self._check_state(state)
        return safe_sum(
            [
                contribution_helmholtz_energy(c, self._parameters, state)
                for c in self._contributions
            ]
        )
