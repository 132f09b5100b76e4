"""One-fluid mixing rules.

The perturbation contributions treat a mixture as a single pseudo-component. This
module reduces the pairwise parameters and the composition to the parameters of that
pseudo-component.

With mole fractions ``x`` and pairwise values indexed by ``ij``:

- ``weighted_sigma3 = sum_ij x_i x_j sigma_ij^3``,
- ``epsilon_k = sum_ij x_i x_j sigma_ij^3 eps_ij / weighted_sigma3``,
- ``rep = sum_ij x_i x_j rep_ij``, ``att = sum_ij x_i x_j att_ij``,
- ``sigma = (sum_i x_i sigma_i^3)^(1/3)``,
- ``d = (sum_i x_i (d_i / sigma_i)^3)^(1/3)``, likewise for ``q``.

The diameters ``d`` and ``q`` of the pseudo-component are dimensionless.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from . import ad
from .ad import functions as af
from .parameters import UVParameters
from .utils import safe_sum

__all__ = ["OneFluidProperties", "one_fluid_properties"]


@dataclass(frozen=True)
class OneFluidProperties:
    """Parameters of the one-fluid pseudo-component."""

    rep: ad.Scalar
    """Repulsive exponent."""

    att: ad.Scalar
    """Attractive exponent."""

    sigma: ad.Scalar
    """Size parameter in Angstrom."""

    weighted_sigma3: ad.Scalar
    """Mole-fraction weighted pairwise ``sigma^3`` in Angstrom^3."""

    epsilon_k: ad.Scalar
    """Energy parameter in K."""

    d: ad.Scalar
    """Dimensionless effective hard-sphere diameter."""

    q: Optional[ad.Scalar] = None
    """Dimensionless shape diameter, if supplied."""


def _cube_mean(
    molefracs: Sequence[ad.Scalar],
    diameters: Sequence[ad.Scalar],
    sigma: Sequence[float],
) -> ad.Scalar:
    """Cube-mean of diameters made dimensionless with ``sigma``."""
    return af.cbrt(
        safe_sum(
            [x * af.powi(di / s, 3) for x, di, s in zip(molefracs, diameters, sigma)]
        )
    )


def one_fluid_properties(
    parameters: UVParameters,
    molefracs: Sequence[ad.Scalar],
    d: Sequence[ad.Scalar],
    q: Optional[Sequence[ad.Scalar]] = None,
) -> OneFluidProperties:
    """Applies the one-fluid mixing rules.

    Parameters:
        parameters: The parameter set.
        molefracs: Mole fraction of each component.
        d: Effective hard-sphere diameter of each component in Angstrom.
        q: ``default=None``

            Shape diameter of each component in Angstrom.

    Returns:
        The parameters of the pseudo-component.

    """
    n = parameters.ncomponents
    sigma = [float(s) for s in parameters.sigma]

    weighted_sigma3 = []
    weighted_eps = []
    rep = []
    att = []
    for i in range(n):
        for j in range(n):
            xx = molefracs[i] * molefracs[j]
            s3 = xx * float(parameters.sigma_ij[i, j]) ** 3
            weighted_sigma3.append(s3)
            weighted_eps.append(s3 * float(parameters.eps_k_ij[i, j]))
            rep.append(xx * float(parameters.rep_ij[i, j]))
            att.append(xx * float(parameters.att_ij[i, j]))

    wsigma3 = safe_sum(weighted_sigma3)
    return OneFluidProperties(
        rep=safe_sum(rep),
        att=safe_sum(att),
        sigma=af.cbrt(safe_sum([x * s**3 for x, s in zip(molefracs, sigma)])),
        weighted_sigma3=wsigma3,
        epsilon_k=safe_sum(weighted_eps) / wsigma3,
        d=_cube_mean(molefracs, d, sigma),
        q=None if q is None else _cube_mean(molefracs, q, sigma),
    )
