"""This private module contains central assumptions and data for the entire
package.

Changes here should be done with much care.

"""

from __future__ import annotations

__all__ = [
    "MAX_ETA",
    "CUTOFF_RADIUS",
]


NUMBA_CACHE: bool = True
"""Flag to instruct the numba compiler to cache (!and use cached!) functions.

See Also:
    https://numba.readthedocs.io/en/stable/user/jit.html#cache

"""

NUMBA_FAST_MATH: bool = False
"""Flag to instruct the numba compiler to use it's ``fastmath`` functions.

Left off, since the quadrature kernels feed regression values which are compared to
high precision.

"""

MAX_ETA: float = 0.5
"""Default maximal packing fraction used to bound the density of a state."""

CUTOFF_RADIUS: float = 5.0
"""Outer cutoff (in units of the size parameter ``sigma``) of the second virial
correction.

Beyond the cutoff, the Mayer function is replaced by its mean-field limit.

"""

QUADRATURE_NODES: int = 16
"""Number of Gauss-Legendre nodes per panel, used to integrate Boltzmann factors for
effective hard-sphere diameters."""

QUADRATURE_PANELS: int = 32
"""Number of equally sized panels of the composite Gauss-Legendre rule.

At low reduced temperatures, the Boltzmann factor changes from 0 to 1 within a small
fraction of ``sigma``. The panels keep this transition resolved.

"""

REPULSION_CUTOFF: float = 100.0
"""Reduced Boltzmann exponent ``u / kT`` above which the Boltzmann factor is treated
as zero when integrating diameters.

The integration interval ``[0, r_lo]`` with ``u(r_lo) / kT`` equal to this value
contributes analytically. Below the reduced temperature 1, ``r_lo`` is fixed by
``u(r_lo) / epsilon`` equal to this value, which keeps the quadrature away from the
steep core. Either way, the neglected Boltzmann factor is below ``exp(-100)``.

"""
