"""Storage of Mie fluid parameters for pure components and mixtures.

Every component is described by the repulsive and attractive exponent of the Mie
potential, a size parameter ``sigma`` (Angstrom) and an energy parameter
``epsilon_k`` (epsilon divided by the Boltzmann constant, in K).

A :class:`UVParameters` instance is built once from the per-component records and an
optional matrix of binary interaction parameters ``k_ij``. The pairwise combined
matrices are computed at construction and are read-only afterwards, such that one
parameter set can be shared by arbitrarily many contributions and evaluations.

The Mie potential reads, with ``n`` the repulsive and ``m`` the attractive exponent,

.. math::

    u(r) = C(n, m)\\,\\varepsilon\\left[\\left(\\frac{\\sigma}{r}\\right)^n
    - \\left(\\frac{\\sigma}{r}\\right)^m\\right],
    \\quad C(n, m) = \\frac{n}{n - m}\\left(\\frac{n}{m}\\right)^{m / (n - m)}.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from . import ad
from .ad import functions as af
from .utils import ParameterError

__all__ = [
    "UVRecord",
    "UVBinaryRecord",
    "UVParameters",
    "mie_prefactor",
    "mean_field_constant",
]

logger = logging.getLogger(__name__)


def mie_prefactor(rep: ad.Scalar, att: ad.Scalar) -> ad.Scalar:
    """Prefactor ``C(n, m)`` of the Mie potential.

    Parameters:
        rep: Repulsive exponent ``n``.
        att: Attractive exponent ``m``.

    Returns:
        ``n / (n - m) * (n / m)^(m / (n - m))``.

    """
    return rep / (rep - att) * af.powd(rep / att, att / (rep - att))


def mean_field_constant(rep: ad.Scalar, att: ad.Scalar, x: ad.Scalar) -> ad.Scalar:
    """Mean field constant of the Mie potential, beyond a reduced distance ``x``.

    The constant is the negative of the integral of ``u(r) r^2 / epsilon`` from ``x``
    to infinity, with all lengths in units of ``sigma``.

    Parameters:
        rep: Repulsive exponent.
        att: Attractive exponent.
        x: Reduced lower integration bound ``r / sigma``.

    Returns:
        ``C(n, m) [x^(3 - m) / (m - 3) - x^(3 - n) / (n - 3)]``.

    """
    return mie_prefactor(rep, att) * (
        af.powd(x, 3.0 - att) / (att - 3.0) - af.powd(x, 3.0 - rep) / (rep - 3.0)
    )


@dataclass(frozen=True)
class UVRecord:
    """Mie parameters of a single component."""

    rep: float
    """Repulsive exponent."""

    att: float
    """Attractive exponent."""

    sigma: float
    """Size parameter in Angstrom."""

    epsilon_k: float
    """Energy parameter divided by the Boltzmann constant, in K."""


@dataclass(frozen=True)
class UVBinaryRecord:
    """Binary interaction parameter of a pair of components.

    The pair energy is ``(1 - k_ij) sqrt(epsilon_i epsilon_j)``.

    """

    k_ij: float = 0.0


def _validate_record(record: UVRecord, index: int) -> None:
    """Raises a :class:`ParameterError` if a single record is inconsistent."""
    for name in ("rep", "att", "sigma", "epsilon_k"):
        value = getattr(record, name)
        if not np.isfinite(value) or value <= 0.0:
            raise ParameterError(
                f"Component {index}: {name} must be positive and finite, got {value}."
            )
    if record.att >= record.rep:
        raise ParameterError(
            f"Component {index}: attractive exponent {record.att} must be smaller"
            + f" than repulsive exponent {record.rep}."
        )


def _binary_matrix(
    binary_records: Optional[Union[np.ndarray, Sequence[Sequence]]], n: int
) -> np.ndarray:
    """Converts the binary interaction input into an ``(n, n)`` float matrix."""
    if binary_records is None:
        return np.zeros((n, n))

    rows = []
    for row in binary_records:
        rows.append(
            [br.k_ij if isinstance(br, UVBinaryRecord) else float(br) for br in row]
        )
    k_ij = np.array(rows, dtype=float)

    if k_ij.shape != (n, n):
        raise ParameterError(
            f"Binary parameters of shape {k_ij.shape} given for {n} components."
        )
    if not np.array_equal(k_ij, k_ij.T):
        raise ParameterError("Binary parameters must be symmetric.")
    if not np.all(np.isfinite(k_ij)) or np.any(k_ij >= 1.0):
        raise ParameterError("Binary parameters must be finite and smaller than 1.")
    return k_ij


class UVParameters:
    """Parameter set of an ``N``-component Mie fluid.

    Use the factory methods :meth:`from_records`, :meth:`from_lists` or
    :meth:`new_pure` for construction.

    Parameters:
        records: One record per component.
        binary_records: ``default=None``

            Optional ``(N, N)`` matrix of binary interaction parameters, given as
            floats or :class:`UVBinaryRecord`. Must be symmetric.

    Raises:
        ParameterError: If no records are given, if any record is inconsistent or if
            the binary parameters do not fit the records.

    """

    def __init__(
        self,
        records: Sequence[UVRecord],
        binary_records: Optional[Union[np.ndarray, Sequence[Sequence]]] = None,
    ) -> None:
        if len(records) == 0:
            raise ParameterError("Parameter set requires at least one component.")
        for i, record in enumerate(records):
            _validate_record(record, i)

        self.records: tuple[UVRecord, ...] = tuple(records)
        """The per-component records in the order of construction."""

        self.ncomponents: int = len(records)
        """Number of components."""

        self.rep: np.ndarray = np.array([r.rep for r in records], dtype=float)
        """``shape=(N,)`` Repulsive exponents."""
        self.att: np.ndarray = np.array([r.att for r in records], dtype=float)
        """``shape=(N,)`` Attractive exponents."""
        self.sigma: np.ndarray = np.array([r.sigma for r in records], dtype=float)
        """``shape=(N,)`` Size parameters in Angstrom."""
        self.epsilon_k: np.ndarray = np.array(
            [r.epsilon_k for r in records], dtype=float
        )
        """``shape=(N,)`` Energy parameters in K."""

        self.k_ij: np.ndarray = _binary_matrix(binary_records, self.ncomponents)
        """``shape=(N, N)`` Binary interaction parameters."""

        self.rep_ij: np.ndarray = np.sqrt(np.outer(self.rep, self.rep))
        """``shape=(N, N)`` Geometric mean of repulsive exponents."""
        self.att_ij: np.ndarray = np.sqrt(np.outer(self.att, self.att))
        """``shape=(N, N)`` Geometric mean of attractive exponents."""
        self.sigma_ij: np.ndarray = 0.5 * np.add.outer(self.sigma, self.sigma)
        """``shape=(N, N)`` Arithmetic mean of size parameters."""
        self.eps_k_ij: np.ndarray = (1.0 - self.k_ij) * np.sqrt(
            np.outer(self.epsilon_k, self.epsilon_k)
        )
        """``shape=(N, N)`` Combined energy parameters in K."""

        # Pure values on the diagonal, exactly.
        np.fill_diagonal(self.rep_ij, self.rep)
        np.fill_diagonal(self.att_ij, self.att)
        np.fill_diagonal(self.sigma_ij, self.sigma)
        np.fill_diagonal(self.eps_k_ij, self.epsilon_k)

        if np.any(self.att_ij >= self.rep_ij):
            raise ParameterError(
                "Combined attractive exponents must be smaller than combined repulsive"
                + " exponents for every pair."
            )

        for a in (
            self.rep,
            self.att,
            self.sigma,
            self.epsilon_k,
            self.k_ij,
            self.rep_ij,
            self.att_ij,
            self.sigma_ij,
            self.eps_k_ij,
        ):
            a.setflags(write=False)

        logger.debug(
            f"Created Mie parameter set with {self.ncomponents} components"
            + (
                ", including binary interaction parameters."
                if np.any(self.k_ij != 0.0)
                else "."
            )
        )

    def __repr__(self) -> str:
        records = ", ".join(repr(r) for r in self.records)
        return f"UVParameters([{records}])"

    @classmethod
    def from_records(
        cls,
        records: Sequence[UVRecord],
        binary_records: Optional[Union[np.ndarray, Sequence[Sequence]]] = None,
    ) -> UVParameters:
        """Creates a parameter set from per-component records.

        See :class:`UVParameters` for the arguments.

        """
        return cls(records, binary_records)

    @classmethod
    def from_lists(
        cls,
        rep: Sequence[float],
        att: Sequence[float],
        sigma: Sequence[float],
        epsilon_k: Sequence[float],
        k_ij: Optional[Union[np.ndarray, Sequence[Sequence[float]]]] = None,
    ) -> UVParameters:
        """Creates a parameter set from lists of per-component values.

        Parameters:
            rep: Repulsive exponents.
            att: Attractive exponents.
            sigma: Size parameters in Angstrom.
            epsilon_k: Energy parameters in K.
            k_ij: ``default=None``

                Binary interaction parameters. Zero if not given.

        Raises:
            ParameterError: If the lists are of different length.

        """
        lengths = {len(rep), len(att), len(sigma), len(epsilon_k)}
        if len(lengths) != 1:
            raise ParameterError(
                "Parameter lists must be of equal length, got lengths"
                + f" {len(rep)}, {len(att)}, {len(sigma)} and {len(epsilon_k)}."
            )
        records = [
            UVRecord(float(r), float(a), float(s), float(e))
            for r, a, s, e in zip(rep, att, sigma, epsilon_k)
        ]
        return cls(records, k_ij)

    @classmethod
    def new_pure(cls, record: UVRecord) -> UVParameters:
        """Creates a parameter set for a single component."""
        return cls([record])

    def subset(self, indices: Sequence[int]) -> UVParameters:
        """Restricts the parameter set to some components.

        Parameters:
            indices: Indices of the retained components. The order of the indices
                defines the order of the components in the new set.

        Raises:
            ParameterError: If the indices are empty, out of range or not unique.

        Returns:
            A new parameter set with recomputed pairwise matrices.

        """
        indices = [int(i) for i in indices]
        if len(indices) == 0:
            raise ParameterError("Subset requires at least one component.")
        if len(set(indices)) != len(indices):
            raise ParameterError(f"Subset indices must be unique, got {indices}.")
        if any(i < 0 or i >= self.ncomponents for i in indices):
            raise ParameterError(
                f"Subset indices {indices} out of range for {self.ncomponents}"
                + " components."
            )
        logger.debug(f"Restricting Mie parameter set to components {indices}.")
        return UVParameters(
            [self.records[i] for i in indices], self.k_ij[np.ix_(indices, indices)]
        )
