"""Tests of the parameter sets in :mod:`uvtheory.parameters`."""

from __future__ import annotations

import numpy as np
import pytest
from scipy import integrate

import uvtheory as uv


@pytest.fixture(scope="module")
def ternary() -> uv.UVParameters:
    k_ij = np.array([[0.0, 0.1, 0.0], [0.1, 0.0, -0.05], [0.0, -0.05, 0.0]])
    return uv.UVParameters.from_lists(
        rep=[12.0, 24.0, 18.0],
        att=[6.0, 6.0, 5.5],
        sigma=[3.0, 3.7039, 4.2],
        epsilon_k=[120.0, 150.03, 200.0],
        k_ij=k_ij,
    )


def test_combining_rules(ternary: uv.UVParameters):
    """Pairwise matrices are symmetric, with pure values on the diagonal."""
    p = ternary
    assert p.ncomponents == 3

    for a in [p.rep_ij, p.att_ij, p.sigma_ij, p.eps_k_ij]:
        assert a.shape == (3, 3)
        assert np.array_equal(a, a.T)

    assert np.array_equal(np.diag(p.rep_ij), p.rep)
    assert np.array_equal(np.diag(p.att_ij), p.att)
    assert np.array_equal(np.diag(p.sigma_ij), p.sigma)
    assert np.array_equal(np.diag(p.eps_k_ij), p.epsilon_k)

    assert np.isclose(p.rep_ij[0, 1], np.sqrt(12.0 * 24.0))
    assert np.isclose(p.att_ij[1, 2], np.sqrt(6.0 * 5.5))
    assert np.isclose(p.sigma_ij[0, 2], 0.5 * (3.0 + 4.2))
    assert np.isclose(p.eps_k_ij[0, 1], 0.9 * np.sqrt(120.0 * 150.03))
    assert np.isclose(p.eps_k_ij[1, 2], 1.05 * np.sqrt(150.03 * 200.0))


def test_read_only(ternary: uv.UVParameters):
    with pytest.raises(ValueError):
        ternary.sigma[0] = 1.0
    with pytest.raises(ValueError):
        ternary.eps_k_ij[0, 1] = 1.0


def test_factories_are_equivalent(ternary: uv.UVParameters):
    records = list(ternary.records)
    binary = [[uv.UVBinaryRecord(k) for k in row] for row in ternary.k_ij.tolist()]
    from_records = uv.UVParameters.from_records(records, binary)
    for name in ["rep_ij", "att_ij", "sigma_ij", "eps_k_ij", "k_ij"]:
        assert np.array_equal(getattr(from_records, name), getattr(ternary, name))

    pure = uv.UVParameters.new_pure(records[1])
    assert pure.ncomponents == 1
    assert pure.sigma[0] == 3.7039
    assert "UVRecord" in repr(pure)


def test_subset(ternary: uv.UVParameters):
    """The subset follows the order of the indices and keeps binary parameters."""
    sub = ternary.subset([2, 0])
    assert sub.ncomponents == 2
    assert np.array_equal(sub.sigma, [4.2, 3.0])
    assert np.array_equal(sub.epsilon_k, [200.0, 120.0])
    assert sub.k_ij[0, 1] == 0.0

    sub = ternary.subset([1, 2])
    assert sub.k_ij[0, 1] == -0.05
    assert sub.eps_k_ij[0, 1] == ternary.eps_k_ij[1, 2]


@pytest.mark.parametrize("indices", [[], [0, 0], [3], [-1, 1]])
def test_invalid_subset(ternary: uv.UVParameters, indices: list[int]):
    with pytest.raises(uv.ParameterError):
        ternary.subset(indices)


@pytest.mark.parametrize(
    "record",
    [
        uv.UVRecord(12.0, 6.0, 0.0, 100.0),
        uv.UVRecord(12.0, 6.0, 3.0, -1.0),
        uv.UVRecord(12.0, 12.0, 3.0, 100.0),
        uv.UVRecord(6.0, 12.0, 3.0, 100.0),
        uv.UVRecord(12.0, 0.0, 3.0, 100.0),
        uv.UVRecord(np.inf, 6.0, 3.0, 100.0),
        uv.UVRecord(12.0, 6.0, np.nan, 100.0),
    ],
)
def test_invalid_records(record: uv.UVRecord):
    with pytest.raises(uv.ParameterError):
        uv.UVParameters.new_pure(record)


def test_invalid_construction():
    with pytest.raises(uv.ParameterError):
        uv.UVParameters.from_records([])
    with pytest.raises(uv.ParameterError):
        uv.UVParameters.from_lists([12.0, 24.0], [6.0], [3.0, 3.0], [100.0, 100.0])
    # Wrong shape of binary parameters.
    with pytest.raises(uv.ParameterError):
        uv.UVParameters.from_lists([12.0], [6.0], [3.0], [100.0], np.zeros((2, 2)))
    # Not symmetric.
    with pytest.raises(uv.ParameterError):
        uv.UVParameters.from_lists(
            [12.0, 12.0], [6.0, 6.0], [3.0, 3.0], [100.0, 100.0], [[0, 0.1], [0, 0]]
        )


def test_mie_prefactor():
    """The Lennard-Jones potential has prefactor 4 and mean field constant 8/9."""
    assert np.isclose(uv.mie_prefactor(12.0, 6.0), 4.0, rtol=1e-14)
    assert np.isclose(uv.mean_field_constant(12.0, 6.0, 1.0), 8.0 / 9.0, rtol=1e-14)


@pytest.mark.parametrize(
    "rep, att, x", [(24.0, 6.0, 1.3), (12.0, 6.0, 1.0), (15.0, 8.0, 2.0)]
)
def test_mean_field_constant(rep: float, att: float, x: float):
    """Comparison with the numerical integral of the Mie tail."""
    c = uv.mie_prefactor(rep, att)

    def integrand(r):
        return c * (r**-rep - r**-att) * r**2

    expected, _ = integrate.quad(integrand, x, np.inf, epsabs=1e-13, epsrel=1e-13)
    assert np.isclose(uv.mean_field_constant(rep, att, x), -expected, rtol=1e-9)
