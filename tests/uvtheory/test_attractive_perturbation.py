"""Tests of the attractive perturbation contributions in
:mod:`uvtheory.attractive_perturbation`."""

from __future__ import annotations

import numpy as np
import pytest

import uvtheory as uv
from tests.uvtheory import (
    correlated_diameters,
    methane_parameters,
    reduced_parameters,
    reduced_state,
)


@pytest.fixture
def wca_terms() -> uv.AttractiveTerms:
    p = reduced_parameters(24.0, 6.0)
    state = reduced_state(p, 4.0, 1.0, [2.0])
    return uv.attractive_terms_wca(p, state)


def test_attractive_terms_wca(wca_terms: uv.AttractiveTerms):
    """Terms depending on the shape diameter only."""
    assert np.isclose(wca_terms.delta_b21u, -1.02233215790525, rtol=0.0, atol=1e-12)
    assert np.isclose(wca_terms.b2bar, -1.09102560732964, rtol=0.0, atol=1e-12)
    assert np.isclose(wca_terms.u_fraction, 0.997069754340431, rtol=0.0, atol=1e-5)


@correlated_diameters
def test_first_order_term_wca(wca_terms: uv.AttractiveTerms):
    assert np.isclose(wca_terms.delta_a1u, -1.52406840346272, rtol=0.0, atol=1e-6)


@correlated_diameters
def test_attractive_perturbation_wca():
    p = reduced_parameters(24.0, 6.0)
    state = reduced_state(p, 4.0, 1.0, [2.0])
    a = uv.attractive_perturbation_wca(p, state) / state.total_moles
    assert np.isclose(a, -1.5242697155023, rtol=0.0, atol=1e-5)


def test_attractive_perturbation_from_terms(wca_terms: uv.AttractiveTerms):
    p = reduced_parameters(24.0, 6.0)
    state = reduced_state(p, 4.0, 1.0, [2.0])
    a = uv.attractive_perturbation_wca(p, state) / state.total_moles
    assert np.isclose(a, wca_terms.helmholtz_energy(state.density), rtol=1e-14)


def test_u_fraction():
    assert uv.u_fraction(12.0, 0.0) == 0.0
    rho = np.linspace(0.0, 2.0, 41)
    phi = np.array([uv.u_fraction(12.0, r) for r in rho])
    assert np.all(np.diff(phi) > 0.0)
    assert np.all(phi < 1.0)
    assert np.isclose(uv.u_fraction(12.0, 10.0), 1.0)


def test_correlation_integral_bh_low_density():
    """At zero density, the BH correlation integral is the negative mean field
    constant beyond ``sigma``, for any hard-sphere diameter."""
    p = reduced_parameters(12.0, 6.0)
    alpha = uv.mean_field_constant(12.0, 6.0, 1.0)
    for d in [0.9, 0.95, 1.0]:
        mix = uv.one_fluid_properties(p, [1.0], [d])
        assert np.isclose(uv.correlation_integral_bh(0.0, mix), -alpha, rtol=1e-12)


@pytest.mark.parametrize(
    "terms, contribution",
    [
        (uv.attractive_terms_bh, uv.attractive_perturbation_bh),
        (uv.attractive_terms_wca, uv.attractive_perturbation_wca),
    ],
)
@pytest.mark.parametrize("reduced_temperature", [1.0, 4.0])
def test_second_virial_limit(terms, contribution, reduced_temperature: float):
    """At low density, the first-order term reduces to its virial part and the
    contribution per particle to ``B2 rho``."""
    p = methane_parameters()
    reduced_density = 1e-9
    state = reduced_state(p, reduced_temperature, reduced_density, [1.0])
    t = terms(p, state)

    density = state.density
    assert np.isclose(t.delta_a1u / density, t.delta_b21u, rtol=1e-6)
    a = contribution(p, state) / state.total_moles
    assert np.isclose(a / density, t.b2bar, rtol=1e-6)


def test_residual_virial_coefficient_mixture():
    """Mixture second virial coefficient, compared to the pairwise sum."""
    p = uv.UVParameters.from_lists(
        [12.0, 24.0], [6.0, 6.0], [3.0, 4.0], [100.0, 200.0], [[0.0, 0.1], [0.1, 0.0]]
    )
    temperature = 250.0
    x = [0.4, 0.6]
    b2 = uv.residual_virial_coefficient(p, x, temperature)

    expected = 0.0
    for i in range(2):
        for j in range(2):
            expected += (
                x[i]
                * x[j]
                * p.sigma_ij[i, j] ** 3
                * uv.delta_b2(
                    temperature / p.eps_k_ij[i, j],
                    p.rep_ij[i, j],
                    p.att_ij[i, j],
                    1.0,
                    1.0,
                )
            )
    assert np.isclose(b2, expected, rtol=1e-12)
    # Attraction dominates at this temperature.
    assert b2 < 0.0


@pytest.mark.parametrize(
    "contribution", [uv.attractive_perturbation_bh, uv.attractive_perturbation_wca]
)
def test_identical_pseudo_components(contribution):
    p = methane_parameters()
    split = uv.UVParameters.from_records([p.records[0]] * 2)
    state = reduced_state(p, 1.5, 0.8, [2.0])
    state_split = uv.StateHD(state.temperature, state.volume, (1.7, 0.3))

    assert np.isclose(contribution(p, state), contribution(split, state_split))
