"""Tests of the reference perturbation contributions in
:mod:`uvtheory.reference_perturbation`."""

from __future__ import annotations

import numpy as np
import pytest

import uvtheory as uv
from tests.uvtheory import correlated_diameters, reduced_parameters, reduced_state


@correlated_diameters
def test_reference_perturbation_bh():
    p = reduced_parameters(24.0, 6.0)
    state = reduced_state(p, 4.0, 1.0, [2.0])
    a = uv.reference_perturbation_bh(p, state) / state.total_moles
    assert np.isclose(a, -0.0611105573289734, rtol=0.0, atol=1e-10)


@correlated_diameters
@pytest.mark.parametrize("moles", [[2.0], [1.7, 0.3]])
def test_reference_perturbation_wca(moles: list[float]):
    p = reduced_parameters(24.0, 6.0)
    if len(moles) == 2:
        p = uv.UVParameters.from_records([p.records[0]] * 2)
    state = reduced_state(p, 4.0, 1.0, moles)
    a = uv.reference_perturbation_wca(p, state) / state.total_moles
    assert np.isclose(a, 0.258690311450425, rtol=0.0, atol=1e-10)


@pytest.mark.parametrize(
    "contribution", [uv.reference_perturbation_bh, uv.reference_perturbation_wca]
)
@pytest.mark.parametrize("reduced_temperature", [1.0, 4.0])
def test_identical_pseudo_components(contribution, reduced_temperature: float):
    """A mixture of identical components reproduces the pure component."""
    p = reduced_parameters(24.0, 6.0, sigma=2.0)
    split = uv.UVParameters.from_records([p.records[0]] * 2)
    state = reduced_state(p, reduced_temperature, 1.0, [2.0])
    state_split = uv.StateHD(state.temperature, state.volume, (1.7, 0.3))

    a_pure = contribution(p, state) / state.total_moles
    a_split = contribution(split, state_split) / state_split.total_moles
    assert np.isclose(a_pure, a_split, rtol=1e-12)


@pytest.mark.parametrize(
    "contribution, order",
    [(uv.reference_perturbation_bh, 2.0), (uv.reference_perturbation_wca, 1.0)],
)
def test_low_density_limit(contribution, order: float):
    """The BH contribution per particle vanishes quadratically with density, since
    both effective packing fractions vanish. The WCA contribution per particle
    vanishes linearly, due to the different lengths ``d`` and ``q``."""
    p = reduced_parameters(12.0, 6.0)
    a = [contribution(p, reduced_state(p, 2.0, rho, [1.0])) for rho in [1e-5, 2e-5]]
    assert np.isclose(a[1] / a[0], 2.0**order, rtol=1e-2)


def test_packing_fraction_transforms():
    """Without difference in lengths, the transforms are the identity."""
    rp = uv.reference_perturbation
    for coefficients in [rp.BH_ETA_A, rp.WCA_ETA_A]:
        assert uv.eta_a(0.3, 0.0, 12.0, coefficients) == 0.3
    for coefficients in [rp.BH_ETA_B, rp.WCA_ETA_B]:
        assert uv.eta_b(0.3, 0.0, coefficients) == 0.3

    # The leading term in eta is linear.
    eta = 1e-8
    tau = 0.05
    c = rp.BH_ETA_A[0]
    slope = 1.0 + tau * (c[0] + c[1] / 12.0) + tau**2 * (c[2] + c[3] / 12.0)
    assert np.isclose(uv.eta_a(eta, tau, 12.0, rp.BH_ETA_A) / eta, slope, rtol=1e-6)
