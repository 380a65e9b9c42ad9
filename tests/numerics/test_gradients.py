"""
Tests for the Numba vorticity and strain-rate kernels.
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from flowvars.numerics.gradients import (
    vorticity_vector,
    strain_rate_magnitude,
    compute_vorticity,
    compute_strain_rate,
)


def reference_vorticity(g):
    """Curl of velocity from a (n_dim, n_dim) gradient, padded to 3D."""
    G = np.zeros((3, 3))
    G[:g.shape[0], :g.shape[1]] = g
    return np.array([G[2, 1] - G[1, 2], G[0, 2] - G[2, 0], G[1, 0] - G[0, 1]])


def reference_strain(g):
    """sqrt(2 S'_ij S'_ij) with the deviatoric strain S'."""
    S = 0.5 * (g + g.T)
    S -= np.trace(g) / 3.0 * np.eye(g.shape[0])
    return np.sqrt(2.0 * np.sum(S * S))


class TestSingleTensor:

    @pytest.mark.parametrize("n_dim", [2, 3])
    def test_vorticity_random(self, n_dim, rng):
        for _ in range(20):
            g = rng.normal(size=(n_dim, n_dim))
            assert_allclose(vorticity_vector(g), reference_vorticity(g), atol=1e-14)

    def test_vorticity_2d_only_z(self, rng):
        omega = vorticity_vector(rng.normal(size=(2, 2)))
        assert omega[0] == 0.0 and omega[1] == 0.0

    def test_out_buffer(self):
        out = np.full(3, 7.0)
        result = vorticity_vector(np.array([[0.0, 1.0], [0.0, 0.0]]), out=out)
        assert result is out
        assert_allclose(out, [0.0, 0.0, -1.0])

    @pytest.mark.parametrize("n_dim", [2, 3])
    def test_strain_random(self, n_dim, rng):
        for _ in range(20):
            g = rng.normal(size=(n_dim, n_dim))
            assert strain_rate_magnitude(g) == pytest.approx(reference_strain(g), rel=1e-12)

    def test_strain_pure_shear(self):
        g = np.zeros((3, 3))
        g[0, 1] = 2.0
        assert strain_rate_magnitude(g) == pytest.approx(2.0)

    def test_strain_rotation_free_of_strain(self):
        g = np.array([[0.0, -3.0], [3.0, 0.0]])
        assert strain_rate_magnitude(g) == pytest.approx(0.0, abs=1e-14)

    def test_strain_isotropic_expansion(self):
        """Pure dilatation has no deviatoric strain in 3D."""
        assert strain_rate_magnitude(2.0 * np.eye(3)) == pytest.approx(0.0, abs=1e-14)


class TestStackedKernels:

    @pytest.mark.parametrize("n_dim", [2, 3])
    def test_field_matches_single(self, n_dim, rng):
        g = rng.normal(size=(30, n_dim, n_dim))
        omega = compute_vorticity(g)
        s_mag = compute_strain_rate(g)
        assert omega.shape == (30, 3)
        assert s_mag.shape == (30,)
        for n in range(30):
            assert_allclose(omega[n], vorticity_vector(g[n]), atol=1e-14)
            assert s_mag[n] == pytest.approx(strain_rate_magnitude(g[n]), rel=1e-14)

    def test_non_contiguous_input(self, rng):
        g = rng.normal(size=(10, 3, 3)).transpose(0, 2, 1)
        assert_allclose(compute_strain_rate(g),
                        [reference_strain(np.ascontiguousarray(x)) for x in g], rtol=1e-12)
