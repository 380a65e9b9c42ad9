"""
Tests for the batched clipped and conservative updates.
"""

import numpy as np
from numpy.testing import assert_allclose

from flowvars.numerics.updates import apply_clipped_update, apply_conservative_update
from flowvars.physics.jax_config import jnp


class TestClippedUpdate:

    def test_always_in_bounds(self, rng):
        Q_old = jnp.asarray(rng.uniform(0.0, 1.0, 500))
        dQ = jnp.asarray(rng.normal(scale=10.0, size=500))
        Q = np.asarray(apply_clipped_update(Q_old, dQ, 0.0, 1.0))
        assert np.all((Q >= 0.0) & (Q <= 1.0))

    def test_interior_values_unchanged_by_clip(self):
        Q = apply_clipped_update(jnp.asarray([0.5, 0.2]), jnp.asarray([0.1, -0.1]), 0.0, 1.0)
        assert_allclose(np.asarray(Q), [0.6, 0.1], rtol=1e-14)

    def test_array_bounds(self):
        Q = apply_clipped_update(jnp.zeros(3), jnp.asarray([5.0, 5.0, -5.0]),
                                 jnp.asarray([0.0, 0.0, -1.0]), jnp.asarray([1.0, 10.0, 1.0]))
        assert_allclose(np.asarray(Q), [1.0, 5.0, -1.0])


class TestConservativeUpdate:

    def test_formula(self, rng):
        Q_old = rng.uniform(0.0, 1.0, 50)
        dQ = rng.normal(scale=0.1, size=50)
        rho = rng.uniform(0.5, 2.0, 50)
        rho_old = rng.uniform(0.5, 2.0, 50)
        Q = apply_conservative_update(jnp.asarray(Q_old), jnp.asarray(dQ), jnp.asarray(rho),
                                      jnp.asarray(rho_old), -np.inf, np.inf)
        assert_allclose(np.asarray(Q), (Q_old * rho_old + dQ) / rho, rtol=1e-14)

    def test_equal_unit_density_matches_clipped(self, rng):
        Q_old = jnp.asarray(rng.uniform(0.0, 1.0, 100))
        dQ = jnp.asarray(rng.normal(size=100))
        ones = jnp.ones(100)
        Q_cons = apply_conservative_update(Q_old, dQ, ones, ones, 0.0, 1.0)
        Q_clip = apply_clipped_update(Q_old, dQ, 0.0, 1.0)
        assert_allclose(np.asarray(Q_cons), np.asarray(Q_clip), rtol=1e-15)

    def test_conserves_density_weighted_quantity(self):
        Q = apply_conservative_update(jnp.asarray([2.0]), jnp.asarray([0.0]),
                                      jnp.asarray([4.0]), jnp.asarray([1.0]), 0.0, 10.0)
        assert_allclose(np.asarray(Q) * 4.0, [2.0])
