"""
Pytest tests for the Spalart-Allmaras eddy-viscosity relation.

Analytical fv1 derivatives are checked against PyTorch autograd.
"""

import pytest
import torch
import numpy as np

from flowvars.physics.spalart_allmaras import fv1, eddy_viscosity


class TestFv1Gradient:
    """Test that the analytical fv1 derivative matches autograd."""

    def test_fv1_gradient(self):
        """fv1 gradient should match autograd within tolerance."""
        torch.set_default_dtype(torch.float64)

        chi = torch.tensor([1e-3, 0.5, 5.0, 7.1, 40.0], requires_grad=True)
        val, grad_analytic = fv1(chi)

        grad_autograd = torch.autograd.grad(
            outputs=val, inputs=chi,
            grad_outputs=torch.ones_like(val)
        )[0]

        diff = (grad_analytic - grad_autograd).abs().max().item()
        assert diff < 1e-12, f"fv1 gradient mismatch: {diff:.2e}"

    def test_eddy_viscosity_differentiable(self):
        """d(mu_t)/d(nu_tilde) is available through autograd."""
        torch.set_default_dtype(torch.float64)

        nu_tilde = torch.tensor([1e-5, 1e-4, 1e-3], requires_grad=True)
        mu_t = eddy_viscosity(torch.tensor(1.2), nu_tilde, torch.tensor(1.8e-5))
        mu_t.sum().backward()

        assert torch.all(nu_tilde.grad > 0), "mu_t should grow with nu_tilde"


class TestFv1Constraints:
    """Test that fv1 satisfies its physical constraints."""

    def test_fv1_bounds(self):
        """fv1 should be in [0, 1] and monotonically increasing."""
        chi = np.linspace(0.0, 100.0, 101)
        val, grad = fv1(chi)

        assert (val >= 0).all(), "fv1 should be non-negative"
        assert (val <= 1).all(), "fv1 should be <= 1"
        assert (grad >= 0).all(), "fv1 gradient should be non-negative"

    def test_fv1_limits(self):
        """fv1(0) → 0, fv1(∞) → 1, fv1(cv1) = 1/2."""
        assert fv1(0.0)[0] < 1e-10
        assert fv1(1000.0)[0] > 0.99
        assert fv1(7.1)[0] == pytest.approx(0.5)


class TestEddyViscosity:
    """μ_t = ρ ν̃ fv1(χ)."""

    def test_negative_nu_tilde_clamped(self):
        mu_t = eddy_viscosity(1.0, np.array([-1e-3, 0.0]), 1.8e-5)
        assert np.all(mu_t == 0.0)

    def test_high_reynolds_limit(self):
        """For χ >> cv1, μ_t → ρ ν̃."""
        mu_t = eddy_viscosity(1.2, 1.0, 1.8e-5)
        assert mu_t == pytest.approx(1.2, rel=1e-9)

    def test_array_and_scalar_agree(self):
        nu = np.array([1e-5, 5e-5, 2e-4])
        field = eddy_viscosity(1.1, nu, 1.7e-5)
        for i, n in enumerate(nu):
            assert field[i] == pytest.approx(eddy_viscosity(1.1, n, 1.7e-5), rel=1e-14)
