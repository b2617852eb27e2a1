import casadi as ca
import numpy as np
import pytest
from numpy.testing import assert_allclose

from transcriptolab import radau
from transcriptolab.exceptions import BasisConstructionError, ConfigurationError
from transcriptolab.radau import compute_radau_collocation_components


class TestRadauMathematicalCorrectness:
    @pytest.mark.parametrize("N", [1, 2, 3, 4, 5, 8, 10, 15])
    def test_radau_nodes_are_right_sided_on_unit_interval(self, N):
        components = compute_radau_collocation_components(N)
        nodes = components.collocation_nodes

        assert nodes.shape == (N,)
        assert nodes[-1] == pytest.approx(1.0, abs=1e-15)
        assert nodes[0] > 0.0
        assert np.all(np.diff(nodes) > 0.0)

    @pytest.mark.parametrize("N", [1, 2, 3, 4, 5, 6, 7, 8, 9])
    def test_nodes_match_casadi_collocation_points(self, N):
        components = compute_radau_collocation_components(N)

        assert_allclose(
            components.collocation_nodes, ca.collocation_points(N, "radau"), rtol=0, atol=1e-10
        )
        if N > 1:
            assert_allclose(
                components.legendre_roots,
                ca.collocation_points(N - 1, "legendre"),
                rtol=0,
                atol=1e-10,
            )

    def test_known_low_degree_values(self):
        one = compute_radau_collocation_components(1)
        assert_allclose(one.collocation_nodes, [1.0])
        assert_allclose(one.quadrature_weights, [1.0])
        assert_allclose(one.differentiation_matrix, [[-1.0], [1.0]])
        assert one.legendre_roots.shape == (0,)

        two = compute_radau_collocation_components(2)
        assert_allclose(two.collocation_nodes, [1.0 / 3.0, 1.0], atol=1e-15)
        assert_allclose(two.quadrature_weights, [0.75, 0.25], atol=1e-15)
        assert_allclose(two.legendre_roots, [0.5], atol=1e-15)

        three = compute_radau_collocation_components(3)
        assert_allclose(
            three.legendre_roots, [0.5 - np.sqrt(3) / 6, 0.5 + np.sqrt(3) / 6], atol=1e-14
        )

    @pytest.mark.parametrize("N", [1, 2, 3, 4, 5])
    def test_radau_quadrature_exactness(self, N):
        components = compute_radau_collocation_components(N)
        nodes = components.collocation_nodes
        weights = components.quadrature_weights

        # Radau quadrature is exact for polynomials up to degree 2N-2
        for degree in range(2 * N - 1):
            radau_integral = np.sum(weights * nodes**degree)
            exact_integral = 1.0 / (degree + 1)

            assert abs(radau_integral - exact_integral) < 1e-13, (
                f"Quadrature exactness failed for N={N}, degree={degree}: "
                f"Radau={radau_integral}, Exact={exact_integral}"
            )

    @pytest.mark.parametrize("N", [1, 2, 3, 4, 5])
    def test_differentiation_matrix_accuracy(self, N):
        components = compute_radau_collocation_components(N)
        state_nodes = components.state_approximation_nodes
        colloc_nodes = components.collocation_nodes
        diff_matrix = components.differentiation_matrix

        assert diff_matrix.shape == (N + 1, N)

        # N + 1 state nodes represent polynomials up to degree N exactly
        for power in range(N + 1):
            func_values = state_nodes**power
            computed_derivatives = func_values @ diff_matrix
            exact_derivatives = power * colloc_nodes ** max(power - 1, 0)
            if power == 0:
                exact_derivatives = np.zeros_like(colloc_nodes)

            max_error = np.max(np.abs(computed_derivatives - exact_derivatives))
            assert max_error < 1e-10, (
                f"Differentiation matrix failed for x^{power} with N={N}: max_error={max_error}"
            )

    @pytest.mark.parametrize("N", [1, 3, 7, 12])
    def test_construction_is_bit_reproducible(self, N):
        first = compute_radau_collocation_components(N)
        second = compute_radau_collocation_components(N)

        assert np.array_equal(first.collocation_nodes, second.collocation_nodes)
        assert np.array_equal(first.quadrature_weights, second.quadrature_weights)
        assert np.array_equal(first.differentiation_matrix, second.differentiation_matrix)
        assert np.array_equal(first.legendre_roots, second.legendre_roots)

    def test_basis_arrays_are_read_only(self):
        components = compute_radau_collocation_components(3)

        with pytest.raises(ValueError):
            components.differentiation_matrix[0, 0] = 1.0
        with pytest.raises(ValueError):
            components.quadrature_weights[0] = 1.0


class TestRadauBasisErrors:
    @pytest.mark.parametrize("degree", [0, -1, 2.5, True, "3", None])
    def test_invalid_degree_rejected(self, degree):
        with pytest.raises(ConfigurationError):
            compute_radau_collocation_components(degree)

    def test_non_finite_roots_raise_basis_error(self, monkeypatch):
        def broken_roots_jacobi(n, alpha, beta, mu=False):
            nan_roots = np.full(n, np.nan)
            if mu:
                return nan_roots, np.ones(n), 2.0
            return nan_roots, np.ones(n)

        monkeypatch.setattr(radau, "roots_jacobi", broken_roots_jacobi)

        with pytest.raises(BasisConstructionError, match="NaN or Inf"):
            compute_radau_collocation_components(4)

    def test_out_of_range_roots_raise_basis_error(self, monkeypatch):
        def shifted_roots_jacobi(n, alpha, beta, mu=False):
            roots = np.linspace(-3.0, -2.0, n)
            if mu:
                return roots, np.ones(n), 2.0
            return roots, np.ones(n)

        monkeypatch.setattr(radau, "roots_jacobi", shifted_roots_jacobi)

        with pytest.raises(BasisConstructionError):
            compute_radau_collocation_components(3)

    def test_coincident_roots_raise_basis_error(self, monkeypatch):
        def repeated_roots_jacobi(n, alpha, beta, mu=False):
            roots = np.full(n, -0.25)
            if mu:
                return roots, np.ones(n), 2.0
            return roots, np.ones(n)

        monkeypatch.setattr(radau, "roots_jacobi", repeated_roots_jacobi)

        with pytest.raises(BasisConstructionError, match="strictly increasing"):
            compute_radau_collocation_components(4)

    def test_inconsistent_weights_raise_basis_error(self, monkeypatch):
        exact_roots_jacobi = radau.roots_jacobi

        def scaled_weights_roots_jacobi(n, alpha, beta, mu=False):
            if mu:
                roots, weights, total = exact_roots_jacobi(n, alpha, beta, mu=True)
                return roots, 3.0 * weights, total
            return exact_roots_jacobi(n, alpha, beta, mu=False)

        monkeypatch.setattr(radau, "roots_jacobi", scaled_weights_roots_jacobi)

        with pytest.raises(BasisConstructionError, match="sum to"):
            compute_radau_collocation_components(3)
