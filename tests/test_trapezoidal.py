import numpy as np
import pytest
from numpy.testing import assert_allclose

from transcriptolab import (
    ConfigurationError,
    DimensionMismatchError,
    Mesh,
    ProblemDimensions,
    TranscriptionScheme,
    Trapezoidal,
)


def make_trapezoidal(mesh=(0.0, 0.25, 1.0), num_states=1, final_time=4.0, **counts):
    return Trapezoidal(ProblemDimensions(num_states, **counts), list(mesh), final_time=final_time)


class TestTrapezoidal:
    def test_grid_is_the_mesh(self):
        trapezoidal = make_trapezoidal()

        assert trapezoidal.num_grid_points == 3
        assert_allclose(trapezoidal.create_grid(), [0.0, 0.25, 1.0])
        assert_allclose(trapezoidal.grid_times, [0.0, 1.0, 4.0])
        assert_allclose(trapezoidal.create_mesh_indices(), [1.0, 1.0, 1.0])

    def test_quadrature(self):
        coefficients = make_trapezoidal().create_quadrature_coefficients()

        assert_allclose(coefficients, [0.5, 2.0, 1.5])
        assert coefficients.sum() == pytest.approx(4.0)

    def test_linear_trajectory_has_zero_defects(self):
        trapezoidal = make_trapezoidal(num_states=2)
        rates = np.array([[2.0], [-1.0]])
        states = rates * trapezoidal.grid_times
        derivatives = np.repeat(rates, 3, axis=1)

        defects = trapezoidal.calc_defects(trapezoidal.split_states(states), derivatives)

        assert defects.shape == (2, 2)
        assert_allclose(defects, 0.0, atol=1e-14)

    def test_defect_value(self):
        trapezoidal = make_trapezoidal()
        states = np.array([[0.0, 1.0, 1.0]])
        derivatives = np.array([[0.0, 2.0, 0.0]])

        defects = trapezoidal.calc_defects(trapezoidal.split_states(states), derivatives)

        # Interval 0: h=1, 1 - 0 - 0.5*(0 + 2); interval 1: h=3, 0 - 1.5*(2 + 0)
        assert_allclose(defects, [[0.0, -3.0]])

    def test_no_interpolation_residuals(self):
        trapezoidal = make_trapezoidal(num_controls=2)

        assert trapezoidal.calc_interpolating_controls(np.ones((2, 3))).shape == (2, 0)
        assert trapezoidal.calc_interpolating_multipliers(None).shape == (0, 0)

    def test_dimension_mismatch(self):
        trapezoidal = make_trapezoidal()

        with pytest.raises(DimensionMismatchError):
            trapezoidal.calc_defects([np.zeros((1, 3)), np.zeros((1, 2))], np.zeros((1, 3)))

    def test_satisfies_transcription_interface(self):
        assert isinstance(make_trapezoidal(), TranscriptionScheme)

    def test_prebuilt_mesh_rejects_separate_horizon(self):
        mesh = Mesh.uniform(3)

        with pytest.raises(ConfigurationError, match="prebuilt Mesh"):
            Trapezoidal(ProblemDimensions(1), mesh, final_time=2.0)

        assert Trapezoidal(ProblemDimensions(1), mesh).mesh is mesh
