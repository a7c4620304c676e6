"""
Tests for field containers and initial conditions.
"""

import jax.numpy as jnp
import numpy as np
import pytest

from tflbm.errors import DimensionMismatchError
from tflbm.fields import MacroscopicState, VectorField
from tflbm.grid import Grid
from tflbm.operators.initialise import Initialise


class TestMacroscopicState:

    def test_from_height_2d(self, grid_2d):
        state = MacroscopicState.from_height(np.ones(grid_2d.shape))
        assert isinstance(state.velocity, VectorField)
        state.validate(grid_2d)

    def test_from_height_1d(self, grid_1d):
        state = MacroscopicState.from_height(np.ones(grid_1d.shape), np.full(grid_1d.shape, 0.1))
        assert state.dim == 1
        state.validate(grid_1d)

    def test_mismatched_velocity(self, grid_2d):
        state = MacroscopicState.from_height(
            np.ones(grid_2d.shape), VectorField.zeros((8, 5))
        )
        with pytest.raises(DimensionMismatchError, match="velocity"):
            state.validate(grid_2d)

    def test_to_numpy(self, grid_2d):
        state = MacroscopicState.from_height(
            np.ones(grid_2d.shape), VectorField.uniform(grid_2d.shape, 0.1, 0.2)
        )
        data = state.to_numpy()
        assert isinstance(data["height"], np.ndarray)
        assert data["velocity"].shape == grid_2d.shape + (2,)
        np.testing.assert_allclose(data["velocity"][..., 1], 0.2)


class TestInitialise:

    def test_standard_2d(self, grid_2d):
        state = Initialise(grid_2d).initialise_standard(height=0.5, velocity=[0.01, -0.02])
        np.testing.assert_allclose(state.height, 0.5)
        np.testing.assert_allclose(state.velocity.x, 0.01)
        np.testing.assert_allclose(state.velocity.y, -0.02)

    def test_standard_1d(self, grid_1d):
        state = Initialise(grid_1d).initialise_standard(height=2.0, velocity=0.05)
        np.testing.assert_allclose(state.height, 2.0)
        np.testing.assert_allclose(state.velocity, 0.05)

    def test_sine_perturbation(self):
        grid = Grid((40, 3))
        state = Initialise(grid).initialise_sine_perturbation(height=1.0, amplitude=0.1)

        assert state.height.shape == (40, 3)
        assert np.isclose(jnp.mean(state.height), 1.0, rtol=1e-12)
        assert np.isclose(jnp.max(state.height), 1.1, rtol=1e-12)
        # Uniform along y
        np.testing.assert_allclose(state.height[:, 0], state.height[:, 2])
