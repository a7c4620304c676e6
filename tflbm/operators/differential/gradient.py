from functools import partial

import jax.numpy as jnp
from jax import jit

from tflbm.errors import DimensionMismatchError
from tflbm.fields.fields import VectorField
from tflbm.lattice.lattice import Lattice


class Gradient:
    """
    Callable class to calculate the gradient of a periodic field using the LBM stencil.

    The implementation of the gradient operator is based on https://doi.org/10.1063/5.0072221
    """

    def __init__(self, lattice: Lattice):
        self.w = lattice.w
        self.c = lattice.c
        self.d = lattice.d
        self._kernel = self._gradient_1d if self.d == 1 else self._gradient_2d

    @partial(jit, static_argnums=(0,))
    def __call__(self, grid):
        """
        Args:
            grid (jnp.ndarray): Input field, shape (nx,) or (nx, ny)

        Returns:
            jnp.ndarray or VectorField: d/dx in 1D, (d/dx, d/dy) in 2D
        """
        if grid.ndim != self.d:
            raise DimensionMismatchError(
                f"Gradient on a D{self.d} lattice expects a {self.d}D field, got shape {grid.shape}"
            )
        return self._kernel(grid)

    def _gradient_1d(self, grid):
        grid_padded = jnp.pad(grid, pad_width=(1, 1), mode="wrap")
        return (grid_padded[2:] - grid_padded[:-2]) / 2

    def _gradient_2d(self, grid):
        w = self.w
        c = self.c

        grid_padded = jnp.pad(grid, pad_width=((1, 1), (1, 1)), mode="wrap")

        # Side nodes
        grid_ineg1_j0 = grid_padded[:-2, 1:-1]
        grid_ipos1_j0 = grid_padded[2:, 1:-1]
        grid_i0_jneg1 = grid_padded[1:-1, :-2]
        grid_i0_jpos1 = grid_padded[1:-1, 2:]

        # Corner nodes
        grid_ipos1_jpos1 = grid_padded[2:, 2:]
        grid_ineg1_jpos1 = grid_padded[:-2, 2:]
        grid_ineg1_jneg1 = grid_padded[:-2, :-2]
        grid_ipos1_jneg1 = grid_padded[2:, :-2]

        grad_x = 3 * (
            w[1] * c[0, 1] * grid_ipos1_j0
            + w[3] * c[0, 3] * grid_ineg1_j0
            + w[5] * c[0, 5] * grid_ipos1_jpos1
            + w[6] * c[0, 6] * grid_ineg1_jpos1
            + w[7] * c[0, 7] * grid_ineg1_jneg1
            + w[8] * c[0, 8] * grid_ipos1_jneg1
        )
        grad_y = 3 * (
            w[2] * c[1, 2] * grid_i0_jpos1
            + w[4] * c[1, 4] * grid_i0_jneg1
            + w[5] * c[1, 5] * grid_ipos1_jpos1
            + w[6] * c[1, 6] * grid_ineg1_jpos1
            + w[7] * c[1, 7] * grid_ineg1_jneg1
            + w[8] * c[1, 8] * grid_ipos1_jneg1
        )

        return VectorField(grad_x, grad_y)
