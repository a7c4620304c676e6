from functools import partial

import jax.numpy as jnp
from jax import jit

from tflbm.errors import DimensionMismatchError
from tflbm.lattice.lattice import Lattice


class Laplacian:
    """
    Callable class to calculate the Laplacian of a periodic field.

    In 1D this is the central difference h[i-1] - 2 h[i] + h[i+1]. In 2D the
    isotropic nine point stencil of the D2Q9 lattice is used,

        lap(h) = 6 * sum_i w_i (h(x + c_i) - h(x))
               = (4 * axis neighbours + diagonal neighbours - 20 h) / 6,

    following https://doi.org/10.1063/5.0072221. Neighbours are looked up
    through periodic padding, there are no boundary cases.
    """

    def __init__(self, lattice: Lattice):
        self.w = lattice.w
        self.d = lattice.d
        self._kernel = self._laplacian_1d if self.d == 1 else self._laplacian_2d

    @partial(jit, static_argnums=(0,))
    def __call__(self, grid):
        """
        Calculate the Laplacian of a field.

        Args:
            grid (jnp.ndarray): Input field, shape (nx,) or (nx, ny)

        Returns:
            jnp.ndarray: Laplacian of the input field, same shape
        """
        if grid.ndim != self.d:
            raise DimensionMismatchError(
                f"Laplacian on a D{self.d} lattice expects a {self.d}D field, got shape {grid.shape}"
            )
        return self._kernel(grid)

    def _laplacian_1d(self, grid):
        grid_padded = jnp.pad(grid, pad_width=(1, 1), mode="wrap")

        grid_ineg1 = grid_padded[:-2]
        grid_ipos1 = grid_padded[2:]
        grid_i0 = grid_padded[1:-1]

        return grid_ineg1 - 2 * grid_i0 + grid_ipos1

    def _laplacian_2d(self, grid):
        w = self.w

        grid_padded = jnp.pad(grid, pad_width=((1, 1), (1, 1)), mode="wrap")

        grid_ineg1_j0 = grid_padded[:-2, 1:-1]
        grid_ipos1_j0 = grid_padded[2:, 1:-1]
        grid_i0_jneg1 = grid_padded[1:-1, :-2]
        grid_i0_jpos1 = grid_padded[1:-1, 2:]
        grid_ipos1_jpos1 = grid_padded[2:, 2:]
        grid_ineg1_jpos1 = grid_padded[:-2, 2:]
        grid_ineg1_jneg1 = grid_padded[:-2, :-2]
        grid_ipos1_jneg1 = grid_padded[2:, :-2]
        grid_i0_j0 = grid_padded[1:-1, 1:-1]

        return 6 * (
            w[1] * (grid_ipos1_j0 - grid_i0_j0)
            + w[2] * (grid_i0_jpos1 - grid_i0_j0)
            + w[3] * (grid_ineg1_j0 - grid_i0_j0)
            + w[4] * (grid_i0_jneg1 - grid_i0_j0)
            + w[5] * (grid_ipos1_jpos1 - grid_i0_j0)
            + w[6] * (grid_ineg1_jpos1 - grid_i0_j0)
            + w[7] * (grid_ineg1_jneg1 - grid_i0_j0)
            + w[8] * (grid_ipos1_jneg1 - grid_i0_j0)
        )
