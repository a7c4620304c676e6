from functools import partial

import jax.numpy as jnp
from jax import jit

from tflbm.grid.grid import Grid
from tflbm.lattice.lattice import Lattice
from tflbm.operators.differential.velocity_squared import velocity_squared
from tflbm.utils.timing import time_function, TIMING_ENABLED


class Equilibrium:
    """
    Callable class to calculate the shallow water equilibrium distribution
    of the film height.

    D1Q3, following Eq. (13) of "Study of the 1D lattice Boltzmann shallow
    water equation and its coupling to build a canal network":

        f0 = h - g h^2 / (2 v^2) - h u^2 / v^2
        f1 = g h^2 / (4 v^2) + h u / (2 v) + h u^2 / (2 v^2)
        f2 = g h^2 / (4 v^2) - h u / (2 v) + h u^2 / (2 v^2)

    D2Q9, for the moving directions i = 1..8:

        fi = w_i h (3/2 g h + 3 c_i.u + 9/2 (c_i.u)^2 - 3/2 u^2)

    and the rest population takes what is left of the height, so that the sum
    over all directions is h.
    """

    def __init__(self, grid: Grid, lattice: Lattice, gravity: float = 0.0) -> None:
        self.nx: int = grid.nx
        self.ny: int = grid.ny
        self.q: int = lattice.q
        self.d: int = lattice.d
        self.v: float = lattice.v
        self.w = lattice.w
        self.c = lattice.c
        self.gravity = gravity
        self._kernel = self._equilibrium_1d if self.d == 1 else self._equilibrium_2d

    @time_function(enable_timing=TIMING_ENABLED)
    @partial(jit, static_argnums=(0,))
    def __call__(self, height, velocity):
        """
        Calculate the equilibrium distribution function.

        Args:
            height (jnp.ndarray): Film thickness, shape (nx,) or (nx, ny)
            velocity: Velocity, shape (nx,) in 1D or a VectorField in 2D

        Returns:
            jnp.ndarray: Equilibrium distribution, shape (nx, 3) or (nx, ny, 9)
        """
        return self._kernel(height, velocity)

    def _equilibrium_1d(self, h, u):
        g = self.gravity
        v = self.v
        u2 = velocity_squared(u)

        gh2 = g * h * h
        f0 = h - gh2 / (2 * v ** 2) - h * u2 / v ** 2
        f1 = gh2 / (4 * v ** 2) + h * u / (2 * v) + h * u2 / (2 * v ** 2)
        f2 = gh2 / (4 * v ** 2) - h * u / (2 * v) + h * u2 / (2 * v ** 2)

        return jnp.stack([f0, f1, f2], axis=-1)

    def _equilibrium_2d(self, h, u):
        g = self.gravity
        w = self.w
        cx, cy = self.c[0], self.c[1]
        u2 = velocity_squared(u)

        f_moving = []
        for i in range(1, self.q):
            cu = cx[i] * u.x + cy[i] * u.y
            f_moving.append(w[i] * h * (1.5 * g * h + 3 * cu + 4.5 * cu * cu - 1.5 * u2))
        f_sum = sum(f_moving)

        return jnp.stack([h - f_sum] + f_moving, axis=-1)
