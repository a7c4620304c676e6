from functools import partial

import jax.numpy as jnp
from jax import jit

from tflbm.fields.fields import MacroscopicState, VectorField
from tflbm.grid.grid import Grid
from tflbm.lattice.lattice import Lattice
from tflbm.operators.differential.velocity_squared import velocity_squared
from tflbm.operators.pressure.film_pressure import FilmPressure
from tflbm.utils.timing import time_function, TIMING_ENABLED


class Macroscopic:
    """
    Calculates the macroscopic film fields from the population distribution.

    The height is the zeroth moment and the velocity the first moment divided
    by the height. Pressure and kinetic energy of the recovered height and
    velocity complete the state.
    """

    def __init__(self, grid: Grid, lattice: Lattice, film_pressure: FilmPressure) -> None:
        self.nx: int = grid.nx
        self.ny: int = grid.ny
        self.q: int = lattice.q
        self.d: int = lattice.d
        self.c = jnp.array(lattice.c)
        self.film_pressure = film_pressure

    @time_function(enable_timing=TIMING_ENABLED)
    @partial(jit, static_argnums=(0,))
    def __call__(self, f: jnp.ndarray) -> MacroscopicState:
        """
        Args:
            f (jnp.ndarray): Population distribution, shape (nx, q) or (nx, ny, q)
        Returns:
            MacroscopicState: height, velocity, pressure and energy
        """
        height = jnp.sum(f, axis=-1)
        if self.d == 1:
            velocity = jnp.sum(f * self.c[0], axis=-1) / height
        else:
            velocity = VectorField(
                jnp.sum(f * self.c[0], axis=-1) / height,
                jnp.sum(f * self.c[1], axis=-1) / height,
            )
        return self.complete(height, velocity)

    @partial(jit, static_argnums=(0,))
    def complete(self, height, velocity) -> MacroscopicState:
        """State with pressure and energy computed from height and velocity."""
        pressure = self.film_pressure(height)
        energy = 0.5 * height * velocity_squared(velocity)
        return MacroscopicState(height, velocity, pressure, energy)
