from functools import partial

import jax.numpy as jnp
from jax import jit

from tflbm.fields.fields import MacroscopicState
from tflbm.grid.grid import Grid
from tflbm.lattice.lattice import Lattice
from tflbm.operators.collision import CollisionBGK, SourceTerm
from tflbm.operators.equilibrium.equilibrium import Equilibrium
from tflbm.operators.force import SlipModel, ThinFilmForce
from tflbm.operators.macroscopic.macroscopic import Macroscopic
from tflbm.operators.pressure.film_pressure import FilmPressure
from tflbm.operators.stream import Streaming
from tflbm.utils.timing import time_function, TIMING_ENABLED


class Update(object):
    """
    One collision-streaming timestep of the thin film lattice Boltzmann method.

    pressure -> equilibrium -> forced BGK collision -> streaming -> moments
    """

    def __init__(
        self,
        grid: Grid,
        lattice: Lattice,
        film_pressure: FilmPressure,
        gravity: float = 0.0,
        delta: float = 1.0,
        slip_model: SlipModel = None,
    ):
        self.grid = grid
        self.lattice = lattice
        self.slip_model = slip_model if slip_model is not None else SlipModel()
        self.omega = self.slip_model.relaxation_rate(delta)
        self.film_pressure = film_pressure
        self.equilibrium = Equilibrium(grid, lattice, gravity)
        self.force = ThinFilmForce(lattice, self.slip_model, delta)
        self.source_term = SourceTerm(lattice)
        self.collision = CollisionBGK(grid, lattice, self.omega)
        self.streaming = Streaming(lattice)
        self.macroscopic = Macroscopic(grid, lattice, film_pressure)

    @partial(jit, static_argnums=(0,))
    @time_function(enable_timing=TIMING_ENABLED)
    def __call__(self, f: jnp.ndarray, state: MacroscopicState):
        """
        Args:
            f (jnp.ndarray): Distribution function, shape (nx, q) or (nx, ny, q)
            state (MacroscopicState): Macroscopic fields belonging to f

        Returns:
            tuple: (f, state) after one timestep
        """
        height, velocity = state.height, state.velocity

        pressure = self.film_pressure(height)
        feq = self.equilibrium(height, velocity)
        source = self.source_term(self.force(height, velocity, pressure))
        fcol = self.collision(f, feq, source)

        fstream = self.streaming(fcol)
        return fstream, self.macroscopic(fstream)
