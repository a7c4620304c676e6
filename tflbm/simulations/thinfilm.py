import jax.numpy as jnp

from tflbm.config.input_constants import InputConstants
from tflbm.errors import ConfigurationError, DimensionMismatchError
from tflbm.fields.fields import MacroscopicState
from tflbm.operators.force import SlipModel
from tflbm.operators.initialise.init import Initialise
from tflbm.operators.pressure import DisjoiningPressure, FilmPressure
from tflbm.operators.update.update import Update
from .base import BaseSimulation


class ThinFilmSimulation(BaseSimulation):
    """
    Thin film on a periodic 1D (D1Q3) or 2D (D2Q9) lattice, selected from
    the configured extents.
    """

    def __init__(
        self,
        constants: InputConstants,
        lattice_type: str = None,
        tau: float = 1.0,
        theta=1 / 9,
        hmin: float = 0.1,
        exponents=(9, 3),
    ):
        super().__init__(constants, lattice_type)
        if self.lattice.d != self.grid.dim:
            raise ConfigurationError(
                f"Lattice {self.lattice.name} does not match a {self.grid.dim}D grid {self.grid.shape}"
            )
        self.tau = tau
        self.theta = theta
        self.hmin = hmin
        self.exponents = tuple(exponents)

        self.slip_model = None
        self.disjoining_pressure = None
        self.film_pressure = None
        self.initialiser = None
        self.update = None
        self.macroscopic = None
        self.setup_operators()

    def setup_operators(self):
        c = self.constants
        self.slip_model = SlipModel(self.tau)
        self.disjoining_pressure = DisjoiningPressure(
            self.grid,
            gamma=c.gamma,
            theta=self.theta,
            hmin=self.hmin,
            exponents=self.exponents,
        )
        self.film_pressure = FilmPressure(self.lattice, self.disjoining_pressure)
        self.initialiser = Initialise(self.grid)
        self.update = Update(
            self.grid,
            self.lattice,
            self.film_pressure,
            gravity=c.gravity,
            delta=c.delta,
            slip_model=self.slip_model,
        )
        self.macroscopic = self.update.macroscopic

    def initialize_fields(self, init_type="standard", *, init_dir=None, **init_kwargs):
        if init_type == "init_from_file":
            if init_dir is None:
                raise ConfigurationError(
                    "init_from_file requires init_dir pointing to a .npz file"
                )
            state = self.initialiser.init_from_npz(init_dir)
        elif init_type == "sine":
            state = self.initialiser.initialise_sine_perturbation(**init_kwargs)
        elif init_type == "standard":
            state = self.initialiser.initialise_standard(**init_kwargs)
        else:
            raise ConfigurationError(f"Unknown init_type: {init_type}")
        return self.prepare(state)

    def prepare(self, state: MacroscopicState):
        """
        Validate an initial state against the configured extents, fill in its
        pressure and energy and build the equilibrium populations.

        Returns:
            tuple: (f, state)
        """
        if not isinstance(state, MacroscopicState):
            raise DimensionMismatchError(
                f"Initial condition must be a MacroscopicState, got {type(state).__name__}"
            )
        state.validate(self.grid)
        state = self.macroscopic.complete(
            jnp.asarray(state.height, dtype=float), state.velocity
        )
        f = self.update.equilibrium(state.height, state.velocity)
        return f, state

    def run_timestep(self, fprev, state):
        return self.update(fprev, state)
