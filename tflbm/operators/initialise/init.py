import jax.numpy as jnp
import numpy as np

from tflbm.fields.fields import MacroscopicState, VectorField
from tflbm.grid.grid import Grid


class Initialise:
    """
    Handles the initialisation of the film for various scenarios.

    Every routine returns a MacroscopicState on the grid. Pressure and energy
    are left at zero and computed by the simulation from height and velocity.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.dim = grid.dim

    def _velocity(self, velocity):
        if self.dim == 1:
            return jnp.full(self.grid.shape, float(np.ravel(velocity)[0]))
        ux, uy = np.broadcast_to(np.asarray(velocity, dtype=float), (2,))
        return VectorField.uniform(self.grid.shape, ux, uy)

    def initialise_standard(self, height: float = 1.0, velocity=0.0) -> MacroscopicState:
        """
        Initialises a flat film with uniform thickness and velocity.

        Args:
            height (float): Initial film thickness.
            velocity: Scalar in 1D, [ux, uy] in 2D.

        Returns:
            MacroscopicState: Initial state.
        """
        h = jnp.full(self.grid.shape, height, dtype=float)
        return MacroscopicState.from_height(h, self._velocity(velocity))

    def initialise_sine_perturbation(
        self, height: float = 1.0, amplitude: float = 0.1, wavenumber: int = 1
    ) -> MacroscopicState:
        """
        Initialises a film at rest with a sinusoidal thickness perturbation
        along x, the classic setup for spinodal dewetting and rupture.

        Args:
            height (float): Mean film thickness.
            amplitude (float): Relative amplitude of the perturbation.
            wavenumber (int): Number of periods over the domain length.

        Returns:
            MacroscopicState: Initial state.
        """
        x = jnp.arange(self.grid.nx)
        profile = height * (1 + amplitude * jnp.sin(2 * jnp.pi * wavenumber * x / self.grid.nx))
        if self.dim == 2:
            profile = jnp.broadcast_to(profile[:, None], self.grid.shape)
        return MacroscopicState.from_height(profile, self._velocity(0.0))

    def init_from_npz(self, path: str) -> MacroscopicState:
        """
        Restart from a state dumped by SimulationIO.

        Args:
            path (str): Path to a timestep_<t>.npz file.

        Returns:
            MacroscopicState: The stored height and velocity.
        """
        data = np.load(path)
        height = jnp.asarray(data["height"])
        velocity = data["velocity"]
        if self.dim == 2:
            velocity = VectorField(jnp.asarray(velocity[..., 0]), jnp.asarray(velocity[..., 1]))
        state = MacroscopicState.from_height(height, velocity)
        state.validate(self.grid)
        return state
