from functools import partial

from jax import jit

from tflbm.lattice.lattice import Lattice
from tflbm.operators.differential.gradient import Gradient
from tflbm.operators.force.slip import SlipModel


class ThinFilmForce:
    """
    Callable class for the force density driving the film: the pressure
    gradient plus substrate friction. Gravity is not part of it, it enters
    through the hydrostatic term of the equilibrium.
    """

    def __init__(self, lattice: Lattice, slip_model: SlipModel, delta: float):
        self.gradient = Gradient(lattice)
        self.slip_model = slip_model
        self.delta = delta

    @partial(jit, static_argnums=(0,))
    def __call__(self, height, velocity, pressure):
        """
        Args:
            height (jnp.ndarray): Film thickness
            velocity: Film velocity, scalar field (1D) or VectorField (2D)
            pressure (jnp.ndarray): Film pressure

        Returns:
            Force density with the layout of the velocity.
        """
        grad_p = self.gradient(pressure)
        return self.slip_model.force(height, velocity, grad_p, self.delta)
