from functools import partial

from jax import jit

from tflbm.lattice.lattice import Lattice
from tflbm.operators.differential.laplacian import Laplacian
from tflbm.operators.pressure.disjoining_pressure import DisjoiningPressure


class FilmPressure:
    """
    Callable class for the film pressure p = -gamma * lap(h) + Pi(h).

    Positive pressure thins the film locally, negative pressure thickens it.
    The force acting on the film is -h grad(p), so this sign has to match
    wherever the pressure is consumed.
    """

    def __init__(self, lattice: Lattice, disjoining_pressure: DisjoiningPressure):
        self.laplacian = Laplacian(lattice)
        self.disjoining_pressure = disjoining_pressure
        self.gamma = disjoining_pressure.gamma

    @partial(jit, static_argnums=(0,))
    def __call__(self, height):
        return -self.gamma * self.laplacian(height) + self.disjoining_pressure(height)
