import jax.numpy as jnp

from tflbm.fields.fields import VectorField
from tflbm.lattice.lattice import Lattice


class SourceTerm:
    """
    Callable class to distribute a force density over the populations,

        S_i = w_i c_i . F / cs^2,   cs^2 = 1/3.

    Both lattices give sum_i S_i = 0 and sum_i c_i S_i = F, so the source adds
    momentum F per timestep and leaves the height untouched. On D1Q3 this is
    S = (0, F / 2, -F / 2).
    """

    def __init__(self, lattice: Lattice):
        self.q: int = lattice.q
        self.d: int = lattice.d
        self.w = lattice.w
        self.c = lattice.c

    def __call__(self, force) -> jnp.ndarray:
        """
        Args:
            force: Force density, shape (nx,) in 1D or a VectorField in 2D

        Returns:
            jnp.ndarray: Source term, shape (nx, 3) or (nx, ny, 9)
        """
        w = self.w
        if isinstance(force, VectorField):
            cx, cy = self.c[0], self.c[1]
            source = [3 * w[i] * (cx[i] * force.x + cy[i] * force.y) for i in range(self.q)]
        else:
            cx = self.c[0]
            source = [3 * w[i] * cx[i] * force for i in range(self.q)]
        return jnp.stack(source, axis=-1)
