import jax.numpy as jnp
from tflbm.lattice.lattice import Lattice


class Streaming:
    """
    Callable class to perform the streaming step of the LBM. Every population
    moves one lattice link along its velocity, wrapping around periodically.
    """

    def __init__(self, lattice: Lattice):
        self.c = lattice.c  # Shape: (d, q)
        self.q = lattice.q
        self.d = lattice.d

    def __call__(self, f):
        """
        Perform the streaming step of the LBM.

        Args:
            f (jnp.ndarray): Distribution function, shape (nx, q) or (nx, ny, q)

        Returns:
            jnp.ndarray: Post-streaming distribution function.
        """
        for i in range(self.q):
            shift = tuple(int(s) for s in self.c[:, i])
            f = f.at[..., i].set(
                jnp.roll(f[..., i], shift, axis=tuple(range(self.d)))
            )
        return f
