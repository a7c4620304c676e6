import jax.numpy as jnp
from tflbm.grid.grid import Grid
from tflbm.lattice.lattice import Lattice
from .base import CollisionBase


class CollisionBGK(CollisionBase):
    """
    Implements the BGK (Bhatnagar-Gross-Krook) collision operator for LBM,

        f_i <- f_i + omega (f_i^eq - f_i) + S_i,

    with an optional source term S.
    """

    def __init__(self, grid: Grid, lattice: Lattice, omega: float) -> None:
        """
        Initialize the CollisionBGK operator.

        Args:
            grid (Grid): Grid object containing simulation domain information
            lattice (Lattice): Lattice object containing lattice properties
            omega (float): Relaxation rate, 1 / tau
        """
        super().__init__(grid, lattice)
        self.omega: float = omega

    def __call__(
        self, f: jnp.ndarray, feq: jnp.ndarray, source: jnp.ndarray = None
    ) -> jnp.ndarray:
        """
        Perform the BGK collision step.

        Args:
            f (jnp.ndarray): Distribution function.
            feq (jnp.ndarray): Equilibrium distribution function.
            source (jnp.ndarray, optional): Source term.

        Returns:
            jnp.ndarray: Post-collision distribution function.
        """
        fcol = (1 - self.omega) * f + self.omega * feq
        if source is None:
            return fcol
        return fcol + source
