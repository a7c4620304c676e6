from abc import ABC, abstractmethod

import jax.numpy as jnp
from tflbm.grid.grid import Grid
from tflbm.lattice.lattice import Lattice


class CollisionBase(ABC):
    """
    Base class for LBM collision operators.
    Subclasses implement the __call__ method.
    """

    def __init__(self, grid: Grid, lattice: Lattice) -> None:
        """
        Initializes the grid and lattice parameters required for the collision step.
        Args:
            grid (Grid): Grid object containing simulation domain information
            lattice (Lattice): Lattice object containing lattice properties
        """
        self.nx: int = grid.nx
        self.ny: int = grid.ny
        self.q: int = lattice.q
        self.d: int = lattice.d

    @abstractmethod
    def __call__(self, f: jnp.ndarray, feq: jnp.ndarray, source: jnp.ndarray = None) -> jnp.ndarray:
        """
        Perform the collision step of the LBM.
        """
