from typing import Tuple

import numpy as np

from tflbm.errors import ConfigurationError, DimensionMismatchError


class Grid(object):
    """
    Fixed-size periodic lattice. Every dimension wraps around, so there are
    no edges to treat separately.
    """

    def __init__(self, shape: Tuple[int, ...]):
        self.shape = tuple(int(n) for n in shape)
        self.dim = len(self.shape)
        if self.dim not in (1, 2):
            raise ConfigurationError(f"Only 1D and 2D grids are supported, got shape {shape}")
        if any(n < 1 for n in self.shape):
            raise ConfigurationError(f"Grid extents must be positive, got {shape}")
        if self.dim == 1:
            self.nx = self.shape[0]
            self.ny = 1
        else:
            self.nx, self.ny = self.shape

    @classmethod
    def from_constants(cls, constants) -> "Grid":
        return cls(constants.shape)

    def check_shape(self, name: str, field) -> None:
        shape = tuple(np.shape(field))
        if shape != self.shape:
            raise DimensionMismatchError(
                f"Field '{name}' has shape {shape}, expected {self.shape}"
            )
