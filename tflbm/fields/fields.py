from typing import NamedTuple, Union

import jax.numpy as jnp
import numpy as np

from tflbm.errors import DimensionMismatchError
from tflbm.grid.grid import Grid


class VectorField(NamedTuple):
    """Two-component vector field built from two scalar fields of equal shape."""

    x: jnp.ndarray
    y: jnp.ndarray

    @classmethod
    def zeros(cls, shape) -> "VectorField":
        return cls(jnp.zeros(shape), jnp.zeros(shape))

    @classmethod
    def uniform(cls, shape, ux: float, uy: float) -> "VectorField":
        return cls(jnp.full(shape, ux, dtype=float), jnp.full(shape, uy, dtype=float))

    def stack(self) -> jnp.ndarray:
        """Components along a trailing axis, shape (nx, ny, 2)."""
        return jnp.stack([self.x, self.y], axis=-1)


Velocity = Union[jnp.ndarray, VectorField]


class MacroscopicState(NamedTuple):
    """
    Macroscopic film quantities at one timestep.

    Attributes:
        height: Film thickness h, shape (nx,) or (nx, ny).
        velocity: Scalar field in 1D, VectorField in 2D.
        pressure: Film pressure p = -gamma * lap(h) + Pi(h).
        energy: Kinetic energy density h * u^2 / 2.
    """

    height: jnp.ndarray
    velocity: Velocity
    pressure: jnp.ndarray
    energy: jnp.ndarray

    @classmethod
    def from_height(cls, height, velocity=None) -> "MacroscopicState":
        """State with zero pressure and energy; both are filled in by the solver."""
        height = jnp.asarray(height, dtype=float)
        if velocity is None:
            velocity = jnp.zeros_like(height) if height.ndim == 1 else VectorField.zeros(height.shape)
        elif isinstance(velocity, VectorField):
            velocity = VectorField(jnp.asarray(velocity.x, dtype=float), jnp.asarray(velocity.y, dtype=float))
        else:
            velocity = jnp.asarray(velocity, dtype=float)
        return cls(height, velocity, jnp.zeros_like(height), jnp.zeros_like(height))

    @property
    def dim(self) -> int:
        return self.height.ndim

    def validate(self, grid: Grid) -> None:
        grid.check_shape("height", self.height)
        if grid.dim == 2:
            if not isinstance(self.velocity, VectorField):
                raise DimensionMismatchError("A 2D state needs a VectorField velocity")
            grid.check_shape("velocity.x", self.velocity.x)
            grid.check_shape("velocity.y", self.velocity.y)
        else:
            if isinstance(self.velocity, VectorField):
                raise DimensionMismatchError("A 1D state needs a scalar velocity field")
            grid.check_shape("velocity", self.velocity)
        grid.check_shape("pressure", self.pressure)
        grid.check_shape("energy", self.energy)

    def to_numpy(self) -> dict:
        """Snapshot of all fields as NumPy arrays, detached from device buffers."""
        velocity = self.velocity.stack() if isinstance(self.velocity, VectorField) else self.velocity
        return {
            "height": np.array(self.height),
            "velocity": np.array(velocity),
            "pressure": np.array(self.pressure),
            "energy": np.array(self.energy),
        }
