from typing import NamedTuple, Tuple, Union

import jax.numpy as jnp
import numpy as np

from tflbm.errors import ConfigurationError, DimensionMismatchError


class UniformContactAngle(NamedTuple):
    """Equilibrium contact angle, in units of pi, shared by every lattice site."""

    value: float

    def field(self, shape: Tuple[int, ...]) -> jnp.ndarray:
        return jnp.full(shape, self.value, dtype=float)


class PerSiteContactAngle(NamedTuple):
    """Contact angle per lattice site, in units of pi, for patterned substrates."""

    values: jnp.ndarray

    def field(self, shape: Tuple[int, ...]) -> jnp.ndarray:
        if tuple(self.values.shape) != tuple(shape):
            raise DimensionMismatchError(
                f"Contact angle field has shape {tuple(self.values.shape)}, expected {tuple(shape)}"
            )
        return jnp.asarray(self.values, dtype=float)

    @classmethod
    def chemical_step(cls, shape, theta_left: float, theta_right: float, step_location: float = 0.5):
        """
        Substrate with two wettabilities split along x at `step_location`
        (fraction of the domain length).
        """
        if not 0.0 < step_location < 1.0:
            raise ConfigurationError(f"step_location must lie in (0, 1), got {step_location}")
        step = int(shape[0] * step_location)
        values = np.full(shape, theta_right, dtype=float)
        values[:step, ...] = theta_left
        return cls(jnp.asarray(values))


ContactAngle = Union[UniformContactAngle, PerSiteContactAngle]


def as_contact_angle(theta, shape: Tuple[int, ...]) -> ContactAngle:
    """
    Turn a user supplied contact angle into one of the two variants.

    Accepts a scalar, a one-element array (uniform) or an array with the full
    domain shape (per site). Anything else is a shape error.
    """
    if isinstance(theta, (UniformContactAngle, PerSiteContactAngle)):
        return theta
    theta = np.asarray(theta, dtype=float)
    if theta.size == 1:
        return UniformContactAngle(float(theta.reshape(-1)[0]))
    if theta.shape == tuple(shape):
        return PerSiteContactAngle(jnp.asarray(theta))
    raise DimensionMismatchError(
        f"Contact angle must be a single value or have shape {tuple(shape)}, got {theta.shape}"
    )


def resolve_contact_angle(theta, shape: Tuple[int, ...]) -> jnp.ndarray:
    """Per-site contact angle field, resolved once so kernels never branch on shape."""
    return as_contact_angle(theta, shape).field(shape)
