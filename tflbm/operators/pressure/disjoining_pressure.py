from functools import partial
from typing import Tuple

import jax.numpy as jnp
from jax import jit

from tflbm.errors import ConfigurationError
from tflbm.grid.grid import Grid
from tflbm.operators.pressure.contact_angle import resolve_contact_angle


class DisjoiningPressure:
    """
    Callable class for the power-law disjoining pressure of a thin film.

        kappa = gamma * (1 - cos(pi theta)) * (n - 1)(m - 1) / ((n - m) h*)
        Pi(h) = kappa * ((h*/h)^n - (h*/h)^m)

    Pi vanishes at the precursor thickness h* and is the wetting potential that
    lets a film dewet without a moving contact line singularity. Heights that
    are zero or negative give non-finite values.
    """

    def __init__(
        self,
        grid: Grid,
        gamma: float = 0.01,
        theta=1 / 9,
        hmin: float = 0.1,
        exponents: Tuple[int, int] = (9, 3),
    ):
        """
        Args:
            grid (Grid): Lattice extents, used to resolve the contact angle field.
            gamma (float): Surface tension.
            theta: Contact angle in units of pi. Scalar, one-element array,
                full-domain array, or a contact angle variant.
            hmin (float): Precursor film thickness h*.
            exponents (tuple): Power-law exponents (n, m), n != m.
        """
        n, m = exponents
        if n == m:
            raise ConfigurationError(f"Disjoining pressure exponents must differ, got n = m = {n}")
        if hmin <= 0:
            raise ConfigurationError(f"Precursor film thickness must be positive, got {hmin}")
        if gamma < 0:
            raise ConfigurationError(f"Surface tension must be non-negative, got {gamma}")

        self.gamma = gamma
        self.hmin = hmin
        self.n = n
        self.m = m
        self.theta = resolve_contact_angle(theta, grid.shape)
        self.kappa = (
            gamma
            * (1 - jnp.cos(jnp.pi * self.theta))
            * (n - 1)
            * (m - 1)
            / ((n - m) * hmin)
        )

    @partial(jit, static_argnums=(0,))
    def __call__(self, height):
        """
        Args:
            height (jnp.ndarray): Film thickness, shape (nx,) or (nx, ny)

        Returns:
            jnp.ndarray: Disjoining pressure, same shape
        """
        ratio = self.hmin / height
        return self.kappa * (ratio ** self.n - ratio ** self.m)
