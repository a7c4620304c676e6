from functools import partial

from jax import jit

from tflbm.fields.fields import VectorField


class VelocitySquared:
    """
    Callable class for the squared velocity magnitude u^2, pointwise.

    A VectorField gives ux^2 + uy^2, a scalar (1D) velocity field gives u*u.
    """

    @partial(jit, static_argnums=(0,))
    def __call__(self, velocity):
        if isinstance(velocity, VectorField):
            return velocity.x * velocity.x + velocity.y * velocity.y
        return velocity * velocity


velocity_squared = VelocitySquared()
