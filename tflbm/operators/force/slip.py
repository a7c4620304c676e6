from tflbm.errors import ConfigurationError
from tflbm.fields.fields import VectorField


class SlipModel:
    """
    Couples the slip length to the lattice Boltzmann relaxation and to the
    friction the substrate exerts on the film.

    Following "Lattice Boltzmann method for thin-liquid-film hydrodynamics"
    (Zitz et al., PRE 100, 033313) the relaxation time is kept at tau = 1 by
    default and the slip length only enters through the friction coefficient

        alpha(h) = 6 h / (2 h^2 + 6 delta h + 3 delta^2),

    which reduces to the lubrication result 3 / h for delta -> 0. The force
    density acting on the film is

        F = -h grad(p) - nu alpha(h) u,    nu = (2 tau - 1) / 6.
    """

    def __init__(self, tau: float = 1.0):
        if tau <= 0.5:
            raise ConfigurationError(f"Relaxation time must be larger than 1/2, got {tau}")
        self.tau = tau
        self.viscosity = (2 * tau - 1) / 6

    def relaxation_rate(self, delta: float) -> float:
        """BGK relaxation rate omega = 1 / tau."""
        if delta <= 0:
            raise ConfigurationError(f"Slip length must be positive, got {delta}")
        return 1.0 / self.tau

    @staticmethod
    def friction(height, delta: float):
        return 6 * height / (2 * height * height + 6 * delta * height + 3 * delta * delta)

    def force(self, height, velocity, pressure_gradient, delta: float):
        """Force density F, a scalar field in 1D or a VectorField in 2D."""
        drag = self.viscosity * self.friction(height, delta)
        if isinstance(velocity, VectorField):
            return VectorField(
                -height * pressure_gradient.x - drag * velocity.x,
                -height * pressure_gradient.y - drag * velocity.y,
            )
        return -height * pressure_gradient - drag * velocity

    def forcing(self, height, velocity, pressure_gradient, delta: float):
        """Velocity increment F / h the force produces in one timestep."""
        force = self.force(height, velocity, pressure_gradient, delta)
        if isinstance(force, VectorField):
            return VectorField(force.x / height, force.y / height)
        return force / height
