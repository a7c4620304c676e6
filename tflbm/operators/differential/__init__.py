from .gradient import Gradient
from .laplacian import Laplacian
from .velocity_squared import VelocitySquared, velocity_squared
