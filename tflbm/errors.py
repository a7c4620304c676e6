class ConfigurationError(ValueError):
    """Malformed or inconsistent simulation parameters."""


class DimensionMismatchError(ValueError):
    """Fields of inconsistent shape were combined in one operation."""


class NumericalDivergenceError(ArithmeticError):
    """
    A field became non-finite during a run.

    Lattice Boltzmann updates are explicit, so a run cannot continue from a
    non-finite state. The offending timestep and field are kept on the
    exception for the caller.
    """

    def __init__(self, timestep: int, field: str):
        self.timestep = timestep
        self.field = field
        super().__init__(f"Non-finite values in '{field}' at timestep {timestep}.")
