import math
import numbers
from dataclasses import dataclass, asdict
from typing import Dict

from tflbm.errors import ConfigurationError

# Keys of the two-column input file, in the order they are expected.
INPUT_KEYS = (
    ("Lattice_points_x", "lx", int),
    ("Lattice_points_y", "ly", int),
    ("Max_run_time", "maxruntime", int),
    ("Output_dump", "dumping", int),
    ("gravity", "gravity", float),
    ("surface_tension", "gamma", float),
    ("slippage", "delta", float),
)


@dataclass(frozen=True)
class InputConstants:
    """
    Runtime constants of a thin film simulation.

    Attributes:
        lx (int): Lattice points in x-direction.
        ly (int): Lattice points in y-direction, 1 for a one dimensional film.
        maxruntime (int): Number of lattice Boltzmann time steps.
        dumping (int): Interval between two output dumps.
        gravity (float): Gravitational acceleration.
        gamma (float): Surface tension of the liquid.
        delta (float): Slip length.
    """

    lx: int
    ly: int = 1
    maxruntime: int = 1000
    dumping: int = 100
    gravity: float = 0.0
    gamma: float = 0.01
    delta: float = 1.0

    def __post_init__(self):
        for name in ("lx", "ly", "maxruntime", "dumping"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if self.dumping > self.maxruntime:
            raise ConfigurationError(
                f"dumping ({self.dumping}) must not exceed maxruntime ({self.maxruntime})"
            )
        for name in ("gravity", "gamma", "delta"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
        if self.gamma < 0:
            raise ConfigurationError(f"Surface tension must be non-negative, got {self.gamma}")
        if self.delta <= 0:
            raise ConfigurationError(f"Slip length must be positive, got {self.delta}")

    @property
    def dim(self) -> int:
        return 1 if self.ly == 1 else 2

    @property
    def shape(self):
        if self.dim == 1:
            return (self.lx,)
        return (self.lx, self.ly)

    def to_dict(self) -> Dict:
        return asdict(self)


def read_input(file) -> InputConstants:
    """
    Reads input parameters from a two-column text file.

    Every line holds a name and a value separated by whitespace, e.g.

        Lattice_points_x    10
        Lattice_points_y    5
        Max_run_time        1000
        Output_dump         100
        gravity             0.0
        surface_tension     0.01
        slippage            1.0

    Args:
        file (str or Path): Path to the input file.

    Returns:
        InputConstants: The validated constants.
    """
    with open(file, "r") as handle:
        rows = [line.split() for line in handle if line.strip() and not line.lstrip().startswith("#")]

    if len(rows) != len(INPUT_KEYS):
        raise ConfigurationError(
            f"Expected {len(INPUT_KEYS)} parameters in {file}, found {len(rows)}"
        )

    values = {}
    for row, (label, name, cast) in zip(rows, INPUT_KEYS):
        if len(row) != 2:
            raise ConfigurationError(f"Malformed line for '{label}': {' '.join(row)}")
        if row[0] != label:
            raise ConfigurationError(f"Expected '{label}' on line {len(values) + 1} of {file}, found '{row[0]}'")
        try:
            number = float(row[1])
        except ValueError:
            raise ConfigurationError(f"Value of '{row[0]}' is not a number: {row[1]}")
        if cast is int:
            if not number.is_integer():
                raise ConfigurationError(f"Value of '{row[0]}' must be an integer: {row[1]}")
            number = int(number)
        values[name] = number

    return InputConstants(**values)
