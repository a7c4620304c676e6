import numpy as np
import re
from numpy import ndarray

from tflbm.errors import ConfigurationError

SUPPORTED_LATTICES = ("D1Q3", "D2Q9")


class Lattice(object):

    def __init__(self, name: str) -> None:
        if name not in SUPPORTED_LATTICES:
            raise ConfigurationError(
                f"Lattice {name} not supported, use one of {SUPPORTED_LATTICES}."
            )
        self.name: str = name
        dq = re.findall(r'\d+', name)
        self.d: int = int(dq[0])
        self.q: int = int(dq[1])
        # Lattice speed, dx / dt
        self.v: float = 1.0

        # Construct the properties of a lattice
        self.c: ndarray = self.construct_lattice_velocities
        self.w: ndarray = self.construct_lattice_weigths

    @classmethod
    def for_dimension(cls, d: int) -> "Lattice":
        if d == 1:
            return cls("D1Q3")
        if d == 2:
            return cls("D2Q9")
        raise ConfigurationError(f"Only one and two dimensional lattices are supported, got d={d}.")

    @property
    def construct_lattice_velocities(self) -> ndarray:
        if self.name == "D1Q3":
            c = np.array([[0, 1, -1]])
        else:
            cx = [0, 1, 0, -1, 0, 1, -1, -1, 1]
            cy = [0, 0, 1, 0, -1, 1, 1, -1, -1]
            c = np.array(tuple(zip(cx, cy))).T

        return c

    @property
    def construct_lattice_weigths(self) -> ndarray:
        if self.name == "D1Q3":
            w = np.array([2 / 3, 1 / 6, 1 / 6])
        else:
            w = np.array([4 / 9, 1 / 9, 1 / 9, 1 / 9, 1 / 9, 1 / 36, 1 / 36, 1 / 36, 1 / 36])

        return w
