from abc import ABC, abstractmethod

from tflbm.config.input_constants import InputConstants
from tflbm.grid import Grid
from tflbm.lattice import Lattice


class BaseSimulation(ABC):
    def __init__(self, constants: InputConstants, lattice_type: str = None):
        self.constants = constants
        self.grid = Grid.from_constants(constants)
        if lattice_type is None:
            self.lattice = Lattice.for_dimension(self.grid.dim)
        else:
            self.lattice = Lattice(lattice_type)
        self.grid_shape = self.grid.shape

    @abstractmethod
    def setup_operators(self):
        """Setup simulation-specific operators"""
        pass

    @abstractmethod
    def initialize_fields(self, init_type="standard", *, init_dir=None, **init_kwargs):
        """
        Parameters
        ----------
        init_type : str
            Name of the initialisation routine.
        init_dir : str or None, optional
            Path to the .npz snapshot when `init_type=="init_from_file"`.
        """
        pass

    @abstractmethod
    def run_timestep(self, fprev, state):
        """Execute one timestep"""
        pass
