import tflbm.lattice
import tflbm.grid
from tflbm.errors import ConfigurationError, DimensionMismatchError, NumericalDivergenceError
from tflbm.config import InputConstants, read_input
from tflbm.fields import VectorField, MacroscopicState
from tflbm.operators.differential import Gradient, Laplacian, VelocitySquared, velocity_squared
from tflbm.operators.pressure import (
    UniformContactAngle,
    PerSiteContactAngle,
    DisjoiningPressure,
    FilmPressure,
)
from tflbm.operators.equilibrium import Equilibrium
from tflbm.operators.force import SlipModel, ThinFilmForce
from tflbm.operators.collision import CollisionBGK, SourceTerm
from tflbm.operators.stream import Streaming
from tflbm.operators.macroscopic import Macroscopic
from tflbm.operators.update import Update
from tflbm.operators.initialise import Initialise
from tflbm.simulations import ThinFilmSimulation
from tflbm.run import Run, RunState
from tflbm.utils import (
    SimulationIO,
    visualise,
    time_function,
    TIMING_ENABLED,
)
from tflbm.lattice.lattice import Lattice
from tflbm.grid.grid import Grid
