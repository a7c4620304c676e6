from .io import SimulationIO
from .plotting import visualise
from .timing import time_function, TIMING_ENABLED

__all__ = [
    "SimulationIO",
    "visualise",
    "time_function",
    "TIMING_ENABLED",
]
