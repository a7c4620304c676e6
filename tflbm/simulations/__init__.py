from .base import BaseSimulation
from .thinfilm import ThinFilmSimulation
