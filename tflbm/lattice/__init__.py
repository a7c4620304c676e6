from .lattice import Lattice
