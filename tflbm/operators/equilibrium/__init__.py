from .equilibrium import Equilibrium
