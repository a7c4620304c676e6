from .init import Initialise
