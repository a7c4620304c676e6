from .macroscopic import Macroscopic
