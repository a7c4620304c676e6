from .slip import SlipModel
from .thin_film_force import ThinFilmForce
