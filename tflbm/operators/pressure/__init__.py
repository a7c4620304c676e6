from .contact_angle import (
    UniformContactAngle,
    PerSiteContactAngle,
    as_contact_angle,
    resolve_contact_angle,
)
from .disjoining_pressure import DisjoiningPressure
from .film_pressure import FilmPressure
