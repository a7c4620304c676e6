from .collision_BGK import CollisionBGK
from .source import SourceTerm
