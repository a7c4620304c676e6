from .fields import VectorField, MacroscopicState
