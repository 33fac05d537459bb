from .base import MISSING, Field, FieldOptions
from .units import Angular, Spatial, UnitsField
from .vectorized import Vectorized

__all__ = [
    "MISSING",
    "Field",
    "FieldOptions",
    "Vectorized",
    "UnitsField",
    "Spatial",
    "Angular",
]
