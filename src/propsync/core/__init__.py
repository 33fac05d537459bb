from .errors import FieldDeclarationError, FieldOptionsError, NoValueError, PropsyncError, ValidationError
from .fields import MISSING, Angular, Field, FieldOptions, Spatial, UnitsField, Vectorized
from .model import FieldEntry, HasFields
from .snapshot import Snapshot
from .type_registry import DEFAULT_TYPES, TypeRegistry, TypeSupport
from .units import AngularUnits, SpatialUnits, Units
from .validators import ValidationResult, Validator

__all__ = [
    "PropsyncError",
    "ValidationError",
    "NoValueError",
    "FieldOptionsError",
    "FieldDeclarationError",
    "MISSING",
    "Field",
    "FieldOptions",
    "Vectorized",
    "UnitsField",
    "Spatial",
    "Angular",
    "HasFields",
    "FieldEntry",
    "Snapshot",
    "TypeRegistry",
    "TypeSupport",
    "DEFAULT_TYPES",
    "Units",
    "SpatialUnits",
    "AngularUnits",
    "Validator",
    "ValidationResult",
]
