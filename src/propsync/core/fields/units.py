from __future__ import annotations

"""Vectorized fields carrying a units tag from a closed enumeration."""

from typing import TYPE_CHECKING, Any, Dict, Generic, Optional, Type, TypeVar

from propsync.core.errors import NoValueError, ValidationError
from propsync.core.fields.base import FieldOptions
from propsync.core.fields.vectorized import Vectorized
from propsync.core.type_registry import DEFAULT_TYPES
from propsync.core.units import AngularUnits, SpatialUnits, Units

if TYPE_CHECKING:
    from propsync.core.model import HasFields

T = TypeVar("T")
U = TypeVar("U", bound=Units)


class UnitsField(Vectorized[T], Generic[T, U]):
    """
    Vectorized field with an optional units tag.

    Subclasses bind ``units_type`` to one enumeration. The tag is independent
    of whether the field holds a literal or a reference, and is emitted next
    to either one as ``"units": "<name>"``.

    Construction forms (see FieldOptions):
        no options          default value and default units, clean
        value=              literal set, dirty
        units=              units set, clean
        value= + units=     literal then units, dirty
        reference= [+units=] reference then units, dirty
    """

    kind = "units"
    units_type: Type[Units] = Units

    def __init__(self, value_type: Any = Any, *, units: Any = None, **kwargs: Any) -> None:
        if self.units_type is Units:
            raise TypeError(f"{type(self).__name__} must bind units_type to a concrete Units enumeration")
        options = FieldOptions.build(value=kwargs.get("value"), reference=kwargs.get("reference"), units=units)
        registry = kwargs.get("registry") or DEFAULT_TYPES
        self._default_units: Optional[U] = registry.default_for(self.units_type)
        self._units: Optional[U] = self._default_units
        super().__init__(value_type, **kwargs)
        self._options = options
        if options.units is not None:
            self.set_units(options.units)
            if options.mode == "units":
                # units-only construction leaves the field clean
                self._dirty = False

    def default_units(self) -> Optional[U]:
        return self._default_units

    def units_opt(self) -> Optional[U]:
        return self._units

    def units(self) -> U:
        if self._units is None:
            raise NoValueError("units", field=self.field_name)
        return self._units

    def set_units(self, units: Any) -> None:
        """Assign a units tag (member or external name; None clears) and mark dirty."""
        if units is not None:
            try:
                units = self.units_type.parse(units)
            except ValueError as exc:
                raise ValidationError(str(exc), field=self.field_name) from exc
        self._units = units
        self._dirty = True

    def set_value_and_units(self, value: Optional[T], units: Any) -> None:
        self.set(value)
        self.set_units(units)

    def set_reference_and_units(self, name: Optional[str], units: Any) -> None:
        self.set_reference(name)
        self.set_units(units)

    def __call__(
        self,
        *args: Any,
        reference: Optional[str] = None,
        units: Any = None,
    ) -> Optional["HasFields"]:
        if args or reference is not None or units is None:
            super().__call__(*args, reference=reference)
        if units is not None:
            self.set_units(units)
        return self.owner

    def serialize_value(self) -> Dict[str, Any]:
        data = super().serialize_value()
        if self._units is not None:
            data["units"] = self._units.external_name
        return data


class Spatial(UnitsField[T, SpatialUnits]):
    """Value or reference measured in spatial units (``screen`` or ``data``)."""

    kind = "spatial"
    units_type = SpatialUnits


class Angular(UnitsField[T, AngularUnits]):
    """Value or reference measured in angular units (``deg`` or ``rad``)."""

    kind = "angular"
    units_type = AngularUnits


__all__ = ["UnitsField", "Spatial", "Angular"]
