"""
Typed Field Containers

This module defines Field, the generic container behind every declared model
attribute, and FieldOptions, the validated structure describing which
construction form a field was built with.

Key concepts:
- A field holds a default value, an optional current value and a dirty flag
- Every non-empty assignment passes through the field's validators first
- The dirty flag is monotonic: nothing in a field ever clears it
- Fields declared on a model class are templates; each model instance works
  on its own spawned copy
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from propsync.core.errors import FieldOptionsError, NoValueError
from propsync.core.type_registry import DEFAULT_TYPES, Encoder, TypeCheck, TypeRegistry
from propsync.core.validators import ValidationResult, Validator, as_validators, collect_violations

if TYPE_CHECKING:
    from propsync.core.model import HasFields

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict) -> "_Missing":
        return self


MISSING: Any = _Missing()


class FieldOptions(BaseModel):
    """
    Construction options of a field: ``{value?, reference?, units?}``.

    A literal value and a reference are mutually exclusive at construction
    time. Units may accompany either, or stand alone.

    Attributes:
        value: Initial literal value
        reference: Name of externally stored data to use instead of a literal
        units: Units tag (enum member or its external name)
    """

    value: Any = None
    reference: Optional[str] = None
    units: Any = None

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @field_validator("reference")
    @classmethod
    def _reference_non_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("reference must be non-empty")
        return v

    @model_validator(mode="after")
    def _value_xor_reference(self) -> "FieldOptions":
        if self.value is not None and self.reference is not None:
            raise ValueError("value and reference are mutually exclusive")
        return self

    @classmethod
    def build(cls, **options: Any) -> "FieldOptions":
        try:
            return cls(**options)
        except PydanticValidationError as exc:
            details = "; ".join(err.get("msg", "invalid option") for err in exc.errors())
            raise FieldOptionsError(f"Invalid field options: {details}") from exc

    @property
    def mode(self) -> str:
        """Name of the construction form, e.g. ``"value+units"`` or ``"default"``."""
        given = [name for name in ("value", "reference", "units") if getattr(self, name) is not None]
        return "+".join(given) or "default"


class Field(Generic[T]):
    """
    Generic typed container for one model attribute.

    The default is taken from ``default=`` when given, otherwise from the
    type registry (which may define none). The encoder used by ``to_json``
    always comes from the type registry.

    Attributes:
        value_type: Python type of the held value
        name: Explicit external name; the declaration identifier is used when None
        validators: Validators applied, in order, to every non-empty assignment
        owner: Model instance the field belongs to (None for class-level templates)

    Examples:
        >>> size = Field(float, validators=[non_negative()])
        >>> size.set(2.5)
        >>> size.value(), size.is_dirty()
        (2.5, True)
    """

    kind = "field"

    def __init__(
        self,
        value_type: Any = Any,
        *,
        default: Any = MISSING,
        validators: Optional[Sequence[Validator]] = None,
        name: Optional[str] = None,
        value: Any = None,
        registry: Optional[TypeRegistry] = None,
    ) -> None:
        if name is not None and not name.strip():
            raise FieldOptionsError("explicit field name must be non-empty")
        self.value_type = value_type
        self.name = name
        self.validators = as_validators(validators)
        self.registry = registry if registry is not None else DEFAULT_TYPES
        self.owner: Optional["HasFields"] = None
        self.attr_name: Optional[str] = None
        self._encoder: Optional[Encoder] = None
        self._type_check: Optional[TypeCheck] = None
        self._type_resolved = False
        self._default: Optional[T] = self.registry.default_for(value_type) if default is MISSING else default
        self._value: Optional[T] = copy.deepcopy(self._default)
        self._dirty = False

        if value is not None:
            self.set(value)

    # Declaration

    def __set_name__(self, owner: type, name: str) -> None:
        self.attr_name = name

    @property
    def field_name(self) -> Optional[str]:
        """Resolved external name: the explicit name, else the declared identifier."""
        return self.name or self.attr_name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        try:
            return instance.__dict__[self.attr_name]
        except KeyError:
            raise AttributeError(f"Field '{self.attr_name}' is not initialised on {type(instance).__name__}") from None

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.attr_name].set(value)

    def spawn(self, owner: "HasFields") -> "Field[T]":
        """Return a fresh per-instance copy of this template bound to ``owner``."""
        clone = copy.copy(self)
        clone._value = copy.deepcopy(self._value)
        clone._default = copy.deepcopy(self._default)
        clone.owner = owner
        return clone

    # Values

    def default_value(self) -> Optional[T]:
        return self._default

    def value_opt(self) -> Optional[T]:
        return self._value

    def value(self) -> T:
        if self._value is None:
            raise NoValueError("value", field=self.field_name)
        return self._value

    def has_content(self) -> bool:
        """True when the field has anything to serialize."""
        return self._value is not None

    # Validation

    def validate(self, value: T) -> List[str]:
        """
        Return the message of every validator rejecting ``value``.

        Declared validators report first, in order. A value that is not an
        instance of ``value_type`` adds a final type message; validators that
        cannot even evaluate such a value count as rejecting it.
        """
        type_check = self._resolve_type_check()
        if type_check is None or type_check(value):
            return collect_violations(self.validators, value)
        messages = collect_violations(self.validators, value, errors_reject=True)
        messages.append(f"must be of type {self._type_label()}")
        return messages

    def check(self, value: T) -> ValidationResult:
        return ValidationResult(errors=tuple(self.validate(value)))

    def assert_valid(self, value: T) -> None:
        """Raise ValidationError with the first violation. Never mutates state."""
        result = self.check(value)
        if not result.ok:
            logger.debug("Rejected %r for field %s: %s", value, self.field_name, "; ".join(result.errors))
        result.raise_for_errors(field=self.field_name)

    # Mutation

    def set(self, value: Optional[T]) -> None:
        """Assign a validated value (or None to clear) and mark the field dirty."""
        if value is not None:
            self.assert_valid(value)
        self._value = value
        self._dirty = True

    def try_set(self, value: Optional[T]) -> ValidationResult:
        """Like set(), but report violations instead of raising."""
        result = self.check(value) if value is not None else ValidationResult()
        if result.ok:
            self._value = value
            self._dirty = True
        return result

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value) if self._value is not None else None)

    def __call__(self, *args: Any) -> Optional["HasFields"]:
        """``field(v)`` sets ``v``, ``field()`` clears; both return the owning model."""
        if len(args) > 1:
            raise TypeError(f"{type(self).__name__}() takes at most one positional value")
        self.set(args[0] if args else None)
        return self.owner

    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def dirty(self) -> bool:
        return self._dirty

    # Serialization

    def serialize_value(self) -> Any:
        return self._value

    def encode(self, value: Any) -> Any:
        if self._encoder is None:
            self._encoder = self.registry.encoder_for(self.value_type)
        return self._encoder(value)

    def to_json(self) -> Any:
        """JSON-ready form of the field, or None when there is nothing to emit."""
        if not self.has_content():
            return None
        return self.encode(self.serialize_value())

    def _resolve_type_check(self) -> Optional[TypeCheck]:
        if not self._type_resolved:
            self._type_check = self.registry.type_check_for(self.value_type)
            self._type_resolved = True
        return self._type_check

    def _type_label(self) -> str:
        return getattr(self.value_type, "__name__", None) or repr(self.value_type)

    def __repr__(self) -> str:
        type_name = self._type_label()
        dirty = " dirty" if self._dirty else ""
        return f"{type(self).__name__}[{type_name}]({self.field_name or '?'}={self._value!r}{dirty})"


__all__ = ["Field", "FieldOptions", "MISSING"]
