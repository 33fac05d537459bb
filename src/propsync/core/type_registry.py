from __future__ import annotations

"""Explicit per-type default values and JSON encoders for fields."""

import logging
from typing import Any, Callable, Dict, Optional, get_origin

from pydantic import BaseModel, Field, PrivateAttr, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import to_jsonable_python

from propsync.core.units import Units

logger = logging.getLogger(__name__)

Encoder = Callable[[Any], Any]
TypeCheck = Callable[[Any], bool]
DefaultProvider = Callable[[], Any]


class TypeSupport(BaseModel):
    """Default value and encoder registered for one value type."""

    value_type: Any
    default: Any = None
    default_factory: Optional[DefaultProvider] = None
    encoder: Optional[Encoder] = None

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @model_validator(mode="after")
    def _single_default_source(self) -> "TypeSupport":
        if self.default is not None and self.default_factory is not None:
            raise ValueError("default and default_factory are mutually exclusive")
        return self

    def make_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


class TypeRegistry(BaseModel):
    """Registry of TypeSupport entries keyed by value type.

    Lookups walk the type's MRO so that a registration for a base class
    (e.g. ``Units``) covers its subclasses. Types without an explicit
    encoder are encoded with a pydantic TypeAdapter in JSON mode; types
    pydantic has no schema for (plain classes, nested models) fall back to
    generic encoding, where nested models use their external form.
    """

    items: Dict[Any, TypeSupport] = Field(default_factory=dict)

    model_config = {"arbitrary_types_allowed": True}

    _adapters: Dict[Any, Encoder] = PrivateAttr(default_factory=dict)
    _checks: Dict[Any, Optional[TypeCheck]] = PrivateAttr(default_factory=dict)

    def register(
        self,
        value_type: Any,
        *,
        default: Any = None,
        default_factory: Optional[DefaultProvider] = None,
        encoder: Optional[Encoder] = None,
        replace: bool = False,
    ) -> TypeSupport:
        if value_type in self.items and not replace:
            raise ValueError(f"Duplicate type registration: {_type_label(value_type)}")
        support = TypeSupport(
            value_type=value_type,
            default=default,
            default_factory=default_factory,
            encoder=encoder,
        )
        self.items[value_type] = support
        self._adapters.pop(value_type, None)
        self._checks.pop(value_type, None)
        return support

    def find(self, value_type: Any) -> Optional[TypeSupport]:
        if value_type in self.items:
            return self.items[value_type]
        origin = get_origin(value_type)
        if origin is not None and origin in self.items:
            return self.items[origin]
        for base in getattr(value_type, "__mro__", ())[1:]:
            if base in self.items:
                return self.items[base]
        return None

    def get(self, value_type: Any) -> TypeSupport:
        support = self.find(value_type)
        if support is None:
            available = ", ".join(sorted(_type_label(t) for t in self.items))
            raise KeyError(f"Unknown value type: {_type_label(value_type)}. Available: {available}")
        return support

    def default_for(self, value_type: Any) -> Any:
        """Return a fresh default for the type, or None when it has none."""
        support = self.find(value_type)
        return support.make_default() if support else None

    def encoder_for(self, value_type: Any) -> Encoder:
        support = self.find(value_type)
        if support is not None and support.encoder is not None:
            return support.encoder
        if value_type not in self._adapters:
            self._adapters[value_type] = _adapter_encoder(value_type)
        return self._adapters[value_type]

    def type_check_for(self, value_type: Any) -> Optional[TypeCheck]:
        """Return a strict membership test for the type, or None when any value fits."""
        if value_type not in self._checks:
            self._checks[value_type] = _strict_check(value_type)
        return self._checks[value_type]

    def copy_registry(self) -> "TypeRegistry":
        return TypeRegistry(items=dict(self.items))


def _build_adapter(value_type: Any) -> Optional[TypeAdapter]:
    """Return a TypeAdapter for the type, or None when pydantic has no schema for it."""
    try:
        adapter = TypeAdapter(value_type)
    except PydanticSchemaGenerationError:
        logger.debug("No pydantic schema for %s, using generic handling", _type_label(value_type))
        return None
    logger.debug("Built TypeAdapter for %s", _type_label(value_type))
    return adapter


def _encode_unknown(value: Any) -> Any:
    # nested models render in their external form
    to_external_form = getattr(value, "to_external_form", None)
    if callable(to_external_form):
        return to_external_form()
    if hasattr(value, "__dict__"):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    return str(value)


def _encode_generic(value: Any) -> Any:
    return to_jsonable_python(value, fallback=_encode_unknown)


def _adapter_encoder(value_type: Any) -> Encoder:
    if value_type in (Any, object):
        return _encode_generic
    adapter = _build_adapter(value_type)
    if adapter is None:
        return _encode_generic

    def _encode(value: Any) -> Any:
        return adapter.dump_python(value, mode="json", warnings=False)

    return _encode


def _strict_check(value_type: Any) -> Optional[TypeCheck]:
    if value_type in (Any, object):
        return None
    adapter = _build_adapter(value_type)
    if adapter is None:
        if isinstance(value_type, type):
            return lambda value: isinstance(value, value_type)
        return None

    def _check(value: Any) -> bool:
        try:
            adapter.validate_python(value, strict=True)
        except PydanticValidationError:
            return False
        return True

    return _check


def _type_label(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or repr(value_type)


def _encode_units(value: Units) -> str:
    return value.external_name


def build_default_registry() -> TypeRegistry:
    registry = TypeRegistry()
    registry.register(bool, default=False, encoder=bool)
    registry.register(list, default_factory=list, encoder=_encode_generic)
    registry.register(dict, default_factory=dict, encoder=_encode_generic)
    registry.register(tuple, default_factory=tuple, encoder=list)
    registry.register(set, default_factory=set, encoder=lambda v: sorted(v, key=repr))
    registry.register(Units, encoder=_encode_units)
    return registry


DEFAULT_TYPES = build_default_registry()


__all__ = [
    "Encoder",
    "TypeCheck",
    "DefaultProvider",
    "TypeSupport",
    "TypeRegistry",
    "DEFAULT_TYPES",
    "build_default_registry",
]
