"""
Models With Declared Fields

HasFields is the base class for objects whose state is mirrored to a remote
consumer. Subclasses declare fields as class attributes:

    class Circle(HasFields):
        color = Field(str, default="black", validators=[one_of(COLORS)])
        radius = Spatial(float)

The table of declared fields is built once per class, when the class is
created, and is immutable afterwards. Every instance receives its own copy of
each declared field, so mutating ``circle.radius`` never touches the class
template or other instances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Tuple

from propsync.core import serializer
from propsync.core.errors import FieldDeclarationError
from propsync.core.fields.base import Field
from propsync.core.snapshot import Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldEntry:
    """One declared field: resolved external name, class identifier, template."""

    name: str
    attr: str
    template: Field[Any]


def _reserved_names() -> frozenset:
    return frozenset(name for name in vars(HasFields) if not name.startswith("__"))


def _collect_entries(cls: type) -> Tuple[FieldEntry, ...]:
    reserved = _reserved_names()
    declared: Dict[str, Field[Any]] = {}
    for klass in reversed(cls.__mro__):
        for attr, value in vars(klass).items():
            if isinstance(value, Field):
                if attr in reserved:
                    raise FieldDeclarationError(
                        f"{cls.__name__}: field '{attr}' would shadow HasFields.{attr}"
                    )
                declared[attr] = value
            elif attr in declared:
                # redefined as a plain attribute in a subclass
                del declared[attr]

    entries: List[FieldEntry] = []
    seen: Dict[str, str] = {}
    for attr, template in declared.items():
        name = template.name or attr
        if name in seen:
            raise FieldDeclarationError(
                f"{cls.__name__}: fields '{seen[name]}' and '{attr}' both resolve to name '{name}'"
            )
        seen[name] = attr
        entries.append(FieldEntry(name=name, attr=attr, template=template))
    return tuple(entries)


class HasFields:
    """Base class for models owning a fixed set of named fields."""

    __fields_table__: ClassVar[Tuple[FieldEntry, ...]] = ()
    __fields_by_name__: ClassVar[Mapping[str, FieldEntry]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        table = _collect_entries(cls)
        lookup: Dict[str, FieldEntry] = {}
        for entry in table:
            lookup[entry.name] = entry
            lookup.setdefault(entry.attr, entry)
        cls.__fields_table__ = table
        cls.__fields_by_name__ = MappingProxyType(lookup)
        logger.debug("Declared fields for %s: %s", cls.__name__, [e.name for e in table])

    def __init__(self, **values: Any) -> None:
        for entry in self.__fields_table__:
            self.__dict__[entry.attr] = entry.template.spawn(self)
        for key, value in values.items():
            self.field(key).set(value)

    @classmethod
    def type_name(cls) -> str:
        return cls.__name__

    @classmethod
    def field_entries(cls) -> Tuple[FieldEntry, ...]:
        return cls.__fields_table__

    @classmethod
    def field_names(cls) -> List[str]:
        return [entry.name for entry in cls.__fields_table__]

    def fields_list(self) -> List[Tuple[str, Field[Any]]]:
        """Return ``(resolved name, field)`` pairs in declaration order."""
        return [(entry.name, self.__dict__[entry.attr]) for entry in self.__fields_table__]

    def field(self, name: str) -> Field[Any]:
        """Look up a field by resolved name or declared identifier."""
        entry = self.__fields_by_name__.get(name)
        if entry is None:
            available = ", ".join(self.field_names())
            raise KeyError(f"Unknown field: {name}. Available: {available}")
        return self.__dict__[entry.attr]

    def dirty_fields(self) -> List[str]:
        return [name for name, field in self.fields_list() if field.is_dirty()]

    def full_snapshot(self) -> Snapshot:
        return serializer.take_snapshot(self)

    def dirty_snapshot(self) -> Snapshot:
        return serializer.take_snapshot(self, dirty_only=True)

    def to_external_form(self) -> Dict[str, Any]:
        return serializer.to_external_form(self.full_snapshot())

    def to_document(self, dirty_only: bool = False) -> Dict[str, Any]:
        return serializer.to_document(self, dirty_only=dirty_only)

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={field.value_opt()!r}" for name, field in self.fields_list())
        return f"{self.type_name()}({values})"


__all__ = ["HasFields", "FieldEntry"]
