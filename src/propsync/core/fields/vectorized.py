from __future__ import annotations

"""Fields whose literal value may be replaced by a named data reference."""

from typing import TYPE_CHECKING, Any, Dict, Optional, TypeVar

from propsync.core.errors import FieldOptionsError, NoValueError
from propsync.core.fields.base import Field, FieldOptions

if TYPE_CHECKING:
    from propsync.core.model import HasFields

T = TypeVar("T")


class Vectorized(Field[T]):
    """Field that holds either a literal value or a reference to external data.

    The reference names bulk data managed elsewhere (typically a data-source
    column). Literal and reference may both be stored, but the reference wins
    when the field is serialized.
    """

    kind = "vectorized"

    def __init__(self, value_type: Any = Any, *, reference: Optional[str] = None, **kwargs: Any) -> None:
        self._options = FieldOptions.build(value=kwargs.get("value"), reference=reference)
        self._reference: Optional[str] = None
        super().__init__(value_type, **kwargs)
        if self._options.reference is not None:
            self.set_reference(self._options.reference)

    def reference_opt(self) -> Optional[str]:
        return self._reference

    def reference(self) -> str:
        if self._reference is None:
            raise NoValueError("reference", field=self.field_name)
        return self._reference

    def set_reference(self, name: Optional[str]) -> None:
        """Point the field at external data (None clears). Keeps any literal value."""
        self._reference = name
        self._dirty = True

    def has_content(self) -> bool:
        return self._reference is not None or self._value is not None

    def __call__(self, *args: Any, reference: Optional[str] = None) -> Optional["HasFields"]:
        if reference is None:
            return super().__call__(*args)
        if args:
            raise FieldOptionsError("value and reference are mutually exclusive")
        self.set_reference(reference)
        return self.owner

    def serialize_value(self) -> Dict[str, Any]:
        if self._reference is not None:
            return {"field": self._reference}
        return {"value": self._value}

    def to_json(self) -> Optional[Dict[str, Any]]:
        if not self.has_content():
            return None
        data = self.serialize_value()
        if "value" in data:
            data["value"] = self.encode(data["value"])
        return data

    def __repr__(self) -> str:
        if self._reference is None:
            return super().__repr__()
        dirty = " dirty" if self._dirty else ""
        return f"{type(self).__name__}({self.field_name or '?'}->{self._reference!r}{dirty})"


__all__ = ["Vectorized"]
