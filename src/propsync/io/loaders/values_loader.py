from __future__ import annotations

"""Apply value documents (YAML/JSON mappings) to model fields."""

import logging
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator, model_validator

from propsync.core.errors import ValidationError
from propsync.core.fields.units import UnitsField
from propsync.core.fields.vectorized import Vectorized
from propsync.core.model import HasFields
from propsync.io.loaders.errors import LoaderError
from propsync.utils.logging import log_calls

logger = logging.getLogger(__name__)


class ValueEntrySpec(BaseModel):
    """Document entry for a vectorized field.

    Uses the external shapes: ``{"value": v}`` or ``{"field": name}``, each
    optionally with ``"units"``. A bare ``{"units": u}`` only sets units.
    """

    value: Any = None
    field: Optional[str] = None
    units: Optional[str] = None

    model_config = {"extra": "forbid"}

    @field_validator("field")
    @classmethod
    def _non_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("field reference must be non-empty")
        return v

    @model_validator(mode="after")
    def _value_xor_field(self) -> "ValueEntrySpec":
        if "value" in self.model_fields_set and "field" in self.model_fields_set:
            raise ValueError("entry may set either 'value' or 'field', not both")
        if not self.model_fields_set:
            raise ValueError("entry must set at least one of 'value', 'field', 'units'")
        return self


def _apply_entry(target: Vectorized[Any], name: str, spec: ValueEntrySpec) -> None:
    if "field" in spec.model_fields_set:
        target.set_reference(spec.field)
    elif "value" in spec.model_fields_set:
        target.set(spec.value)
    if "units" in spec.model_fields_set:
        if not isinstance(target, UnitsField):
            raise ValidationError(f"field '{name}' does not take units", field=name)
        target.set_units(spec.units)


def apply_values(model: HasFields, data: Mapping[str, Any]) -> None:
    """Set fields of ``model`` from a name -> value mapping.

    Plain fields take the value as-is. Vectorized fields additionally accept
    the mapping shapes described by ValueEntrySpec.

    Raises:
        KeyError: unknown field name
        ValidationError: a value was rejected by the field
        pydantic.ValidationError: malformed entry for a vectorized field
    """
    for name, raw in data.items():
        target = model.field(name)
        if isinstance(target, Vectorized) and isinstance(raw, Mapping):
            _apply_entry(target, name, ValueEntrySpec.model_validate(dict(raw)))
        else:
            target.set(raw)
        logger.debug("Applied %s=%r on %s", name, raw, model.type_name())


def _read_document(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        # JSON documents are valid YAML
        return yaml.safe_load(f) or {}


@log_calls()
def load_values(path: str, model: HasFields) -> HasFields:
    """Read a YAML/JSON value document and apply it to ``model``.

    Expected format:
    color: red
    radius: {value: 5.0, units: screen}
    x: {field: x_column}
    """
    try:
        data = _read_document(path)
    except OSError as exc:
        raise LoaderError(path, "Cannot read value document", cause=exc) from exc
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Invalid YAML in value document", cause=exc) from exc
    if not isinstance(data, Mapping):
        raise LoaderError(path, f"Value document must be a mapping, got {type(data).__name__}")
    try:
        apply_values(model, data)
    except KeyError as exc:
        raise LoaderError(path, f"Unknown field for {model.type_name()}", cause=exc) from exc
    except PydanticValidationError as exc:
        raise LoaderError(path, "Invalid value entry", cause=exc) from exc
    except ValidationError as exc:
        raise LoaderError(path, f"Rejected value for '{exc.field}'", cause=exc) from exc
    return model


__all__ = ["ValueEntrySpec", "apply_values", "load_values"]
