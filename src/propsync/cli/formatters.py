"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Type

from rich.table import Table

from propsync.core.fields.base import Field
from propsync.core.fields.units import UnitsField
from propsync.core.fields.vectorized import Vectorized
from propsync.utils.error_formatting import format_validators

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from propsync.core.model import HasFields


def format_type(field: Field[Any]) -> str:
    value_type = field.value_type
    return getattr(value_type, "__name__", None) or str(value_type).replace("typing.", "")


def format_initial(field: Field[Any]) -> str:
    """Initial content of a template field as it would be serialized."""
    if isinstance(field, Vectorized) and field.reference_opt() is not None:
        return f"-> {field.reference_opt()}"
    value = field.value_opt()
    return "-" if value is None else repr(value)


def format_units(field: Field[Any]) -> str:
    if not isinstance(field, UnitsField):
        return ""
    units = field.units_opt()
    names = "|".join(m.value for m in field.units_type)
    return f"{units.external_name} ({names})" if units is not None else f"- ({names})"


def build_fields_table(model_cls: Type["HasFields"]) -> Table:
    table = Table(title=f"{model_cls.type_name()} fields")
    table.add_column("Name", style="bold")
    table.add_column("Attribute")
    table.add_column("Kind")
    table.add_column("Type")
    table.add_column("Initial")
    table.add_column("Units")
    table.add_column("Validators")

    for entry in model_cls.field_entries():
        template = entry.template
        table.add_row(
            entry.name,
            entry.attr if entry.attr != entry.name else "",
            template.kind,
            format_type(template),
            format_initial(template),
            format_units(template),
            format_validators([v.message for v in template.validators]),
        )
    return table
