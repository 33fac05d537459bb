"""
Snapshot Serialization

Turns model fields into their external JSON-object shapes:

- Field[T]:        the encoded value itself
- Vectorized[T]:   {"field": <reference>} or {"value": <encoded value>}
- UnitsField[T,U]: as Vectorized, plus "units": "<name>" when tagged

Fields holding neither a literal nor a reference are left out entirely.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from propsync.core.fields.base import Field
from propsync.core.snapshot import Snapshot
from propsync.utils.logging import log_calls

if TYPE_CHECKING:
    from propsync.core.model import HasFields


def serialize_field(field: Field[Any]) -> Optional[Any]:
    """Return the JSON-ready form of one field, or None when it is empty."""
    return field.to_json()


def take_snapshot(model: "HasFields", *, dirty_only: bool = False) -> Snapshot:
    """Collect serialized fields of ``model`` in declaration order."""
    items = []
    for name, field in model.fields_list():
        if dirty_only and not field.is_dirty():
            continue
        value = serialize_field(field)
        if value is None:
            continue
        items.append((name, value))
    return Snapshot(items, type_name=model.type_name(), dirty_only=dirty_only)


def to_external_form(snapshot: Snapshot) -> Dict[str, Any]:
    return snapshot.to_dict()


def to_document(model: "HasFields", *, dirty_only: bool = False) -> Dict[str, Any]:
    snapshot = take_snapshot(model, dirty_only=dirty_only)
    return {"type": snapshot.type_name, "attributes": to_external_form(snapshot)}


@log_calls()
def dumps(
    target: Union[Snapshot, "HasFields"],
    *,
    dirty_only: bool = False,
    indent: Optional[int] = None,
    sort_keys: bool = False,
) -> str:
    """Render a snapshot, or a model's snapshot, as JSON text."""
    if isinstance(target, Snapshot):
        snapshot = target
    else:
        snapshot = take_snapshot(target, dirty_only=dirty_only)
    return json.dumps(to_external_form(snapshot), indent=indent, sort_keys=sort_keys)


__all__ = ["serialize_field", "take_snapshot", "to_external_form", "to_document", "dumps"]
