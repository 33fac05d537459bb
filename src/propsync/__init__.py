"""Declarative, validated model fields mirrored to JSON as full or delta snapshots."""

from propsync.core import *  # noqa: F401,F403
from propsync.core import __all__ as _core_all
from propsync.core.serializer import dumps, serialize_field, take_snapshot, to_external_form

__version__ = "0.1.0"

__all__ = list(_core_all) + ["dumps", "serialize_field", "take_snapshot", "to_external_form"]
