from __future__ import annotations

"""Closed unit enumerations attached to units-aware fields."""

from enum import Enum
from typing import Any


class Units(str, Enum):
    """Base class for unit enumerations. Members serialize by value."""

    @property
    def external_name(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "Units":
        """Accept a member of this enumeration or its external name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Units):
            raise ValueError(f"{value.external_name!r} is a {type(value).__name__} unit, not {cls.__name__}")
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        names = ", ".join(m.value for m in cls)
        raise ValueError(f"Invalid {cls.__name__} value {value!r}. Must be one of: {names}")


class SpatialUnits(Units):
    SCREEN = "screen"
    DATA = "data"


class AngularUnits(Units):
    DEG = "deg"
    RAD = "rad"


__all__ = ["Units", "SpatialUnits", "AngularUnits"]
