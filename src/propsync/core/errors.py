from __future__ import annotations

"""Exception types raised by fields and models."""

from typing import Sequence


class PropsyncError(Exception):
    """Base class for all propsync errors."""


class ValidationError(PropsyncError, ValueError):
    """A candidate value was rejected by one or more validators.

    The message is the one of the first rejecting validator in declared order.
    ``messages`` holds every collected violation when they are known.
    """

    def __init__(self, message: str, *, messages: Sequence[str] | None = None, field: str | None = None):
        self.message = message
        self.messages = tuple(messages) if messages else (message,)
        self.field = field
        super().__init__(message)


class NoValueError(PropsyncError, LookupError):
    """Raised when reading a value, reference or units tag that is not set."""

    def __init__(self, what: str = "value", *, field: str | None = None):
        self.what = what
        self.field = field
        target = f" on field '{field}'" if field else ""
        super().__init__(f"No {what} set{target}")


class FieldOptionsError(PropsyncError, ValueError):
    """Construction options for a field are inconsistent."""


class FieldDeclarationError(PropsyncError, TypeError):
    """A model declares its fields in a way that cannot be resolved."""


__all__ = [
    "PropsyncError",
    "ValidationError",
    "NoValueError",
    "FieldOptionsError",
    "FieldDeclarationError",
]
