"""
Field Validators

A Validator pairs a predicate with the message reported when the predicate
rejects a value. Validators are owned by the field that declares them and
are evaluated in declared order.

Two contracts are offered on top of a validator list:
- collect_violations() reports every rejecting validator's message
- ValidationResult.raise_for_errors() fails fast with the first message
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from propsync.core.errors import ValidationError


@dataclass(frozen=True)
class Validator:
    """
    A named predicate over a candidate value.

    Attributes:
        predicate: Callable returning True when the value is acceptable
        message: Human-readable description of the violation

    Examples:
        >>> positive = Validator(lambda v: v > 0, "must be positive")
        >>> positive.accepts(3)
        True
        >>> positive.accepts(-1)
        False
    """

    predicate: Callable[[Any], bool]
    message: str

    def accepts(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def __call__(self, value: Any) -> bool:
        return self.accepts(value)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking one value against a validator list."""

    errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[str]:
        return self.errors[0] if self.errors else None

    def raise_for_errors(self, field: str | None = None) -> None:
        """Raise ValidationError carrying the first violation, if any."""
        if self.errors:
            raise ValidationError(self.errors[0], messages=self.errors, field=field)

    def __bool__(self) -> bool:
        return self.ok


def collect_violations(validators: Iterable[Validator], value: Any, *, errors_reject: bool = False) -> List[str]:
    """
    Return the message of every validator that rejects ``value``.

    With ``errors_reject`` a predicate raising TypeError or ValueError counts
    as a rejection instead of propagating.
    """
    messages = []
    for validator in validators:
        try:
            accepted = validator.accepts(value)
        except (TypeError, ValueError):
            if not errors_reject:
                raise
            accepted = False
        if not accepted:
            messages.append(validator.message)
    return messages


def check_value(validators: Iterable[Validator], value: Any) -> ValidationResult:
    return ValidationResult(errors=tuple(collect_violations(validators, value)))


def one_of(values: Iterable[Any], message: str | None = None) -> Validator:
    allowed = frozenset(values)
    text = message or f"must be one of: {', '.join(sorted(str(v) for v in allowed))}"
    return Validator(lambda v: v in allowed, text)


def in_range(low: Any = None, high: Any = None, message: str | None = None) -> Validator:
    """Inclusive range check; either bound may be omitted."""
    if low is None and high is None:
        raise ValueError("in_range() needs at least one bound")

    def _within(value: Any) -> bool:
        if low is not None and value < low:
            return False
        if high is not None and value > high:
            return False
        return True

    if message is None:
        if low is not None and high is not None:
            message = f"must be between {low} and {high}"
        elif low is not None:
            message = f"must be >= {low}"
        else:
            message = f"must be <= {high}"
    return Validator(_within, message)


def non_negative(message: str | None = None) -> Validator:
    return in_range(low=0, message=message or "must be non-negative")


def instance_of(*types: type, message: str | None = None) -> Validator:
    names = ", ".join(t.__name__ for t in types)
    return Validator(lambda v: isinstance(v, types), message or f"must be an instance of {names}")


def matches(pattern: str, message: str | None = None) -> Validator:
    compiled = re.compile(pattern)
    return Validator(
        lambda v: isinstance(v, str) and compiled.fullmatch(v) is not None,
        message or f"must match {pattern!r}",
    )


def as_validators(items: Optional[Sequence[Validator]]) -> Tuple[Validator, ...]:
    if not items:
        return ()
    result = tuple(items)
    for item in result:
        if not isinstance(item, Validator):
            raise TypeError(f"Expected Validator, got {type(item).__name__}")
    return result


__all__ = [
    "Validator",
    "ValidationResult",
    "collect_violations",
    "check_value",
    "one_of",
    "in_range",
    "non_negative",
    "instance_of",
    "matches",
    "as_validators",
]
