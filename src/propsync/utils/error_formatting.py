"""Shared formatting for validation and lookup failures."""

from typing import Any, Sequence


def format_violations(field_name: str, value: Any, messages: Sequence[str]) -> str:
    """
    Format every violation collected for one candidate value.

    Args:
        field_name: Resolved field name (e.g., "radius")
        value: Rejected candidate value
        messages: Violation messages in validator order

    Returns:
        Message like "radius=-1: must be non-negative; must be < 10"
    """
    if not messages:
        return f"{field_name}={value!r}: ok"
    return f"{field_name}={value!r}: " + "; ".join(messages)


def format_validators(messages: Sequence[str]) -> str:
    """Compact validator listing for tables."""
    if not messages:
        return "-"
    return "\n".join(f"• {m}" for m in messages)
