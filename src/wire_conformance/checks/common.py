"""Helpers shared by the individual checks."""

from __future__ import annotations

from typing import Any

from ..codec import Equality


def describe_exception(e: BaseException) -> str:
    """Render an exception as `Type: message`."""
    return f"{type(e).__name__}: {e}"


def mismatch(equality: Equality[Any], actual: Any, expected: Any) -> str | None:
    """
    Compare two values with a consumer-supplied equality.

    Returns:
        None if they are equal, otherwise a diagnostic. An equality that
        raises counts as a mismatch.
    """
    try:
        if equality(actual, expected):
            return None
    except Exception as e:
        return f"equality raised {describe_exception(e)} comparing {actual!r} with {expected!r}"
    return f"got {actual!r}, expected {expected!r}"


def not_bytes(operation: str, returned: Any) -> str:
    """Diagnostic for an operation that had to return `bytes` but did not."""
    return f"{operation} returned {type(returned).__name__}, not bytes: {returned!r}"
