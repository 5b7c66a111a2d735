"""
Outcomes of an incremental decode operation.

A decode operation takes the first chunk of input and reports one of three
outcomes. Decoding is driven by inspecting the outcome, never by catching
exceptions::

    Failed      the input cannot represent a valid value (terminal)
    NeedsMore   more input is required; resume the continuation
    Finished    a value was decoded; unread input is kept (terminal)

A continuation receives either the next chunk of bytes, or `END_OF_INPUT`
(`None`) once the input source is exhausted. A decode operation must not
answer `END_OF_INPUT` with another `NeedsMore`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from typing_extensions import Final

from ..exceptions import ContinuationReusedError

T = TypeVar("T")

END_OF_INPUT: Final = None
"""Signal passed to a continuation once no more input will arrive."""


@dataclass(frozen=True, slots=True)
class Failed:
    """The decode operation rejected its input."""

    message: str
    """Why the input was rejected."""

    consumed: int
    """Bytes consumed before the failure was detected."""


@dataclass(frozen=True, slots=True)
class NeedsMore(Generic[T]):
    """The decode operation is suspended waiting for input."""

    continuation: Callable[[bytes | None], DecodeOutcome[T]]
    """One-shot function taking the next chunk, or `END_OF_INPUT`."""

    def resume(self, chunk: bytes | None) -> DecodeOutcome[T]:
        """Supply the next chunk (or `END_OF_INPUT`) and return the new outcome."""
        return self.continuation(chunk)


@dataclass(frozen=True, slots=True)
class Finished(Generic[T]):
    """The decode operation produced a value."""

    value: T
    """The decoded value."""

    remaining: bytes
    """Input that was fed but not consumed by the value."""

    consumed: int
    """Bytes consumed by the value."""


DecodeOutcome = Failed | NeedsMore[T] | Finished[T]
"""Union of the three decode outcomes for pattern matching."""

Decode = Callable[[bytes], DecodeOutcome[T]]
"""A decode operation: first chunk of input in, outcome out."""


def is_terminal(outcome: DecodeOutcome[Any]) -> bool:
    """Return True for `Failed` and `Finished`, which accept no further input."""
    return not isinstance(outcome, NeedsMore)


def one_shot(
    continuation: Callable[[bytes | None], DecodeOutcome[T]],
) -> Callable[[bytes | None], DecodeOutcome[T]]:
    """
    Wrap a continuation so that it can be resumed at most once.

    Raises:
        ContinuationReusedError: On the second call.
    """
    resumed = False

    def resume(chunk: bytes | None) -> DecodeOutcome[T]:
        nonlocal resumed
        if resumed:
            raise ContinuationReusedError()
        resumed = True
        return continuation(chunk)

    return resume
