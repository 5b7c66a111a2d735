"""
Incremental binary parsers.

A `Get[T]` is a generator that describes how to parse a `T`. It asks for
input by yielding requests, and returns the parsed value::

    def get_point() -> Get[Point]:
        x = yield from get_word16()
        y = yield from get_word16()
        return Point(x, y)

Parsers never touch the input directly. The runner buffers whatever chunks
arrive and suspends the generator (returning `NeedsMore`) until enough bytes
are buffered to answer the pending request. This is what lets a parser be
written once and then driven with input split at any point.


REQUESTS
--------
Only two requests exist:

  - take n bytes: answered with exactly n bytes, or rejected at end of input.
  - at end?     : answered with True only once end of input is signalled
                  and nothing is buffered.

Every primitive in this module is built from those two.


FAILURE
-------
A parser rejects its input by calling `fail()`, which raises `DecodeFailure`.
The runner turns it into a `Failed` outcome. Any other exception is a bug in
the parser and propagates out of the decode operation unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar

from ..exceptions import DecodeFailure, DecoderContractViolation
from .outcome import (
    END_OF_INPUT,
    Decode,
    DecodeOutcome,
    Failed,
    Finished,
    NeedsMore,
    one_shot,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class _Take:
    """Request for exactly `count` bytes."""

    count: int


@dataclass(frozen=True, slots=True)
class _AtEnd:
    """Request to know whether the input is exhausted."""


Get = Generator[_Take | _AtEnd, Any, T]
"""A parser producing a `T`."""

GetFactory = Callable[[], Get[T]]
"""A zero-argument callable creating a fresh parser, so that it can be run repeatedly."""


class _GetRunner(Generic[T]):
    """Drives one parser generator against buffered input."""

    def __init__(self, parser: Get[T]) -> None:
        self._parser = parser
        self._buffer = bytearray()
        self._consumed = 0
        self._at_eof = False
        self._request: _Take | _AtEnd | None = None
        self._reply: Any = None

    def start(self, data: bytes) -> DecodeOutcome[T]:
        self._buffer += data
        return self._run()

    def _feed(self, chunk: bytes | None) -> DecodeOutcome[T]:
        if chunk is None:
            self._at_eof = True
        else:
            self._buffer += chunk
        return self._run()

    def _run(self) -> DecodeOutcome[T]:
        while True:
            # Resume the parser with the reply to its previous request.
            if self._request is None:
                try:
                    self._request = self._parser.send(self._reply)
                except StopIteration as stop:
                    return Finished(stop.value, bytes(self._buffer), self._consumed)
                except DecodeFailure as e:
                    return Failed(e.message, self._consumed)
                self._reply = None

            match self._request:
                case _Take(count):
                    if len(self._buffer) >= count:
                        self._reply = bytes(self._buffer[:count])
                        del self._buffer[:count]
                        self._consumed += count
                    elif self._at_eof:
                        self._parser.close()
                        return Failed(
                            f"not enough bytes: needed {count}, {len(self._buffer)} available",
                            self._consumed,
                        )
                    else:
                        return NeedsMore(one_shot(self._feed))
                case _AtEnd():
                    if self._buffer:
                        self._reply = False
                    elif self._at_eof:
                        self._reply = True
                    else:
                        return NeedsMore(one_shot(self._feed))
                case other:
                    raise TypeError(f"Parser yielded {other!r}; expected an input request")

            self._request = None


def run_get_incremental(get: GetFactory[T]) -> Decode[T]:
    """
    Turn a parser factory into an incremental decode operation.

    Every call of the returned operation starts a fresh parser.
    """

    def decode(data: bytes) -> DecodeOutcome[T]:
        return _GetRunner(get()).start(data)

    return decode


def run_get(get: GetFactory[T], data: bytes) -> T:
    """
    Parse a complete input.

    Trailing bytes left over after the value are ignored.

    Raises:
        DecodeFailure: If the parser rejects the input.
    """
    outcome = run_get_incremental(get)(data)
    if isinstance(outcome, NeedsMore):
        outcome = outcome.resume(END_OF_INPUT)

    match outcome:
        case Finished(value=value):
            return value
        case Failed(message=message, consumed=consumed):
            raise DecodeFailure(message, offset=consumed)
        case _:
            raise DecoderContractViolation("asked for more input after end of input", data=data)


# =============================================================================
# Primitives
# =============================================================================


def fail(message: str) -> NoReturn:
    """Reject the input being parsed."""
    raise DecodeFailure(message)


def take(count: int) -> Get[bytes]:
    """Read exactly `count` bytes."""
    if count < 0:
        raise ValueError(f"Cannot take a negative number of bytes: {count}")
    data = yield _Take(count)
    return data


def skip(count: int) -> Get[None]:
    """Discard exactly `count` bytes."""
    yield from take(count)


def is_empty() -> Get[bool]:
    """Check whether the input is exhausted, waiting for more input if necessary."""
    at_end = yield _AtEnd()
    return at_end


def expect_bytes(expected: bytes) -> Get[None]:
    """Read `len(expected)` bytes and reject the input unless they match."""
    data = yield from take(len(expected))
    if data != expected:
        fail(f"expected 0x{expected.hex()}, got 0x{data.hex()}")


def get_word8() -> Get[int]:
    """Read an unsigned 8-bit integer."""
    (byte,) = yield from take(1)
    return byte


def get_word16() -> Get[int]:
    """Read an unsigned big-endian 16-bit integer."""
    data = yield from take(2)
    return int.from_bytes(data, "big")


def get_word32() -> Get[int]:
    """Read an unsigned big-endian 32-bit integer."""
    data = yield from take(4)
    return int.from_bytes(data, "big")


def get_word64() -> Get[int]:
    """Read an unsigned big-endian 64-bit integer."""
    data = yield from take(8)
    return int.from_bytes(data, "big")


def get_list(item: GetFactory[T]) -> Get[list[T]]:
    """
    Read items until the input is exhausted.

    Note that this grammar accepts the empty input. A type encoded this
    way needs some framing around it to be non-nullable.
    """
    items: list[T] = []
    while not (yield from is_empty()):
        items.append((yield from item()))
    return items


def put_word8(value: int) -> bytes:
    """Encode an unsigned 8-bit integer."""
    return value.to_bytes(1, "big")


def put_word16(value: int) -> bytes:
    """Encode an unsigned big-endian 16-bit integer."""
    return value.to_bytes(2, "big")


def put_word32(value: int) -> bytes:
    """Encode an unsigned big-endian 32-bit integer."""
    return value.to_bytes(4, "big")


def put_word64(value: int) -> bytes:
    """Encode an unsigned big-endian 64-bit integer."""
    return value.to_bytes(8, "big")
