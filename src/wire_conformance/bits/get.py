"""
Bit-granular parsers.

A `BitGet[T]` works exactly like a byte-level `Get[T]`, except that it
requests input in bits. Bits are read most-significant first within each
byte. Parsers reject input with the same `fail()` as byte parsers.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import TypeVar

from ..exceptions import BitPackingError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class _TakeBits:
    """Request for exactly `width` bits, answered as an unsigned integer."""

    width: int


BitGet = Generator[_TakeBits, int, T]
"""A bit-level parser producing a `T`."""

BitGetFactory = Callable[[], BitGet[T]]
"""A zero-argument callable creating a fresh bit-level parser."""


def get_bits(width: int) -> BitGet[int]:
    """Read `width` bits as an unsigned integer."""
    if width < 0:
        raise BitPackingError(width)
    value = yield _TakeBits(width)
    return value


def get_bool() -> BitGet[bool]:
    """Read a single bit as a flag."""
    bit = yield from get_bits(1)
    return bit == 1


def get_bit_bytes(count: int) -> BitGet[bytes]:
    """Read `count` whole bytes, which need not be byte-aligned."""
    value = yield from get_bits(8 * count)
    return value.to_bytes(count, "big")
