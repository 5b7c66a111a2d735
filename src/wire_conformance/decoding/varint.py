"""
Unsigned LEB128 varint encoding and incremental decoding.

HOW LEB128 ENCODING WORKS
-------------------------
LEB128 (Little-Endian Base 128) splits an integer into 7-bit groups,
encoding each group in one byte. The MSB (bit 7) signals continuation:

- MSB = 1: More bytes follow
- MSB = 0: This is the final byte

Byte structure::

    [C|D D D D D D D]
     ^-- Continuation bit (1 = more bytes, 0 = last byte)
       ^-----------^-- 7 bits of data

Example: 300 = 0b100101100 encodes as [0xAC, 0x02].


INCREMENTAL DECODING
--------------------
The length of a varint is only known once its final byte arrives, so an
incremental decoder must suspend an unknown number of times. Malformed
input comes in two flavours: truncation (the input ends on a byte with
the continuation bit set) and overlong encodings (more than 10 bytes).

Non-minimal encodings such as [0x80, 0x00] for zero are accepted, the
same as protobuf. Re-encoding the decoded value yields the minimal form.


References:
    LEB128 specification:
        https://en.wikipedia.org/wiki/LEB128
    Protocol Buffers encoding:
        https://protobuf.dev/programming-guides/encoding/#varints
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from typing_extensions import Final

from .get import Get, GetFactory, fail, take

T = TypeVar("T")

MAX_VARINT_BYTES: Final = 10
"""A 64-bit value needs at most 10 bytes (70 bits, with 6 unused)."""


def put_varint(value: int) -> bytes:
    """
    Encode an unsigned integer as LEB128 varint.

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError("Varint must be non-negative")

    result = bytearray()

    # Emit low 7 bits with the continuation bit until the value fits in 7 bits.
    while value >= 0x80:
        result.append((value & 0x7F) | 0x80)
        value >>= 7

    # Final byte without continuation bit.
    result.append(value)

    return bytes(result)


def get_varint() -> Get[int]:
    """
    Read a varint, one byte at a time.

    Rejects encodings longer than `MAX_VARINT_BYTES`.
    """
    result = 0
    shift = 0

    while True:
        (byte,) = yield from take(1)

        # Byte 0 contributes bits 0-6, byte 1 bits 7-13, and so on.
        result |= (byte & 0x7F) << shift
        shift += 7

        if not (byte & 0x80):
            break

        if shift >= 7 * MAX_VARINT_BYTES:
            fail("Varint too long")

    return result


def get_counted(item: GetFactory[T]) -> Get[list[T]]:
    """Read a varint element count followed by that many items."""
    count = yield from get_varint()
    items: list[T] = []
    for _ in range(count):
        items.append((yield from item()))
    return items


def put_counted(put_item: Callable[[T], bytes], items: Sequence[T]) -> bytes:
    """Encode a varint element count followed by the items."""
    return put_varint(len(items)) + b"".join(put_item(item) for item in items)
