"""
Lifting bit-granular codecs onto the byte-level decode contract.

From the outside an adapted codec is indistinguishable from a byte codec:
it encodes to whole bytes and decodes incrementally with the same three
outcomes. Inside, the bit parser pulls whole bytes on demand; bits left
over in the last byte are discarded when the parser returns, so every
value occupies a whole number of bytes.
"""

from __future__ import annotations

from functools import partial
from typing import TypeVar

from ..codec import Codec
from ..decoding import Get, GetFactory, run_get_incremental, take
from .get import BitGetFactory, _TakeBits
from .put import BitPut, BitWriter

T = TypeVar("T")


def run_bit_get(bit_get: BitGetFactory[T]) -> GetFactory[T]:
    """Turn a bit-level parser factory into a byte-level one."""

    def get() -> Get[T]:
        parser = bit_get()

        # Bits pulled from the input but not yet handed to the parser.
        acc = 0
        available = 0
        reply: int | None = None

        while True:
            try:
                request = parser.send(reply)  # type: ignore[arg-type]
            except StopIteration as stop:
                return stop.value

            match request:
                case _TakeBits(width):
                    if available < width:
                        data = yield from take((width - available + 7) // 8)
                        acc = (acc << (8 * len(data))) | int.from_bytes(data, "big")
                        available += 8 * len(data)

                    available -= width
                    reply = acc >> available
                    acc &= (1 << available) - 1
                case other:
                    raise TypeError(f"Bit parser yielded {other!r}; expected a bit request")

    return get


def run_bit_put(bit_put: BitPut[T], value: T) -> bytes:
    """Encode `value` with a bit-level encoder, padding to a byte boundary."""
    writer = BitWriter()
    bit_put(writer, value)
    return writer.getvalue()


def bit_codec(bit_get: BitGetFactory[T], bit_put: BitPut[T]) -> Codec[T]:
    """Build a byte-level codec from a bit-level parser and encoder."""
    return Codec(
        encode=partial(run_bit_put, bit_put),
        decode=run_get_incremental(run_bit_get(bit_get)),
    )
