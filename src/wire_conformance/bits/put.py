"""Bit-granular encoding."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from ..exceptions import BitPackingError

T = TypeVar("T")


class BitWriter:
    """
    Accumulates bits most-significant first and emits whole bytes.

    The final partial byte is padded with zero bits by `getvalue()`.
    """

    __slots__ = ("_acc", "_pending", "_out")

    def __init__(self) -> None:
        self._acc = 0
        self._pending = 0
        self._out = bytearray()

    @property
    def bit_length(self) -> int:
        """Number of bits written so far."""
        return 8 * len(self._out) + self._pending

    def put_bits(self, width: int, value: int) -> None:
        """
        Write `value` using exactly `width` bits.

        Raises:
            BitPackingError: If `width` is negative or `value` does not fit.
        """
        if width < 0:
            raise BitPackingError(width)
        if not 0 <= value < (1 << width):
            raise BitPackingError(width, value)

        self._acc = (self._acc << width) | value
        self._pending += width

        while self._pending >= 8:
            self._pending -= 8
            self._out.append((self._acc >> self._pending) & 0xFF)
        self._acc &= (1 << self._pending) - 1

    def put_bool(self, flag: bool) -> None:
        """Write a single bit."""
        self.put_bits(1, 1 if flag else 0)

    def put_bit_bytes(self, data: bytes) -> None:
        """Write whole bytes at the current bit position."""
        for byte in data:
            self.put_bits(8, byte)

    def getvalue(self) -> bytes:
        """Return everything written so far, zero-padded to a byte boundary."""
        if not self._pending:
            return bytes(self._out)
        return bytes(self._out) + bytes([self._acc << (8 - self._pending)])


BitPut = Callable[[BitWriter, T], None]
"""A bit-level encoder writing a `T` into a `BitWriter`."""
