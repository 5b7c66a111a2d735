"""Bit-packed codecs and their adapter onto the byte-level decode contract."""

from .adapter import bit_codec, run_bit_get, run_bit_put
from .get import BitGet, BitGetFactory, get_bit_bytes, get_bits, get_bool
from .put import BitPut, BitWriter

__all__ = [
    "BitGet",
    "BitGetFactory",
    "BitPut",
    "BitWriter",
    "bit_codec",
    "get_bit_bytes",
    "get_bits",
    "get_bool",
    "run_bit_get",
    "run_bit_put",
]
