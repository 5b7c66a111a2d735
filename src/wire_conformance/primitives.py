"""
Conformance suites for the primitive codecs shipped with the harness.

These double as a self-check of the harness and as worked examples of
wiring a codec into each kind of suite.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from hypothesis import strategies as st

from .bits import BitGet, BitWriter, get_bits, get_bool
from .codec import TextCodec
from .decoding import (
    Get,
    get_counted,
    get_varint,
    get_word8,
    get_word16,
    get_word32,
    get_word64,
    put_counted,
    put_varint,
    put_word8,
    put_word16,
    put_word32,
    put_word64,
)
from .rpc import msgpack_codec
from .suite import (
    ConformanceSuite,
    binary_suite,
    bit_encoding_suite,
    describe,
    rpc_suite,
    textual_suite,
)


def _words(bits: int) -> st.SearchStrategy[int]:
    return st.integers(min_value=0, max_value=2**bits - 1)


@dataclass(frozen=True, slots=True)
class PacketHeader:
    """
    An 11-bit packed header, padded to two bytes on the wire.

    Layout (MSB first): kind (3 bits), urgent (1 bit), ttl (7 bits).
    """

    kind: int
    urgent: bool
    ttl: int


def get_packet_header() -> BitGet[PacketHeader]:
    """Read a `PacketHeader`."""
    kind = yield from get_bits(3)
    urgent = yield from get_bool()
    ttl = yield from get_bits(7)
    return PacketHeader(kind, urgent, ttl)


def put_packet_header(writer: BitWriter, header: PacketHeader) -> None:
    """Write a `PacketHeader`."""
    writer.put_bits(3, header.kind)
    writer.put_bool(header.urgent)
    writer.put_bits(7, header.ttl)


packet_headers: st.SearchStrategy[PacketHeader] = st.builds(
    PacketHeader, kind=_words(3), urgent=st.booleans(), ttl=_words(7)
)
"""Every `PacketHeader`."""


def get_word16_list() -> Get[list[int]]:
    """Read a counted list of 16-bit words."""
    items = yield from get_counted(get_word16)
    return items


def builtin_suites() -> ConformanceSuite:
    """Every suite for the built-in primitives."""
    return describe(
        "primitives",
        describe("Word8", binary_suite(get_word8, put_word8, _words(8))),
        describe("Word16", binary_suite(get_word16, put_word16, _words(16))),
        describe("Word32", binary_suite(get_word32, put_word32, _words(32))),
        describe(
            "Word64",
            binary_suite(get_word64, put_word64, _words(64)),
            rpc_suite(msgpack_codec(int), _words(64)),
            textual_suite(TextCodec(render=str, parse=int), _words(64)),
        ),
        describe("Varint", binary_suite(get_varint, put_varint, _words(64))),
        describe(
            "Word16 list",
            binary_suite(
                get_word16_list,
                partial(put_counted, put_word16),
                st.lists(_words(16), max_size=20),
            ),
        ),
        describe(
            "PacketHeader",
            bit_encoding_suite(get_packet_header, put_packet_header, packet_headers),
        ),
    )
