"""
MessagePack serialization for remote calls.

Remote calls carry values as self-describing MessagePack rather than as the
compact streaming wire format. Decoding is all-or-nothing: either the whole
buffer is a valid encoding of the requested type, or there is no value.
"""

from __future__ import annotations

import logging
from typing import TypeVar

import msgspec

from .codec import RpcCodec

T = TypeVar("T")

logger = logging.getLogger(__name__)


def msgpack_codec(type_: type[T]) -> RpcCodec[T]:
    """
    Build a MessagePack codec for `type_`.

    Any type msgspec can handle works: builtins, dataclasses,
    `msgspec.Struct` subclasses and their compositions.
    """
    encoder = msgspec.msgpack.Encoder()
    decoder = msgspec.msgpack.Decoder(type_)

    def decode(data: bytes) -> T | None:
        try:
            return decoder.decode(data)
        except msgspec.DecodeError as e:
            # ValidationError subclasses DecodeError.
            logger.debug("MessagePack decode of %s failed: %s", type_.__name__, e)
            return None

    return RpcCodec(encode=encoder.encode, decode=decode)
