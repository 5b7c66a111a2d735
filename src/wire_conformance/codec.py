"""
Capability interfaces supplied by the modules whose codecs are under test.

Each suite needs three things from a consumer module: a codec, a value
generator (a hypothesis strategy) and an equality. The harness only ever
calls these; it never inspects the types being encoded.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .decoding import Decode, GetFactory, run_get_incremental

T = TypeVar("T")

Equality = Callable[[T, T], bool]
"""Structural equality between a value and its decoded copy."""

structural_eq: Equality[Any] = operator.eq
"""Default equality: the type's own `==`."""


@dataclass(frozen=True, slots=True)
class Codec(Generic[T]):
    """A streaming binary codec."""

    encode: Callable[[T], bytes]
    """Serialize a value to bytes."""

    decode: Decode[T]
    """Incremental decode operation."""

    @classmethod
    def from_get_put(cls, get: GetFactory[T], put: Callable[[T], bytes]) -> Codec[T]:
        """Build a codec from a parser factory and an encoder."""
        return cls(encode=put, decode=run_get_incremental(get))


@dataclass(frozen=True, slots=True)
class RpcCodec(Generic[T]):
    """A non-streaming serialization whose decode reports failure as None."""

    encode: Callable[[T], bytes]
    """Serialize a value for a remote call."""

    decode: Callable[[bytes], T | None]
    """Deserialize a value, or None if the bytes do not represent one."""


@dataclass(frozen=True, slots=True)
class TextCodec(Generic[T]):
    """A render/parse pair."""

    render: Callable[[T], str]
    """Render a value as text."""

    parse: Callable[[str], T]
    """Parse text produced by `render`."""
