"""
Round-trip law for streaming byte codecs.

For every value `x`: `decode(encode(x))` finishes, consumes every byte, and
produces a value equal to `x`. A `Failed` outcome, leftover bytes or a
different value are all failures carrying `x`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TypeVar

from ..codec import Codec, Equality, structural_eq
from ..decoding import Failed, Finished, decode_all, split_chunks
from ..exceptions import AssertionViolation
from .common import describe_exception, mismatch, not_bytes
from .result import CheckResult

T = TypeVar("T")

logger = logging.getLogger(__name__)

ROUND_TRIP = "decodes encoded protocols correctly"
CHUNKED_ROUND_TRIP = "decodes values split across chunks"


def check_round_trip(
    codec: Codec[T],
    value: T,
    equality: Equality[T] = structural_eq,
    *,
    name: str = ROUND_TRIP,
) -> CheckResult:
    """Encode `value`, feed the bytes as one chunk, and expect `value` back."""
    return _check_round_trip(codec, value, equality, name, boundaries=())


def check_chunked_round_trip(
    codec: Codec[T],
    value: T,
    boundaries: Iterable[int],
    equality: Equality[T] = structural_eq,
    *,
    name: str = CHUNKED_ROUND_TRIP,
) -> CheckResult:
    """
    Like `check_round_trip`, but feed the encoding split at `boundaries`.

    The decoded value must not depend on where the input was split.
    """
    return _check_round_trip(codec, value, equality, name, boundaries=boundaries)


def _check_round_trip(
    codec: Codec[T],
    value: T,
    equality: Equality[T],
    name: str,
    *,
    boundaries: Iterable[int],
) -> CheckResult:
    try:
        data = codec.encode(value)
    except Exception as e:
        return CheckResult.failure(name, f"encode raised {describe_exception(e)}", value=value)

    if not isinstance(data, bytes):
        return CheckResult.failure(name, not_bytes("encode", data), value=value)

    chunks = split_chunks(data, boundaries)
    logger.debug("Round-tripping %r through %d chunk(s): 0x%s", value, len(chunks), data.hex())

    try:
        outcome = decode_all(codec.decode, chunks)
    except AssertionViolation as e:
        return CheckResult.failure(name, e.message, value=value, data=data)

    match outcome:
        case Failed(message=message, consumed=consumed):
            return CheckResult.failure(
                name,
                f"decoding the encoder's own output failed after {consumed} bytes: {message}",
                value=value,
                data=data,
            )
        case Finished(remaining=remaining) if remaining:
            return CheckResult.failure(
                name,
                f"{len(remaining)} byte(s) left over after decoding: 0x{remaining.hex()}",
                value=value,
                data=data,
            )
        case Finished(value=decoded):
            problem = mismatch(equality, decoded, value)
            if problem is not None:
                return CheckResult.failure(
                    name, f"round trip changed the value: {problem}", value=value, data=data
                )

    return CheckResult.success(name)
