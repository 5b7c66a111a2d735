"""
Decoding arbitrary input.

Arbitrary bytes, mostly not valid encodings, are fed to a decode operation
followed by end of input. Exactly two outcomes are legal:

  - `Failed`: malformed input was rejected.
  - `Finished`: the input happened to be accepted. The decoded value must
    then itself satisfy the round-trip law. This catches codecs that accept
    some malformed input yet cannot faithfully reproduce what they built
    from it.

Anything else fails the check: an unresolved `NeedsMore` after end of
input, an exception escaping the decoder, or bad byte accounting.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from ..codec import Codec, Equality, structural_eq
from ..decoding import Failed, Finished, decode_all
from ..exceptions import AssertionViolation
from .result import CheckResult
from .roundtrip import check_round_trip

T = TypeVar("T")

logger = logging.getLogger(__name__)

ARBITRARY_INPUT = "handles arbitrary input"


def check_arbitrary_input(
    codec: Codec[T],
    data: bytes,
    equality: Equality[T] = structural_eq,
    *,
    name: str = ARBITRARY_INPUT,
) -> CheckResult:
    """Drive `codec.decode` over `data` and check the outcome is legal."""
    try:
        outcome = decode_all(codec.decode, [data])
    except AssertionViolation as e:
        return CheckResult.failure(name, e.message, data=data)

    match outcome:
        case Failed(message=message):
            logger.debug("Arbitrary input 0x%s rejected: %s", data.hex(), message)
            return CheckResult.success(name, message="rejected")
        case Finished(value=value):
            logger.debug("Arbitrary input 0x%s accepted as %r", data.hex(), value)
            result = check_round_trip(codec, value, equality, name=name)
            if not result.passed:
                return CheckResult.failure(
                    name,
                    f"accepted arbitrary input as {value!r}, which does not round-trip: "
                    f"{result.message}",
                    value=value,
                    data=data,
                )

    return CheckResult.success(name, message="accepted")
