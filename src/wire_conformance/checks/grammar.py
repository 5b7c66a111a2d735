"""
Non-nullable packet grammar.

The empty byte sequence must never decode to a value. If it did, a value
of the type could take zero bytes on the wire, and any framing that
concatenates or length-delimits such values would become ambiguous.

Two behaviours are legal on empty input: reject it at once, or ask for
more input and reject once end of input is signalled.
"""

from __future__ import annotations

from typing import Any

from ..codec import Codec
from ..decoding import Failed, Finished, IncrementalDecoder
from ..exceptions import AssertionViolation
from .result import CheckResult

NON_NULLABLE = "should have a non-nullable packet grammar"


def check_non_nullable(codec: Codec[Any], *, name: str = NON_NULLABLE) -> CheckResult:
    """Feed zero bytes, then end of input, and expect a rejection."""
    decoder: IncrementalDecoder[Any] = IncrementalDecoder(codec.decode)

    try:
        match decoder.push_chunk(b""):
            case Finished(value=value):
                return CheckResult.failure(
                    name,
                    "Done with empty input; packet grammar appears to be nullable",
                    value=value,
                    data=b"",
                )
            case Failed():
                return CheckResult.success(name, message="rejected empty input")

        final = decoder.push_end_of_input()
    except AssertionViolation as e:
        return CheckResult.failure(name, e.message, data=b"")

    if isinstance(final, Finished):
        return CheckResult.failure(
            name,
            "Done with empty input after end of input; packet grammar appears to be nullable",
            value=final.value,
            data=b"",
        )

    return CheckResult.success(name, message="asked for more input, then rejected")
