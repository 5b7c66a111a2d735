"""Expectations about how a decoder treats one specific input."""

from __future__ import annotations

from typing import Any, TypeVar

from ..codec import Equality, structural_eq
from ..decoding import Decode, Failed, Finished, IncrementalDecoder, NeedsMore, decode_all
from ..exceptions import AssertionViolation
from .common import mismatch
from .result import CheckResult

T = TypeVar("T")


def expect_decoded(
    decode: Decode[T],
    data: bytes,
    expected: T,
    equality: Equality[T] = structural_eq,
    *,
    name: str = "decodes to the expected value",
) -> CheckResult:
    """
    Decode the whole of `data` and compare with `expected`.

    Trailing bytes after the value are ignored.
    """
    try:
        outcome = decode_all(decode, [data])
    except AssertionViolation as e:
        return CheckResult.failure(name, e.message, value=expected, data=data)

    match outcome:
        case Failed(message=message):
            return CheckResult.failure(name, message, value=expected, data=data)
        case Finished(value=value):
            problem = mismatch(equality, value, expected)
            if problem is not None:
                return CheckResult.failure(name, problem, value=expected, data=data)

    return CheckResult.success(name)


def expect_decoder_fail(
    decode: Decode[Any],
    data: bytes,
    expected_message: str,
    *,
    name: str = "rejects the input",
) -> CheckResult:
    """
    Push `data` without signalling end of input and expect a rejection.

    The input must be enough for the decoder to fail on its own; it must not
    merely be waiting for more bytes.
    """
    try:
        outcome = IncrementalDecoder(decode).push_chunk(data)
    except AssertionViolation as e:
        return CheckResult.failure(name, e.message, data=data)

    match outcome:
        case Failed(message=message) if expected_message in message:
            return CheckResult.success(name)
        case Failed(message=message):
            return CheckResult.failure(
                name,
                f"failure message {message!r} does not contain {expected_message!r}",
                data=data,
            )
        case NeedsMore():
            return CheckResult.failure(name, "Not enough input to reach failure", data=data)
        case Finished(value=value):
            return CheckResult.failure(
                name, "Input unexpectedly yielded a valid value", value=value, data=data
            )

    raise AssertionError(f"unreachable outcome {outcome!r}")
