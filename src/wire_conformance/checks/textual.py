"""
Round-trip law for render/parse pairs.

`parse` only has to handle text that `render` produced, so it raising on
such text is a failure like any other mismatch.
"""

from __future__ import annotations

from typing import TypeVar

from ..codec import Equality, TextCodec, structural_eq
from .common import describe_exception, mismatch
from .result import CheckResult

T = TypeVar("T")

TEXTUAL_ROUND_TRIP = "encodes and decodes correctly"


def check_textual_round_trip(
    codec: TextCodec[T],
    value: T,
    equality: Equality[T] = structural_eq,
    *,
    name: str = TEXTUAL_ROUND_TRIP,
) -> CheckResult:
    """Render `value`, parse the text, and expect `value` back."""
    try:
        text = codec.render(value)
    except Exception as e:
        return CheckResult.failure(name, f"render raised {describe_exception(e)}", value=value)

    try:
        parsed = codec.parse(text)
    except Exception as e:
        return CheckResult.failure(
            name, f"parse raised {describe_exception(e)} on rendered text {text!r}", value=value
        )

    problem = mismatch(equality, parsed, value)
    if problem is not None:
        return CheckResult.failure(name, f"parsing {text!r} {problem}", value=value)

    return CheckResult.success(name)
