"""
Round-trip law for the remote-call serialization path.

That path has no streaming semantics: decode takes a whole buffer and
returns the value or None. For every `x`, `decode(encode(x))` must be a
value equal to `x`. Values of the type must themselves never be None.
"""

from __future__ import annotations

from typing import TypeVar

from ..codec import Equality, RpcCodec, structural_eq
from .common import describe_exception, mismatch, not_bytes
from .result import CheckResult

T = TypeVar("T")

RPC_ROUND_TRIP = "encodes and decodes correctly"


def check_rpc_round_trip(
    codec: RpcCodec[T],
    value: T,
    equality: Equality[T] = structural_eq,
    *,
    name: str = RPC_ROUND_TRIP,
) -> CheckResult:
    """Encode `value` for a remote call and expect it back unchanged."""
    try:
        data = codec.encode(value)
    except Exception as e:
        return CheckResult.failure(name, f"encode raised {describe_exception(e)}", value=value)

    if not isinstance(data, bytes):
        return CheckResult.failure(name, not_bytes("encode", data), value=value)

    try:
        decoded = codec.decode(data)
    except Exception as e:
        return CheckResult.failure(
            name,
            f"decode raised {describe_exception(e)} instead of returning a value or None",
            value=value,
            data=data,
        )

    if decoded is None:
        return CheckResult.failure(
            name, "decoding the encoder's own output returned None", value=value, data=data
        )

    problem = mismatch(equality, decoded, value)
    if problem is not None:
        return CheckResult.failure(name, problem, value=value, data=data)

    return CheckResult.success(name)
