"""Conformance harness for binary wire-format codecs."""

from .bits import BitGet, BitPut, BitWriter, bit_codec, run_bit_get, run_bit_put
from .checks import (
    CheckResult,
    Counterexample,
    check_arbitrary_input,
    check_chunked_round_trip,
    check_non_nullable,
    check_round_trip,
    check_rpc_round_trip,
    check_textual_round_trip,
    expect_decoded,
    expect_decoder_fail,
)
from .codec import Codec, Equality, RpcCodec, TextCodec
from .decoding import (
    END_OF_INPUT,
    Decode,
    DecodeOutcome,
    Failed,
    Finished,
    Get,
    IncrementalDecoder,
    NeedsMore,
    run_get,
    run_get_incremental,
)
from .exceptions import (
    AssertionViolation,
    ConformanceError,
    DecodeFailure,
    DecoderAborted,
    DecoderContractViolation,
)
from .rpc import msgpack_codec
from .suite import (
    Check,
    ConformanceSuite,
    SuiteReport,
    binary_suite,
    bit_encoding_suite,
    byte_codec_suite,
    describe,
    rpc_suite,
    textual_suite,
)

__all__ = [
    # Outcomes and driving
    "END_OF_INPUT",
    "Decode",
    "DecodeOutcome",
    "Failed",
    "Finished",
    "NeedsMore",
    "IncrementalDecoder",
    "Get",
    "run_get",
    "run_get_incremental",
    # Bit packing
    "BitGet",
    "BitPut",
    "BitWriter",
    "bit_codec",
    "run_bit_get",
    "run_bit_put",
    # Capabilities
    "Codec",
    "RpcCodec",
    "TextCodec",
    "Equality",
    "msgpack_codec",
    # Checks
    "CheckResult",
    "Counterexample",
    "check_round_trip",
    "check_chunked_round_trip",
    "check_arbitrary_input",
    "check_non_nullable",
    "check_rpc_round_trip",
    "check_textual_round_trip",
    "expect_decoded",
    "expect_decoder_fail",
    # Suites
    "Check",
    "ConformanceSuite",
    "SuiteReport",
    "byte_codec_suite",
    "binary_suite",
    "bit_encoding_suite",
    "textual_suite",
    "rpc_suite",
    "describe",
    # Exceptions
    "ConformanceError",
    "DecodeFailure",
    "AssertionViolation",
    "DecoderContractViolation",
    "DecoderAborted",
]
