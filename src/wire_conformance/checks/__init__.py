"""Individual conformance checks. Each returns a `CheckResult`; none raise for a codec defect."""

from .expectations import expect_decoded, expect_decoder_fail
from .fuzz import ARBITRARY_INPUT, check_arbitrary_input
from .grammar import NON_NULLABLE, check_non_nullable
from .result import CheckResult, Counterexample
from .roundtrip import CHUNKED_ROUND_TRIP, ROUND_TRIP, check_chunked_round_trip, check_round_trip
from .rpc import RPC_ROUND_TRIP, check_rpc_round_trip
from .textual import TEXTUAL_ROUND_TRIP, check_textual_round_trip

__all__ = [
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
    "ROUND_TRIP",
    "CHUNKED_ROUND_TRIP",
    "ARBITRARY_INPUT",
    "NON_NULLABLE",
    "RPC_ROUND_TRIP",
    "TEXTUAL_ROUND_TRIP",
]
