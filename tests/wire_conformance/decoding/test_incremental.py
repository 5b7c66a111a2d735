"""Tests for the incremental decoder driver and its contract policing."""

from __future__ import annotations

import pytest

from tests.wire_conformance.helpers import (
    CRASHING_WORD8,
    HAND_WRITTEN_WORD32,
    MISCOUNTING,
    STUCK,
    WORD64,
)
from wire_conformance.decoding import (
    Failed,
    Finished,
    NeedsMore,
    decode_all,
    put_word64,
    split_chunks,
)
from wire_conformance.decoding.incremental import IncrementalDecoder
from wire_conformance.exceptions import DecoderAborted, DecoderContractViolation


class TestFeed:
    """Feeding whole chunk lists."""

    def test_single_chunk(self) -> None:
        """1234 encodes and decodes with nothing left over."""
        encoded = WORD64.encode(1234)
        assert decode_all(WORD64.decode, [encoded]) == Finished(1234, b"", 8)

    @pytest.mark.parametrize("boundaries", [[1], [3, 5], [1, 2, 3, 4, 5, 6, 7]])
    def test_split_chunks(self, boundaries: list[int]) -> None:
        """Any chunking gives the same result."""
        chunks = split_chunks(WORD64.encode(1234), boundaries)
        assert decode_all(WORD64.decode, chunks) == Finished(1234, b"", 8)

    def test_no_chunks(self) -> None:
        """With no input at all the decoder sees one empty chunk, then end of input."""
        outcome = decode_all(WORD64.decode, [])
        assert isinstance(outcome, Failed)

    def test_truncated_input_fails(self) -> None:
        """[0xff] is not a 64-bit word."""
        outcome = decode_all(WORD64.decode, [b"\xff"])
        assert isinstance(outcome, Failed)
        assert outcome.consumed == 0

    def test_hand_written_decoder(self) -> None:
        """Decoders need not be built from parsers."""
        chunks = [b"\x00", b"\x00\x01", b"\x02\x09"]
        assert decode_all(HAND_WRITTEN_WORD32.decode, chunks) == Finished(0x102, b"\x09", 4)


class TestPushChunk:
    """Pushing chunks one at a time."""

    def test_tracks_outcome_and_input(self) -> None:
        """The latest outcome and all fed bytes are exposed."""
        decoder = IncrementalDecoder(WORD64.decode)
        assert decoder.outcome is None
        assert isinstance(decoder.push_chunk(b"\x00" * 4), NeedsMore)
        assert isinstance(decoder.outcome, NeedsMore)
        assert decoder.bytes_fed == b"\x00" * 4

    def test_extra_input_after_finished(self) -> None:
        """Chunks arriving after a value extend its remaining bytes."""
        decoder = IncrementalDecoder(WORD64.decode)
        assert decoder.push_chunk(put_word64(7)) == Finished(7, b"", 8)
        assert decoder.push_chunk(b"ab") == Finished(7, b"ab", 8)
        assert decoder.push_end_of_input() == Finished(7, b"ab", 8)

    def test_extra_input_after_failed(self) -> None:
        """A rejection is final."""
        decoder = IncrementalDecoder(HAND_WRITTEN_WORD32.decode)
        decoder.push_chunk(b"\x01")
        failed = decoder.push_end_of_input()
        assert failed == Failed("expected 4 bytes, got 1", 0)
        assert decoder.push_chunk(b"\x02\x03\x04") == failed

    def test_end_of_input_without_chunks(self) -> None:
        """End of input alone runs the decoder on the empty input first."""
        decoder = IncrementalDecoder(HAND_WRITTEN_WORD32.decode)
        assert decoder.push_end_of_input() == Failed("expected 4 bytes, got 0", 0)


    def test_end_of_input_repeated(self) -> None:
        """Signalling end of input again returns the same terminal outcome."""
        decoder = IncrementalDecoder(WORD64.decode)
        decoder.push_chunk(put_word64(9))
        decoder.push_chunk(b"z")
        assert decoder.push_end_of_input() == Finished(9, b"z", 8)
        assert decoder.push_end_of_input() == Finished(9, b"z", 8)


class TestContractViolations:
    """Broken decoders are caught, not trusted."""

    def test_needs_more_after_end_of_input(self) -> None:
        """A decoder that never settles violates the contract."""
        with pytest.raises(DecoderContractViolation, match="after end of input"):
            decode_all(STUCK.decode, [b"\x01"])

    def test_exception_is_an_abort(self) -> None:
        """Raising instead of failing aborts the decode."""
        with pytest.raises(DecoderAborted, match="ValueError") as exc_info:
            decode_all(CRASHING_WORD8.decode, [b"\xff"])
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.data == b"\xff"

    def test_wrong_byte_accounting(self) -> None:
        """Finished must account for every byte fed."""
        with pytest.raises(DecoderContractViolation, match="0 bytes consumed"):
            decode_all(MISCOUNTING.decode, [b"\x05\x06"])

    def test_failed_consuming_more_than_fed(self) -> None:
        """Failed cannot claim bytes it was never given."""
        with pytest.raises(DecoderContractViolation, match="consuming 3 of 1"):
            decode_all(lambda data: Failed("nope", 3), [b"\x00"])

    def test_not_an_outcome(self) -> None:
        """Decoders must return one of the three outcomes."""
        with pytest.raises(DecoderContractViolation, match="returned int"):
            decode_all(lambda data: 42, [b"\x00"])  # type: ignore[arg-type, return-value]

    def test_violations_are_assertion_errors(self) -> None:
        """Pytest reports a violation as a failure, not an error."""
        with pytest.raises(AssertionError):
            decode_all(STUCK.decode, [])
