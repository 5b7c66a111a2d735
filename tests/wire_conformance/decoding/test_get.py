"""Tests for incremental parsers and the runner that drives them."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from wire_conformance.decoding import (
    END_OF_INPUT,
    Failed,
    Finished,
    Get,
    GetFactory,
    NeedsMore,
    expect_bytes,
    fail,
    get_list,
    get_word8,
    get_word16,
    get_word32,
    get_word64,
    put_word8,
    put_word16,
    put_word32,
    put_word64,
    run_get,
    run_get_incremental,
    skip,
    take,
)
from wire_conformance.exceptions import ContinuationReusedError, DecodeFailure


def get_tagged_word16() -> Get[int]:
    """Magic prefix, a version byte that must be 1, then a 16-bit word."""
    yield from expect_bytes(b"WC")
    version = yield from get_word8()
    if version != 1:
        fail(f"unsupported version {version}")
    value = yield from get_word16()
    return value


class TestWords:
    """Fixed-width big-endian integers."""

    @pytest.mark.parametrize(
        ("get", "put", "value", "encoded"),
        [
            (get_word8, put_word8, 0xAB, b"\xab"),
            (get_word16, put_word16, 0x1234, b"\x12\x34"),
            (get_word32, put_word32, 0xDEADBEEF, b"\xde\xad\xbe\xef"),
            (get_word64, put_word64, 1234, b"\x00\x00\x00\x00\x00\x00\x04\xd2"),
        ],
    )
    def test_encode_and_decode(
        self,
        get: GetFactory[int],
        put: Callable[[int], bytes],
        value: int,
        encoded: bytes,
    ) -> None:
        """Each width encodes big-endian and decodes back."""
        assert put(value) == encoded
        assert run_get(get, encoded) == value

    def test_put_out_of_range(self) -> None:
        """Values too wide for the word are rejected by the encoder."""
        with pytest.raises(OverflowError):
            put_word8(256)


class TestRunGetIncremental:
    """The runner suspends, resumes, fails and finishes according to the contract."""

    def test_finishes_on_complete_input(self) -> None:
        """A full encoding finishes at once."""
        decode = run_get_incremental(get_word64)
        assert decode(put_word64(1234)) == Finished(1234, b"", 8)

    def test_keeps_trailing_bytes(self) -> None:
        """Unread input is reported as remaining."""
        decode = run_get_incremental(get_word64)
        assert decode(put_word64(1) + b"xy") == Finished(1, b"xy", 8)

    def test_suspends_until_enough_input(self) -> None:
        """A partial encoding asks for more, then finishes once it arrives."""
        decode = run_get_incremental(get_word64)
        outcome = decode(b"\x00\x00\x00\x00")
        assert isinstance(outcome, NeedsMore)
        assert outcome.resume(b"\x00\x00\x04\xd2") == Finished(1234, b"", 8)

    def test_empty_chunk_is_not_end_of_input(self) -> None:
        """An empty chunk leaves the decode suspended."""
        decode = run_get_incremental(get_word8)
        outcome = decode(b"")
        assert isinstance(outcome, NeedsMore)
        outcome = outcome.resume(b"")
        assert isinstance(outcome, NeedsMore)
        assert outcome.resume(b"\x07") == Finished(7, b"", 1)

    def test_truncated_input_fails_at_end_of_input(self) -> None:
        """A single 0xff is not enough for a 64-bit word."""
        outcome = run_get_incremental(get_word64)(b"\xff")
        assert isinstance(outcome, NeedsMore)
        final = outcome.resume(END_OF_INPUT)
        assert isinstance(final, Failed)
        assert "not enough bytes" in final.message
        assert final.consumed == 0

    def test_fail_reports_consumed_bytes(self) -> None:
        """fail() becomes Failed with the bytes consumed so far."""
        outcome = run_get_incremental(get_tagged_word16)(b"WC\x02\x00\x01")
        assert outcome == Failed("unsupported version 2", 3)

    def test_expect_bytes_mismatch(self) -> None:
        """A wrong magic prefix is rejected."""
        outcome = run_get_incremental(get_tagged_word16)(b"XX\x01\x00\x01")
        assert outcome == Failed("expected 0x5743, got 0x5858", 2)

    def test_each_call_starts_a_fresh_parser(self) -> None:
        """The decode operation is reusable."""
        decode = run_get_incremental(get_tagged_word16)
        assert decode(b"WC\x01\x00\x05") == Finished(5, b"", 5)
        assert decode(b"WC\x01\x00\x06") == Finished(6, b"", 5)

    def test_continuation_is_one_shot(self) -> None:
        """Resuming the same suspended decode twice is an error."""
        outcome = run_get_incremental(get_word16)(b"\x00")
        assert isinstance(outcome, NeedsMore)
        outcome.resume(b"\x01")
        with pytest.raises(ContinuationReusedError):
            outcome.resume(b"\x01")

    def test_other_exceptions_propagate(self) -> None:
        """Exceptions other than DecodeFailure escape the decode operation."""

        def get_negative() -> Get[bytes]:
            data = yield from take(-1)
            return data

        with pytest.raises(ValueError, match="negative"):
            run_get_incremental(get_negative)(b"")

    def test_junk_request_is_a_type_error(self) -> None:
        """Parsers may only yield input requests."""

        def get_junk() -> Get[None]:
            yield "junk"  # type: ignore[misc]

        with pytest.raises(TypeError, match="expected an input request"):
            run_get_incremental(get_junk)(b"")


class TestGetList:
    """Reading items until end of input."""

    def test_empty_input(self) -> None:
        """The empty input is an empty list, but only once end of input is known."""
        outcome = run_get_incremental(lambda: get_list(get_word8))(b"")
        assert isinstance(outcome, NeedsMore)
        assert outcome.resume(END_OF_INPUT) == Finished([], b"", 0)

    def test_items_across_chunks(self) -> None:
        """Items keep arriving until end of input."""
        outcome = run_get_incremental(lambda: get_list(get_word8))(b"\x01")
        assert isinstance(outcome, NeedsMore)
        outcome = outcome.resume(b"\x02")
        assert isinstance(outcome, NeedsMore)
        assert outcome.resume(END_OF_INPUT) == Finished([1, 2], b"", 2)

    def test_partial_item_fails(self) -> None:
        """A trailing partial item is rejected."""
        assert isinstance(run_get(lambda: get_list(get_word16), b"\x00\x01"), list)
        with pytest.raises(DecodeFailure, match="not enough bytes"):
            run_get(lambda: get_list(get_word16), b"\x00\x01\x02")


class TestRunGet:
    """Non-incremental parsing."""

    def test_ignores_trailing_bytes(self) -> None:
        """Leftover input is dropped."""
        assert run_get(get_word8, b"\x01\x02") == 1

    def test_skip(self) -> None:
        """skip() discards bytes."""

        def get_second() -> Get[int]:
            yield from skip(1)
            value = yield from get_word8()
            return value

        assert run_get(get_second, b"\x01\x02") == 2

    def test_failure_raises_with_offset(self) -> None:
        """A rejection surfaces as DecodeFailure carrying the offset."""
        with pytest.raises(DecodeFailure) as exc_info:
            run_get(get_tagged_word16, b"WC\x09")
        assert exc_info.value.offset == 3
        assert "unsupported version 9" in exc_info.value.message
