"""Tests for decode outcomes and one-shot continuations."""

from __future__ import annotations

import pytest

from wire_conformance.decoding import (
    END_OF_INPUT,
    DecodeOutcome,
    Failed,
    Finished,
    NeedsMore,
    is_terminal,
    one_shot,
)
from wire_conformance.exceptions import ContinuationReusedError


def _finish_with(chunk: bytes | None) -> DecodeOutcome[bytes]:
    data = chunk or b""
    return Finished(data, b"", len(data))


class TestIsTerminal:
    """Failed and Finished are terminal; NeedsMore is not."""

    def test_failed_is_terminal(self) -> None:
        """A rejection accepts no further input."""
        assert is_terminal(Failed("bad tag", 1))

    def test_finished_is_terminal(self) -> None:
        """A decoded value accepts no further input."""
        assert is_terminal(Finished(1, b"", 1))

    def test_needs_more_is_not_terminal(self) -> None:
        """A suspended decode is still waiting."""
        assert not is_terminal(NeedsMore(_finish_with))


class TestNeedsMore:
    """Tests for resuming a suspended decode."""

    def test_resume_passes_chunk(self) -> None:
        """resume() hands the chunk to the continuation."""
        assert NeedsMore(_finish_with).resume(b"ab") == Finished(b"ab", b"", 2)

    def test_resume_passes_end_of_input(self) -> None:
        """END_OF_INPUT is delivered as None."""
        seen: list[bytes | None] = []

        def record(chunk: bytes | None) -> DecodeOutcome[None]:
            seen.append(chunk)
            return Failed("done", 0)

        NeedsMore(record).resume(END_OF_INPUT)
        assert seen == [None]


class TestOneShot:
    """Tests for the one-shot continuation wrapper."""

    def test_first_call_goes_through(self) -> None:
        """The wrapped continuation runs normally once."""
        assert one_shot(_finish_with)(b"x") == Finished(b"x", b"", 1)

    def test_second_call_raises(self) -> None:
        """Resuming the same continuation twice is rejected."""
        resume = one_shot(_finish_with)
        resume(b"x")
        with pytest.raises(ContinuationReusedError, match="already been resumed"):
            resume(b"y")


def test_outcomes_are_immutable() -> None:
    """Outcomes are frozen dataclasses."""
    outcome = Failed("bad", 0)
    with pytest.raises(AttributeError):
        outcome.message = "other"  # type: ignore[misc]
