"""
Driving a decode operation to a terminal outcome.

The driver feeds chunks into a decode operation one at a time. It starts
with the first chunk, and each later chunk goes to the pending
continuation. When the chunks run out it sends `END_OF_INPUT`. The driver
also polices the decode contract:

  - `NeedsMore` in answer to `END_OF_INPUT` is a contract violation.
  - An exception escaping the decode operation is an abort.
  - `Finished` and `Failed` must account for the bytes they were fed.

Violations are raised as `AssertionViolation` subclasses, which the checks
turn into failed results.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from ..exceptions import DecoderAborted, DecoderContractViolation
from .outcome import END_OF_INPUT, Decode, DecodeOutcome, Failed, Finished, NeedsMore

T = TypeVar("T")

logger = logging.getLogger(__name__)


class IncrementalDecoder(Generic[T]):
    """
    Feeds input into one run of a decode operation.

    An instance is single-use: it tracks the outcome of one decode from the
    first chunk to a terminal outcome.
    """

    def __init__(self, decode: Decode[T]) -> None:
        self._decode = decode
        self._outcome: DecodeOutcome[T] | None = None
        self._fed = bytearray()
        self._unread = bytearray()

    @property
    def bytes_fed(self) -> bytes:
        """All input supplied so far, including chunks that arrived after a terminal outcome."""
        return bytes(self._fed)

    @property
    def outcome(self) -> DecodeOutcome[T] | None:
        """The latest outcome, or None before any input was pushed."""
        return self._outcome

    def push_chunk(self, data: bytes) -> DecodeOutcome[T]:
        """
        Supply one chunk without signalling end of input.

        Once the outcome is terminal the decoder accepts no further input.
        Extra chunks are then appended to `remaining` of a `Finished`
        outcome, and a `Failed` outcome is returned unchanged.
        """
        self._fed += data

        match self._outcome:
            case None:
                outcome = self._call(self._decode, data)
            case NeedsMore() as pending:
                outcome = self._call(pending.resume, data)
            case terminal:
                self._unread += data
                return self._with_unread(terminal)

        return self._settle(outcome)

    def push_end_of_input(self) -> DecodeOutcome[T]:
        """
        Signal that no more input will arrive and return the terminal outcome.

        Raises:
            DecoderContractViolation: If the decoder still asks for more input.
            DecoderAborted: If the decoder raises.
        """
        outcome = self._outcome if self._outcome is not None else self.push_chunk(b"")

        if isinstance(outcome, NeedsMore):
            outcome = self._settle(self._call(outcome.resume, END_OF_INPUT))
            if isinstance(outcome, NeedsMore):
                logger.debug("Decoder asked for more input after end of input")
                raise DecoderContractViolation(
                    "asked for more input after end of input", data=self.bytes_fed
                )

        return self._with_unread(outcome)

    def feed(self, chunks: Iterable[bytes]) -> DecodeOutcome[T]:
        """
        Supply every chunk in order, then end of input.

        Returns:
            The terminal outcome, `Failed` or `Finished`.
        """
        for chunk in chunks:
            self.push_chunk(chunk)
        return self.push_end_of_input()

    def _call(self, step: Callable[[Any], DecodeOutcome[T]], arg: bytes | None) -> Any:
        try:
            return step(arg)
        except Exception as e:
            logger.debug("Decoder raised %s after %d bytes", type(e).__name__, len(self._fed))
            raise DecoderAborted(e, data=self.bytes_fed) from e

    def _settle(self, outcome: Any) -> DecodeOutcome[T]:
        """Validate a freshly returned outcome and record it."""
        fed = len(self._fed)

        match outcome:
            case NeedsMore():
                pass
            case Failed(consumed=consumed):
                if not 0 <= consumed <= fed:
                    raise DecoderContractViolation(
                        f"failed after consuming {consumed} of {fed} bytes", data=self.bytes_fed
                    )
            case Finished(remaining=remaining, consumed=consumed):
                if consumed < 0 or consumed + len(remaining) != fed:
                    raise DecoderContractViolation(
                        f"finished with {consumed} bytes consumed and {len(remaining)} "
                        f"remaining, but {fed} bytes were fed",
                        data=self.bytes_fed,
                    )
            case _:
                raise DecoderContractViolation(
                    f"returned {type(outcome).__name__}, not a decode outcome",
                    data=self.bytes_fed,
                )

        self._outcome = outcome
        return outcome

    def _with_unread(self, outcome: DecodeOutcome[T]) -> DecodeOutcome[T]:
        """Append input that arrived after a value was finished to its remaining bytes."""
        if isinstance(outcome, Finished) and self._unread:
            remaining = outcome.remaining + bytes(self._unread)
            return Finished(outcome.value, remaining, outcome.consumed)
        return outcome


def decode_all(decode: Decode[T], chunks: Iterable[bytes]) -> DecodeOutcome[T]:
    """Run `decode` over `chunks` followed by end of input."""
    return IncrementalDecoder(decode).feed(chunks)
