"""Exception hierarchy for the wire conformance harness."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .checks.result import CheckResult


class ConformanceError(Exception):
    """
    Base exception for all harness errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class DecodeFailure(ConformanceError):
    """
    Raised inside a `Get` to reject its input.

    The incremental runner converts it into a `Failed` outcome, so it never
    escapes a decode operation built with `run_get_incremental`.

    Attributes:
        detail: Description of what went wrong.
        offset: The byte offset where the error occurred (if known).
    """

    def __init__(self, detail: str, *, offset: int | None = None) -> None:
        self.detail = detail
        self.offset = offset

        msg = detail
        if offset is not None:
            msg = f"{msg} (at byte offset {offset})"

        super().__init__(msg)


class AssertionViolation(ConformanceError, AssertionError):
    """
    A codec under test broke one of the laws the harness checks.

    Subclasses `AssertionError` so that pytest reports it as a test failure
    rather than an error.

    Attributes:
        result: The failed check result, when one exists.
    """

    def __init__(self, message: str, *, result: CheckResult | None = None) -> None:
        self.result = result
        super().__init__(message)


class DecoderContractViolation(AssertionViolation):
    """
    Raised when a decode operation breaks the three-outcome contract.

    Attributes:
        detail: Which part of the contract was broken.
        data: The input fed before the violation was observed.
    """

    def __init__(self, detail: str, *, data: bytes | None = None) -> None:
        self.detail = detail
        self.data = data

        msg = f"Decoder contract violated: {detail}"
        if data is not None:
            msg = f"{msg} (input: 0x{data.hex()})"

        super().__init__(msg)


class DecoderAborted(AssertionViolation):
    """
    Raised when a decode operation raises instead of returning an outcome.

    The original exception is chained as `__cause__`.

    Attributes:
        cause: The exception raised by the decode operation.
        data: The input fed before the abort.
    """

    def __init__(self, cause: BaseException, *, data: bytes | None = None) -> None:
        self.cause = cause
        self.data = data

        msg = f"Decoder aborted with {type(cause).__name__}: {cause}"
        if data is not None:
            msg = f"{msg} (input: 0x{data.hex()})"

        super().__init__(msg)


class ContinuationReusedError(ConformanceError):
    """Raised when a one-shot `NeedsMore` continuation is resumed twice."""

    def __init__(self) -> None:
        super().__init__("Continuation has already been resumed")


class BitPackingError(ConformanceError):
    """
    Raised when a value does not fit the bit width it is written with.

    Attributes:
        width: Requested bit width.
        value: The value that could not be written (if applicable).
    """

    def __init__(self, width: int, value: int | None = None) -> None:
        self.width = width
        self.value = value

        if value is None:
            msg = f"Invalid bit width {width}"
        else:
            msg = f"{value} does not fit in {width} bits"

        super().__init__(msg)
