"""Pass/fail results of conformance checks."""

from __future__ import annotations

from typing import Any, Self

from pydantic import field_serializer
from typing_extensions import Final

from ..base import StrictBaseModel
from ..exceptions import AssertionViolation


_NO_VALUE: Final = object()
"""Marks a failure that has no offending value, as distinct from a `None` value."""


class Counterexample(StrictBaseModel):
    """The input that made a check fail."""

    value: Any = None
    """The offending value, when the check was driven by a value."""

    has_value: bool = False
    """Whether `value` was supplied, so that a genuine `None` value is still reported."""

    data: bytes | None = None
    """The offending byte sequence, when one is involved."""

    @field_serializer("value", when_used="json")
    def _serialize_value(self, value: Any) -> str | None:
        return repr(value) if self.has_value else None

    @field_serializer("data", when_used="json")
    def _serialize_data(self, data: bytes | None) -> str | None:
        return None if data is None else "0x" + data.hex()

    def __str__(self) -> str:
        parts = []
        if self.has_value:
            parts.append(f"value={self.value!r}")
        if self.data is not None:
            parts.append(f"bytes=0x{self.data.hex()}")
        return ", ".join(parts) or "<none>"


class CheckResult(StrictBaseModel):
    """
    Outcome of one check.

    Checks never raise for a defect in the codec under test. They return a
    failed result instead, carrying the counterexample and a diagnostic.
    """

    name: str
    """Name of the check, including the names of enclosing suites."""

    passed: bool
    """Whether the check held for every example tried."""

    message: str = ""
    """Diagnostic for a failure, or a short note for a success."""

    counterexample: Counterexample | None = None
    """What triggered the failure."""

    examples: int = 1
    """How many examples were tried."""

    @classmethod
    def success(cls, name: str, *, examples: int = 1, message: str = "") -> Self:
        """A passing result."""
        return cls(name=name, passed=True, message=message, examples=examples)

    @classmethod
    def failure(
        cls,
        name: str,
        message: str,
        *,
        value: Any = _NO_VALUE,
        data: bytes | None = None,
        examples: int = 1,
    ) -> Self:
        """A failing result with its counterexample."""
        if value is _NO_VALUE:
            counterexample = Counterexample(data=data)
        else:
            counterexample = Counterexample(value=value, has_value=True, data=data)
        return cls(
            name=name,
            passed=False,
            message=message,
            counterexample=counterexample,
            examples=examples,
        )

    def renamed(self, name: str) -> Self:
        """The same result under a different name."""
        return self.model_copy(update={"name": name})

    def describe(self) -> str:
        """One human-readable line (two for failures)."""
        if self.passed:
            return f"PASS {self.name} ({self.examples} examples)"
        return f"FAIL {self.name}: {self.message}\n     counterexample: {self.counterexample}"

    def raise_for_failure(self) -> Self:
        """
        Return self if the check passed.

        Raises:
            AssertionViolation: If the check failed.
        """
        if not self.passed:
            raise AssertionViolation(self.describe(), result=self)
        return self
