"""
Named, composable suites of conformance checks.

A consumer module hands the harness its codec, a hypothesis strategy
generating representative values, and optionally an equality. It gets back
a suite::

    WORD64 = describe(
        "Word64",
        binary_suite(get_word64, put_word64, st.integers(0, 2**64 - 1)),
        rpc_suite(msgpack_codec(int), st.integers(0, 2**64 - 1)),
    )

Suites are plain data. Running one returns a `SuiteReport`; iterating over
one yields its checks, so a suite can parametrize a pytest test directly::

    @pytest.mark.parametrize("check", WORD64, ids=str)
    def test_word64(check: Check) -> None:
        check.run().raise_for_failure()


HOW PROPERTIES ARE DRIVEN
-------------------------
Each generated check runs as a hypothesis property. When an example fails,
hypothesis shrinks it, and the result reports the minimal counterexample
found. No example database is used, so runs leave nothing behind. With
WIRE_CONFORMANCE_ENV=test the example sequence is derandomized, so CI runs
are reproducible.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from functools import partial
from itertools import accumulate
from typing import Any, TypeVar

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from hypothesis.errors import Flaky

from .base import StrictBaseModel
from .bits import BitGetFactory, BitPut, bit_codec
from .checks import (
    ARBITRARY_INPUT,
    CHUNKED_ROUND_TRIP,
    NON_NULLABLE,
    ROUND_TRIP,
    RPC_ROUND_TRIP,
    TEXTUAL_ROUND_TRIP,
    CheckResult,
    check_arbitrary_input,
    check_chunked_round_trip,
    check_non_nullable,
    check_round_trip,
    check_rpc_round_trip,
    check_textual_round_trip,
)
from .checks.common import describe_exception
from .codec import Codec, Equality, RpcCodec, TextCodec, structural_eq
from .config import (
    ARBITRARY_INPUT_MAX_SIZE,
    DEFAULT_MAX_EXAMPLES,
    EXPENSIVE_MAX_EXAMPLES,
    WIRE_CONFORMANCE_ENV,
)
from .decoding import GetFactory
from .exceptions import AssertionViolation

T = TypeVar("T")

logger = logging.getLogger(__name__)

NAME_SEPARATOR = " / "
"""Joins the names of nested suites and their checks."""


@dataclass(frozen=True, slots=True)
class Check:
    """One named property of a codec."""

    name: str
    """Fully qualified name."""

    evaluate: Callable[..., CheckResult]
    """Called once per generated example, or once with no arguments when there is no strategy."""

    strategy: st.SearchStrategy[Any] | None = None
    """Generator of examples, if the property is quantified over values."""

    max_examples: int = DEFAULT_MAX_EXAMPLES
    """How many examples hypothesis tries before declaring success."""

    def __str__(self) -> str:
        return self.name

    def prefixed(self, prefix: str) -> Check:
        """The same check nested under a suite name."""
        if not prefix:
            return self
        return replace(self, name=f"{prefix}{NAME_SEPARATOR}{self.name}")

    def run(self) -> CheckResult:
        """Evaluate the check and return its result."""
        if self.strategy is None:
            result = self._evaluate().renamed(self.name)
        else:
            result = self._run_property(self.strategy)

        if result.passed:
            logger.info("PASS %s (%d examples)", self.name, result.examples)
        else:
            logger.warning(
                "FAIL %s: %s [%s]", self.name, result.message, result.counterexample
            )
        return result

    def _run_property(self, strategy: st.SearchStrategy[Any]) -> CheckResult:
        failures: list[CheckResult] = []
        examples = 0

        @settings(
            max_examples=self.max_examples,
            deadline=None,
            database=None,
            report_multiple_bugs=False,
            derandomize=WIRE_CONFORMANCE_ENV == "test",
            suppress_health_check=[HealthCheck.too_slow],
        )
        @given(strategy)
        def run_example(example: Any) -> None:
            nonlocal examples
            # Shrinking replays are not counted.
            if not failures:
                examples += 1
            result = self._evaluate(example)
            if not result.passed:
                failures.append(result)
                raise AssertionViolation(result.message, result=result)

        try:
            run_example()
        except (AssertionViolation, Flaky):
            if not failures:
                raise
            # Hypothesis replays the shrunk example last.
            return failures[-1].model_copy(update={"name": self.name, "examples": examples})

        return CheckResult.success(self.name, examples=examples)

    def _evaluate(self, *example: Any) -> CheckResult:
        """Call the property, turning an escaping exception into a failed result."""
        try:
            return self.evaluate(*example)
        except Exception as e:
            logger.debug("Check %s raised %s", self.name, type(e).__name__, exc_info=True)
            message = f"check raised {describe_exception(e)}"
            if example:
                return CheckResult.failure(self.name, message, value=example[0])
            return CheckResult.failure(self.name, message)


class SuiteReport(StrictBaseModel):
    """Results of running every check of a suite."""

    name: str
    """Name of the suite that was run."""

    results: tuple[CheckResult, ...]
    """One result per check, in suite order."""

    @property
    def passed(self) -> bool:
        """Whether every check passed."""
        return all(result.passed for result in self.results)

    @property
    def failures(self) -> tuple[CheckResult, ...]:
        """The failed results."""
        return tuple(result for result in self.results if not result.passed)

    def summary(self) -> str:
        """Human-readable report, one line per check and a totals line."""
        lines = [result.describe() for result in self.results]
        lines.append(
            f"{len(self.results) - len(self.failures)} passed, {len(self.failures)} failed"
        )
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class ConformanceSuite:
    """A named collection of checks."""

    name: str
    """Suite name; prefixes the names of its checks. May be empty."""

    checks: tuple[Check, ...] = ()
    """Checks, named relative to this suite."""

    def __iter__(self) -> Iterator[Check]:
        """Yield the checks with fully qualified names."""
        for check in self.checks:
            yield check.prefixed(self.name)

    def __len__(self) -> int:
        return len(self.checks)

    def __add__(self, other: ConformanceSuite) -> ConformanceSuite:
        """Concatenate two suites into an anonymous one."""
        return ConformanceSuite("", (*self, *other))

    def with_max_examples(self, max_examples: int) -> ConformanceSuite:
        """The same checks, each trying `max_examples` examples."""
        return ConformanceSuite(
            self.name, tuple(replace(check, max_examples=max_examples) for check in self.checks)
        )

    def select(self, keyword: str) -> ConformanceSuite:
        """Keep only the checks whose qualified name contains `keyword`."""
        return ConformanceSuite("", tuple(check for check in self if keyword in check.name))

    def run(self) -> SuiteReport:
        """Run every check in order."""
        logger.info("Running %d checks of %s", len(self), self.name or "suite")
        return SuiteReport(name=self.name, results=tuple(check.run() for check in self))


def describe(name: str, *suites: ConformanceSuite) -> ConformanceSuite:
    """Group suites under a common name."""
    return ConformanceSuite(name, tuple(check for suite in suites for check in suite))


# =============================================================================
# Entry points
# =============================================================================


_CHUNK_SIZES = st.lists(st.integers(min_value=1, max_value=8), max_size=16)
"""Sizes of the leading chunks an encoding is split into; the rest forms the last chunk."""


def _chunked_round_trip(codec: Codec[T], equality: Equality[T], example: Any) -> CheckResult:
    value, sizes = example
    return check_chunked_round_trip(codec, value, accumulate(sizes), equality)


def byte_codec_suite(
    codec: Codec[T],
    generator: st.SearchStrategy[T],
    equality: Equality[T] = structural_eq,
    *,
    name: str = "Binary.{get,put}",
    max_examples: int = EXPENSIVE_MAX_EXAMPLES,
    arbitrary_input: st.SearchStrategy[bytes] | None = None,
) -> ConformanceSuite:
    """
    Checks for a streaming byte codec.

    Args:
        codec: The encode/decode pair under test.
        generator: Representative values of the type.
        equality: Structural equality for the type.
        name: Suite name.
        max_examples: Examples per check; incremental decoding is comparatively expensive.
        arbitrary_input: Raw byte strings for the arbitrary input check.
    """
    if arbitrary_input is None:
        arbitrary_input = st.binary(max_size=ARBITRARY_INPUT_MAX_SIZE)

    return ConformanceSuite(
        name,
        (
            Check(
                ROUND_TRIP,
                partial(check_round_trip, codec, equality=equality),
                generator,
                max_examples,
            ),
            Check(
                CHUNKED_ROUND_TRIP,
                partial(_chunked_round_trip, codec, equality),
                st.tuples(generator, _CHUNK_SIZES),
                max_examples,
            ),
            Check(
                ARBITRARY_INPUT,
                partial(check_arbitrary_input, codec, equality=equality),
                arbitrary_input,
                max_examples,
            ),
            Check(NON_NULLABLE, partial(check_non_nullable, codec)),
        ),
    )


def binary_suite(
    get: GetFactory[T],
    put: Callable[[T], bytes],
    generator: st.SearchStrategy[T],
    equality: Equality[T] = structural_eq,
    *,
    name: str = "Binary.{get,put}",
    max_examples: int = EXPENSIVE_MAX_EXAMPLES,
) -> ConformanceSuite:
    """Checks for a codec written as a `Get` parser and an encoder."""
    return byte_codec_suite(
        Codec.from_get_put(get, put),
        generator,
        equality,
        name=name,
        max_examples=max_examples,
    )


def bit_encoding_suite(
    bit_get: BitGetFactory[T],
    bit_put: BitPut[T],
    generator: st.SearchStrategy[T],
    equality: Equality[T] = structural_eq,
    *,
    name: str = "BitEncoding.bit{Get,Put}",
    max_examples: int = EXPENSIVE_MAX_EXAMPLES,
) -> ConformanceSuite:
    """Checks for a bit-packed codec, run through the byte-aligned adapter."""
    return byte_codec_suite(
        bit_codec(bit_get, bit_put),
        generator,
        equality,
        name=name,
        max_examples=max_examples,
    )


def textual_suite(
    codec: TextCodec[T],
    generator: st.SearchStrategy[T],
    equality: Equality[T] = structural_eq,
    *,
    name: str = "Read/Show",
    max_examples: int = DEFAULT_MAX_EXAMPLES,
) -> ConformanceSuite:
    """Checks for a render/parse pair."""
    return ConformanceSuite(
        name,
        (
            Check(
                TEXTUAL_ROUND_TRIP,
                partial(check_textual_round_trip, codec, equality=equality),
                generator,
                max_examples,
            ),
        ),
    )


def rpc_suite(
    codec: RpcCodec[T],
    generator: st.SearchStrategy[T],
    equality: Equality[T] = structural_eq,
    *,
    name: str = "MessagePack",
    max_examples: int = DEFAULT_MAX_EXAMPLES,
) -> ConformanceSuite:
    """Checks for the remote-call serialization path."""
    return ConformanceSuite(
        name,
        (
            Check(
                RPC_ROUND_TRIP,
                partial(check_rpc_round_trip, codec, equality=equality),
                generator,
                max_examples,
            ),
        ),
    )
