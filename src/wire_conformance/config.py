"""
Global configuration for the wire conformance harness.

This module contains environment-specific settings that apply across all suites.
"""

import os

from typing_extensions import Final

_SUPPORTED_ENVS: list[str] = ["prod", "test"]

WIRE_CONFORMANCE_ENV: Final = os.environ.get("WIRE_CONFORMANCE_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if WIRE_CONFORMANCE_ENV not in _SUPPORTED_ENVS:
    raise ValueError(
        f"Invalid WIRE_CONFORMANCE_ENV environment variable: '{WIRE_CONFORMANCE_ENV}'. "
        f"Supported values: {_SUPPORTED_ENVS}"
    )


def _positive_int_from_env(name: str, default: int) -> int:
    """Read a positive integer setting, rejecting anything else eagerly."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"Invalid {name} environment variable: '{raw}' is not an integer") from e
    if value <= 0:
        raise ValueError(f"Invalid {name} environment variable: {value} must be positive")
    return value


DEFAULT_MAX_EXAMPLES: Final = _positive_int_from_env("WIRE_CONFORMANCE_MAX_EXAMPLES", 100)
"""Generated cases per check for cheap properties (textual, remote-call)."""

EXPENSIVE_MAX_EXAMPLES: Final = _positive_int_from_env(
    "WIRE_CONFORMANCE_EXPENSIVE_MAX_EXAMPLES", 50
)
"""
Generated cases per check for incremental byte and bit decoding.

These are fairly expensive, and running very large tests for them is
probably not very valuable.
"""

ARBITRARY_INPUT_MAX_SIZE: Final = _positive_int_from_env(
    "WIRE_CONFORMANCE_ARBITRARY_INPUT_MAX_SIZE", 64
)
"""Upper bound on the length of raw byte strings fed to decoders as arbitrary input."""
