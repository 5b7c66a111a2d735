"""Test helpers for wire_conformance unit tests."""

from __future__ import annotations

from .codecs import (
    BYTE_LIST,
    CRASHING_WORD8,
    HAND_WRITTEN_WORD32,
    LEAKY_WORD16,
    LOOSE_FLAG,
    LOSSY_WORD16,
    MISCOUNTING,
    STUCK,
    WORD64,
    fixed_width_decode,
    flags,
    words16,
    words64,
)

__all__ = [
    "BYTE_LIST",
    "CRASHING_WORD8",
    "HAND_WRITTEN_WORD32",
    "LEAKY_WORD16",
    "LOOSE_FLAG",
    "LOSSY_WORD16",
    "MISCOUNTING",
    "STUCK",
    "WORD64",
    "fixed_width_decode",
    "flags",
    "words16",
    "words64",
]
