"""Splitting and joining byte sequences into input chunks."""

from __future__ import annotations

from collections.abc import Iterable


def split_chunks(data: bytes, boundaries: Iterable[int]) -> list[bytes]:
    """
    Split `data` at the given cut points.

    Cut points are clamped to `[0, len(data)]`, sorted and de-duplicated,
    so any iterable of integers is accepted. Joining the result always gives
    back `data`, and no chunk is empty unless `data` is.

    Args:
        data: The byte sequence to split.
        boundaries: Offsets at which a new chunk starts.

    Returns:
        The chunks in order. Empty input yields a single empty chunk.
    """
    cuts = sorted({min(max(cut, 0), len(data)) for cut in boundaries} - {0, len(data)})

    chunks: list[bytes] = []
    start = 0
    for cut in cuts:
        chunks.append(data[start:cut])
        start = cut
    chunks.append(data[start:])
    return chunks


def join_chunks(chunks: Iterable[bytes]) -> bytes:
    """Concatenate chunks back into a single byte sequence."""
    return b"".join(chunks)
