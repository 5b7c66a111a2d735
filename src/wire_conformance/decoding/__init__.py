"""Incremental decoding: outcomes, parsers and the driver that feeds them."""

from .chunks import join_chunks, split_chunks
from .get import (
    Get,
    GetFactory,
    expect_bytes,
    fail,
    get_list,
    get_word8,
    get_word16,
    get_word32,
    get_word64,
    is_empty,
    put_word8,
    put_word16,
    put_word32,
    put_word64,
    run_get,
    run_get_incremental,
    skip,
    take,
)
from .incremental import IncrementalDecoder, decode_all
from .outcome import (
    END_OF_INPUT,
    Decode,
    DecodeOutcome,
    Failed,
    Finished,
    NeedsMore,
    is_terminal,
    one_shot,
)
from .varint import get_counted, get_varint, put_counted, put_varint

__all__ = [
    # Outcomes
    "END_OF_INPUT",
    "Decode",
    "DecodeOutcome",
    "Failed",
    "Finished",
    "NeedsMore",
    "is_terminal",
    "one_shot",
    # Driver
    "IncrementalDecoder",
    "decode_all",
    # Chunking
    "split_chunks",
    "join_chunks",
    # Parsers
    "Get",
    "GetFactory",
    "run_get",
    "run_get_incremental",
    "fail",
    "take",
    "skip",
    "is_empty",
    "expect_bytes",
    "get_word8",
    "get_word16",
    "get_word32",
    "get_word64",
    "get_varint",
    "get_list",
    "put_word8",
    "put_word16",
    "put_word32",
    "put_word64",
    "put_varint",
    "get_counted",
    "put_counted",
]
