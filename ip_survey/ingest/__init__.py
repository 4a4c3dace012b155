"""Ingest package - survey readers and the format dispatcher.

This package handles:
- Decoding comma-separated and whitespace-delimited survey records
- Decoding the little-endian binary survey layout (and encoding it for producers)
- Selecting the reader from the caller's format tag

Key entry points:
- decode_survey: decode an in-memory buffer given a format tag
- load_survey: read a file from disk and decode it
- ReaderConfig: reader options (text encoding, invalid-number policy, ...)

Design principle:
- Readers produce immutable Survey objects
- Tolerated input problems are reported in Survey.warnings, fatal ones raise
"""

from .binary_codec import BinaryCursor, decode_binary, encode_binary
from .config import ReaderConfig
from .dispatch import decode_survey, load_survey, resolve_format
from .readers_text import parse_csv, parse_number, parse_text

__all__ = [
    "BinaryCursor",
    "ReaderConfig",
    "decode_binary",
    "decode_survey",
    "encode_binary",
    "load_survey",
    "parse_csv",
    "parse_number",
    "parse_text",
    "resolve_format",
]
