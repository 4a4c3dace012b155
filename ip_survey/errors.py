from __future__ import annotations

from typing import Any


class SurveyDecodeError(ValueError):
    """Base class for failures that abort a decode call."""


class UnsupportedFormat(SurveyDecodeError):
    """Raised when the format discriminator is not csv, text or binary."""

    def __init__(self, fmt: Any) -> None:
        self.fmt = fmt
        super().__init__(f"Unsupported format: {fmt!r} (expected one of 'csv', 'text', 'binary')")


class CorruptBinaryData(SurveyDecodeError):
    """
    Raised when a binary survey buffer ends before the next field.

    Attributes
    ----------
    offset:
        Cursor offset at which the read was attempted.
    expected:
        Number of bytes the next field needs.
    available:
        Number of bytes left in the buffer from ``offset``.
    field:
        Label of the field being read (e.g. ``"line[0].point_count"``).
    """

    def __init__(self, message: str, *, offset: int, expected: int, available: int, field: str = "") -> None:
        self.offset = int(offset)
        self.expected = int(expected)
        self.available = int(available)
        self.field = field
        super().__init__(message)

    @classmethod
    def short_read(cls, *, offset: int, expected: int, available: int, field: str) -> "CorruptBinaryData":
        return cls(
            f"Truncated binary survey: {field} needs {expected} bytes at offset {offset}, "
            f"only {available} available",
            offset=offset,
            expected=expected,
            available=available,
            field=field,
        )
