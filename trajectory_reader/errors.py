"""
Errors raised while decoding trajectory streams.

Each error names the source and where in it the problem was found:
a line number for text formats, a byte offset for binary formats, and
the index of the record being decoded. Failures of the underlying file
object (``OSError``) are not wrapped.
"""

from typing import Optional


class TrajectoryError(Exception):
    """Base class for all decode errors."""

    def __init__(
        self,
        message: str,
        *,
        source: str = "<stream>",
        index: Optional[int] = None,
        offset: Optional[int] = None,
        line: Optional[int] = None,
    ):
        self.reason = message
        self.source = source
        self.index = index
        self.offset = offset
        self.line = line
        super().__init__(f"{self._location()}: {message}")

    def _location(self) -> str:
        if self.line is not None:
            location = f"{self.source}:{self.line}"
        elif self.offset is not None:
            location = f"{self.source}@{self.offset}"
        else:
            location = self.source
        if self.index is not None:
            location += f" (record {self.index})"
        return location


class MalformedRecordError(TrajectoryError, ValueError):
    """A record is structurally invalid (column count, numeric token, slice length)."""


class TruncatedRecordError(TrajectoryError):
    """Binary input ends in the middle of a record."""

    def __init__(self, *, expected: int, actual: int, **kwargs):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"truncated record: expected {expected} bytes, got {actual}",
            **kwargs,
        )


class NonMonotonicTimeError(TrajectoryError):
    """A stream timestamp is earlier than the one before it."""

    def __init__(self, *, previous: float, current: float, **kwargs):
        self.previous = previous
        self.current = current
        super().__init__(
            f"time went backwards: {current!r} after {previous!r}",
            **kwargs,
        )
