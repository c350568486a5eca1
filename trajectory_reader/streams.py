"""
Plumbing shared by the format readers.

    - byte source adaptation (bytes or binary file objects)
    - the time-order guard every stream enforces
    - the single-pass iterator protocol of all readers

Readers own their source: it is closed when the sequence is exhausted,
when decoding fails, or when the reader is closed early.
"""

import io
import logging
import math
from typing import Any, Iterator, Optional

from .errors import MalformedRecordError, NonMonotonicTimeError

logger = logging.getLogger(__name__)


def source_name(source: Any, default: str = "<stream>") -> str:
    """Best-effort display name of a byte source."""
    name = getattr(source, "name", None)
    if isinstance(name, (str, bytes)) and name:
        return name if isinstance(name, str) else name.decode("utf-8", "replace")
    return default


def as_binary_source(source: Any):
    """Return a file-like object with ``read(n)`` for a binary source."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    if hasattr(source, "read"):
        return source
    raise TypeError(
        f"Expected bytes or a binary file object, got {type(source).__name__}"
    )


class TimeOrderGuard:
    """Rejects a stream whose timestamps are not finite or decrease."""

    def __init__(self, source: str):
        self.source = source
        self.first: Optional[float] = None
        self.previous: Optional[float] = None

    def check(self, time: float, **where) -> None:
        if not math.isfinite(time):
            raise MalformedRecordError(
                f"time is not a finite number: {time}", source=self.source, **where
            )
        if self.previous is not None and time < self.previous:
            raise NonMonotonicTimeError(
                previous=self.previous,
                current=time,
                source=self.source,
                **where,
            )
        if self.first is None:
            self.first = time
        self.previous = time


class StreamReader:
    """
    Single-pass iterator over the values decoded from one source.

    Subclasses implement ``_decode`` as a generator. The reader can be
    used as a context manager to release the source when the consumer
    stops early.
    """

    kind = "records"

    def __init__(self, source: Any, name: Optional[str] = None):
        self.source = source
        self.name = name or source_name(source)
        self.count = 0
        self.guard = TimeOrderGuard(self.name)
        self._closed = False
        self._values = self._generate()

    def _decode(self) -> Iterator[Any]:
        raise NotImplementedError

    def _generate(self) -> Iterator[Any]:
        try:
            for value in self._decode():
                self.count += 1
                yield value
            if self.count:
                logger.info(
                    f"Read {self.count} {self.kind} from {self.name}, "
                    f"time range: {self.guard.first:.3f} to {self.guard.previous:.3f}"
                )
            else:
                logger.warning(f"No {self.kind} found in {self.name}")
        finally:
            self._close_source()

    def _close_source(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self.source, "close", None)
        if callable(close):
            close()
        logger.debug(f"Closed {self.name}")

    def __iter__(self) -> "StreamReader":
        return self

    def __next__(self):
        return next(self._values)

    def close(self) -> None:
        """Stop decoding and release the source."""
        self._values.close()
        self._close_source()

    def __enter__(self) -> "StreamReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
