"""
Time correlation of position and accuracy streams.

Some formats store accuracy in a separate file sampled at its own
cadence (Riegl POF/POQ, SBET/SMRMSG). The position stream drives the
output: each position receives the accuracy valid at its own time.

Correlation Rules:
    - exact sample time: the sample is returned unchanged
    - before the first sample: the first sample (no extrapolation)
    - after the last sample: the last sample (no extrapolation)
    - otherwise: linear interpolation of every field between the two
      bracketing samples
    - empty accuracy stream: no accuracy

Both streams must be sorted by time. The cursor over the accuracy stream
only moves forward, so correlating n positions with m accuracy samples
is a single O(n + m) merge.
"""

import logging
from dataclasses import fields
from typing import Iterable, Iterator, Optional

from .errors import NonMonotonicTimeError
from .records import Accuracy, Position, Record
from .streams import StreamReader, TimeOrderGuard, source_name

logger = logging.getLogger(__name__)

_ACCURACY_FIELDS = tuple(f.name for f in fields(Accuracy) if f.name != "time")


def interpolate_accuracy(a0: Accuracy, a1: Accuracy, time: float) -> Accuracy:
    """
    Linearly interpolate two accuracy samples at ``time``.

    Optional fields missing from either sample stay None.
    """
    weight = (time - a0.time) / (a1.time - a0.time)
    values = {}
    for name in _ACCURACY_FIELDS:
        v0 = getattr(a0, name)
        v1 = getattr(a1, name)
        if v0 is None or v1 is None:
            values[name] = None
        else:
            values[name] = v0 + weight * (v1 - v0)
    return Accuracy(time=time, **values)


class AccuracyCursor:
    """
    Forward-only cursor over a time-sorted accuracy stream.

    The cursor holds the latest sample at or before the last queried
    time (``current``, at stream position ``index``) and the sample after
    it (``following``). Samples are pulled from the stream lazily.
    """

    def __init__(self, accuracies: Iterable[Accuracy], name: Optional[str] = None):
        self.name = name or source_name(accuracies, "<accuracy>")
        self._stream = iter(accuracies)
        self._guard = TimeOrderGuard(self.name)
        self._pulled = 0
        self._started = False
        self.index = -1
        self.current: Optional[Accuracy] = None
        self.following: Optional[Accuracy] = None
        self.last_time: Optional[float] = None
        self.clamped_before = 0
        self.clamped_after = 0

    def _pull(self) -> Optional[Accuracy]:
        try:
            sample = next(self._stream)
        except StopIteration:
            return None
        self._guard.check(sample.time, index=self._pulled)
        self._pulled += 1
        return sample

    def _start(self) -> None:
        self._started = True
        self.current = self._pull()
        if self.current is not None:
            self.index = 0
            self.following = self._pull()

    def at(self, time: float) -> Optional[Accuracy]:
        """
        Accuracy valid at ``time``.

        Queries must come in non-decreasing time order.
        """
        if self.last_time is not None and time < self.last_time:
            raise NonMonotonicTimeError(
                previous=self.last_time, current=time, source=self.name
            )
        self.last_time = time
        if not self._started:
            self._start()
        if self.current is None:
            return None

        while self.following is not None and self.following.time <= time:
            self.current = self.following
            self.index += 1
            self.following = self._pull()

        a0, a1 = self.current, self.following
        if time <= a0.time:
            if time < a0.time:
                self.clamped_before += 1
            return a0
        if a1 is None:
            self.clamped_after += 1
            return a0
        return interpolate_accuracy(a0, a1, time)

    def log_coverage(self) -> None:
        if not self._started:
            return
        if self.current is None:
            logger.warning(f"Accuracy stream {self.name} is empty; records carry no accuracy")
            return
        if self.clamped_before or self.clamped_after:
            logger.warning(
                f"{self.clamped_before} positions before and {self.clamped_after} "
                f"after the accuracy time range of {self.name} use the nearest sample"
            )


class CorrelatedReader(StreamReader):
    """
    Pairs every position with the accuracy valid at its time.

    Args:
        positions: Time-sorted positions, defines the output cadence
        accuracies: Time-sorted accuracy samples

    Yields one Record per position, in position order. Errors raised by
    either stream propagate immediately. Closing the reader closes both
    streams, whether or not iteration has started.
    """

    def __init__(
        self,
        positions: Iterable[Position],
        accuracies: Iterable[Accuracy],
        name: Optional[str] = None,
    ):
        self.positions = positions
        self.accuracies = accuracies
        self.cursor = AccuracyCursor(accuracies)
        super().__init__(positions, name=name or source_name(positions, "<positions>"))

    def _decode(self) -> Iterator[Record]:
        for position in self.positions:
            self.guard.check(position.time, index=self.count)
            yield Record(position, self.cursor.at(position.time))
        logger.info(f"Correlated {self.count} positions with {self.cursor.name}")
        self.cursor.log_coverage()

    def _close_source(self) -> None:
        if self._closed:
            return
        self._closed = True
        for stream in (self.positions, self.accuracies):
            close = getattr(stream, "close", None)
            if callable(close):
                close()
        logger.debug(f"Closed {self.name} and {self.cursor.name}")


def correlate(
    positions: Iterable[Position],
    accuracies: Iterable[Accuracy],
) -> CorrelatedReader:
    """Pair every position with the accuracy valid at its time."""
    return CorrelatedReader(positions, accuracies)
