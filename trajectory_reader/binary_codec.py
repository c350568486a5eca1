"""
Fixed-width binary record decoding.

Binary trajectory formats are flat sequences of fixed-size records, each
an ordered list of numeric fields of one width and byte order. A
:class:`BinaryLayout` describes one such record and the unit conversions
needed to reach the common record model.

Byte order and field width are constants of each layout; nothing is
detected at runtime.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

import numpy as np

from .errors import MalformedRecordError, TruncatedRecordError
from .streams import StreamReader, as_binary_source

logger = logging.getLogger(__name__)


def radians_to_degrees(value: float) -> float:
    return float(np.rad2deg(value))


def arcminutes_to_degrees(value: float) -> float:
    return value / 60.0


def read_record(
    buffer: bytes,
    record_size: int,
    dtype: Any = "<f8",
) -> Tuple[float, ...]:
    """
    Decode one fixed-size record into its numeric fields.

    Args:
        buffer: Exactly ``record_size`` bytes
        record_size: Size of one record in bytes
        dtype: Numpy dtype of every field, including the byte order

    Returns:
        Tuple of floats in source order
    """
    dtype = np.dtype(dtype)
    if len(buffer) != record_size:
        raise MalformedRecordError(
            f"record slice is {len(buffer)} bytes, expected {record_size}"
        )
    if record_size % dtype.itemsize:
        raise MalformedRecordError(
            f"record size {record_size} is not a multiple of the "
            f"{dtype.itemsize}-byte field width"
        )
    values = np.frombuffer(buffer, dtype=dtype)
    return tuple(float(v) for v in values)


@dataclass(frozen=True)
class BinaryLayout:
    """
    Layout of one binary record.

    Attributes:
        name: Format name used in messages
        fields: Field names in source order
        conversions: Per-field conversion into record model units
        byte_order: Numpy byte order character ('<' little, '>' big)
        type_code: Numpy type of every field ('f8' for doubles)
    """
    name: str
    fields: Tuple[str, ...]
    conversions: Dict[str, Callable[[float], float]] = field(default_factory=dict)
    byte_order: str = "<"
    type_code: str = "f8"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.byte_order + self.type_code)

    @property
    def record_size(self) -> int:
        return len(self.fields) * self.dtype.itemsize

    def decode(self, buffer: bytes) -> Dict[str, float]:
        """Decode a record and apply the unit conversions."""
        values = dict(zip(self.fields, read_record(buffer, self.record_size, self.dtype)))
        for name, convert in self.conversions.items():
            values[name] = convert(values[name])
        return values


def skip_header(source, header_size: int, name: str = "<stream>") -> None:
    """Consume a fixed-size file header."""
    if header_size <= 0:
        return
    header = source.read(header_size)
    if len(header) < header_size:
        raise TruncatedRecordError(
            expected=header_size,
            actual=len(header),
            source=name,
            offset=0,
        )
    logger.debug(f"Skipped {header_size}-byte header of {name}")


def iter_chunks(
    source,
    record_size: int,
    name: str = "<stream>",
    start_offset: int = 0,
) -> Iterator[Tuple[int, int, bytes]]:
    """
    Read a source one record at a time.

    Yields:
        (index, offset, chunk) for every complete record

    Raises:
        TruncatedRecordError: If the input ends inside a record
    """
    index = 0
    offset = start_offset
    while True:
        chunk = source.read(record_size)
        if not chunk:
            return
        # Pipes and sockets may return fewer bytes than asked for
        while len(chunk) < record_size:
            more = source.read(record_size - len(chunk))
            if not more:
                break
            chunk += more
        if len(chunk) < record_size:
            raise TruncatedRecordError(
                expected=record_size,
                actual=len(chunk),
                source=name,
                index=index,
                offset=offset,
            )
        yield index, offset, chunk
        index += 1
        offset += record_size


class BinaryRecordReader(StreamReader):
    """
    Reader for a stream of fixed-size binary records.

    Subclasses set ``layout`` and build a record model value from the
    decoded field mapping in ``_build``.
    """

    layout: BinaryLayout

    def __init__(self, source: Any, name: Optional[str] = None, header_size: int = 0):
        self.header_size = header_size
        super().__init__(as_binary_source(source), name=name)

    def _build(self, values: Dict[str, float]):
        raise NotImplementedError

    def _decode(self) -> Iterator[Any]:
        skip_header(self.source, self.header_size, self.name)
        record_size = self.layout.record_size
        logger.debug(f"Decoding {self.layout.name} records of {record_size} bytes from {self.name}")
        for index, offset, chunk in iter_chunks(
            self.source, record_size, self.name, self.header_size
        ):
            try:
                values = self.layout.decode(chunk)
            except MalformedRecordError as e:
                raise MalformedRecordError(
                    e.reason, source=self.name, index=index, offset=offset
                ) from e
            self.guard.check(values["time"], index=index, offset=offset)
            yield self._build(values)
