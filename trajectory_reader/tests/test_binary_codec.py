"""
Tests for fixed-width binary record decoding.
"""

import io

import numpy as np
import pytest

from trajectory_reader.binary_codec import (
    BinaryLayout,
    arcminutes_to_degrees,
    iter_chunks,
    radians_to_degrees,
    read_record,
    skip_header,
)
from trajectory_reader.errors import MalformedRecordError, TruncatedRecordError


class TrickleSource:
    """Binary source returning at most a few bytes per read, like a pipe."""

    def __init__(self, data: bytes, step: int = 5):
        self.data = data
        self.pos = 0
        self.step = step

    def read(self, n: int) -> bytes:
        n = min(n, self.step)
        chunk = self.data[self.pos:self.pos + n]
        self.pos += len(chunk)
        return chunk


class TestReadRecord:
    """Tests for single record decoding."""

    def test_little_endian_doubles(self, pack):
        values = read_record(pack([[1.5, -2.25, 1e6]]), 24)

        assert values == (1.5, -2.25, 1e6)
        assert all(type(v) is float for v in values)

    def test_big_endian_doubles(self, pack):
        buffer = pack([[1.5, -2.25]], dtype='>f8')

        assert read_record(buffer, 16, dtype='>f8') == (1.5, -2.25)
        assert read_record(buffer, 16, dtype='<f8') != (1.5, -2.25)

    def test_short_slice(self, pack):
        with pytest.raises(MalformedRecordError, match="expected 24"):
            read_record(pack([[1.0, 2.0]]), 24)

    def test_long_slice(self, pack):
        with pytest.raises(MalformedRecordError):
            read_record(pack([[1.0, 2.0, 3.0, 4.0]]), 24)

    def test_size_not_multiple_of_width(self):
        with pytest.raises(MalformedRecordError, match="multiple"):
            read_record(b"\x00" * 12, 12)


class TestBinaryLayout:
    """Tests for layout-driven decoding and unit conversion."""

    @pytest.fixture
    def layout(self):
        return BinaryLayout(
            name="test",
            fields=("time", "angle", "rms"),
            conversions={"angle": radians_to_degrees, "rms": arcminutes_to_degrees},
        )

    def test_record_size(self, layout):
        assert layout.record_size == 24
        assert BinaryLayout("f4", ("a", "b"), type_code="f4").record_size == 8

    def test_decode_converts_units(self, layout, pack):
        values = layout.decode(pack([[12.5, np.pi / 2, 30.0]]))

        assert values["time"] == 12.5
        assert values["angle"] == pytest.approx(90.0)
        assert values["rms"] == pytest.approx(0.5)

    def test_decode_wrong_size(self, layout):
        with pytest.raises(MalformedRecordError):
            layout.decode(b"\x00" * 16)


class TestIterChunks:
    """Tests for fixed-size chunking and truncation checks."""

    def test_exact_multiple(self, pack):
        data = pack([[float(i), 0.0] for i in range(4)])
        chunks = list(iter_chunks(io.BytesIO(data), 16))

        assert [index for index, _, _ in chunks] == [0, 1, 2, 3]
        assert [offset for _, offset, _ in chunks] == [0, 16, 32, 48]
        assert b"".join(chunk for _, _, chunk in chunks) == data

    def test_empty_source(self):
        assert list(iter_chunks(io.BytesIO(b""), 16)) == []

    @pytest.mark.parametrize("extra", [1, 8, 15])
    def test_truncated_tail(self, pack, extra):
        data = pack([[1.0, 2.0], [3.0, 4.0]]) + b"\x01" * extra
        seen = []

        with pytest.raises(TruncatedRecordError) as exc_info:
            for chunk in iter_chunks(io.BytesIO(data), 16, name="tail.bin"):
                seen.append(chunk)

        assert len(seen) == 2
        error = exc_info.value
        assert error.index == 2
        assert error.offset == 32
        assert error.expected == 16
        assert error.actual == extra
        assert "tail.bin@32" in str(error)

    def test_start_offset(self, pack):
        chunks = list(iter_chunks(io.BytesIO(pack([[1.0], [2.0]])), 8, start_offset=100))
        assert [offset for _, offset, _ in chunks] == [100, 108]

    def test_short_reads_are_assembled(self, pack):
        data = pack([[1.0, 2.0], [3.0, 4.0]])
        chunks = list(iter_chunks(TrickleSource(data), 16))

        assert len(chunks) == 2
        assert read_record(chunks[1][2], 16) == (3.0, 4.0)


class TestSkipHeader:
    """Tests for fixed-size preamble handling."""

    def test_skip(self):
        source = io.BytesIO(b"HEADER" + b"\x00" * 8)
        skip_header(source, 6)
        assert source.read() == b"\x00" * 8

    def test_zero_size_reads_nothing(self):
        source = io.BytesIO(b"abc")
        skip_header(source, 0)
        assert source.tell() == 0

    def test_truncated_header(self):
        with pytest.raises(TruncatedRecordError):
            skip_header(io.BytesIO(b"abc"), 10)
