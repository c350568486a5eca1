"""
ASCII POS trajectory reader.

One epoch per line, see :mod:`trajectory_reader.ascii_codec` for the
column layout. Default layout (degrees, meters):

    time latitude longitude height roll pitch heading

Exports with an uncommented header can skip it with ``header_lines``.
"""

import io
import logging
from typing import Any, Iterable, Iterator, Optional

from .ascii_codec import DEFAULT_COMMENT_PREFIXES, ColumnLayout, LineParser
from .errors import MalformedRecordError
from .records import Record
from .streams import StreamReader

logger = logging.getLogger(__name__)


class PosReader(StreamReader):
    """
    Lazy reader of text trajectory lines.

    Args:
        source: Text or binary file object, or any iterable of lines;
            binary lines are decoded as UTF-8
        layout: Column layout (default: 7 position columns)
        comment_prefixes: Prefixes of lines to skip
        header_lines: Number of leading lines to skip unconditionally
    """

    def __init__(
        self,
        source: Any,
        layout: Optional[ColumnLayout] = None,
        comment_prefixes: Iterable[str] = DEFAULT_COMMENT_PREFIXES,
        header_lines: int = 0,
        name: Optional[str] = None,
    ):
        if isinstance(source, str):
            raise TypeError("Pass an open file or an iterable of lines, not a string")
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        self.parser = LineParser(layout, comment_prefixes)
        self.header_lines = header_lines
        super().__init__(source, name=name)

    def _decode(self) -> Iterator[Record]:
        for lineno, line in enumerate(self.source, start=1):
            if lineno <= self.header_lines:
                logger.debug(f"Skipping header line {lineno} of {self.name}")
                continue
            try:
                if isinstance(line, bytes):
                    line = line.decode("utf-8")
                record = self.parser.parse_line(line)
            except UnicodeDecodeError as e:
                raise MalformedRecordError(
                    f"invalid UTF-8 at byte {e.start}",
                    source=self.name,
                    line=lineno,
                    index=self.count,
                ) from e
            except MalformedRecordError as e:
                raise MalformedRecordError(
                    e.reason, source=self.name, line=lineno, index=self.count
                ) from e
            if record is None:
                continue
            self.guard.check(record.time, line=lineno, index=self.count)
            yield record
