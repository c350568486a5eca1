"""
Delimited text line decoding.

A line holds one epoch as decimal numbers separated by whitespace,
commas, or both, in a fixed column order:

    time latitude longitude height [roll pitch heading ...] [accuracy ...]

Position columns come first and always start with time, latitude,
longitude and height (degrees and meters). Optional inline accuracy
columns follow; they share the line's time. Values are taken as they
are written, no unit conversion is applied.
"""

import re
from dataclasses import dataclass, fields
from typing import Iterable, Optional, Tuple

from .errors import MalformedRecordError
from .records import Accuracy, Position, Record

DEFAULT_COLUMNS = ("time", "latitude", "longitude", "height", "roll", "pitch", "heading")
REQUIRED_COLUMNS = ("time", "latitude", "longitude", "height")
REQUIRED_ACCURACY_COLUMNS = ("north", "east", "down")
DEFAULT_COMMENT_PREFIXES = ("#", "%", "//")

DELIMITER_RE = re.compile(r"[,\s]+")
NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

_POSITION_FIELDS = {f.name for f in fields(Position)}
_ACCURACY_FIELDS = {f.name for f in fields(Accuracy)} - {"time"}


@dataclass(frozen=True)
class ColumnLayout:
    """
    Column order of a text trajectory.

    Attributes:
        columns: Position field per column, starting with REQUIRED_COLUMNS
        accuracy_columns: Accuracy field per trailing column (may be empty)
    """
    columns: Tuple[str, ...] = DEFAULT_COLUMNS
    accuracy_columns: Tuple[str, ...] = ()

    def __post_init__(self):
        if tuple(self.columns[:len(REQUIRED_COLUMNS)]) != REQUIRED_COLUMNS:
            raise ValueError(
                f"Position columns must start with {REQUIRED_COLUMNS}, got {tuple(self.columns)}"
            )
        unknown = set(self.columns) - _POSITION_FIELDS
        if unknown:
            raise ValueError(f"Unknown position columns: {sorted(unknown)}")
        unknown = set(self.accuracy_columns) - _ACCURACY_FIELDS
        if unknown:
            raise ValueError(f"Unknown accuracy columns: {sorted(unknown)}")
        if self.accuracy_columns and not set(REQUIRED_ACCURACY_COLUMNS) <= set(self.accuracy_columns):
            raise ValueError(f"Accuracy columns must include {REQUIRED_ACCURACY_COLUMNS}")
        names = list(self.columns) + list(self.accuracy_columns)
        if len(set(self.columns)) != len(self.columns) or len(set(self.accuracy_columns)) != len(self.accuracy_columns):
            raise ValueError(f"Duplicate columns in layout: {names}")

    @property
    def column_count(self) -> int:
        return len(self.columns) + len(self.accuracy_columns)


def split_tokens(line: str) -> list:
    """Split a line on whitespace and commas."""
    return [token for token in DELIMITER_RE.split(line.strip()) if token]


def parse_number(token: str) -> float:
    if not NUMBER_RE.match(token):
        raise MalformedRecordError(f"not a decimal number: {token!r}")
    return float(token)


class LineParser:
    """
    Parser of text trajectory lines.

    Blank lines and lines starting with one of ``comment_prefixes``
    (after leading whitespace) are skipped.
    """

    def __init__(
        self,
        layout: Optional[ColumnLayout] = None,
        comment_prefixes: Iterable[str] = DEFAULT_COMMENT_PREFIXES,
    ):
        self.layout = layout or ColumnLayout()
        self.comment_prefixes = tuple(comment_prefixes)

    def is_skipped(self, line: str) -> bool:
        stripped = line.strip()
        return not stripped or (
            bool(self.comment_prefixes) and stripped.startswith(self.comment_prefixes)
        )

    def parse_line(self, line: str) -> Optional[Record]:
        """
        Parse one line.

        Returns:
            The decoded Record, or None for a blank or comment line

        Raises:
            MalformedRecordError: On a wrong column count or a non-numeric token
        """
        if self.is_skipped(line):
            return None

        tokens = split_tokens(line)
        if len(tokens) != self.layout.column_count:
            raise MalformedRecordError(
                f"expected {self.layout.column_count} columns, got {len(tokens)}"
            )
        values = [parse_number(token) for token in tokens]

        n_position = len(self.layout.columns)
        position = Position(**dict(zip(self.layout.columns, values[:n_position])))

        accuracy = None
        if self.layout.accuracy_columns:
            accuracy = Accuracy(
                time=position.time,
                **dict(zip(self.layout.accuracy_columns, values[n_position:])),
            )
        return Record(position, accuracy)
