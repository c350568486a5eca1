"""
SBET (Smoothed Best Estimate of Trajectory) reader.

SBET binary format (per epoch), little-endian doubles:
    - time: GPS seconds of week
    - latitude, longitude: radians
    - altitude: meters
    - x_velocity, y_velocity, z_velocity: m/s
    - roll, pitch, heading, wander_angle: radians
    - x_acceleration, y_acceleration, z_acceleration: m/s^2
    - x_angular_rate, y_angular_rate, z_angular_rate: rad/s

Total: 17 doubles = 136 bytes per epoch, no file header.

The SMRMSG companion file carries the RMS errors of the same solution:
    - time: GPS seconds of week
    - north, east, down position RMS: meters
    - north, east, down velocity RMS: m/s
    - roll, pitch, heading RMS: arc-minutes

Total: 10 doubles = 80 bytes per epoch.
"""

import logging
from typing import Any, Dict, Optional, Union

from .binary_codec import (
    BinaryLayout,
    BinaryRecordReader,
    arcminutes_to_degrees,
    radians_to_degrees,
)
from .correlation import CorrelatedReader, correlate
from .records import Accuracy, Position, Record

logger = logging.getLogger(__name__)


SBET_LAYOUT = BinaryLayout(
    name="sbet",
    fields=(
        "time", "latitude", "longitude", "height",
        "x_velocity", "y_velocity", "z_velocity",
        "roll", "pitch", "heading", "wander_angle",
        "x_acceleration", "y_acceleration", "z_acceleration",
        "x_angular_rate", "y_angular_rate", "z_angular_rate",
    ),
    conversions={
        name: radians_to_degrees
        for name in (
            "latitude", "longitude",
            "roll", "pitch", "heading", "wander_angle",
            "x_angular_rate", "y_angular_rate", "z_angular_rate",
        )
    },
)

SMRMSG_LAYOUT = BinaryLayout(
    name="smrmsg",
    fields=(
        "time",
        "north", "east", "down",
        "north_velocity", "east_velocity", "down_velocity",
        "roll", "pitch", "heading",
    ),
    conversions={
        "roll": arcminutes_to_degrees,
        "pitch": arcminutes_to_degrees,
        "heading": arcminutes_to_degrees,
    },
)


class SbetReader(BinaryRecordReader):
    """
    Lazy reader of SBET records.

    Yields one :class:`Record` per epoch. SBET carries no accuracy, so
    ``Record.accuracy`` is always None; see :func:`read_sbet` to attach
    an SMRMSG stream.

    Example:
        with SbetReader(open("flight.sbet", "rb")) as reader:
            for record in reader:
                print(record.time, record.position.latitude)
    """

    layout = SBET_LAYOUT

    def _build(self, values: Dict[str, float]) -> Record:
        return Record(Position(**values))


class SbetPositions(SbetReader):
    """SBET reader yielding bare positions, for correlation."""

    kind = "positions"

    def _build(self, values: Dict[str, float]) -> Position:
        return Position(**values)


class SmrmsgReader(BinaryRecordReader):
    """Lazy reader of SMRMSG accuracy epochs."""

    layout = SMRMSG_LAYOUT
    kind = "accuracy epochs"

    def _build(self, values: Dict[str, float]) -> Accuracy:
        return Accuracy(**values)


def read_sbet(
    sbet_source: Any,
    smrmsg_source: Optional[Any] = None,
) -> Union[SbetReader, CorrelatedReader]:
    """
    Read an SBET trajectory, optionally with its SMRMSG accuracy.

    Args:
        sbet_source: SBET bytes or binary file object
        smrmsg_source: SMRMSG bytes or binary file object

    Returns:
        Reader of records in SBET order; close it or use it in a
        ``with`` block to release both sources
    """
    if smrmsg_source is None:
        return SbetReader(sbet_source)
    return correlate(SbetPositions(sbet_source), SmrmsgReader(smrmsg_source))
