"""
Riegl POF/POQ reader pair.

The trajectory is split over two files sampled independently:

POF (position), little-endian doubles per epoch:
    - time: GPS seconds
    - latitude, longitude: degrees
    - height: ellipsoidal height (meters)
    - roll, pitch, yaw: degrees

POQ (quality), little-endian doubles per epoch:
    - time: GPS seconds
    - north, east, down standard deviation: meters
    - roll, pitch, yaw standard deviation: degrees

Total: 7 doubles = 56 bytes per epoch in both files. Files exported with
a fixed-size preamble can be read by passing its size as ``header_size``.
"""

import logging
from typing import Any, Dict

from .binary_codec import BinaryLayout, BinaryRecordReader
from .correlation import CorrelatedReader, correlate
from .records import Accuracy, Position

logger = logging.getLogger(__name__)


POF_LAYOUT = BinaryLayout(
    name="pof",
    fields=("time", "latitude", "longitude", "height", "roll", "pitch", "heading"),
)

POQ_LAYOUT = BinaryLayout(
    name="poq",
    fields=("time", "north", "east", "down", "roll", "pitch", "heading"),
)


class PofReader(BinaryRecordReader):
    """Lazy reader of POF positions."""

    layout = POF_LAYOUT
    kind = "positions"

    def _build(self, values: Dict[str, float]) -> Position:
        return Position(**values)


class PoqReader(BinaryRecordReader):
    """Lazy reader of POQ accuracy epochs."""

    layout = POQ_LAYOUT
    kind = "accuracy epochs"

    def _build(self, values: Dict[str, float]) -> Accuracy:
        return Accuracy(**values)


def read_pof_poq(
    pof_source: Any,
    poq_source: Any,
    pof_header_size: int = 0,
    poq_header_size: int = 0,
) -> CorrelatedReader:
    """
    Read a POF trajectory with the accuracy of its POQ file.

    The two files may differ in record count and timestamps; accuracy is
    interpolated at every POF time.
    """
    return correlate(
        PofReader(pof_source, header_size=pof_header_size),
        PoqReader(poq_source, header_size=poq_header_size),
    )
