"""
Trajectory Reader Package

Reads GNSS/IMU post-processed trajectories from their on-disk encodings
into one record model for georeferencing (lidar, photogrammetry).

Data Flow:
    byte source → format reader → [time correlation] → Record sequence

Conventions:
    - Time: GPS seconds, non-decreasing within a file
    - Position: WGS84 latitude/longitude in degrees, ellipsoidal height in meters
    - Attitude: roll, pitch, heading in degrees

Supported Formats:
    - SBET binary trajectories, with optional SMRMSG accuracy files
    - Riegl POF position files paired with POQ accuracy files
    - ASCII POS files (whitespace or comma delimited)
"""

from .records import Position, Accuracy, Record
from .errors import (
    TrajectoryError,
    MalformedRecordError,
    TruncatedRecordError,
    NonMonotonicTimeError,
)
from .binary_codec import BinaryLayout, read_record, iter_chunks
from .ascii_codec import ColumnLayout, LineParser
from .sbet import SbetReader, SmrmsgReader, read_sbet, SBET_LAYOUT, SMRMSG_LAYOUT
from .riegl import PofReader, PoqReader, read_pof_poq, POF_LAYOUT, POQ_LAYOUT
from .pos import PosReader
from .correlation import AccuracyCursor, CorrelatedReader, correlate, interpolate_accuracy
from .config import ReaderConfig, PosOptions, RieglOptions
from .loader import detect_format, companion_path, read_trajectory

__version__ = "0.1.0"
__all__ = [
    "Position",
    "Accuracy",
    "Record",
    "TrajectoryError",
    "MalformedRecordError",
    "TruncatedRecordError",
    "NonMonotonicTimeError",
    "BinaryLayout",
    "read_record",
    "iter_chunks",
    "ColumnLayout",
    "LineParser",
    "SbetReader",
    "SmrmsgReader",
    "read_sbet",
    "SBET_LAYOUT",
    "SMRMSG_LAYOUT",
    "PofReader",
    "PoqReader",
    "read_pof_poq",
    "POF_LAYOUT",
    "POQ_LAYOUT",
    "PosReader",
    "AccuracyCursor",
    "CorrelatedReader",
    "correlate",
    "interpolate_accuracy",
    "ReaderConfig",
    "PosOptions",
    "RieglOptions",
    "detect_format",
    "companion_path",
    "read_trajectory",
]
