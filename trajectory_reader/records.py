"""
Record model shared by all trajectory decoders.

Every decoder produces the same value types so downstream code never
needs to know which file format a sample came from.

Units (after decoding):
    - time: GPS seconds
    - latitude, longitude: decimal degrees
    - height: ellipsoidal height in meters
    - attitude angles: degrees
    - velocities: m/s, accelerations: m/s^2, angular rates: deg/s
    - accuracies: standard deviations in the unit of the quantity
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """
    A single trajectory epoch.

    Attributes:
        time: GPS time in seconds
        latitude: Geodetic latitude in degrees
        longitude: Geodetic longitude in degrees
        height: Ellipsoidal height in meters
        roll, pitch, heading: Attitude in degrees (if the format carries it)
    """
    time: float
    latitude: float
    longitude: float
    height: float
    roll: Optional[float] = None
    pitch: Optional[float] = None
    heading: Optional[float] = None
    x_velocity: Optional[float] = None  # m/s
    y_velocity: Optional[float] = None  # m/s
    z_velocity: Optional[float] = None  # m/s
    wander_angle: Optional[float] = None  # degrees
    x_acceleration: Optional[float] = None  # m/s^2
    y_acceleration: Optional[float] = None  # m/s^2
    z_acceleration: Optional[float] = None  # m/s^2
    x_angular_rate: Optional[float] = None  # deg/s
    y_angular_rate: Optional[float] = None  # deg/s
    z_angular_rate: Optional[float] = None  # deg/s


@dataclass(frozen=True)
class Accuracy:
    """
    Standard deviations of a trajectory epoch.

    Sources expressing position accuracy along x/y/z use the same
    north/east/down slots.
    """
    time: float
    north: float  # meters
    east: float  # meters
    down: float  # meters
    roll: Optional[float] = None  # degrees
    pitch: Optional[float] = None  # degrees
    heading: Optional[float] = None  # degrees
    north_velocity: Optional[float] = None  # m/s
    east_velocity: Optional[float] = None  # m/s
    down_velocity: Optional[float] = None  # m/s


@dataclass(frozen=True)
class Record:
    """A position with the accuracy valid at its time, if any is known."""
    position: Position
    accuracy: Optional[Accuracy] = None

    @property
    def time(self) -> float:
        return self.position.time
