"""
Shared fixtures for trajectory reader tests.
"""

import numpy as np
import pytest


def pack_rows(rows, dtype='<f8') -> bytes:
    """Encode rows of numbers as consecutive fixed-size binary records."""
    return np.asarray(rows, dtype=np.float64).astype(dtype).tobytes()


@pytest.fixture
def pack():
    return pack_rows


@pytest.fixture
def sbet_rows():
    """Three SBET epochs in storage units (radians, rad/s)."""
    rows = []
    for i in range(3):
        rows.append([
            100.0 + i * 0.005,           # time
            np.deg2rad(46.5 + i * 1e-5),  # latitude
            np.deg2rad(7.25 + i * 1e-5),  # longitude
            812.0 + i,                    # height
            10.0, -0.5, 0.1,              # velocities
            np.deg2rad(1.0 + i),          # roll
            np.deg2rad(-2.0),             # pitch
            np.deg2rad(90.0 + i),         # heading
            np.deg2rad(0.5),              # wander angle
            0.01, 0.02, 9.81,             # accelerations
            np.deg2rad(0.1), np.deg2rad(0.2), np.deg2rad(0.3),  # angular rates
        ])
    return rows
