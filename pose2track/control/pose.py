"""Pose data structures for single-joint head tracking."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(slots=True)
class Pose6D:
    """Tracked head sample in sensor space.

    position:
      3D position [x, y, z], sensor-space units (meters for Kinect).
    quaternion:
      Orientation quaternion [w, x, y, z], expected unit length.
    """

    position: np.ndarray
    quaternion: np.ndarray

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.position).all() and np.isfinite(self.quaternion).all())


def identity_pose() -> Pose6D:
    return Pose6D(
        position=np.zeros(3, dtype=np.float64),
        quaternion=np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64),
    )
