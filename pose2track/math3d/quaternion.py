"""Quaternion utilities for right-handed coordinates.
"""

from __future__ import annotations

import math

import numpy as np


def q_normalize(q: np.ndarray) -> np.ndarray:
    q = np.asarray(q, dtype=np.float64)
    n = float(np.linalg.norm(q))
    if n < 1e-12:
        return np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)
    return q / n


def q_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    aw, ax, ay, az = a
    bw, bx, by, bz = b
    return np.array(
        [
            aw * bw - ax * bx - ay * by - az * bz,
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
        ],
        dtype=np.float64,
    )


def axis_angle_to_q(axis: np.ndarray, angle_rad: float) -> np.ndarray:
    axis = np.asarray(axis, dtype=np.float64)
    axis = axis / (np.linalg.norm(axis) + 1e-12)
    s = math.sin(angle_rad / 2.0)
    return q_normalize(
        np.array(
            [math.cos(angle_rad / 2.0), axis[0] * s, axis[1] * s, axis[2] * s],
            dtype=np.float64,
        )
    )


def euler_yaw_pitch_roll_to_q(
    yaw_deg: float, pitch_deg: float, roll_deg: float
) -> np.ndarray:
    """
    Right-handed coordinates:
      x: right, y: up, z: forward
    Euler:
      yaw around +y, pitch around +x, roll around +z
    Composition: q = q_yaw * q_pitch * q_roll
    """
    yaw = math.radians(yaw_deg)
    pitch = math.radians(pitch_deg)
    roll = math.radians(roll_deg)
    q_yaw = axis_angle_to_q(np.array([0.0, 1.0, 0.0]), yaw)
    q_pitch = axis_angle_to_q(np.array([1.0, 0.0, 0.0]), pitch)
    q_roll = axis_angle_to_q(np.array([0.0, 0.0, 1.0]), roll)
    return q_normalize(q_mul(q_mul(q_yaw, q_pitch), q_roll))


def q_to_euler_pitch_yaw_roll(q: np.ndarray) -> tuple[float, float, float]:
    """Convert quaternion [w, x, y, z] to (pitch, yaw, roll) in radians.

    Inverse of ``euler_yaw_pitch_roll_to_q`` (same axes and composition).

    Yaw is folded from atan2's [-pi, pi] into [0, 2pi): turning past the
    +pi/-pi heading keeps increasing instead of jumping, and the jump moves to
    the 0/2pi heading instead.

    The input is not normalized. Drift outside the unit sphere only shows up as
    inaccuracy; the asin argument is clamped so pitch always stays finite.
    """
    w, x, y, z = (float(c) for c in np.asarray(q, dtype=np.float64).reshape(4))

    yaw = math.atan2(2.0 * (w * y + x * z), 1.0 - 2.0 * (y * y + x * x))
    sin_pitch = 2.0 * (w * x - z * y)
    pitch = math.asin(max(-1.0, min(1.0, sin_pitch)))
    roll = math.atan2(2.0 * (w * z + y * x), 1.0 - 2.0 * (x * x + z * z))

    if yaw < 0.0:
        yaw += 2.0 * math.pi
    return pitch, yaw, roll
