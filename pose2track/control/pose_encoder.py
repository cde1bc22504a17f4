"""Pose normalization and the 48-byte tracking datagram.

Wire layout, six little-endian IEEE-754 doubles:

  offset  0  normalized x
  offset  8  normalized y
  offset 16  normalized z
  offset 24  yaw   (radians * angular scale)
  offset 32  pitch (radians * angular scale)
  offset 40  roll  (radians * angular scale)

Position is written x, y, z but the angles are written yaw, pitch, roll.
Receivers read any 48-byte datagram on their port with exactly this layout.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..math3d.quaternion import q_to_euler_pitch_yaw_roll
from .pose import Pose6D

_PACKET = struct.Struct("<6d")
PACKET_SIZE = _PACKET.size


@dataclass(frozen=True)
class TrackingPacket:
    x: float
    y: float
    z: float
    yaw: float
    pitch: float
    roll: float

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.x, self.y, self.z, self.yaw, self.pitch, self.roll)


def pack_packet(packet: TrackingPacket) -> bytes:
    return _PACKET.pack(*packet.as_tuple())


def unpack_packet(data: bytes) -> TrackingPacket:
    if len(data) != PACKET_SIZE:
        raise ValueError(f"tracking packet must be {PACKET_SIZE} bytes, got {len(data)}")
    return TrackingPacket(*_PACKET.unpack(data))


def _vec3(values: Sequence[float], name: str) -> np.ndarray:
    v = np.asarray(values, dtype=np.float64).reshape(-1)
    if v.size != 3:
        raise ValueError(f"{name} expects 3 values, got {v.size}")
    return v


@dataclass(frozen=True)
class EncoderSettings:
    """Tuning constants matched to the receiver's expected input range.

    position_scale:
      per-axis multiplier (x, y, z) applied after centering.
    position_offset:
      per-axis bias (x, y, z) subtracted after scaling.
    angular_scale:
      per-angle multiplier (yaw, pitch, roll) on the radian values. This is a
      sensitivity gain, not a degrees conversion.
    """

    position_scale: tuple[float, float, float] = (30.0, 30.0, 30.0)
    position_offset: tuple[float, float, float] = (0.0, 0.0, 50.0)
    angular_scale: tuple[float, float, float] = (25.0, 25.0, 25.0)


class PoseEncoder:
    """Turns one head sample plus the current room center into a datagram.

    Holds no per-sample state; the center comes from the caller's tracker.
    """

    def __init__(self, settings: EncoderSettings | None = None):
        self.settings = settings or EncoderSettings()
        self._scale = _vec3(self.settings.position_scale, "position_scale")
        self._offset = _vec3(self.settings.position_offset, "position_offset")
        self._angular = _vec3(self.settings.angular_scale, "angular_scale")

    def normalize_position(self, position: np.ndarray, center: np.ndarray) -> np.ndarray:
        p = _vec3(position, "position")
        c = _vec3(center, "center")
        return (p - c) * self._scale - self._offset

    def to_packet(self, pose: Pose6D, center: np.ndarray) -> TrackingPacket:
        norm = self.normalize_position(pose.position, center)
        pitch, yaw, roll = q_to_euler_pitch_yaw_roll(pose.quaternion)
        yaw_s, pitch_s, roll_s = self._angular
        return TrackingPacket(
            x=float(norm[0]),
            y=float(norm[1]),
            z=float(norm[2]),
            yaw=yaw * float(yaw_s),
            pitch=pitch * float(pitch_s),
            roll=roll * float(roll_s),
        )

    def encode(self, pose: Pose6D, center: np.ndarray) -> bytes:
        return pack_packet(self.to_packet(pose, center))
