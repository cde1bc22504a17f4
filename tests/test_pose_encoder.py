import math
import struct

import numpy as np
import pytest

from pose2track.control.pose import Pose6D
from pose2track.control.pose_encoder import (
    PACKET_SIZE,
    EncoderSettings,
    PoseEncoder,
    TrackingPacket,
    pack_packet,
    unpack_packet,
)
from pose2track.math3d.quaternion import euler_yaw_pitch_roll_to_q


def _pose(x: float, y: float, z: float, q=(1.0, 0.0, 0.0, 0.0)) -> Pose6D:
    return Pose6D(
        position=np.array([x, y, z], dtype=np.float64),
        quaternion=np.asarray(q, dtype=np.float64),
    )


def test_packet_layout_is_little_endian_doubles_in_wire_order():
    packet = TrackingPacket(x=1.5, y=-2.25, z=0.0, yaw=3.14, pitch=-1.0, roll=0.5)
    data = pack_packet(packet)
    assert len(data) == PACKET_SIZE == 48
    assert struct.unpack("<6d", data) == (1.5, -2.25, 0.0, 3.14, -1.0, 0.5)
    assert data[24:32] == struct.pack("<d", 3.14)
    assert data[32:40] == struct.pack("<d", -1.0)
    assert unpack_packet(data) == packet


def test_unpack_rejects_wrong_length():
    with pytest.raises(ValueError, match="48"):
        unpack_packet(b"\x00" * 47)
    with pytest.raises(ValueError, match="48"):
        unpack_packet(b"\x00" * 56)


def test_normalize_position_uses_default_scale_and_forward_bias():
    encoder = PoseEncoder()
    out = encoder.normalize_position(
        np.array([0.5, -0.1, 2.0]), np.array([0.25, 0.1, 1.5])
    )
    np.testing.assert_allclose(out, np.array([7.5, -6.0, 15.0 - 50.0]))


def test_encode_at_center_with_identity_orientation():
    encoder = PoseEncoder()
    data = encoder.encode(_pose(0.2, 0.3, 1.8), np.array([0.2, 0.3, 1.8]))
    assert len(data) == 48
    np.testing.assert_allclose(
        unpack_packet(data).as_tuple(), (0.0, 0.0, -50.0, 0.0, 0.0, 0.0)
    )


def test_encode_writes_yaw_before_pitch_with_angular_scale():
    encoder = PoseEncoder()
    q = euler_yaw_pitch_roll_to_q(30.0, 10.0, -5.0)
    packet = unpack_packet(encoder.encode(_pose(0.0, 0.0, 0.0, q), np.zeros(3)))
    assert abs(packet.yaw - math.radians(30.0) * 25.0) < 1e-9
    assert abs(packet.pitch - math.radians(10.0) * 25.0) < 1e-9
    assert abs(packet.roll - math.radians(-5.0) * 25.0) < 1e-9


def test_encode_folded_yaw_is_scaled_after_folding():
    encoder = PoseEncoder()
    q = euler_yaw_pitch_roll_to_q(math.degrees(-0.1), 0.0, 0.0)
    packet = encoder.to_packet(_pose(0.0, 0.0, 0.0, q), np.zeros(3))
    assert abs(packet.yaw - (2.0 * math.pi - 0.1) * 25.0) < 1e-8


def test_encode_custom_settings():
    encoder = PoseEncoder(
        EncoderSettings(
            position_scale=(1.0, 2.0, 3.0),
            position_offset=(1.0, 0.0, 0.0),
            angular_scale=(1.0, 1.0, 1.0),
        )
    )
    packet = encoder.to_packet(_pose(1.0, 1.0, 1.0), np.zeros(3))
    assert (packet.x, packet.y, packet.z) == (0.0, 2.0, 3.0)


def test_encode_non_unit_quaternion_stays_finite():
    encoder = PoseEncoder()
    data = encoder.encode(_pose(0.1, 0.2, 2.0, (1.0, 1.0, 0.0, 0.0)), np.zeros(3))
    assert len(data) == 48
    assert all(math.isfinite(v) for v in unpack_packet(data).as_tuple())


def test_encoder_settings_reject_wrong_length():
    with pytest.raises(ValueError, match="position_scale"):
        PoseEncoder(EncoderSettings(position_scale=(1.0, 2.0)))


def test_encode_has_no_retained_state():
    encoder = PoseEncoder()
    pose = _pose(0.4, -0.2, 2.2, euler_yaw_pitch_roll_to_q(45.0, 0.0, 0.0))
    center = np.array([0.1, 0.0, 2.0])
    first = encoder.encode(pose, center)
    encoder.encode(_pose(9.0, 9.0, 9.0), np.zeros(3))
    assert encoder.encode(pose, center) == first
