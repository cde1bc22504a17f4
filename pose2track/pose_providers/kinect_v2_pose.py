"""Kinect head pose provider via external bridge (e.g. C# process).

This provider intentionally avoids direct Kinect hardware SDK bindings.
A bridge process owns the sensor, picks the tracked skeleton and forwards its
head joint once per skeleton frame as localhost UDP JSON.
"""

from __future__ import annotations

import json
import logging
import socket
import time
from typing import Optional, Tuple

import numpy as np

from ..control.pose import Pose6D, identity_pose
from ..control.pose_provider import PoseProvider
from ..math3d.quaternion import q_normalize

logger = logging.getLogger(__name__)


def _parse_pose_payload(payload: dict) -> Optional[Tuple[np.ndarray, np.ndarray, bool]]:
    tracked = bool(payload.get("tracked", True))
    position = payload.get("position", payload.get("position_m"))
    quaternion = payload.get("quaternion_wxyz", payload.get("quaternion"))
    if position is None or quaternion is None:
        return None

    try:
        p = np.asarray(position, dtype=np.float64).reshape(-1)
        q = np.asarray(quaternion, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError):
        return None
    if p.size != 3 or q.size != 4:
        return None
    if not np.isfinite(p).all() or not np.isfinite(q).all():
        return None

    return p, q_normalize(q), tracked


def _parse_pose_packet(data: bytes) -> Optional[Tuple[np.ndarray, np.ndarray, bool]]:
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    return _parse_pose_payload(payload)


class _UdpPoseReceiver:
    def __init__(self, host: str, port: int):
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind((host, int(port)))
        self.sock.setblocking(False)

    def recv_latest(self) -> Optional[Tuple[np.ndarray, np.ndarray, bool]]:
        latest = None
        while True:
            try:
                data, _ = self.sock.recvfrom(65535)
            except BlockingIOError:
                break
            except OSError:
                break
            parsed = _parse_pose_packet(data)
            if parsed is not None:
                latest = parsed
        return latest

    def close(self) -> None:
        self.sock.close()


class KinectV2PoseProvider(PoseProvider):
    """Head sample provider fed by external Kinect bridge messages over UDP.

    Expected JSON packet schema:
    {
      "tracked": true,
      "position": [x, y, z],
      "quaternion_wxyz": [w, x, y, z]
    }

    Positions are passed through in raw sensor space; centering is done
    downstream by the extent tracker.
    """

    def __init__(
        self,
        title: str,
        poll_ms: int = 8,
        bridge_host: str = "127.0.0.1",
        bridge_port: int = 24567,
    ):
        self.title = title
        self.poll_s = max(0.001, float(poll_ms) / 1000.0)
        self.bridge_host = str(bridge_host)
        self.bridge_port = int(bridge_port)

        self._receiver = _UdpPoseReceiver(self.bridge_host, self.bridge_port)

        self._closed = False
        self._on_tick = None
        self._status_text = ""
        self._has_tracking = False
        self._has_new_sample = False

        self._pose = identity_pose()
        self._last_warn_t = 0.0
        self._last_recv_t = 0.0
        self._recv_count = 0

        logger.info(
            "[POSE] provider=kinectv2-bridge (host=%s, port=%s, poll_ms=%.1f)",
            self.bridge_host,
            self.bridge_port,
            self.poll_s * 1000.0,
        )

    def get_pose(self) -> Pose6D:
        return Pose6D(
            position=self._pose.position.copy(),
            quaternion=self._pose.quaternion.copy(),
        )

    def has_tracking(self) -> bool:
        # One sample feeds exactly one tick; no new packet means no frame.
        return bool(self._has_tracking and self._has_new_sample)

    def set_status(self, text: str) -> None:
        self._status_text = text

    def _poll_once(self) -> None:
        self._has_new_sample = False
        sample = self._receiver.recv_latest()
        if sample is None:
            now = time.time()
            # Only log if we have not received any packet recently.
            if (now - self._last_recv_t) > 2.0 and (now - self._last_warn_t) > 2.0:
                logger.info(
                    "[POSE] waiting for Kinect bridge packets on %s:%s",
                    self.bridge_host,
                    self.bridge_port,
                )
                self._last_warn_t = now
            return

        p, q, tracked = sample
        self._last_recv_t = time.time()
        self._recv_count += 1
        if self._recv_count == 1:
            logger.info(
                "[POSE] first Kinect bridge packet received on %s:%s",
                self.bridge_host,
                self.bridge_port,
            )
        if not tracked:
            self._has_tracking = False
            return

        self._pose = Pose6D(position=p, quaternion=q)
        self._has_tracking = True
        self._has_new_sample = True

    def run(self, on_tick):
        self._on_tick = on_tick
        while not self._closed:
            self._poll_once()
            if self._on_tick is not None:
                self._on_tick()
            time.sleep(self.poll_s)
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._receiver.close()
        except OSError:
            pass
