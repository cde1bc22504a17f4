"""Control plane for mapping head samples -> tracking datagrams."""

from __future__ import annotations

import logging
import time

from .display_provider import DisplayFrame, DisplayProvider, NullDisplayProvider
from .extent import ExtentTracker
from .pose_encoder import PoseEncoder, pack_packet
from .pose_provider import PoseProvider

logger = logging.getLogger(__name__)


class TrackingController:
    """Runs the per-frame pipeline: observe extent, encode, send.

    Called synchronously from the pose provider's loop; never re-entered.
    """

    def __init__(
        self,
        pose_provider: PoseProvider,
        tracker: ExtentTracker,
        encoder: PoseEncoder,
        sender,
        display_provider: DisplayProvider | None = None,
        display_hz: float = 5.0,
    ):
        self.pose_provider = pose_provider
        self.tracker = tracker
        self.encoder = encoder
        self.sender = sender
        self.display_provider = display_provider or NullDisplayProvider()

        self.frames = 0
        self.skipped = 0
        self.last_packet = None
        self.display_interval = (1.0 / display_hz) if display_hz > 0.0 else 0.0
        self.last_display_t = 0.0

    def tick(self) -> None:
        if not self.pose_provider.has_tracking():
            return

        pose = self.pose_provider.get_pose()
        if not pose.is_finite():
            self.skipped += 1
            logger.debug("[TRACK] skipping non-finite sample: %s", pose)
            return

        x, y, z = (float(v) for v in pose.position)
        self.tracker.observe(x, y, z)
        center = self.tracker.center()

        packet = self.encoder.to_packet(pose, center)
        self.sender.send(pack_packet(packet))
        self.frames += 1
        self.last_packet = packet

        now = time.time()
        if self.display_interval > 0.0 and (now - self.last_display_t) >= self.display_interval:
            self.display_provider.update(
                DisplayFrame(
                    pose=pose,
                    center=center,
                    extent_min=self.tracker.minimum,
                    extent_max=self.tracker.maximum,
                    packet=packet,
                    frames=self.frames,
                    dropped=int(getattr(self.sender, "dropped", 0)),
                )
            )
            self.last_display_t = now
