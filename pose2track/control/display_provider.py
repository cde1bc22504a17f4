"""Display providers for rendering runtime tracking state."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

import numpy as np

from .pose import Pose6D
from .pose_encoder import TrackingPacket
from .pose_provider import PoseProvider

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DisplayFrame:
    """Runtime frame data shared by all display providers."""

    pose: Pose6D
    center: np.ndarray
    extent_min: np.ndarray
    extent_max: np.ndarray
    packet: TrackingPacket
    frames: int
    dropped: int


class DisplayProvider:
    """Base display provider interface."""

    def update(self, frame: DisplayFrame) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class NullDisplayProvider(DisplayProvider):
    def update(self, frame: DisplayFrame) -> None:  # noqa: ARG002
        pass


def _status_lines(frame: DisplayFrame) -> list[str]:
    q = frame.pose.quaternion
    p = frame.pose.position
    c = frame.center
    lo = frame.extent_min
    hi = frame.extent_max
    pk = frame.packet
    return [
        (
            f"q=[w,x,y,z]     = [{q[0]: .4f}, {q[1]: .4f}, "
            f"{q[2]: .4f}, {q[3]: .4f}]"
        ),
        f"yaw/pitch/roll  = ({pk.yaw: .3f}, {pk.pitch: .3f}, {pk.roll: .3f})",
        f"head xyz        = [{p[0]: .3f}, {p[1]: .3f}, {p[2]: .3f}]",
        f"center xyz      = [{c[0]: .3f}, {c[1]: .3f}, {c[2]: .3f}]",
        (
            f"extent          = x[{lo[0]: .2f}, {hi[0]: .2f}] "
            f"y[{lo[1]: .2f}, {hi[1]: .2f}] z[{lo[2]: .2f}, {hi[2]: .2f}]"
        ),
        f"sent xyz        = [{pk.x: .2f}, {pk.y: .2f}, {pk.z: .2f}]",
        f"frames/dropped  = {frame.frames}/{frame.dropped}",
    ]


class _CliStatsSink:
    def __init__(self, mode: str):
        self.mode = "live" if mode == "live" else "scroll"
        self._is_tty = bool(getattr(sys.stderr, "isatty", lambda: False)())
        self._live_enabled = self.mode == "live" and self._is_tty
        self._line_count = 0

    def emit(self, lines: list[str], scroll_line: str) -> None:
        if not self._live_enabled:
            logger.info(scroll_line)
            return

        out = sys.stderr
        if self._line_count > 0:
            out.write(f"\x1b[{self._line_count}F")

        max_lines = max(self._line_count, len(lines))
        for i in range(max_lines):
            line = lines[i] if i < len(lines) else ""
            out.write("\x1b[2K")
            out.write(line)
            out.write("\n")
        out.flush()
        self._line_count = len(lines)


class TuiDisplayProvider(DisplayProvider):
    """Terminal + pose UI text display provider."""

    def __init__(self, pose_provider: PoseProvider, cli_output: str = "live"):
        self.pose_provider = pose_provider
        self.cli_sink = _CliStatsSink(cli_output)

    def update(self, frame: DisplayFrame) -> None:
        lines = _status_lines(frame)
        self.pose_provider.set_status("\n".join(lines))

        pk = frame.packet
        c = frame.center
        self.cli_sink.emit(
            lines=["Pose2Track Live"] + lines,
            scroll_line=(
                "[TRACK] sent_xyz=(%.2f, %.2f, %.2f) ypr=(%.3f, %.3f, %.3f) "
                "center=(%.3f, %.3f, %.3f) frames=%d dropped=%d"
                % (
                    pk.x,
                    pk.y,
                    pk.z,
                    pk.yaw,
                    pk.pitch,
                    pk.roll,
                    c[0],
                    c[1],
                    c[2],
                    frame.frames,
                    frame.dropped,
                )
            ),
        )
