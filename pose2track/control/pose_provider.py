"""Pose provider interfaces for the tracked head joint."""

from __future__ import annotations

from typing import Callable

from .pose import Pose6D


class PoseProvider:
    """Base interface for head sample sources.

    Implementations may be UI-based (ToyCV) or fed by a sensor bridge (Kinect).
    They own the sensor and the event loop; the pipeline only sees one
    position + quaternion per tick.
    """

    def get_pose(self) -> Pose6D:
        """Return the latest head sample in sensor space."""
        raise NotImplementedError

    def has_tracking(self) -> bool:
        """Whether the current sample comes from valid tracking."""
        return True

    def set_status(self, text: str) -> None:
        # Optional UI hook.
        pass

    def run(self, on_tick: Callable[[], None]) -> None:
        """Run the provider's event loop and call on_tick once per frame."""
        raise NotImplementedError

    def close(self) -> None:
        pass
