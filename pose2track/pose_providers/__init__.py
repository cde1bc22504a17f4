"""Pose provider implementations."""

from .kinect_v2_pose import KinectV2PoseProvider

__all__ = [
    "KinectV2PoseProvider",
]
