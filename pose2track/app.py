"""
Head tracking -> UDP tracking receiver:
- Head sample source (Kinect bridge stream or ToyCV sliders)
- Extent tracker keeps a running room center, no calibration step
- Pose encoder: center/scale position, quaternion -> scaled yaw/pitch/roll
- 48-byte little-endian datagram per frame, fire-and-forget
- Display provider (tui/none) renders the same runtime frame data

Deps:
  uv add numpy pyyaml
"""

from __future__ import annotations

import logging

from .config import parse_args
from .control.controller import TrackingController
from .control.display_provider import NullDisplayProvider, TuiDisplayProvider
from .control.extent import ExtentTracker
from .control.pose_encoder import PoseEncoder
from .transport.udp_sender import UdpPoseSender

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_toycv_provider(cfg, title: str):
    from .pose_providers.toycv_tk import ToyCvTkPoseProvider

    return ToyCvTkPoseProvider(
        title=title,
        udp_target=f"{cfg.udp_host}:{cfg.udp_port}",
    )


def build_pose_provider(cfg):
    if cfg.pose_provider == "toycv":
        return build_toycv_provider(cfg, "Pose2Track - ToyCV Head Pose")

    try:
        if cfg.pose_provider == "kinectv2":
            from .pose_providers.kinect_v2_pose import KinectV2PoseProvider

            return KinectV2PoseProvider(
                title="Pose2Track - Kinect Head Pose",
                poll_ms=cfg.kinect_poll_ms,
                bridge_host=cfg.kinect_bridge_host,
                bridge_port=cfg.kinect_bridge_port,
            )
        raise RuntimeError(f"Unsupported pose provider: {cfg.pose_provider}")
    except (ImportError, RuntimeError, OSError):
        logger.exception("[POSE] failed to init requested pose provider")
        logger.warning("[POSE] fallback to ToyCV sliders")
        return build_toycv_provider(cfg, "Pose2Track - ToyCV Head Pose (fallback)")


def build_display_provider(cfg, pose_provider):
    if cfg.display_provider == "tui":
        return TuiDisplayProvider(
            pose_provider=pose_provider,
            cli_output=cfg.cli_output,
        )
    if cfg.display_provider == "none":
        return NullDisplayProvider()
    raise RuntimeError(f"Unsupported display provider: {cfg.display_provider}")


def build_controller(cfg, pose_provider, sender) -> TrackingController:
    settings = cfg.encoder_settings()
    logger.info(
        "[TRACK] position scale=%s offset=%s angular scale (yaw, pitch, roll)=%s",
        settings.position_scale,
        settings.position_offset,
        settings.angular_scale,
    )
    return TrackingController(
        pose_provider=pose_provider,
        tracker=ExtentTracker(),
        encoder=PoseEncoder(settings),
        sender=sender,
        display_provider=build_display_provider(cfg, pose_provider),
        display_hz=cfg.display_hz,
    )


def main(argv=None):
    cfg = parse_args(argv)
    configure_logging(cfg.log_level)

    sender = UdpPoseSender(cfg.udp_host, cfg.udp_port)
    pose_provider = build_pose_provider(cfg)
    controller = build_controller(cfg, pose_provider, sender)

    try:
        pose_provider.run(controller.tick)
    except KeyboardInterrupt:
        logger.info("[TRACK] interrupted")
    finally:
        try:
            controller.display_provider.close()
            pose_provider.close()
        finally:
            sender.close()
            logger.info(
                "[TRACK] stopped: frames=%d sent=%d dropped=%d skipped=%d",
                controller.frames,
                sender.sent,
                sender.dropped,
                controller.skipped,
            )


if __name__ == "__main__":
    main()
