"""CLI config and defaults."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .control.pose_encoder import EncoderSettings


@dataclass(frozen=True)
class AppConfig:
    udp_host: str = "127.0.0.1"
    udp_port: int = 4242
    position_scale_x: float = 30.0
    position_scale_y: float = 30.0
    position_scale_z: float = 30.0
    position_offset_x: float = 0.0
    position_offset_y: float = 0.0
    position_offset_z: float = 50.0
    angular_scale_yaw: float = 25.0
    angular_scale_pitch: float = 25.0
    angular_scale_roll: float = 25.0
    pose_provider: str = "kinectv2"
    kinect_poll_ms: int = 8
    kinect_bridge_host: str = "127.0.0.1"
    kinect_bridge_port: int = 24567
    log_level: str = "info"
    display_provider: str = "tui"
    display_hz: float = 5.0
    cli_output: str = "live"

    def encoder_settings(self) -> EncoderSettings:
        return EncoderSettings(
            position_scale=(
                self.position_scale_x,
                self.position_scale_y,
                self.position_scale_z,
            ),
            position_offset=(
                self.position_offset_x,
                self.position_offset_y,
                self.position_offset_z,
            ),
            angular_scale=(
                self.angular_scale_yaw,
                self.angular_scale_pitch,
                self.angular_scale_roll,
            ),
        )


_APP_CONFIG_FIELDS = {f.name for f in fields(AppConfig)}
_INT_FIELDS = {
    "udp_port",
    "kinect_poll_ms",
    "kinect_bridge_port",
}
_FLOAT_FIELDS = {
    "position_scale_x",
    "position_scale_y",
    "position_scale_z",
    "position_offset_x",
    "position_offset_y",
    "position_offset_z",
    "angular_scale_yaw",
    "angular_scale_pitch",
    "angular_scale_roll",
    "display_hz",
}
_STRING_FIELDS = {
    "udp_host",
    "pose_provider",
    "kinect_bridge_host",
    "log_level",
    "display_provider",
    "cli_output",
}
_KEY_ALIASES = {
    "host": "udp_host",
    "port": "udp_port",
}


def _coerce_config_value(key: str, value: Any) -> Any:
    try:
        if key in _INT_FIELDS:
            if isinstance(value, bool):
                raise TypeError("bool is not an int")
            return int(value)
        if key in _FLOAT_FIELDS:
            if isinstance(value, bool):
                raise TypeError("bool is not a float")
            return float(value)
        if key in _STRING_FIELDS:
            return "" if value is None else str(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid value for config key '{key}': {value!r}") from exc
    raise ValueError(f"unsupported config key '{key}'")


def _normalize_config_key(raw_key: Any) -> str:
    if not isinstance(raw_key, str):
        raise ValueError(f"config key must be string, got {type(raw_key).__name__}")
    key = raw_key.strip().replace("-", "_")
    if not key:
        raise ValueError("config key cannot be empty")
    return _KEY_ALIASES.get(key, key)


def _load_yaml_config(path: str) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise ValueError(f"--config file not found: {p}")
    if not p.is_file():
        raise ValueError(f"--config must point to a file: {p}")

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"failed to read --config file {p}: {exc}") from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse YAML config {p}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"--config root must be a mapping/object, got {type(loaded).__name__}")

    normalized: dict[str, Any] = {}
    for raw_key, raw_value in loaded.items():
        key = _normalize_config_key(raw_key)
        if key not in _APP_CONFIG_FIELDS:
            raise ValueError(f"unknown config key in {p}: {raw_key!r}")
        normalized[key] = _coerce_config_value(key, raw_value)
    return normalized


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Stream a tracked head pose to a UDP tracking receiver.",
    )
    ap.add_argument(
        "--config",
        type=str,
        default="",
        help="YAML config file path. CLI args override YAML values.",
    )
    ap.add_argument(
        "--udp-host",
        type=str,
        default="127.0.0.1",
        help="Destination host of the tracking receiver.",
    )
    ap.add_argument(
        "--udp-port",
        type=int,
        default=4242,
        help="Destination UDP port of the tracking receiver.",
    )

    for axis in ("x", "y", "z"):
        ap.add_argument(
            f"--position-scale-{axis}",
            type=float,
            default=30.0,
            help=f"Multiplier for centered {axis} position.",
        )
    ap.add_argument("--position-offset-x", type=float, default=0.0, help="Bias subtracted from scaled x.")
    ap.add_argument("--position-offset-y", type=float, default=0.0, help="Bias subtracted from scaled y.")
    ap.add_argument(
        "--position-offset-z",
        type=float,
        default=50.0,
        help="Bias subtracted from scaled z (constant forward bias).",
    )
    for angle in ("yaw", "pitch", "roll"):
        ap.add_argument(
            f"--angular-scale-{angle}",
            type=float,
            default=25.0,
            help=f"Multiplier for {angle} in radians (sensitivity, not a unit conversion).",
        )

    ap.add_argument(
        "--pose-provider",
        choices=["kinectv2", "toycv"],
        default="kinectv2",
        help="Head sample source: Kinect bridge stream or ToyCV sliders.",
    )
    ap.add_argument(
        "--kinect-poll-ms",
        type=int,
        default=8,
        help="Kinect polling sleep in milliseconds.",
    )
    ap.add_argument(
        "--kinect-bridge-host",
        type=str,
        default="127.0.0.1",
        help="Host for Kinect bridge UDP pose stream.",
    )
    ap.add_argument(
        "--kinect-bridge-port",
        type=int,
        default=24567,
        help="Port for Kinect bridge UDP pose stream.",
    )
    ap.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Global log level.",
    )
    ap.add_argument(
        "--display-provider",
        choices=["tui", "none"],
        default="tui",
        help="Display provider: terminal TUI or none.",
    )
    ap.add_argument(
        "--display-hz",
        type=float,
        default=5.0,
        help="Display refresh rate in Hz (0 disables display updates).",
    )
    ap.add_argument(
        "--cli-output",
        choices=["live", "scroll"],
        default="live",
        help="TUI output mode: in-place live panel or scrolling logs.",
    )

    return ap


def _validate_port(flag: str, port: int) -> None:
    if not (1 <= port <= 65535):
        raise ValueError(f"{flag} must be in [1,65535], got {port}")


def validate_config(cfg: AppConfig) -> None:
    if not cfg.udp_host.strip():
        raise ValueError("--udp-host must be non-empty")
    _validate_port("--udp-port", cfg.udp_port)

    for name in sorted(_FLOAT_FIELDS - {"display_hz"}):
        value = getattr(cfg, name)
        if not math.isfinite(value):
            flag = "--" + name.replace("_", "-")
            raise ValueError(f"{flag} must be a finite number, got {value}")

    if cfg.pose_provider not in {"kinectv2", "toycv"}:
        raise ValueError(
            f"--pose-provider must be one of kinectv2|toycv, got {cfg.pose_provider}"
        )
    if cfg.kinect_poll_ms <= 0:
        raise ValueError(f"--kinect-poll-ms must be > 0, got {cfg.kinect_poll_ms}")
    if not cfg.kinect_bridge_host.strip():
        raise ValueError("--kinect-bridge-host must be non-empty")
    _validate_port("--kinect-bridge-port", cfg.kinect_bridge_port)
    if cfg.log_level not in {"debug", "info", "warning", "error"}:
        raise ValueError(
            f"--log-level must be one of debug|info|warning|error, got {cfg.log_level}"
        )
    if cfg.display_provider not in {"tui", "none"}:
        raise ValueError(
            f"--display-provider must be one of tui|none, got {cfg.display_provider}"
        )
    if not math.isfinite(cfg.display_hz) or cfg.display_hz < 0.0:
        raise ValueError(f"--display-hz must be >= 0, got {cfg.display_hz}")
    if cfg.cli_output not in {"live", "scroll"}:
        raise ValueError(f"--cli-output must be live|scroll, got {cfg.cli_output}")


def parse_args(argv=None) -> AppConfig:
    bootstrap = argparse.ArgumentParser(add_help=False)
    bootstrap.add_argument("--config", type=str, default="")
    bootstrap_ns, _ = bootstrap.parse_known_args(argv)

    yaml_cfg: dict[str, Any] = {}
    yaml_error: Optional[str] = None
    if bootstrap_ns.config:
        try:
            yaml_cfg = _load_yaml_config(bootstrap_ns.config)
        except ValueError as exc:
            yaml_error = str(exc)

    ap = build_arg_parser()
    if yaml_error is not None:
        ap.error(yaml_error)
    if yaml_cfg:
        ap.set_defaults(**yaml_cfg)
    args = ap.parse_args(argv)

    cfg = AppConfig(
        udp_host=args.udp_host,
        udp_port=args.udp_port,
        position_scale_x=args.position_scale_x,
        position_scale_y=args.position_scale_y,
        position_scale_z=args.position_scale_z,
        position_offset_x=args.position_offset_x,
        position_offset_y=args.position_offset_y,
        position_offset_z=args.position_offset_z,
        angular_scale_yaw=args.angular_scale_yaw,
        angular_scale_pitch=args.angular_scale_pitch,
        angular_scale_roll=args.angular_scale_roll,
        pose_provider=args.pose_provider,
        kinect_poll_ms=args.kinect_poll_ms,
        kinect_bridge_host=args.kinect_bridge_host,
        kinect_bridge_port=args.kinect_bridge_port,
        log_level=args.log_level,
        display_provider=args.display_provider,
        display_hz=float(args.display_hz),
        cli_output=args.cli_output,
    )
    try:
        validate_config(cfg)
    except ValueError as exc:
        ap.error(str(exc))
    return cfg
