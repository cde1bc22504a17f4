import pytest

from pose2track.config import AppConfig, parse_args, validate_config


def test_validate_config_accepts_defaults():
    validate_config(AppConfig())


def test_defaults_match_receiver_tuning():
    cfg = parse_args([])
    assert (cfg.udp_host, cfg.udp_port) == ("127.0.0.1", 4242)
    settings = cfg.encoder_settings()
    assert settings.position_scale == (30.0, 30.0, 30.0)
    assert settings.position_offset == (0.0, 0.0, 50.0)
    assert settings.angular_scale == (25.0, 25.0, 25.0)


def test_validate_config_rejects_invalid_udp_port():
    cfg = AppConfig(udp_port=70000)
    with pytest.raises(ValueError, match="--udp-port"):
        validate_config(cfg)


def test_validate_config_rejects_empty_udp_host():
    cfg = AppConfig(udp_host="  ")
    with pytest.raises(ValueError, match="--udp-host"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_kinect_bridge_port():
    cfg = AppConfig(kinect_bridge_port=0)
    with pytest.raises(ValueError, match="--kinect-bridge-port"):
        validate_config(cfg)


def test_validate_config_rejects_non_finite_scale():
    cfg = AppConfig(position_scale_y=float("inf"))
    with pytest.raises(ValueError, match="--position-scale-y"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_display_provider():
    cfg = AppConfig(display_provider="bad")
    with pytest.raises(ValueError, match="--display-provider"):
        validate_config(cfg)


def test_validate_config_rejects_negative_display_hz():
    cfg = AppConfig(display_hz=-1.0)
    with pytest.raises(ValueError, match="--display-hz"):
        validate_config(cfg)


def test_validate_config_rejects_invalid_pose_provider():
    cfg = AppConfig(pose_provider="mediapipe")
    with pytest.raises(ValueError, match="--pose-provider"):
        validate_config(cfg)


def test_parse_args_reads_yaml_config(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "\n".join(
            [
                "udp-host: 192.168.1.20",
                "udp_port: 5555",
                "position_offset_z: 0",
                "angular_scale_yaw: 1.5",
                "pose_provider: toycv",
                "display_hz: 60",
            ]
        ),
        encoding="utf-8",
    )
    cfg = parse_args(["--config", str(cfg_path)])
    assert cfg.udp_host == "192.168.1.20"
    assert cfg.udp_port == 5555
    assert cfg.position_offset_z == 0.0
    assert cfg.angular_scale_yaw == 1.5
    assert cfg.pose_provider == "toycv"
    assert cfg.display_hz == 60.0


def test_parse_args_cli_overrides_yaml(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "\n".join(
            [
                "udp_port: 5555",
                "display_hz: 60",
            ]
        ),
        encoding="utf-8",
    )
    cfg = parse_args(
        [
            "--config",
            str(cfg_path),
            "--udp-port",
            "4243",
            "--display-hz",
            "12",
        ]
    )
    assert cfg.udp_port == 4243
    assert cfg.display_hz == 12.0


def test_parse_args_rejects_unknown_yaml_key(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("udp_port: 4242\nbad_key: 1\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        parse_args(["--config", str(cfg_path)])


def test_parse_args_rejects_bad_yaml_value(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("udp_port: not-a-port\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        parse_args(["--config", str(cfg_path)])


def test_parse_args_rejects_invalid_yaml_enum(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("display_provider: open3d\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        parse_args(["--config", str(cfg_path)])


def test_parse_args_missing_config_file(tmp_path):
    with pytest.raises(SystemExit):
        parse_args(["--config", str(tmp_path / "missing.yaml")])
