"""Tests for configuration loading and target resolution."""

import pytest

from wiz_strip_console.config import DEVICES_ENV_VAR, CommandDefaults, StripConfig


def test_missing_file_gives_defaults(tmp_path):
    """Test that a missing config file yields the default configuration."""
    config = StripConfig.load(tmp_path / "nope.yaml")
    assert config.devices == {}
    assert config.groups == {}
    assert config.defaults == CommandDefaults(speed=20, brightness=75, timeout=1.0)


def test_save_and_load(tmp_path):
    """Test that a saved configuration loads back unchanged."""
    path = tmp_path / "sub" / "config.yaml"
    config = StripConfig(
        devices={"desk": "192.168.1.20", "shelf": "192.168.1.21"},
        groups={"office": ["desk", "shelf"]},
        defaults=CommandDefaults(speed=50, brightness=30, timeout=0.5),
    )
    config.save(path)
    assert StripConfig.load(path) == config


def test_invalid_yaml_falls_back(tmp_path, caplog):
    """Test that an unreadable file logs a warning and uses defaults."""
    path = tmp_path / "config.yaml"
    path.write_text("devices: [unclosed\n")
    config = StripConfig.load(path)
    assert config == StripConfig()
    assert "Failed to load config" in caplog.text


def test_resolve_targets_order_and_dedup():
    """Test that names come first, then groups, without duplicates."""
    config = StripConfig(
        devices={"desk": "10.0.0.1", "shelf": "10.0.0.2"},
        groups={"office": ["shelf", "desk", "10.0.0.3"]},
    )
    assert config.resolve_targets(["desk", "10.0.0.9"], ["office"]) == [
        "10.0.0.1",
        "10.0.0.9",
        "10.0.0.2",
        "10.0.0.3",
    ]


def test_resolve_unknown_group():
    """Test that an unknown group raises KeyError."""
    with pytest.raises(KeyError):
        StripConfig().resolve_targets(groups=["kitchen"])


def test_env_targets(monkeypatch):
    """Test targets from the environment variable."""
    config = StripConfig(devices={"desk": "10.0.0.1"})
    monkeypatch.delenv(DEVICES_ENV_VAR, raising=False)
    assert config.env_targets() is None

    monkeypatch.setenv(DEVICES_ENV_VAR, "desk, 10.0.0.5,,")
    assert config.env_targets() == ["10.0.0.1", "10.0.0.5"]


@pytest.mark.parametrize("timeout", [0, -1])
def test_non_positive_timeout_rejected(timeout):
    """Test that a timeout of zero or less is refused."""
    with pytest.raises(ValueError, match="timeout"):
        CommandDefaults.from_dict({"timeout": timeout})
