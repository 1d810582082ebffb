"""Tests for YAML configuration with environment overrides."""

import logging

import pytest

from core.config import ICON_WIRED, ICON_WIRELESS, Config, default_config_path, load_config
from core.errors import ConfigError


class TestDefaultConfigPath:
    def test_explicit_env(self):
        assert default_config_path({"NETSTATUS_CONFIG": "/etc/ns.yml"}) == "/etc/ns.yml"

    def test_xdg(self):
        path = default_config_path({"XDG_CONFIG_HOME": "/home/u/.cfg"})
        assert path == "/home/u/.cfg/netstatus/config.yml"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_config(str(tmp_path / "nope.yml"), env={})

        assert cfg == Config()
        assert cfg.sample_interval_sec == 1.0
        assert cfg.sysfs_root == "/sys/class/net"
        assert cfg.icons == {"wired": ICON_WIRED, "wireless": ICON_WIRELESS}

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("", encoding="utf-8")

        assert load_config(str(path), env={}) == Config()

    def test_file_values(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(
            "sample_interval_sec: 2\n"
            "bus_timeout_sec: 0.5\n"
            "sysfs_root: /tmp/net\n"
            "icons:\n"
            "  wired: E\n",
            encoding="utf-8",
        )

        cfg = load_config(str(path), env={})

        assert cfg.sample_interval_sec == 2.0
        assert cfg.bus_timeout_sec == 0.5
        assert cfg.read_timeout_sec == 2.0
        assert cfg.sysfs_root == "/tmp/net"
        assert cfg.icons == {"wired": "E", "wireless": ICON_WIRELESS}

    def test_env_overrides_file(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("sample_interval_sec: 2\n", encoding="utf-8")

        cfg = load_config(str(path), env={
            "NETSTATUS_SAMPLE_INTERVAL": "0.25",
            "NETSTATUS_SYSFS_ROOT": "/srv/net",
        })

        assert cfg.sample_interval_sec == 0.25
        assert cfg.sysfs_root == "/srv/net"

    def test_path_from_env(self, tmp_path):
        path = tmp_path / "custom.yml"
        path.write_text("read_timeout_sec: 7\n", encoding="utf-8")

        cfg = load_config(env={"NETSTATUS_CONFIG": str(path)})
        assert cfg.read_timeout_sec == 7.0

    @pytest.mark.parametrize(
        "content",
        [
            "sample_interval_sec: [1\n",
            "- a\n- b\n",
            "sample_interval_sec: fast\n",
            "sample_interval_sec: 0\n",
            "bus_timeout_sec: -1\n",
            "read_timeout_sec: true\n",
            "icons: wired\n",
        ],
    )
    def test_invalid_config(self, tmp_path, content):
        path = tmp_path / "config.yml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(str(path), env={})

    def test_invalid_env_override(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.yml"), env={"NETSTATUS_BUS_TIMEOUT": "soon"})

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger="core.config")
        path = tmp_path / "config.yml"
        path.write_text("poll_interval_sec: 1\n", encoding="utf-8")

        cfg = load_config(str(path), env={})

        assert cfg == Config()
        assert "poll_interval_sec" in caplog.text
