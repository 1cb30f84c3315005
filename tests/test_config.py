"""Tests for configuration loading."""

import logging
from pathlib import Path

import pytest

from scylla.config import (
    DEFAULT_MARGIN,
    DEFAULT_TICK_MS,
    DashboardConfig,
    get_default_config_path,
    load_config,
    parse_config,
)
from scylla.exceptions import ConfigError


class TestDefaults:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.yaml")
        assert config == DashboardConfig()

    def test_default_values(self):
        config = DashboardConfig()
        assert config.db_path == Path("c2.db")
        assert config.tick_ms == DEFAULT_TICK_MS
        assert config.margin == DEFAULT_MARGIN
        assert config.tick_interval == pytest.approx(0.2)
        assert config.log_level_value == logging.WARNING

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == DashboardConfig()


class TestLoadConfig:

    def test_reads_all_sections(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("""
database:
  path: /var/lib/c2/agents.db
dashboard:
  tick_ms: 50
  margin: 0
logging:
  file: /tmp/scylla.log
  level: debug
""")
        config = load_config(path)
        assert config.db_path == Path("/var/lib/c2/agents.db")
        assert config.tick_ms == 50
        assert config.tick_interval == pytest.approx(0.05)
        assert config.margin == 0
        assert config.log_file == Path("/tmp/scylla.log")
        assert config.log_level == "DEBUG"
        assert config.log_level_value == logging.DEBUG

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("theme: dark\ndashboard:\n  colour: blue\n")
        assert load_config(path) == DashboardConfig()

    def test_env_var_selects_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("dashboard:\n  tick_ms: 500\n")
        monkeypatch.setenv("SCYLLA_CONFIG", str(path))
        assert get_default_config_path() == path
        assert load_config().tick_ms == 500

    def test_default_path_under_cwd(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SCYLLA_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        assert get_default_config_path() == tmp_path / ".scylla" / "config.yaml"

    def test_malformed_yaml_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("dashboard: [unclosed\n")
        with pytest.raises(ConfigError, match="Failed to load config"):
            load_config(path)


class TestParseConfig:

    def test_none_is_defaults(self):
        assert parse_config(None) == DashboardConfig()

    def test_top_level_must_be_mapping(self):
        with pytest.raises(ConfigError):
            parse_config(["a", "b"])

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError, match="'dashboard' must be a mapping"):
            parse_config({"dashboard": 5})

    @pytest.mark.parametrize("value", [0, -10, "fast", 1.5, True])
    def test_invalid_tick_ms(self, value):
        with pytest.raises(ConfigError):
            parse_config({"dashboard": {"tick_ms": value}})

    def test_negative_margin(self):
        with pytest.raises(ConfigError):
            parse_config({"dashboard": {"margin": -1}})

    def test_unknown_log_level(self):
        with pytest.raises(ConfigError, match="Unknown log level"):
            parse_config({"logging": {"level": "chatty"}})
