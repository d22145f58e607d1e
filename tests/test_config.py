"""
Configuration Tests
-------------------
YAML loading, defaults and PALETTE_* environment overrides.
"""

import logging
import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.errors import ConfigError, ErrorCategory
from infra.config import ConfigManager


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("""
catalogue:
  path: /tmp/commands.yaml
logging:
  level: DEBUG
search:
  limit: 5
vocabulary:
  verbs:
    deploy: [ship]
""", encoding="utf-8")
    return path


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_dot_notation(self, config_file):
        config = ConfigManager(str(config_file))
        assert config.get("catalogue.path") == "/tmp/commands.yaml"
        assert config.get("logging.level") == "DEBUG"
        assert config.get_int("search.limit") == 5
        assert config.get("vocabulary.verbs") == {"deploy": ["ship"]}

    def test_defaults_fill_gaps(self, config_file):
        config = ConfigManager(str(config_file))
        assert config.get("logging.dir") == "logs"
        assert config.get_bool("logging.file") is False
        assert config.get("nope.missing", "fallback") == "fallback"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigManager(str(tmp_path / "absent.yaml"))
        assert config.get("logging.level") == "WARNING"
        assert config.get_int("search.limit") == 0

    def test_env_override(self, config_file, monkeypatch):
        monkeypatch.setenv("PALETTE_SEARCH_LIMIT", "12")
        monkeypatch.setenv("PALETTE_LOGGING_FILE", "yes")
        config = ConfigManager(str(config_file))
        assert config.get_int("search.limit") == 12
        assert config.get_bool("logging.file") is True

    def test_set_and_section(self, config_file):
        config = ConfigManager(str(config_file))
        config.set("search.limit", 3)
        config.set("new.nested.key", "v")
        assert config.get_int("search.limit") == 3
        assert config.get("new.nested.key") == "v"
        assert config.get_section("logging") == {"level": "DEBUG"}
        assert config.get_section("absent") == {}

    def test_reload(self, config_file):
        config = ConfigManager(str(config_file))
        config_file.write_text("search:\n  limit: 9\n", encoding="utf-8")
        config.reload()
        assert config.get_int("search.limit") == 9
        assert config.get("logging.level") == "WARNING"

    @pytest.mark.parametrize("text", ["- a\n- b\n", "key: [unclosed\n"])
    def test_invalid_file(self, tmp_path, text):
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(str(path))
        assert exc_info.value.category == ErrorCategory.CONFIG_INVALID

    def test_bad_integer(self, config_file, monkeypatch):
        monkeypatch.setenv("PALETTE_SEARCH_LIMIT", "many")
        with pytest.raises(ConfigError):
            ConfigManager(str(config_file)).get_int("search.limit")

    def test_logs_under_palette_namespace(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger="palette")
        ConfigManager(str(tmp_path / "absent.yaml"))
        assert any(
            r.name == "palette.infra.config" and "not found" in r.getMessage()
            for r in caplog.records
        )
