"""
Unit tests for configuration loading.
"""

from pathlib import Path

import pytest

from audiolake.config import (
    DEFAULT_CONFIG,
    Config,
    apply_env_overrides,
    deep_merge,
    load_config,
    load_yaml_file,
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("AUDIOLAKE_CACHE_ROOT", "AUDIOLAKE_PAGE_SIZE", "AUDIOLAKE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    """Test load_config defaults, files and overrides."""

    def test_defaults_without_file(self, tmp_path):
        config = load_config(tmp_path)

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_file_overrides_defaults(self, tmp_path):
        (tmp_path / "audiolake.yaml").write_text("pagination:\n  page_size: 25\n")

        config = load_config(tmp_path)

        assert config["pagination"]["page_size"] == 25
        assert config["histogram"]["num_bins"] == 10

    def test_empty_file(self, tmp_path):
        (tmp_path / "audiolake.yaml").write_text("")

        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "audiolake.yaml").write_text("pagination: [unclosed\n")

        with pytest.raises(ValueError):
            load_config(tmp_path)

    def test_non_mapping(self, tmp_path):
        (tmp_path / "audiolake.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ValueError):
            load_config(tmp_path)

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AUDIOLAKE_CACHE_ROOT", "/var/cache/audio")
        monkeypatch.setenv("AUDIOLAKE_PAGE_SIZE", "50")

        config = load_config(tmp_path)

        assert config["cache"]["root"] == "/var/cache/audio"
        assert config["pagination"]["page_size"] == 50

    def test_invalid_environment_value(self):
        with pytest.raises(ValueError, match="AUDIOLAKE_PAGE_SIZE"):
            apply_env_overrides({}, {"AUDIOLAKE_PAGE_SIZE": "many"})

    def test_defaults_not_mutated(self, tmp_path):
        config = load_config(tmp_path)
        config["histogram"]["num_bins"] = 99

        assert DEFAULT_CONFIG["histogram"]["num_bins"] == 10


class TestHelpers:
    """Test config helpers."""

    def test_deep_merge(self):
        merged = deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}, "d": 4})

        assert merged == {"a": {"b": 1, "c": 3}, "d": 4}

    def test_load_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_file(tmp_path / "missing.yaml")


class TestConfigManager:
    """Test the Config class."""

    def test_lazy_properties(self, tmp_path):
        (tmp_path / "audiolake.yaml").write_text("cache:\n  root: /data/cache\n")
        config = Config(tmp_path)

        assert config.cache_root == Path("/data/cache")
        assert config.page_size == 10

    def test_get_nested(self, tmp_path):
        config = Config(tmp_path)

        assert config.get("histogram", "bar_char") == "#"
        assert config.get("histogram", "missing", default="x") == "x"

    def test_reload(self, tmp_path):
        config = Config(tmp_path)
        assert config.page_size == 10

        (tmp_path / "audiolake.yaml").write_text("pagination:\n  page_size: 3\n")
        config.reload()

        assert config.page_size == 3
