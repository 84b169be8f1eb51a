"""Tests for src/config.py — BlogCmsConfig, TOML loading, CLI overrides."""

from pathlib import Path
from unittest.mock import patch

import pytest
from blogcms.config import BlogCmsConfig, LoggingConfig, StorageConfig, load_config, merge_cli_overrides
from blogcms.shared.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Remove env vars and the global config so tests see TOML values only."""
    for key in ("BLOGCMS_STORAGE_BACKEND", "BLOGCMS_STORE_DIR", "BLOGCMS_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("blogcms.config.GLOBAL_CONFIG_PATH", tmp_path / "no-global.toml")


class TestBlogCmsConfigDefaults:
    def test_default_storage(self):
        cfg = BlogCmsConfig()
        assert cfg.storage.backend == "json"
        assert cfg.storage.directory == "./data"

    def test_default_logging(self):
        cfg = BlogCmsConfig()
        assert cfg.logging.level == "WARNING"


class TestLoadConfig:
    def test_load_from_explicit_path(self, tmp_path):
        toml_path = tmp_path / ".blogcms.toml"
        toml_path.write_text('[storage]\nbackend = "memory"\ndirectory = "/srv/pages"\n')
        cfg = load_config(toml_path)
        assert cfg.storage.backend == "memory"
        assert cfg.storage.directory == "/srv/pages"

    def test_load_missing_path_returns_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg.storage.backend == "json"

    def test_load_searches_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".blogcms.toml").write_text('[logging]\nlevel = "INFO"\n')
        monkeypatch.chdir(tmp_path)
        with patch("blogcms.config.CONFIG_SEARCH_PATHS", [tmp_path]):
            cfg = load_config()
        assert cfg.logging.level == "INFO"

    def test_load_global_config(self, tmp_path, monkeypatch):
        global_path = tmp_path / "global.toml"
        global_path.write_text('[storage]\ndirectory = "/global"\n')
        monkeypatch.setattr("blogcms.config.GLOBAL_CONFIG_PATH", global_path)
        with patch("blogcms.config.CONFIG_SEARCH_PATHS", [tmp_path / "empty"]):
            cfg = load_config()
        assert cfg.storage.directory == "/global"

    def test_load_partial_toml(self, tmp_path):
        toml_path = tmp_path / ".blogcms.toml"
        toml_path.write_text('[storage]\ndirectory = "/pages"\n')
        cfg = load_config(toml_path)
        assert cfg.storage.directory == "/pages"
        assert cfg.storage.backend == "json"  # other defaults preserved

    def test_invalid_toml_returns_defaults(self, tmp_path):
        toml_path = tmp_path / ".blogcms.toml"
        toml_path.write_text("this is not valid toml {{{")
        cfg = load_config(toml_path)
        assert cfg.storage.directory == "./data"


class TestEnvVars:
    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        toml_path = tmp_path / ".blogcms.toml"
        toml_path.write_text('[storage]\ndirectory = "/from-toml"\n')
        monkeypatch.setenv("BLOGCMS_STORE_DIR", "/from-env")
        monkeypatch.setenv("BLOGCMS_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("BLOGCMS_LOG_LEVEL", "DEBUG")
        cfg = load_config(toml_path)
        assert cfg.storage.directory == "/from-env"
        assert cfg.storage.backend == "memory"
        assert cfg.logging.level == "DEBUG"

    def test_empty_env_var_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BLOGCMS_STORE_DIR", "")
        cfg = load_config(tmp_path / "missing.toml")
        assert cfg.storage.directory == "./data"


class TestMergeCliOverrides:
    def test_overrides_set_values(self):
        cfg = merge_cli_overrides(BlogCmsConfig(), storage_directory="/cli", log_level="DEBUG")
        assert cfg.storage.directory == "/cli"
        assert cfg.logging.level == "DEBUG"

    def test_none_values_ignored(self):
        base = BlogCmsConfig.model_validate({"storage": {"directory": "/keep"}})
        cfg = merge_cli_overrides(base, storage_directory=None, storage_backend=None)
        assert cfg.storage.directory == "/keep"

    def test_unknown_keys_ignored(self):
        cfg = merge_cli_overrides(BlogCmsConfig(), nonsense="x")
        assert cfg == BlogCmsConfig()


class TestValidation:
    def test_level_normalized(self):
        assert LoggingConfig(level=" info ").level == "INFO"

    def test_unknown_level_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BLOGCMS_LOG_LEVEL", "verbose")
        with pytest.raises(ConfigError, match="log level"):
            load_config(tmp_path / "missing.toml")

    def test_unknown_level_from_toml(self, tmp_path):
        toml_path = tmp_path / ".blogcms.toml"
        toml_path.write_text('[logging]\nlevel = "loud"\n')
        with pytest.raises(ConfigError):
            load_config(toml_path)

    def test_unknown_backend_from_toml(self, tmp_path):
        toml_path = tmp_path / ".blogcms.toml"
        toml_path.write_text('[storage]\nbackend = "postgres"\n')
        with pytest.raises(ConfigError, match="storage backend"):
            load_config(toml_path)

    def test_unknown_backend_from_cli(self):
        with pytest.raises(ConfigError):
            merge_cli_overrides(BlogCmsConfig(), storage_backend="postgres")

    def test_known_backends(self):
        assert StorageConfig(backend="memory").backend == "memory"
        assert StorageConfig(backend="json").backend == "json"
