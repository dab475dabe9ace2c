"""
Tests for the configuration manager
"""

import json

import pytest

from hubscraper.core.base import ConfigurationError
from hubscraper.core.config import AppConfig, ConfigManager


ENV_VARS = [
    'SCRAPER_BASE_URL', 'SCRAPER_REQUEST_DELAY', 'SCRAPER_FETCH_TIMEOUT', 'SCRAPER_MAX_PAGES',
    'STORAGE_BACKEND', 'S3_BUCKET_NAME', 'S3_PREFIX', 'AWS_REGION', 'LOG_LEVEL'
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove configuration variables from the environment"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def yaml_config(tmp_path):
    """YAML configuration file with a few overrides"""
    path = tmp_path / "config.yaml"
    path.write_text(
        "fetch:\n"
        "  timeout: 5\n"
        "  request_delay: 1.5\n"
        "extraction:\n"
        "  lists: sibling\n"
        "storage:\n"
        "  backend: s3\n"
        "  bucket: file-bucket\n",
        encoding='utf-8'
    )
    return path


class TestConfigManager:
    """Test cases for ConfigManager"""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigManager(str(tmp_path / "missing.yaml")).load_config()

        assert config == AppConfig()
        assert config.site.base_url == "https://hub.pointfive.co"
        assert config.site.max_pages == 30
        assert config.fetch.timeout == 8.0
        assert config.fetch.request_delay == 0.3
        assert config.storage.prefix == "Recos/"
        assert config.storage.region == "eu-central-1"
        assert not (tmp_path / "missing.yaml").exists()

    def test_yaml_values(self, yaml_config):
        config = ConfigManager(str(yaml_config)).load_config()

        assert config.fetch.timeout == 5
        assert config.fetch.request_delay == 1.5
        assert config.extraction.lists == "sibling"
        assert config.extraction.fields == "text"
        assert config.storage.bucket == "file-bucket"

    def test_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'site': {'max_pages': 4}}), encoding='utf-8')

        config = ConfigManager(str(path)).load_config()

        assert config.site.max_pages == 4

    def test_env_overrides_file(self, yaml_config, monkeypatch):
        monkeypatch.setenv('SCRAPER_REQUEST_DELAY', '0.5')
        monkeypatch.setenv('S3_BUCKET_NAME', 'env-bucket')
        monkeypatch.setenv('S3_PREFIX', 'Custom/')
        monkeypatch.setenv('LOG_LEVEL', 'DEBUG')

        config = ConfigManager(str(yaml_config)).load_config()

        assert config.fetch.request_delay == 0.5
        assert config.storage.bucket == "env-bucket"
        assert config.storage.prefix == "Custom/"
        assert config.logging.level == "DEBUG"

    def test_non_numeric_env_is_ignored(self, yaml_config, monkeypatch):
        monkeypatch.setenv('SCRAPER_FETCH_TIMEOUT', 'soon')

        config = ConfigManager(str(yaml_config)).load_config()

        assert config.fetch.timeout == 5

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("fetch: [unclosed\n", encoding='utf-8')

        with pytest.raises(ConfigurationError):
            ConfigManager(str(path)).load_config()

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding='utf-8')

        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigManager(str(path)).load_config()


class TestValidateConfig:
    """Test cases for configuration validation"""

    def test_defaults_are_valid(self, tmp_path):
        manager = ConfigManager(str(tmp_path / "missing.yaml"))
        manager.load_config()

        assert manager.validate_config()

    def test_not_loaded(self):
        with pytest.raises(ConfigurationError, match="not loaded"):
            ConfigManager().validate_config()

    def test_s3_requires_bucket(self, tmp_path, monkeypatch):
        monkeypatch.setenv('STORAGE_BACKEND', 's3')
        manager = ConfigManager(str(tmp_path / "missing.yaml"))
        manager.load_config()

        assert manager.validate_config()
        with pytest.raises(ConfigurationError, match="S3_BUCKET_NAME"):
            manager.validate_config(require_storage=True)

    @pytest.mark.parametrize("section,key,value,message", [
        ('site', 'base_url', 'not a url', "Invalid base URL"),
        ('site', 'max_pages', 0, "max_pages"),
        ('fetch', 'timeout', 0, "timeout"),
        ('fetch', 'request_delay', -1, "delay"),
        ('extraction', 'links', 'regex', "Unknown links strategy"),
        ('storage', 'backend', 'ftp', "Unknown storage backend"),
    ])
    def test_invalid_values(self, tmp_path, section, key, value, message):
        manager = ConfigManager(str(tmp_path / "missing.yaml"))
        config = manager.load_config()
        setattr(getattr(config, section), key, value)

        with pytest.raises(ConfigurationError, match=message):
            manager.validate_config()
