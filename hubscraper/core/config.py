"""
Configuration Manager for the Hub Scraper

Handles YAML/JSON configuration files and environment variable integration
with validation. The parsed result is a single AppConfig value that is
passed explicitly into the orchestrator and its components.
"""

import os
import json
import yaml
import validators
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path

from hubscraper.core.base import ConfigurationError, DEFAULT_ORIGIN


STRATEGY_NAMES = ('text', 'sibling')
STORAGE_BACKENDS = ('local', 's3')


@dataclass
class SiteConfig:
    """Source site layout"""
    base_url: str = "https://hub.pointfive.co"
    index_path: str = "/hub"
    page_param: str = "ffbc0c57_page"
    detail_path_marker: str = "/inefficiencies/"
    max_pages: int = 30
    origin: str = DEFAULT_ORIGIN


@dataclass
class FetchConfig:
    """HTTP fetch settings"""
    timeout: float = 8.0
    request_delay: float = 0.3
    user_agent: str = "my-scraper/1.0 (Cloud Cost Optimization Research)"


@dataclass
class ExtractionConfig:
    """Extraction strategy per extractor ('text' or 'sibling')"""
    fields: str = "text"
    paragraphs: str = "text"
    lists: str = "text"
    links: str = "text"


@dataclass
class StorageConfig:
    """Blob storage settings"""
    backend: str = "local"
    local_path: str = "./output"
    bucket: Optional[str] = None
    prefix: str = "Recos/"
    region: str = "eu-central-1"
    file_prefix: str = "pointfive"


@dataclass
class LoggingConfig:
    """Logging system configuration"""
    level: str = "INFO"
    file: str = "./logs/hubscraper.log"
    max_size: str = "10MB"
    backup_count: int = 5
    format: str = "text"


@dataclass
class AppConfig:
    """Complete application configuration"""
    site: SiteConfig = field(default_factory=SiteConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Centralized configuration manager with support for YAML/JSON files
    and environment variable integration.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "config/config.yaml"
        self._config_data: Dict[str, Any] = {}
        self.app_config: Optional[AppConfig] = None

    def load_config(self, config_path: Optional[str] = None) -> AppConfig:
        """Load configuration from file with environment variable override"""
        if config_path:
            self.config_path = config_path

        config_file = Path(self.config_path)

        if not config_file.exists():
            self._config_data = self._get_default_config()
        else:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    if config_file.suffix.lower() == '.json':
                        self._config_data = json.load(f)
                    else:  # Assume YAML
                        self._config_data = yaml.safe_load(f) or {}
            except (OSError, ValueError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {config_file}: {e}")

        if not isinstance(self._config_data, dict):
            raise ConfigurationError(f"Config root in {config_file} must be a mapping")

        self._apply_env_overrides()
        self.app_config = self._parse_config()
        return self.app_config

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration dictionary"""
        return {
            'site': {
                'base_url': 'https://hub.pointfive.co',
                'index_path': '/hub',
                'page_param': 'ffbc0c57_page',
                'detail_path_marker': '/inefficiencies/',
                'max_pages': 30,
                'origin': DEFAULT_ORIGIN
            },
            'fetch': {
                'timeout': 8.0,
                'request_delay': 0.3
            },
            'extraction': {
                'fields': 'text',
                'paragraphs': 'text',
                'lists': 'text',
                'links': 'text'
            },
            'storage': {
                'backend': 'local',
                'local_path': './output',
                'prefix': 'Recos/',
                'region': 'eu-central-1',
                'file_prefix': 'pointfive'
            },
            'logging': {
                'level': 'INFO',
                'file': './logs/hubscraper.log',
                'max_size': '10MB',
                'backup_count': 5,
                'format': 'text'
            }
        }

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides"""
        if os.getenv('SCRAPER_BASE_URL'):
            self._config_data.setdefault('site', {})['base_url'] = os.getenv('SCRAPER_BASE_URL')

        self._override_number('SCRAPER_MAX_PAGES', 'site', 'max_pages', int)
        self._override_number('SCRAPER_FETCH_TIMEOUT', 'fetch', 'timeout', float)
        self._override_number('SCRAPER_REQUEST_DELAY', 'fetch', 'request_delay', float)

        if os.getenv('STORAGE_BACKEND'):
            self._config_data.setdefault('storage', {})['backend'] = os.getenv('STORAGE_BACKEND')

        if os.getenv('S3_BUCKET_NAME'):
            self._config_data.setdefault('storage', {})['bucket'] = os.getenv('S3_BUCKET_NAME')

        if os.getenv('S3_PREFIX'):
            self._config_data.setdefault('storage', {})['prefix'] = os.getenv('S3_PREFIX')

        if os.getenv('AWS_REGION'):
            self._config_data.setdefault('storage', {})['region'] = os.getenv('AWS_REGION')

        if os.getenv('LOG_LEVEL'):
            self._config_data.setdefault('logging', {})['level'] = os.getenv('LOG_LEVEL')

    def _override_number(self, env_name: str, section: str, key: str, cast) -> None:
        value = os.getenv(env_name)
        if not value:
            return
        try:
            self._config_data.setdefault(section, {})[key] = cast(value)
        except ValueError:
            pass

    def _parse_config(self) -> AppConfig:
        """Parse configuration into dataclass objects"""
        site_data = self._config_data.get('site') or {}
        fetch_data = self._config_data.get('fetch') or {}
        extraction_data = self._config_data.get('extraction') or {}
        storage_data = self._config_data.get('storage') or {}
        logging_data = self._config_data.get('logging') or {}

        site = SiteConfig(
            base_url=site_data.get('base_url', 'https://hub.pointfive.co'),
            index_path=site_data.get('index_path', '/hub'),
            page_param=site_data.get('page_param', 'ffbc0c57_page'),
            detail_path_marker=site_data.get('detail_path_marker', '/inefficiencies/'),
            max_pages=site_data.get('max_pages', 30),
            origin=site_data.get('origin', DEFAULT_ORIGIN)
        )

        fetch = FetchConfig(
            timeout=fetch_data.get('timeout', 8.0),
            request_delay=fetch_data.get('request_delay', 0.3),
            user_agent=fetch_data.get('user_agent', FetchConfig.user_agent)
        )

        extraction = ExtractionConfig(
            fields=extraction_data.get('fields', 'text'),
            paragraphs=extraction_data.get('paragraphs', 'text'),
            lists=extraction_data.get('lists', 'text'),
            links=extraction_data.get('links', 'text')
        )

        storage = StorageConfig(
            backend=storage_data.get('backend', 'local'),
            local_path=storage_data.get('local_path', './output'),
            bucket=storage_data.get('bucket'),
            prefix=storage_data.get('prefix', 'Recos/'),
            region=storage_data.get('region', 'eu-central-1'),
            file_prefix=storage_data.get('file_prefix', 'pointfive')
        )

        logging_config = LoggingConfig(
            level=logging_data.get('level', 'INFO'),
            file=logging_data.get('file', './logs/hubscraper.log'),
            max_size=logging_data.get('max_size', '10MB'),
            backup_count=logging_data.get('backup_count', 5),
            format=logging_data.get('format', 'text')
        )

        return AppConfig(
            site=site,
            fetch=fetch,
            extraction=extraction,
            storage=storage,
            logging=logging_config
        )

    def validate_config(self, require_storage: bool = False) -> bool:
        """
        Validate the loaded configuration

        Args:
            require_storage: Also check that the storage backend is usable

        Raises:
            ConfigurationError: If any setting is invalid
        """
        if not self.app_config:
            raise ConfigurationError("Configuration not loaded")

        config = self.app_config

        if not validators.url(config.site.base_url):
            raise ConfigurationError(f"Invalid base URL: {config.site.base_url}")

        if config.site.max_pages <= 0:
            raise ConfigurationError("max_pages must be greater than 0")

        if config.fetch.timeout <= 0:
            raise ConfigurationError("Fetch timeout must be greater than 0")

        if config.fetch.request_delay < 0:
            raise ConfigurationError("Request delay must be non-negative")

        for extractor in ('fields', 'paragraphs', 'lists', 'links'):
            strategy = getattr(config.extraction, extractor)
            if strategy not in STRATEGY_NAMES:
                raise ConfigurationError(
                    f"Unknown {extractor} strategy: {strategy} (expected one of {', '.join(STRATEGY_NAMES)})"
                )

        if config.storage.backend not in STORAGE_BACKENDS:
            raise ConfigurationError(f"Unknown storage backend: {config.storage.backend}")

        if require_storage and config.storage.backend == 's3' and not config.storage.bucket:
            raise ConfigurationError(
                "S3_BUCKET_NAME environment variable (or storage.bucket) is required for the s3 backend"
            )

        return True
