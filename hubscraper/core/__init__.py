"""
Core components of the Hub Scraper

This package contains the core components for the scraper including:
- Data models, interfaces and exceptions
- Configuration management
- Logging system
- Page fetcher

URL discovery and the orchestrator live in hubscraper.core.discovery and
hubscraper.core.orchestrator; they depend on the extraction package.
"""

from hubscraper.core.base import (
    ExtractedRecord,
    DocumentationLink,
    RecordSource,
    BatchResult,
    ScrapeFailure,
    ProcessingResult,
    ProcessingStatus,
    UploadReceipt,
    ScraperError,
    ConfigurationError,
    FetchError,
    ExtractionError,
    StorageError
)
from hubscraper.core.config import ConfigManager, AppConfig
from hubscraper.core.logging import setup_logging, get_logger
from hubscraper.core.fetcher import PageFetcher, parse_html

__all__ = [
    'ExtractedRecord',
    'DocumentationLink',
    'RecordSource',
    'BatchResult',
    'ScrapeFailure',
    'ProcessingResult',
    'ProcessingStatus',
    'UploadReceipt',
    'ScraperError',
    'ConfigurationError',
    'FetchError',
    'ExtractionError',
    'StorageError',
    'ConfigManager',
    'AppConfig',
    'setup_logging',
    'get_logger',
    'PageFetcher',
    'parse_html'
]
