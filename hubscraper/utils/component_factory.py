"""
Component Factory for the Hub Scraper

This module provides functions to create and register components with the orchestrator.
"""

from hubscraper.core.base import ScraperOrchestrator
from hubscraper.core.config import AppConfig
from hubscraper.core.fetcher import PageFetcher
from hubscraper.storage import create_storage


def create_and_register_components(orchestrator: ScraperOrchestrator, config: AppConfig,
                                   with_storage: bool = False) -> None:
    """
    Create and register all components with the orchestrator.

    Args:
        orchestrator: The orchestrator to register components with
        config: Application configuration
        with_storage: Also register the configured blob storage backend
    """
    orchestrator.register_component("fetcher", PageFetcher(config.fetch))

    if with_storage:
        orchestrator.register_component("storage", create_storage(config.storage))
