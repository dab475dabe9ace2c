"""
Command Line Interface for the Hub Scraper

This package provides command line argument parsing and validation
for the scraper. It handles run mode selection (batch or single URL),
output options and configuration overrides.

Classes:
    CLIManager: Command line interface manager for the scraper
"""

from hubscraper.cli.arguments import CLIManager

__all__ = ['CLIManager']
