"""
Command Line Argument Parsing for the Hub Scraper

Handles command line arguments for run mode selection, output options,
and configuration overrides.
"""

import argparse
from pathlib import Path
from typing import List, Optional

import validators

from hubscraper import __version__
from hubscraper.core.config import AppConfig, STORAGE_BACKENDS


class CLIManager:
    """
    Command line interface manager for the scraper

    A run is either a batch (discovery over the paginated index, optionally
    limited) or a single literal URL that bypasses discovery.
    """

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all options

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            prog="python -m hubscraper",
            description="Scraper for the cloud efficiency hub",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_epilog()
        )

        # Run mode
        run_group = parser.add_argument_group("Run Mode")
        run_source = run_group.add_mutually_exclusive_group()
        run_source.add_argument(
            "--url",
            help="Scrape a single detail page instead of running discovery"
        )
        run_source.add_argument(
            "--limit",
            type=int,
            help="Process only the first N discovered URLs"
        )

        # Output options
        output_group = parser.add_argument_group("Output")
        output_group.add_argument(
            "--output",
            help="Write the JSON result to this file instead of stdout"
        )
        output_group.add_argument(
            "--upload",
            action="store_true",
            help="Publish the batch summary and records to blob storage"
        )
        output_group.add_argument(
            "--storage",
            choices=list(STORAGE_BACKENDS),
            help="Storage backend used by --upload"
        )

        # Configuration options
        config_group = parser.add_argument_group("Configuration")
        config_group.add_argument(
            "--config",
            help="Path to configuration file (default: config/config.yaml if present)"
        )
        config_group.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Logging level"
        )
        config_group.add_argument(
            "--delay",
            type=float,
            help="Delay in seconds between consecutive requests"
        )
        config_group.add_argument(
            "--timeout",
            type=float,
            help="Per-request timeout in seconds"
        )
        config_group.add_argument(
            "--max-pages",
            type=int,
            help="Safety cap on the number of index pages to walk"
        )

        parser.add_argument(
            "--version",
            action="version",
            version=f"Hub Scraper v{__version__}"
        )

        parser.add_argument(
            "--examples",
            action="store_true",
            help="Show usage examples and exit"
        )

        return parser

    def _get_epilog(self) -> str:
        """
        Get epilog text for help message

        Returns:
            Formatted epilog text
        """
        return """
Examples:
  # Discover and scrape every detail page, print JSON to stdout
  python -m hubscraper

  # Scrape the first 10 discovered pages and save the result
  python -m hubscraper --limit 10 --output results.json

  # Scrape one page
  python -m hubscraper --url https://hub.pointfive.co/inefficiencies/idle-ec2

  # Scrape and publish to S3
  S3_BUCKET_NAME=my-bucket python -m hubscraper --limit 5 --upload --storage s3

Notes:
  - Requests are sequential with a politeness delay between them
  - The s3 backend requires S3_BUCKET_NAME (or storage.bucket) and AWS credentials
  - Environment variables override config file values; flags override both
"""

    def parse_arguments(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command line arguments

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        parsed_args = self.parser.parse_args(args)
        self.validate_arguments(parsed_args)
        return parsed_args

    def validate_arguments(self, args: argparse.Namespace) -> bool:
        """
        Validate parsed arguments for consistency

        Exits through ``parser.error`` when arguments are invalid.
        """
        if args.url is not None and not validators.url(args.url):
            self.parser.error(f"Invalid URL: {args.url}")

        if args.config and not Path(args.config).is_file():
            self.parser.error(f"Configuration file not found: {args.config}")

        if args.limit is not None and args.limit <= 0:
            self.parser.error("Limit must be greater than 0")

        if args.delay is not None and args.delay < 0:
            self.parser.error("Delay must be non-negative")

        if args.timeout is not None and args.timeout <= 0:
            self.parser.error("Timeout must be greater than 0")

        if args.max_pages is not None and args.max_pages <= 0:
            self.parser.error("Maximum pages must be greater than 0")

        if args.storage and not args.upload:
            self.parser.error("--storage requires --upload")

        return True

    def apply_overrides(self, args: argparse.Namespace, config: AppConfig) -> AppConfig:
        """Apply command line overrides on top of the loaded configuration"""
        if args.log_level:
            config.logging.level = args.log_level

        if args.delay is not None:
            config.fetch.request_delay = args.delay

        if args.timeout is not None:
            config.fetch.timeout = args.timeout

        if args.max_pages is not None:
            config.site.max_pages = args.max_pages

        if args.storage:
            config.storage.backend = args.storage

        return config

    def get_usage_examples(self) -> str:
        return self._get_epilog()
