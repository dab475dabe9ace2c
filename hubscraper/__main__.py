#!/usr/bin/env python3
"""
Hub Scraper - Main Entry Point

This module serves as the main entry point for the scraper application.
It loads the configuration, sets up logging, and runs either a batch
(discovery followed by extraction) or a single-URL scrape.
"""

import sys
import json
import asyncio
from pathlib import Path
from typing import Any, Dict

from hubscraper.core.base import BatchResult, ConfigurationError, ScraperError, StorageError
from hubscraper.core.config import ConfigManager
from hubscraper.core.logging import setup_logging, get_logger
from hubscraper.core.orchestrator import ScraperOrchestratorImpl, new_request_id
from hubscraper.cli.arguments import CLIManager
from hubscraper.utils.component_factory import create_and_register_components


def write_output(payload: Dict[str, Any], output: str = None) -> None:
    """Write the JSON result to a file or stdout"""
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding='utf-8')
    else:
        print(text)


async def main(argv=None) -> int:
    """Main entry point for the scraper"""
    # Parse command line arguments
    cli_manager = CLIManager()
    args = cli_manager.parse_arguments(argv)

    if args.examples:
        print("\nHub Scraper - Usage Examples\n")
        print(cli_manager.get_usage_examples())
        return 0

    # Load configuration
    config_manager = ConfigManager(args.config)
    try:
        config = config_manager.load_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    cli_manager.apply_overrides(args, config)

    # Set up logging
    setup_logging(
        level=config.logging.level,
        log_file=config.logging.file,
        max_size=config.logging.max_size,
        backup_count=config.logging.backup_count,
        fmt=config.logging.format
    )
    logger = get_logger()

    try:
        config_manager.validate_config(require_storage=args.upload)
    except ConfigurationError as e:
        logger.error(f"Configuration validation failed: {e}")
        return 1

    orchestrator = ScraperOrchestratorImpl(config)
    create_and_register_components(orchestrator, config, with_storage=args.upload)

    try:
        await orchestrator.initialize()

        if args.url:
            logger.info(f"Running single-URL scrape: {args.url}")
            try:
                record = await orchestrator.process_single_url(args.url)
            except ScraperError as e:
                logger.error(f"Failed to scrape {args.url}: {e}")
                return 1
            batch = BatchResult(request_id=new_request_id(), urls=[args.url], items=[record])
            payload = record.to_dict()
        else:
            logger.info(f"Running batch scrape (limit: {args.limit or 'none'})")
            batch = await orchestrator.run_batch(args.limit)
            payload = batch.to_dict()

        exit_code = 0 if batch.items else 1

        if args.upload:
            try:
                report = await orchestrator.publish(batch)
            except StorageError as e:
                logger.error(f"Upload failed: {e}")
                return 1
            payload = {'result': payload, 'upload': report.to_dict()}
            if not report.success:
                exit_code = 1

        write_output(payload, args.output)
        logger.info(f"Processing completed: {len(batch.items)}/{batch.total} URLs successful")
        return exit_code
    except Exception as e:
        logger.error(f"Scraper execution failed: {e}", exc_info=True)
        return 1
    finally:
        await orchestrator.cleanup()


def run() -> None:
    """Console script entry point"""
    try:
        exit_code = asyncio.run(main())
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print("\nScraper interrupted by user", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
