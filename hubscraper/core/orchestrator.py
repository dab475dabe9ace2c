"""
Scraper Orchestrator Implementation

Coordinates discovery, fetching, extraction and publishing for single-URL
and batch runs.
"""

import asyncio
import time
import uuid
from typing import List, Optional, Tuple

from hubscraper.core.base import (
    BatchResult,
    ExtractedRecord,
    FetchError,
    ProcessingResult,
    ProcessingStatus,
    ScrapeFailure,
    ScraperOrchestrator,
    StorageError,
)
from hubscraper.core.config import AppConfig
from hubscraper.core.discovery import URLDiscovery
from hubscraper.core.logging import get_logger, logging_manager
from hubscraper.extraction.assembler import RecordAssembler
from hubscraper.storage.publisher import PublishReport, RecordPublisher


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class ScraperOrchestratorImpl(ScraperOrchestrator):
    """
    Implementation of the scraper orchestrator

    URLs are fetched one at a time with ``fetch.request_delay`` seconds
    between consecutive fetches. A failed URL is recorded and never aborts
    the rest of the batch.
    """

    def __init__(self, config: AppConfig, assembler: Optional[RecordAssembler] = None):
        super().__init__(config)
        self.logger = get_logger()
        self.assembler = assembler or RecordAssembler(config.site, config.extraction)
        self.request_delay = config.fetch.request_delay

    async def initialize(self) -> None:
        """Initialize all components"""
        self.logger.info("Initializing scraper orchestrator")

        for component in (self.fetcher, self.storage):
            if component:
                await component.initialize()

        self._initialized = True
        self.logger.info("Scraper orchestrator initialized")

    async def cleanup(self) -> None:
        """Clean up resources"""
        self.logger.info("Cleaning up scraper orchestrator")

        for component in (self.fetcher, self.storage):
            if component:
                await component.cleanup()

        self._initialized = False
        self.logger.info("Scraper orchestrator cleanup completed")

    def _require_fetcher(self):
        if not self.fetcher:
            raise ValueError("Fetcher not initialized")
        return self.fetcher

    async def discover_urls(self, limit: Optional[int] = None) -> List[str]:
        """Collect detail-page URLs from the paginated index"""
        if not self._initialized:
            await self.initialize()

        discovery = URLDiscovery(self._require_fetcher(), self.config.site, self.config.fetch)
        return await discovery.discover(limit)

    async def _extract(self, url: str) -> Tuple[ExtractedRecord, List[str]]:
        self.logger.info(f"Processing URL: {url}")
        document = await self._require_fetcher().fetch_document(url)
        record = self.assembler.assemble(document, url)

        report = self.assembler.validate(record)
        if not report.is_valid:
            logging_manager.log_warning(f"Validation warnings for {url}",
                                        {'url': url, 'errors': report.errors})
        return record, list(report.errors)

    async def scrape_url(self, url: str) -> ProcessingResult:
        """
        Fetch, extract and validate one URL without raising

        Args:
            url: Absolute detail-page URL

        Returns:
            Processing result carrying either the record or the error message
        """
        start_time = time.time()
        result = ProcessingResult(url=url, success=False, status=ProcessingStatus.IN_PROGRESS)

        try:
            record, warnings = await self._extract(url)
            result.validation_errors = warnings
            result.success = True
            result.record = record
            result.status = ProcessingStatus.COMPLETED
        except FetchError as e:
            result.error_message = str(e)
            result.status = ProcessingStatus.FAILED
        except Exception as e:
            logging_manager.log_error(e, {'url': url})
            result.error_message = str(e)
            result.status = ProcessingStatus.FAILED

        result.processing_time = time.time() - start_time
        logging_manager.log_url_result(url, result.success, result.processing_time, result.error_message)
        return result

    async def process_single_url(self, url: str) -> ExtractedRecord:
        """
        Scrape exactly one URL

        Raises:
            FetchError: When the page cannot be fetched; nothing is returned
        """
        if not self._initialized:
            await self.initialize()

        record, _ = await self._extract(url)
        return record

    async def process_urls(self, urls: List[str], request_id: Optional[str] = None) -> BatchResult:
        """
        Process an ordered list of URLs sequentially

        Args:
            urls: Detail-page URLs, processed in the given order
            request_id: Correlation id for logs; generated when omitted

        Returns:
            Successful records in input order plus one failure per failed URL
        """
        if not self._initialized:
            await self.initialize()

        start_time = time.time()
        batch = BatchResult(request_id=request_id or new_request_id(), urls=list(urls))
        self.logger.info(f"Processing {len(urls)} URLs",
                         extra={'context': {'requestId': batch.request_id, 'total': len(urls)}})

        for index, url in enumerate(urls, start=1):
            if index > 1 and self.request_delay > 0:
                await asyncio.sleep(self.request_delay)

            result = await self.scrape_url(url)
            if result.success:
                batch.items.append(result.record)
                if result.validation_errors:
                    batch.warnings.append({'url': url, 'errors': result.validation_errors})
            else:
                batch.errors.append(ScrapeFailure(url=url, error=result.error_message, index=index))

            logging_manager.log_progress(
                index, len(urls), f"Processed {url} - {'Success' if result.success else 'Failed'}"
            )

        batch.duration = time.time() - start_time
        logging_manager.generate_summary_report({
            'request_id': batch.request_id,
            'duration': batch.duration,
            'total_urls': batch.total,
            'successful_urls': len(batch.items),
            'failed_urls': len(batch.errors),
            'warnings': len(batch.warnings),
            'errors': [f"{failure.url}: {failure.error}" for failure in batch.errors]
        })
        return batch

    async def run_batch(self, limit: Optional[int] = None) -> BatchResult:
        """Discover detail URLs, then scrape them in sorted order"""
        request_id = new_request_id()
        start_time = time.time()

        urls = await self.discover_urls(limit)
        batch = await self.process_urls(urls, request_id=request_id)
        batch.duration = time.time() - start_time
        return batch

    async def publish(self, batch: BatchResult) -> PublishReport:
        """
        Upload a batch summary and one object per record

        Raises:
            StorageError: When no storage is registered or the summary upload fails
        """
        if not self.storage:
            raise StorageError("Storage not initialized")
        if not self.storage.is_initialized():
            await self.storage.initialize()

        publisher = RecordPublisher(self.storage, self.config.storage)
        return await publisher.publish_batch(batch)
