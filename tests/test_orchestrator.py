"""
Tests for the scraper orchestrator

Batch runs are sequential, keep partial results and report every failed
URL; single-URL runs surface the failure to the caller.
"""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest
from aioresponses import aioresponses

from hubscraper.core.base import FetchError, StorageError
from hubscraper.core.config import AppConfig, FetchConfig, StorageConfig
from hubscraper.core.fetcher import PageFetcher, parse_html
from hubscraper.core.orchestrator import ScraperOrchestratorImpl
from hubscraper.storage.local_storage import LocalBlobStorage


URLS = [
    "https://hub.pointfive.co/inefficiencies/first",
    "https://hub.pointfive.co/inefficiencies/second",
    "https://hub.pointfive.co/inefficiencies/third",
]


@pytest.fixture
def app_config(tmp_path):
    """Application configuration without politeness delay"""
    return AppConfig(
        fetch=FetchConfig(timeout=1.0, request_delay=0.0),
        storage=StorageConfig(local_path=str(tmp_path / "output"))
    )


@pytest.fixture
def mock_fetcher(detail_html):
    """Fetcher serving the detail page for every URL except the second one"""
    fetcher = AsyncMock()

    async def fetch_document(url):
        if url == URLS[1]:
            raise FetchError(f"Fetch timeout after 8.0s: {url}", url=url)
        return parse_html(detail_html)

    fetcher.fetch_document.side_effect = fetch_document
    return fetcher


@pytest.fixture
def orchestrator(app_config, mock_fetcher):
    orchestrator = ScraperOrchestratorImpl(app_config)
    orchestrator.register_component("fetcher", mock_fetcher)
    return orchestrator


class TestScraperOrchestrator:
    """Test cases for ScraperOrchestratorImpl"""

    @pytest.mark.asyncio
    async def test_initialize_and_cleanup(self, orchestrator, mock_fetcher):
        await orchestrator.initialize()
        assert orchestrator.is_initialized()
        mock_fetcher.initialize.assert_awaited_once()

        await orchestrator.cleanup()
        mock_fetcher.cleanup.assert_awaited_once()

    def test_unknown_component(self, orchestrator):
        with pytest.raises(ValueError, match="Unknown component type"):
            orchestrator.register_component("crawler", Mock())

    @pytest.mark.asyncio
    async def test_batch_keeps_partial_results(self, orchestrator):
        batch = await orchestrator.process_urls(URLS)

        assert len(batch.items) == 2
        assert len(batch.errors) == 1
        assert batch.errors[0].url == URLS[1]
        assert batch.errors[0].index == 2
        assert "timeout" in batch.errors[0].error
        assert [item.source.url for item in batch.items] == [URLS[0], URLS[2]]

        data = batch.to_dict()
        assert data['count'] == 2
        assert data['total'] == 3
        assert data['failed'] == 1
        assert data['urls'] == URLS
        assert data['errors'][0]['url'] == URLS[1]

    @pytest.mark.asyncio
    async def test_batch_without_failures_has_no_error_key(self, orchestrator):
        batch = await orchestrator.process_urls([URLS[0]])

        assert 'errors' not in batch.to_dict()

    @pytest.mark.asyncio
    async def test_fetches_are_sequential_with_delay(self, app_config, mock_fetcher):
        app_config.fetch.request_delay = 0.3
        orchestrator = ScraperOrchestratorImpl(app_config)
        orchestrator.register_component("fetcher", mock_fetcher)

        with patch('hubscraper.core.orchestrator.asyncio.sleep', new=AsyncMock()) as sleep:
            await orchestrator.process_urls(URLS)

        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.3)
        fetched = [call.args[0] for call in mock_fetcher.fetch_document.await_args_list]
        assert fetched == URLS

    @pytest.mark.asyncio
    async def test_unexpected_error_is_recorded(self, orchestrator):
        orchestrator.assembler = Mock()
        orchestrator.assembler.assemble.side_effect = RuntimeError("broken page")

        batch = await orchestrator.process_urls([URLS[0]])

        assert batch.items == []
        assert batch.errors[0].error == "broken page"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_logged_with_url(self, orchestrator):
        orchestrator.assembler = Mock()
        error = RuntimeError("broken page")
        orchestrator.assembler.assemble.side_effect = error

        with patch('hubscraper.core.orchestrator.logging_manager') as manager:
            result = await orchestrator.scrape_url(URLS[0])

        assert not result.success
        manager.log_error.assert_called_once_with(error, {'url': URLS[0]})

    @pytest.mark.asyncio
    async def test_validation_warnings_do_not_drop_records(self, app_config):
        fetcher = AsyncMock()
        fetcher.fetch_document.return_value = parse_html("<body></body>")
        orchestrator = ScraperOrchestratorImpl(app_config)
        orchestrator.register_component("fetcher", fetcher)

        batch = await orchestrator.process_urls([URLS[0]])

        assert len(batch.items) == 1
        assert batch.items[0].title is None
        assert batch.warnings == [{'url': URLS[0], 'errors': ['Missing or invalid title']}]

    @pytest.mark.asyncio
    async def test_single_url(self, orchestrator):
        record = await orchestrator.process_single_url(URLS[0])

        assert record.id == "first"
        assert record.title == "Idle EC2 Instances"

    @pytest.mark.asyncio
    async def test_single_url_failure_is_raised(self, orchestrator):
        with pytest.raises(FetchError, match="Fetch timeout"):
            await orchestrator.process_single_url(URLS[1])

    @pytest.mark.asyncio
    async def test_run_batch_uses_discovery_order_and_limit(self, app_config, detail_html):
        index = parse_html(
            "<body><a href='/inefficiencies/b'>b</a><a href='/inefficiencies/a'>a</a></body>"
        )
        fetcher = AsyncMock()

        async def fetch_document(url):
            if url == "https://hub.pointfive.co/hub":
                return index
            if "/inefficiencies/" in url:
                return parse_html(detail_html)
            return parse_html("<body></body>")

        fetcher.fetch_document.side_effect = fetch_document
        orchestrator = ScraperOrchestratorImpl(app_config)
        orchestrator.register_component("fetcher", fetcher)

        batch = await orchestrator.run_batch(limit=1)

        assert batch.urls == ["https://hub.pointfive.co/inefficiencies/a"]
        assert [item.id for item in batch.items] == ["a"]

    @pytest.mark.asyncio
    async def test_publish_requires_storage(self, orchestrator):
        batch = await orchestrator.process_urls([URLS[0]])

        with pytest.raises(StorageError, match="Storage not initialized"):
            await orchestrator.publish(batch)

    @pytest.mark.asyncio
    async def test_publish_to_local_storage(self, orchestrator, app_config, tmp_path):
        orchestrator.register_component("storage", LocalBlobStorage(app_config.storage))
        batch = await orchestrator.process_urls(URLS)

        report = await orchestrator.publish(batch)

        assert report.success
        assert len(report.records) == 2
        assert report.summary.key.startswith("Recos/pointfive_hub_summary_")
        assert len(list((tmp_path / "output" / "Recos").glob("*.json"))) == 3


class TestBatchOverHttp:
    """End-to-end batch runs through the real fetcher"""

    @pytest.mark.asyncio
    async def test_second_fetch_times_out(self, app_config, detail_html):
        orchestrator = ScraperOrchestratorImpl(app_config)
        orchestrator.register_component("fetcher", PageFetcher(app_config.fetch))

        with aioresponses() as m:
            m.get(URLS[0], status=200, body=detail_html)
            m.get(URLS[1], exception=asyncio.TimeoutError())
            m.get(URLS[2], status=200, body=detail_html)

            try:
                batch = await orchestrator.process_urls(URLS)
            finally:
                await orchestrator.cleanup()

        assert len(batch.items) == 2
        assert len(batch.errors) == 1
        assert batch.errors[0].url == URLS[1]
        assert batch.errors[0].error == f"Fetch timeout after 1.0s: {URLS[1]}"

    @pytest.mark.asyncio
    async def test_http_status_failure(self, app_config, detail_html):
        orchestrator = ScraperOrchestratorImpl(app_config)
        orchestrator.register_component("fetcher", PageFetcher(app_config.fetch))

        with aioresponses() as m:
            m.get(URLS[0], status=503)
            m.get(URLS[1], status=200, body=detail_html)

            try:
                batch = await orchestrator.process_urls(URLS[:2])
            finally:
                await orchestrator.cleanup()

        assert [item.id for item in batch.items] == ["second"]
        assert batch.errors[0].error.startswith("HTTP 503")
