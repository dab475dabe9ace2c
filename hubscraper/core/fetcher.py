"""
Page Fetcher Implementation

Fetches pages over HTTP with a per-request timeout and parses them into
BeautifulSoup documents for the extraction engine.
"""

import asyncio
import logging
from typing import Optional

import aiohttp
from bs4 import BeautifulSoup

from hubscraper.core.base import FetcherInterface, FetchError
from hubscraper.core.config import FetchConfig


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a document tree"""
    return BeautifulSoup(html, 'html.parser')


class PageFetcher(FetcherInterface):
    """
    aiohttp based fetch-and-parse collaborator.

    One session is held for the component's lifetime; every request is
    bounded by ``FetchConfig.timeout`` seconds.
    """

    def __init__(self, config: FetchConfig):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)
        self.timeout = config.timeout
        self.session: Optional[aiohttp.ClientSession] = None

        self.stats = {
            'requests': 0,
            'failures': 0,
            'bytes': 0
        }

    async def initialize(self) -> None:
        """Create the HTTP session"""
        if self._initialized:
            return

        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers={'User-Agent': self.config.user_agent}
        )
        self._initialized = True
        self.logger.debug("Page fetcher initialized")

    async def cleanup(self) -> None:
        """Close the HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None
        self._initialized = False

    async def __aenter__(self) -> "PageFetcher":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    async def fetch_html(self, url: str) -> str:
        """
        Fetch raw HTML for a URL

        Raises:
            FetchError: On timeout, non-2xx status or transport failure
        """
        if not self._initialized:
            await self.initialize()

        self.stats['requests'] += 1
        self.logger.info(f"Fetching document: {url}", extra={'context': {'url': url}})

        try:
            async with self.session.get(url) as response:
                if response.status < 200 or response.status >= 300:
                    raise FetchError(f"HTTP {response.status} {response.reason or ''}".strip(),
                                     url=url, status=response.status)
                html = await response.text()
        except FetchError:
            self.stats['failures'] += 1
            raise
        except asyncio.TimeoutError as e:
            self.stats['failures'] += 1
            self.logger.error(f"Fetch timeout after {self.timeout}s: {url}",
                              extra={'context': {'url': url, 'timeout': self.timeout}})
            raise FetchError(f"Fetch timeout after {self.timeout}s: {url}", url=url) from e
        except aiohttp.ClientError as e:
            self.stats['failures'] += 1
            self.logger.error(f"Fetch failed: {url}: {e}", extra={'context': {'url': url}})
            raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e
        except UnicodeDecodeError as e:
            self.stats['failures'] += 1
            self.logger.error(f"Undecodable response body: {url}", extra={'context': {'url': url}})
            raise FetchError(f"Failed to decode {url}: {e}", url=url) from e

        self.stats['bytes'] += len(html)
        self.logger.debug(f"Document fetched successfully: {url} ({len(html)} chars)",
                          extra={'context': {'url': url, 'size': len(html)}})
        return html

    async def fetch_document(self, url: str) -> BeautifulSoup:
        """Fetch a URL and parse it into a document tree"""
        html = await self.fetch_html(url)
        return parse_html(html)
