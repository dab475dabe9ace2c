"""
URL Discovery for the Hub index

Walks the paginated hub index and collects detail-page URLs. Page 1 is
the bare index URL; page N uses ``?{page_param}=N``. Discovery stops at
the first page without detail links or at the safety cap, whichever
comes first, and always returns the URLs in sorted order.
"""

import asyncio
import logging
from typing import List, Optional, Set

from bs4 import BeautifulSoup

from hubscraper.core.base import FetcherInterface, FetchError
from hubscraper.core.config import FetchConfig, SiteConfig
from hubscraper.extraction.links import resolve_href


class URLDiscovery:
    """Paginated index crawler that yields a deterministic URL list"""

    def __init__(self, fetcher: FetcherInterface, site: SiteConfig, fetch: FetchConfig):
        self.fetcher = fetcher
        self.site = site
        self.request_delay = fetch.request_delay
        self.logger = logging.getLogger(__name__)

    def index_url(self, page: int) -> str:
        base = self.site.base_url.rstrip('/') + self.site.index_path
        if page == 1:
            return base
        return f"{base}?{self.site.page_param}={page}"

    def extract_detail_urls(self, document: BeautifulSoup) -> Set[str]:
        """Absolute detail-page URLs linked from one index page"""
        urls = set()
        for anchor in document.find_all('a', href=True):
            href = anchor['href']
            if self.site.detail_path_marker not in href:
                continue
            url = resolve_href(href, self.site.base_url)
            if url:
                urls.add(url)
        return urls

    async def discover(self, limit: Optional[int] = None) -> List[str]:
        """
        Collect detail URLs across index pages

        Args:
            limit: Keep only the first ``limit`` URLs of the sorted result

        Returns:
            Sorted, de-duplicated detail-page URLs
        """
        found: Set[str] = set()
        self.logger.info("Starting URL extraction from paginated hub")

        for page in range(1, self.site.max_pages + 1):
            if page > 1 and self.request_delay > 0:
                await asyncio.sleep(self.request_delay)

            index_url = self.index_url(page)
            try:
                document = await self.fetcher.fetch_document(index_url)
            except FetchError as e:
                self.logger.error(f"Error fetching index page {page}: {e}",
                                  extra={'context': {'page': page, 'url': index_url}})
                continue

            page_urls = self.extract_detail_urls(document)
            found.update(page_urls)

            self.logger.info(
                f"Extracted {len(page_urls)} URLs from page {page} ({len(found)} so far)",
                extra={'context': {'page': page, 'foundOnPage': len(page_urls), 'totalSoFar': len(found)}}
            )

            if not page_urls:
                self.logger.info(f"No more pages to fetch, last page: {page}")
                break

        urls = sorted(found)
        self.logger.info(f"URL extraction completed: {len(urls)} URLs",
                         extra={'context': {'totalUrls': len(urls), 'sampleUrls': urls[:3]}})

        if limit is not None and limit > 0:
            return urls[:limit]
        return urls
