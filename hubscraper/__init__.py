"""
Cloud Efficiency Hub Scraper

Discovers inefficiency pages on the PointFive Cloud Efficiency Hub,
extracts each page into a normalized JSON record and publishes the
records to blob storage.

Features:
- Paginated index discovery with deterministic ordering
- Heading-driven HTML extraction engine (fields, paragraphs, lists, links)
- Sequential, polite fetching with per-page timeouts
- Record validation with non-fatal warnings
- Local directory and S3 storage backends
- Configurable via YAML/JSON and environment variables
"""

__version__ = "0.1.0"
