"""
Record Assembler

Runs every extractor over one parsed detail page and composes the
normalized ExtractedRecord.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional
from urllib.parse import urlparse

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from hubscraper.core.base import (
    ExtractedRecord,
    ExtractionError,
    RecordSource,
    ValidationReport,
)
from hubscraper.core.config import ExtractionConfig, SiteConfig
from hubscraper.extraction.fields import FIELD_LABELS, find_field_value, find_sibling_field_value
from hubscraper.extraction.headings import (
    BILLING_MODEL,
    DEFAULT_REGISTRY,
    DETECTION,
    DOCUMENTATION,
    EXPLANATION,
    REMEDIATION,
    SectionHeadingRegistry,
)
from hubscraper.extraction.links import LINK_STRATEGIES
from hubscraper.extraction.sections import LIST_STRATEGIES, PARAGRAPH_STRATEGIES
from hubscraper.extraction.validation import validate_record
from hubscraper.extraction.walker import (
    HEADING_TAGS,
    SKIPPED_TAGS,
    Root,
    element_text,
    non_empty,
    walk_root,
    walk_text,
)


logger = logging.getLogger(__name__)

FIELD_STRATEGIES = {
    'text': find_field_value,
    'sibling': find_sibling_field_value,
}


def slug_from_url(url: str) -> str:
    """
    Last non-empty path segment of a URL.

    Falls back to the URL itself when it cannot be parsed or has no path
    segments, so the result is never empty for a non-empty URL.
    """
    try:
        path = urlparse(url).path
    except (ValueError, TypeError, AttributeError):
        return url

    segments = [segment for segment in path.rstrip('/').split('/') if segment]
    return segments[-1] if segments else url


def utc_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a 'Z' suffix"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def find_title_element(root: Root,
                       registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> Optional[Tag]:
    """First <h1> with text, else the first lower-level heading that is not a section heading"""
    for h1 in root.find_all('h1'):
        if element_text(h1):
            return h1

    for heading in root.find_all(HEADING_TAGS[1:]):
        text = element_text(heading)
        if text and text not in registry:
            return heading

    return None


def first_text(root: Root) -> Optional[str]:
    first = next(non_empty(walk_text(root)), None)
    return first.text if first else None


def extract_title(root: Root, registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> Optional[str]:
    title_element = find_title_element(root, registry)
    if title_element is not None:
        return element_text(title_element)
    return first_text(root)


def extract_author(title_element: Optional[Tag], title: Optional[str],
                   registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> Optional[str]:
    """
    First meaningful sibling after the title element.

    Section headings and repeats of the title are skipped.
    """
    if title_element is None:
        return None

    for sibling in title_element.next_siblings:
        if isinstance(sibling, Tag):
            if sibling.name in SKIPPED_TAGS:
                continue
            value = element_text(sibling)
        elif isinstance(sibling, NavigableString) and not isinstance(sibling, PreformattedString):
            value = str(sibling).strip()
        else:
            continue

        if not value or value == title or value in registry:
            continue
        return value

    return None


class RecordAssembler:
    """
    Composes ExtractedRecords from parsed detail pages.

    Each extractor's strategy ('text' or 'sibling') is chosen independently
    from the extraction config.
    """

    def __init__(self, site: SiteConfig, extraction: Optional[ExtractionConfig] = None,
                 registry: SectionHeadingRegistry = DEFAULT_REGISTRY,
                 clock: Optional[Callable[[], datetime]] = None):
        self.site = site
        self.extraction = extraction or ExtractionConfig()
        self.registry = registry
        self.clock = clock or (lambda: datetime.now(timezone.utc))

        self.field_extractor = self._strategy(FIELD_STRATEGIES, 'fields')
        self.paragraph_extractor = self._strategy(PARAGRAPH_STRATEGIES, 'paragraphs')
        self.list_extractor = self._strategy(LIST_STRATEGIES, 'lists')
        self.link_collector = self._strategy(LINK_STRATEGIES, 'links')

    def _strategy(self, strategies, extractor: str):
        name = getattr(self.extraction, extractor)
        try:
            return strategies[name]
        except KeyError:
            raise ExtractionError(
                f"Unknown {extractor} strategy: {name} (expected one of {', '.join(strategies)})"
            ) from None

    def assemble(self, document: Root, url: str) -> ExtractedRecord:
        """
        Build the record for one parsed page

        Args:
            document: Parsed page (whole document or a subtree)
            url: Absolute URL the page was fetched from

        Returns:
            The normalized record; call validate() for schema warnings
        """
        registry = self.registry
        body = walk_root(document)

        title_element = find_title_element(body, registry)
        if title_element is not None:
            title = element_text(title_element)
        else:
            title = first_text(body)
        author = extract_author(title_element, title, registry)

        fields = {
            name: self.field_extractor(body, label)
            for name, label in FIELD_LABELS.items()
        }

        record = ExtractedRecord(
            id=slug_from_url(url),
            title=title,
            author=author,
            explanation=self.paragraph_extractor(body, EXPLANATION, registry),
            billing_model=self.paragraph_extractor(body, BILLING_MODEL, registry),
            detection_signals=tuple(self.list_extractor(body, DETECTION, registry)),
            remediation_actions=tuple(self.list_extractor(body, REMEDIATION, registry)),
            documentation_links=tuple(
                self.link_collector(body, self.site.base_url, DOCUMENTATION, registry)
            ),
            tags=(),
            source=RecordSource(url=url, origin=self.site.origin),
            scraped_at=utc_timestamp(self.clock()),
            **fields
        )

        logger.debug(
            f"Assembled record {record.id}: {len(record.detection_signals)} detection signals, "
            f"{len(record.remediation_actions)} remediation actions, "
            f"{len(record.documentation_links)} documentation links"
        )
        return record

    def validate(self, record: ExtractedRecord) -> ValidationReport:
        return validate_record(record)
