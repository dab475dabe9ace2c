"""
HTML extraction engine for the Hub Scraper

This package turns a parsed detail page into an ExtractedRecord:
- Document walker (document-ordered text nodes)
- Section heading registry (shared start/stop markers)
- Field locator, section extractors (paragraph and list mode), link collector
- Record assembler and validator
"""

from hubscraper.extraction.headings import (
    SECTION_TITLES,
    SectionHeadingRegistry,
    DEFAULT_REGISTRY
)
from hubscraper.extraction.walker import (
    TextNode,
    walk_text,
    section_after
)
from hubscraper.extraction.fields import (
    FIELD_LABELS,
    find_field_value,
    find_sibling_field_value
)
from hubscraper.extraction.sections import (
    extract_section_paragraph,
    extract_sibling_paragraph,
    extract_section_list,
    extract_sibling_list
)
from hubscraper.extraction.links import (
    collect_documentation_links,
    collect_sibling_links,
    resolve_href,
    is_absolute_url
)
from hubscraper.extraction.validation import validate_record
from hubscraper.extraction.assembler import (
    RecordAssembler,
    slug_from_url,
    extract_title,
    extract_author
)

__all__ = [
    'SECTION_TITLES',
    'SectionHeadingRegistry',
    'DEFAULT_REGISTRY',
    'TextNode',
    'walk_text',
    'section_after',
    'FIELD_LABELS',
    'find_field_value',
    'find_sibling_field_value',
    'extract_section_paragraph',
    'extract_sibling_paragraph',
    'extract_section_list',
    'extract_sibling_list',
    'collect_documentation_links',
    'collect_sibling_links',
    'resolve_href',
    'is_absolute_url',
    'validate_record',
    'RecordAssembler',
    'slug_from_url',
    'extract_title',
    'extract_author'
]
