"""
Link collector

Collects the hyperlinks listed under the "Relevant Documentation"
heading, resolved against the site's base URL and de-duplicated by URL.
"""

from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import Tag

from hubscraper.core.base import DocumentationLink
from hubscraper.extraction.headings import DEFAULT_REGISTRY, DOCUMENTATION, SectionHeadingRegistry
from hubscraper.extraction.sections import section_nodes, section_siblings
from hubscraper.extraction.walker import Root, TextNode


ABSOLUTE_SCHEMES = ('http', 'https')


def is_absolute_url(url: Optional[str]) -> bool:
    """True for http(s) URLs that carry a host"""
    if not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ABSOLUTE_SCHEMES and bool(parsed.netloc)


def resolve_href(href: Optional[str], base_url: str) -> Optional[str]:
    """
    Absolute http(s) URL for an href, or None for hrefs that do not point
    at a page (empty, fragment-only, mailto:, javascript:, ...).
    """
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith('#'):
        return None

    try:
        url = href if is_absolute_url(href) else urljoin(base_url, href)
    except ValueError:
        return None

    return url if is_absolute_url(url) else None


def _anchors_near(node: TextNode) -> List[Tag]:
    """Anchors in the text's enclosing element, plus the anchor around the text"""
    anchors = []
    enclosing = node.node.find_parent('a')
    if enclosing is not None:
        anchors.append(enclosing)
    if node.element is not None and node.element.name != 'a':
        anchors.extend(node.element.find_all('a'))
    return anchors


def _collect(anchors: Iterable[Tag], base_url: str) -> List[DocumentationLink]:
    links = []
    seen = set()
    for anchor in anchors:
        url = resolve_href(anchor.get('href'), base_url)
        if url is None or url in seen:
            continue
        seen.add(url)
        links.append(DocumentationLink(url=url, title=anchor.get_text().strip() or None))
    return links


def collect_documentation_links(root: Root, base_url: str,
                                heading: str = DOCUMENTATION,
                                registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> List[DocumentationLink]:
    """
    Links found in the text flow after ``heading``, first occurrence wins.

    Returns an empty list when the heading is missing.
    """
    anchors = (
        anchor
        for node in section_nodes(root, heading, registry)
        for anchor in _anchors_near(node)
    )
    return _collect(anchors, base_url)


def collect_sibling_links(root: Root, base_url: str,
                          heading: str = DOCUMENTATION,
                          registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> List[DocumentationLink]:
    """Links inside the block-level siblings that follow the heading element"""
    anchors = []
    for sibling in section_siblings(root, heading, registry):
        if sibling.name == 'a':
            anchors.append(sibling)
        anchors.extend(sibling.find_all('a'))
    return _collect(anchors, base_url)


LINK_STRATEGIES = {
    'text': collect_documentation_links,
    'sibling': collect_sibling_links,
}
