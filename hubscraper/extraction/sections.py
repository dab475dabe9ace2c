"""
Section extractors

Paragraph mode joins the free text of a section; list mode returns the
items of the first list in a section. A section starts at the text node
equal to its heading and ends at the next different registry heading.

Two strategies exist for each mode:

* ``text``    - follow the document-ordered text stream (tolerates pages
                with no paragraph or heading markup at all)
* ``sibling`` - walk the block-level siblings of the heading element and
                read only paragraph / list markup
"""

from typing import Iterator, List, Optional

from bs4 import Tag

from hubscraper.extraction.headings import DEFAULT_REGISTRY, SectionHeadingRegistry
from hubscraper.extraction.walker import (
    LIST_TAGS,
    Root,
    TextNode,
    block_for,
    collapse_whitespace,
    element_text,
    find_text_node,
    non_empty,
    section_after,
    walk_text,
)


PARAGRAPH_TAGS = ['p']


def section_nodes(root: Root, heading: str,
                  registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> Iterator[TextNode]:
    """Non-empty text nodes belonging to the section introduced by ``heading``"""
    return section_after(
        walk_text(root),
        start=lambda value: value == heading,
        stop=registry.terminator(heading),
    )


def section_siblings(root: Root, heading: str,
                     registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> Iterator[Tag]:
    """
    Element siblings after the heading element, up to the first sibling
    that carries a different registry heading.
    """
    heading_node = find_text_node(root, heading)
    if heading_node is None:
        return
    block = block_for(heading_node)
    if block is None:
        return

    stops = registry.terminator(heading)
    for sibling in block.find_next_siblings():
        if any(stops(node.text) for node in non_empty(walk_text(sibling))):
            return
        yield sibling


def list_items(list_element: Tag) -> List[str]:
    """Trimmed text of each item, empty items dropped"""
    items = list_element.find_all('li', recursive=False) or list_element.find_all('li')
    return [text for text in (item.get_text().strip() for item in items) if text]


# --- paragraph mode -------------------------------------------------------

def extract_section_paragraph(root: Root, heading: str,
                              registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> Optional[str]:
    """
    Join every text fragment of the section with single spaces.

    Returns None when the heading is missing or the section is empty.
    """
    fragments = [node.text for node in section_nodes(root, heading, registry)]
    if not fragments:
        return None
    return collapse_whitespace(" ".join(fragments)) or None


def extract_sibling_paragraph(root: Root, heading: str,
                              registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> Optional[str]:
    """
    Join the paragraph-level text that follows the heading element.

    Siblings that are paragraphs contribute their text; other blocks
    contribute the paragraphs they contain.
    """
    fragments = []
    for sibling in section_siblings(root, heading, registry):
        if sibling.name in PARAGRAPH_TAGS:
            paragraphs = [sibling]
        else:
            paragraphs = sibling.find_all(PARAGRAPH_TAGS)
        fragments.extend(element_text(paragraph) for paragraph in paragraphs)

    joined = collapse_whitespace(" ".join(fragment for fragment in fragments if fragment))
    return joined or None


# --- list mode ------------------------------------------------------------

def extract_section_list(root: Root, heading: str,
                         registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> List[str]:
    """
    Items of the first list that follows the heading inside its section.

    Returns an empty list when the heading is missing, no list follows it
    before the next registry heading, or the list has no non-empty items.
    """
    for node in section_nodes(root, heading, registry):
        list_element = node.node.find_parent(LIST_TAGS)
        if list_element is not None:
            return list_items(list_element)
    return []


def extract_sibling_list(root: Root, heading: str,
                         registry: SectionHeadingRegistry = DEFAULT_REGISTRY) -> List[str]:
    """Items of the first list among, or inside, the heading's following siblings"""
    for sibling in section_siblings(root, heading, registry):
        if sibling.name in LIST_TAGS:
            list_element = sibling
        else:
            list_element = sibling.find(LIST_TAGS)
        if list_element is not None:
            items = list_items(list_element)
            if items:
                return items
    return []


PARAGRAPH_STRATEGIES = {
    'text': extract_section_paragraph,
    'sibling': extract_sibling_paragraph,
}

LIST_STRATEGIES = {
    'text': extract_section_list,
    'sibling': extract_sibling_list,
}
