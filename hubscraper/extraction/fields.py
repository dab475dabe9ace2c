"""
Field locator

Finds the scalar value shown next to a label such as "Cloud Provider".
"""

from typing import Optional

from bs4 import Tag

from hubscraper.extraction.walker import (
    Root,
    block_for,
    element_text,
    find_text_node,
    section_after,
    walk_text,
)


FIELD_LABELS = {
    'service_category': "Service Category",
    'cloud_provider': "Cloud Provider",
    'service_name': "Service Name",
    'inefficiency_type': "Inefficiency Type",
}


def find_field_value(root: Root, label: str) -> Optional[str]:
    """
    Value of a labelled field: the first non-empty text after the label.

    When the label occurs more than once the first occurrence wins.

    Example markup:
        <div>Service Category</div><div>Storage</div>  ->  "Storage"
    """
    following = section_after(
        walk_text(root),
        start=lambda value: value == label,
        stop=lambda value: False,
    )
    node = next(following, None)
    return node.text if node else None


def find_sibling_field_value(root: Root, label: str) -> Optional[str]:
    """
    Value of a labelled field read from the label element's next sibling
    element that carries text.
    """
    label_node = find_text_node(root, label)
    if label_node is None:
        return None

    label_element = block_for(label_node)
    if label_element is None:
        return None

    for sibling in label_element.find_next_siblings():
        if not isinstance(sibling, Tag):
            continue
        value = element_text(sibling)
        if value:
            return value

    return None
