"""
Document walker

Every extractor consumes the same lazy, document-ordered stream of text
nodes. A walk is restartable: each call to ``walk_text`` starts a new
generator over the tree.
"""

import re
from dataclasses import dataclass
from itertools import dropwhile, takewhile
from typing import Callable, Iterable, Iterator, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString


# Raw-text containers whose contents are never page text
SKIPPED_TAGS = frozenset({'script', 'style', 'noscript', 'template'})

HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']
LIST_TAGS = ['ul', 'ol']

_WHITESPACE = re.compile(r'\s+')

Root = Union[BeautifulSoup, Tag]


@dataclass(frozen=True)
class TextNode:
    """A text-bearing node and its nearest enclosing element"""
    text: str
    node: NavigableString
    element: Optional[Tag]


def collapse_whitespace(value: str) -> str:
    """Collapse runs of whitespace to a single space and trim"""
    return _WHITESPACE.sub(' ', value).strip()


def element_text(element: Tag) -> str:
    """Visible text of an element, whitespace collapsed"""
    return collapse_whitespace(element.get_text())


def walk_root(root: Root) -> Root:
    """Whole documents are walked from <body> when there is one"""
    if isinstance(root, BeautifulSoup) and root.body is not None:
        return root.body
    return root


def _is_text(node) -> bool:
    if not isinstance(node, NavigableString) or isinstance(node, PreformattedString):
        return False
    parent = node.parent
    while parent is not None:
        if parent.name in SKIPPED_TAGS:
            return False
        parent = parent.parent
    return True


def walk_text(root: Root) -> Iterator[TextNode]:
    """
    Yield every text node under ``root`` in depth-first pre-order.

    Whitespace-only nodes are yielded with empty ``text``; callers decide
    whether to skip them.
    """
    for node in walk_root(root).descendants:
        if _is_text(node):
            yield TextNode(text=str(node).strip(), node=node, element=node.parent)


def non_empty(nodes: Iterable[TextNode]) -> Iterator[TextNode]:
    return (node for node in nodes if node.text)


def section_after(nodes: Iterable[TextNode],
                  start: Callable[[str], bool],
                  stop: Callable[[str], bool]) -> Iterator[TextNode]:
    """
    Nodes strictly after the first ``start`` match, up to (not including)
    the first ``stop`` match. Empty when ``start`` never matches.
    """
    remaining = dropwhile(lambda node: not start(node.text), non_empty(nodes))
    if next(remaining, None) is None:
        return iter(())
    return takewhile(lambda node: not stop(node.text), remaining)


def find_text_node(root: Root, value: str) -> Optional[TextNode]:
    """First non-empty text node whose trimmed text equals ``value``"""
    return next((node for node in non_empty(walk_text(root)) if node.text == value), None)


def block_for(node: TextNode) -> Optional[Tag]:
    """
    The outermost element around ``node`` that carries nothing but the
    node's own text, e.g. the <h2> around <h2><span>Detection</span></h2>.
    """
    element = node.element
    if element is None:
        return None
    while (element.parent is not None
           and not isinstance(element.parent, BeautifulSoup)
           and element.parent.name != 'body'
           and element_text(element.parent) == node.text):
        element = element.parent
    return element
