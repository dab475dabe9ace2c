"""
Section heading registry

The closed, ordered set of heading labels that introduce content sections
on detail pages. Every section extractor uses the same registry both to
find where its section starts and to decide where it ends.
"""

from typing import Callable, Iterable, Iterator, Tuple


EXPLANATION = "Explanation"
BILLING_MODEL = "Relevant Billing Model"
DETECTION = "Detection"
REMEDIATION = "Remediation"
DOCUMENTATION = "Relevant Documentation"

SECTION_TITLES: Tuple[str, ...] = (
    EXPLANATION,
    BILLING_MODEL,
    DETECTION,
    REMEDIATION,
    DOCUMENTATION,
)


class SectionHeadingRegistry:
    """Closed set of known section headings"""

    def __init__(self, titles: Iterable[str] = SECTION_TITLES):
        self._titles: Tuple[str, ...] = tuple(dict.fromkeys(titles))
        self._members = frozenset(self._titles)

    def __contains__(self, value: object) -> bool:
        return value in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._titles)

    def __len__(self) -> int:
        return len(self._titles)

    def is_heading(self, value: str) -> bool:
        return value in self._members

    def terminator(self, heading: str) -> Callable[[str], bool]:
        """
        Build the stop predicate for the section introduced by ``heading``.

        The predicate is true for any registry member other than ``heading``.
        """
        def stops(value: str) -> bool:
            return value != heading and value in self._members

        return stops


DEFAULT_REGISTRY = SectionHeadingRegistry()
