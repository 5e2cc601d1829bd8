"""Section offset calculator.

Counts the reading characters of a parsed section document and locates an
anchor within them. Traversal is document order (depth-first, pre-order);
only plain text nodes contribute characters, elements only establish
ordering.
"""

import logging
from collections.abc import Iterator

from bs4 import BeautifulSoup
from bs4.element import (
    NavigableString,
    PageElement,
    PreformattedString,
    Script,
    Stylesheet,
    Tag,
    TemplateString,
)
from pydantic import BaseModel, ConfigDict

from reading_progress.models.anchor import Anchor, NodeAnchor, Region

logger = logging.getLogger(__name__)

# Elements whose text is never shown to the reader
NON_CONTENT_TAGS: frozenset[str] = frozenset({"script", "style", "template"})

# String subclasses that are not reading text (comments, CDATA, doctypes, ...)
NON_CONTENT_STRINGS: tuple[type, ...] = (
    PreformattedString,
    Script,
    Stylesheet,
    TemplateString,
)


class SectionOffsets(BaseModel):
    """Character positions of an anchor within one section.

    ``before`` and ``end`` are clamped to ``[0, total]`` and
    ``end >= before``; for a point anchor they are equal.
    """

    model_config = ConfigDict(frozen=True)

    before: int
    end: int
    total: int

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 0.0
        return min(max(self.before / self.total, 0.0), 1.0)

    @property
    def end_fraction(self) -> float:
        if self.total == 0:
            return 0.0
        return min(max(self.end / self.total, 0.0), 1.0)


def measurement_root(document: BeautifulSoup | Tag) -> Tag:
    """Return the element whose text is measured.

    A bare element is measured as is. A parsed document is measured from
    its body, else from its single document element, else as a whole (a
    fragment with several top-level elements).
    """
    if not isinstance(document, BeautifulSoup):
        return document
    body = document.find("body")
    if body is not None:
        return body
    elements = [child for child in document.contents if isinstance(child, Tag)]
    if len(elements) == 1:
        return elements[0]
    return document


def text_length(node: PageElement) -> int:
    """Number of reading characters a single node contributes by itself."""
    if not isinstance(node, NavigableString):
        return 0
    if isinstance(node, NON_CONTENT_STRINGS):
        return 0
    return len(node)


def _walk(root: Tag) -> Iterator[tuple[PageElement, int, bool]]:
    """Yield ``(node, characters, entering)`` for every node below ``root``.

    Each node is yielded once on entry and once on exit, so a node's
    subtree spans the characters counted between the two events.
    """
    stack: list[tuple[PageElement, bool, bool]] = [
        (child, False, True) for child in reversed(root.contents)
    ]
    while stack:
        node, hidden, entering = stack.pop()
        if not entering:
            yield node, 0, False
            continue
        if isinstance(node, Tag):
            yield node, 0, True
            stack.append((node, hidden, False))
            hidden = hidden or node.name in NON_CONTENT_TAGS
            stack.extend((child, hidden, True) for child in reversed(node.contents))
        else:
            yield node, 0 if hidden else text_length(node), True
            yield node, 0, False


def _top(node: PageElement) -> PageElement:
    while node.parent is not None:
        node = node.parent
    return node


def count_characters(document: BeautifulSoup | Tag) -> int:
    """Total reading characters in the document's measurement root."""
    return sum(chars for _, chars, _ in _walk(measurement_root(document)))


class OffsetCalculator:
    """Locates anchors within one parsed section document.

    The calculator never mutates the document, so repeated calls with the
    same inputs give identical results.

    Args:
        document: The parsed section document.
    """

    def __init__(self, document: BeautifulSoup | Tag) -> None:
        self._document = document
        self._root = measurement_root(document)
        self._total = sum(chars for _, chars, _ in _walk(self._root))

    @property
    def total(self) -> int:
        return self._total

    def measure(self, anchor: Anchor) -> SectionOffsets:
        """Compute the characters preceding the anchor's start and end.

        Args:
            anchor: A Region or NodeAnchor. Lazy anchors must be evaluated
                against the document before measuring.

        Returns:
            SectionOffsets for the anchor.

        Raises:
            TypeError: If the anchor is not a Region or NodeAnchor.
            ValueError: If the anchor points outside this document.
        """
        if isinstance(anchor, Region):
            before = self._boundary(anchor.start_container, anchor.start_offset)
            if anchor.collapsed:
                end = before
            else:
                end = self._boundary(anchor.end_container, anchor.end_offset)
        elif isinstance(anchor, NodeAnchor):
            before, end = self._span(anchor.node)
        else:
            raise TypeError(f"Cannot measure anchor of type {type(anchor).__name__}")

        before = min(max(before, 0), self._total)
        end = min(max(end, before), self._total)
        return SectionOffsets(before=before, end=end, total=self._total)

    def _boundary(self, container: PageElement, offset: int) -> int:
        """Characters before a DOM-range boundary point."""
        offset = max(offset, 0)
        if isinstance(container, Tag):
            children = container.contents
            if offset < len(children):
                return self._span(children[offset])[0]
            return self._span(container)[1]

        start, end = self._span(container)
        return start + min(offset, end - start)

    def _span(self, node: PageElement) -> tuple[int, int]:
        """Characters before ``node`` and before the end of its subtree."""
        if node is self._root:
            return 0, self._total
        if _top(node) is not _top(self._root):
            raise ValueError("Anchor node is not part of the section document")

        chars = 0
        start = 0
        for current, length, entering in _walk(self._root):
            if current is node:
                if entering:
                    start = chars
                else:
                    return start, chars + length
            chars += length

        # Outside the measured root: an ancestor spans everything,
        # anything else sits entirely before or after it.
        if any(parent is node for parent in self._root.parents):
            return 0, self._total
        if any(element is self._root for element in node.next_elements):
            return 0, 0
        return self._total, self._total


def point_at(document: BeautifulSoup | Tag, offset: int) -> Region | None:
    """Return the boundary point ``offset`` reading characters into the document.

    Returns None when the offset is negative or past the end of the text.
    """
    if offset < 0:
        return None
    root = measurement_root(document)
    chars = 0
    for node, length, entering in _walk(root):
        if entering and length and chars + length >= offset:
            return Region.point(node, offset - chars)
        chars += length
    if offset == chars:
        return Region.point(root, len(root.contents))
    return None
