"""Anchor variants: where inside a section document a location points."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Union

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, Tag
from pydantic import BaseModel, ConfigDict


class Region(BaseModel):
    """A DOM-range-like region inside a parsed document.

    Offsets follow DOM Range rules: for a text container the offset is a
    character offset, for an element container it is a child index (the
    boundary sits before that child).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    start_container: PageElement
    start_offset: int = 0
    end_container: PageElement
    end_offset: int = 0

    @classmethod
    def point(cls, node: PageElement, offset: int = 0) -> Region:
        """Build a collapsed region (a single boundary point)."""
        return cls(
            start_container=node,
            start_offset=offset,
            end_container=node,
            end_offset=offset,
        )

    @classmethod
    def select_contents(cls, node: PageElement) -> Region:
        """Build the region spanning all contents of ``node``."""
        if isinstance(node, NavigableString):
            end = len(node)
        elif isinstance(node, Tag):
            end = len(node.contents)
        else:
            end = 0
        return cls(
            start_container=node,
            start_offset=0,
            end_container=node,
            end_offset=end,
        )

    @property
    def collapsed(self) -> bool:
        return (
            self.start_container is self.end_container
            and self.start_offset == self.end_offset
        )


class NodeAnchor(BaseModel):
    """A structural node; it starts at its first character."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    node: PageElement


class LazyAnchor(BaseModel):
    """An anchor that can only be resolved once the document is parsed."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    resolve: Callable[[BeautifulSoup], Any]


Anchor = Union[Region, NodeAnchor, LazyAnchor]


def coerce_anchor(value: Any) -> Anchor | None:
    """Turn raw resolver output into one of the anchor variants.

    Args:
        value: A variant, a bs4 node, a callable taking the document,
            or None.

    Returns:
        The matching Anchor variant, or None for None.

    Raises:
        TypeError: If the value cannot be interpreted as an anchor.
    """
    if value is None:
        return None
    if isinstance(value, (Region, NodeAnchor, LazyAnchor)):
        return value
    if isinstance(value, PageElement):
        return NodeAnchor(node=value)
    if callable(value):
        return LazyAnchor(resolve=value)
    raise TypeError(f"Unsupported anchor type: {type(value).__name__}")
