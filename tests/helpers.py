"""Builders shared by the test modules."""

from collections.abc import Callable
from typing import Any

from bs4 import BeautifulSoup

from reading_progress.ingestion.loader import BookLoader
from reading_progress.models import Book, Region


def make_book(*chapters: str, non_linear: tuple[int, ...] = ()) -> Book:
    return BookLoader().from_html(list(chapters), title="Test", non_linear=non_linear)


def first_text(document: BeautifulSoup, selector: str = "p", nth: int = 0) -> Any:
    """First text node inside the ``nth`` element matching ``selector``."""
    return document.select(selector)[nth].contents[0]


def text_point(
    selector: str = "p", offset: int = 0, nth: int = 0
) -> Callable[[BeautifulSoup], Region]:
    """Lazy anchor: a point ``offset`` characters into a matched element's text."""

    def resolve(document: BeautifulSoup) -> Region:
        return Region.point(first_text(document, selector, nth), offset)

    return resolve


def fixed_resolver(index: Any, anchor: Any) -> Callable[[str], dict[str, Any]]:
    """Navigation resolver that ignores the location and returns one target."""

    def resolve(location: str) -> dict[str, Any]:
        return {"index": index, "anchor": anchor}

    return resolve
