"""Data models for the reading-progress engine."""

from reading_progress.models.anchor import (
    Anchor,
    LazyAnchor,
    NodeAnchor,
    Region,
    coerce_anchor,
)
from reading_progress.models.book import Book
from reading_progress.models.progress import (
    BookProgressResult,
    LocalProgress,
    LocationInfo,
    NavigationResult,
    SectionInfo,
    TimeInfo,
)
from reading_progress.models.section import Section

__all__ = [
    "Anchor",
    "Book",
    "BookProgressResult",
    "LazyAnchor",
    "LocalProgress",
    "LocationInfo",
    "NavigationResult",
    "NodeAnchor",
    "Region",
    "Section",
    "SectionInfo",
    "TimeInfo",
    "coerce_anchor",
]
