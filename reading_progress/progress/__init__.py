"""Progress computation: offsets, section progress, spine weights, book progress."""

from reading_progress.progress.book_progress import BookProgress
from reading_progress.progress.offsets import (
    OffsetCalculator,
    SectionOffsets,
    count_characters,
    point_at,
)
from reading_progress.progress.resolver import OffsetResolver
from reading_progress.progress.section_progress import (
    NavigationResolver,
    SectionProgress,
)
from reading_progress.progress.spine import SpineEntry, SpineWeightIndex

__all__ = [
    "BookProgress",
    "NavigationResolver",
    "OffsetCalculator",
    "OffsetResolver",
    "SectionOffsets",
    "SectionProgress",
    "SpineEntry",
    "SpineWeightIndex",
    "count_characters",
    "point_at",
]
