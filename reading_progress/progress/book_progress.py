"""Book progress aggregator: location reference -> book-wide progress."""

import asyncio
import logging
import math

from reading_progress.config import ProgressConfig
from reading_progress.models.book import Book
from reading_progress.models.progress import (
    BookProgressResult,
    LocalProgress,
    LocationInfo,
    SectionInfo,
    TimeInfo,
)
from reading_progress.progress.section_progress import NavigationResolver, SectionProgress
from reading_progress.progress.spine import SpineEntry, SpineWeightIndex

logger = logging.getLogger(__name__)

# Decimal places kept in character positions before paging
POSITION_PRECISION = 6


class BookProgress:
    """Turns location references into book-wide progress.

    Combines the within-section fraction from :class:`SectionProgress` with
    the character weights of a :class:`SpineWeightIndex` (built on first use
    and reused). Pages and reading time are estimates derived from
    ``chars_per_page`` and ``chars_per_minute``.

    Only linear sections are weighted; a location in a non-linear section
    has no book-wide progress and yields None.

    Args:
        book: The book to report progress for.
        resolve_navigation: Maps a location reference to a section index
            and anchor.
        config: Page and reading-rate heuristics.
        spine: A prebuilt spine index, if one is already available.
    """

    def __init__(
        self,
        book: Book,
        resolve_navigation: NavigationResolver,
        config: ProgressConfig | None = None,
        spine: SpineWeightIndex | None = None,
    ) -> None:
        self._book = book
        self._config = config or ProgressConfig()
        self._sections = SectionProgress(
            book,
            resolve_navigation,
            document_cache_size=self._config.document_cache_size,
        )
        self._spine = spine
        self._spine_lock = asyncio.Lock()

    @property
    def section_progress(self) -> SectionProgress:
        return self._sections

    async def spine(self) -> SpineWeightIndex:
        """Return the spine index, building it exactly once."""
        if self._spine is None:
            async with self._spine_lock:
                if self._spine is None:
                    self._spine = await SpineWeightIndex.build(self._book.sections)
        return self._spine

    async def get_book_progress(self, location: str) -> BookProgressResult | None:
        """Compute fraction, section, virtual page and reading time.

        Args:
            location: An opaque location reference (e.g. an EPUB CFI).

        Returns:
            BookProgressResult, or None when the location cannot be
            resolved or lies in a non-linear section.
        """
        local = await self._sections.get_progress(location)
        if local is None:
            return None

        try:
            spine = await self.spine()
        except Exception:
            logger.exception("Failed to build spine index for %r", self._book.title)
            return None

        entry = spine.entry(local.section_index)
        if entry is None:
            logger.debug(
                "Section %d is non-linear; no book progress for %r",
                local.section_index,
                location,
            )
            return None

        return self._aggregate(local, entry, spine)

    def _aggregate(
        self, local: LocalProgress, entry: SpineEntry, spine: SpineWeightIndex
    ) -> BookProgressResult:
        total_chars = spine.total_characters
        page_size = self._config.chars_per_page
        rate = self._config.chars_per_minute

        position = round(spine.position(entry.index, local.fraction), POSITION_PRECISION)
        end_position = round(
            spine.position(entry.index, local.end_fraction), POSITION_PRECISION
        )
        fraction = spine.fraction(entry.index, local.fraction)

        page_total = max(1, math.ceil(total_chars / page_size))
        current = self._page(position, page_size, page_total)
        next_page = max(current, self._page(end_position, page_size, page_total))

        section_remaining = round(
            entry.character_count * (1.0 - local.fraction), POSITION_PRECISION
        )
        book_remaining = max(total_chars - position, 0.0)

        return BookProgressResult(
            fraction=fraction,
            section=SectionInfo(
                current=local.section_index,
                total=len(self._book.sections),
            ),
            location=LocationInfo(current=current, next=next_page, total=page_total),
            time=TimeInfo(
                section=math.ceil(section_remaining / rate),
                total=math.ceil(book_remaining / rate),
            ),
        )

    @staticmethod
    def _page(position: float, page_size: int, page_total: int) -> int:
        page = math.floor(position / page_size)
        return min(max(page, 0), page_total - 1)
