"""Section data model: one unit of the book's reading order."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field, PrivateAttr

logger = logging.getLogger(__name__)

DocumentFactory = Callable[[], Awaitable[BeautifulSoup]]


class Section(BaseModel):
    """A readable section of a book (usually one chapter file).

    ``load_document`` produces a freshly parsed document each time it is
    awaited. Sections without it cannot be measured and yield no
    progress. ``character_count`` may be supplied up front; otherwise it
    is computed on first use and cached for the lifetime of the section.
    """

    index: int
    linear: str = "yes"  # "yes" or "no"
    href: str = ""
    load_document: DocumentFactory | None = None
    character_count: int | None = Field(default=None, ge=0)

    _count_lock: asyncio.Lock = PrivateAttr(default_factory=asyncio.Lock)

    @property
    def is_linear(self) -> bool:
        return self.linear != "no"

    async def count_characters(self) -> int:
        """Return the section's text length, parsing the document once.

        Concurrent callers wait on the same computation. A section that
        cannot produce a document counts as empty.
        """
        if self.character_count is not None:
            return self.character_count

        async with self._count_lock:
            if self.character_count is None:
                self.character_count = await self._measure()
                logger.debug(
                    "Section %d (%s): %d characters",
                    self.index,
                    self.href,
                    self.character_count,
                )
        return self.character_count

    async def _measure(self) -> int:
        # Deferred: offsets imports the models package
        from reading_progress.progress.offsets import count_characters

        if self.load_document is None:
            return 0
        document = await self.load_document()
        return count_characters(document)
