"""Spine weight index: per-section character weights for book-wide fractions."""

import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from reading_progress.models.section import Section

logger = logging.getLogger(__name__)


class SpineEntry(BaseModel):
    """One linear section's weight and where it starts in the book."""

    model_config = ConfigDict(frozen=True)

    index: int
    character_count: int
    chars_before: int


class SpineWeightIndex:
    """Cumulative character weights of the linear sections of a book.

    Non-linear sections (``linear="no"``) carry no weight and are not
    indexed. Build once per book with :meth:`build`.
    """

    def __init__(self, entries: Sequence[SpineEntry]) -> None:
        self._entries = list(entries)
        self._by_index = {entry.index: entry for entry in self._entries}
        self._total = sum(entry.character_count for entry in self._entries)

    @classmethod
    async def build(cls, sections: Sequence[Section]) -> "SpineWeightIndex":
        """Count the characters of every linear section, in spine order.

        Args:
            sections: All sections of the book in reading order.

        Returns:
            The populated index.
        """
        entries: list[SpineEntry] = []
        chars_before = 0
        for section in sections:
            if not section.is_linear:
                continue
            count = await section.count_characters()
            entries.append(
                SpineEntry(
                    index=section.index,
                    character_count=count,
                    chars_before=chars_before,
                )
            )
            chars_before += count

        logger.info(
            "Built spine index: %d linear sections, %d characters",
            len(entries),
            chars_before,
        )
        return cls(entries)

    @property
    def entries(self) -> list[SpineEntry]:
        return list(self._entries)

    @property
    def total_characters(self) -> int:
        return self._total

    def entry(self, index: int) -> SpineEntry | None:
        """Return the entry for section ``index``, or None if not indexed."""
        return self._by_index.get(index)

    def __contains__(self, index: object) -> bool:
        return index in self._by_index

    def __len__(self) -> int:
        return len(self._entries)

    def position(self, index: int, local_fraction: float) -> float:
        """Book-wide character position of a fraction through a section.

        Raises:
            KeyError: If the section is not indexed.
        """
        entry = self._by_index[index]
        local_fraction = min(max(local_fraction, 0.0), 1.0)
        return entry.chars_before + local_fraction * entry.character_count

    def fraction(self, index: int, local_fraction: float) -> float:
        """Book-wide fraction, clamped to ``[0, 1]``; 0 for an empty book."""
        if self._total == 0:
            return 0.0
        return min(max(self.position(index, local_fraction) / self._total, 0.0), 1.0)
