"""Tests for the spine weight index."""

import asyncio

import pytest
from bs4 import BeautifulSoup

from helpers import make_book
from reading_progress.ingestion.loader import parse_document
from reading_progress.models import Section
from reading_progress.progress.spine import SpineEntry, SpineWeightIndex


class TestBuild:
    """Tests for building the index from sections."""

    @pytest.mark.asyncio
    async def test_cumulative_weights(self) -> None:
        book = make_book("<p>aaaa</p>", "<p>bbbbbb</p>", "<p>cc</p>")
        spine = await SpineWeightIndex.build(book.sections)

        assert spine.entries == [
            SpineEntry(index=0, character_count=4, chars_before=0),
            SpineEntry(index=1, character_count=6, chars_before=4),
            SpineEntry(index=2, character_count=2, chars_before=10),
        ]
        assert spine.total_characters == 12
        assert len(spine) == 3

    @pytest.mark.asyncio
    async def test_non_linear_sections_excluded(self) -> None:
        book = make_book("<p>aaaa</p>", "<p>footnote</p>", "<p>bbbb</p>", non_linear=(1,))
        spine = await SpineWeightIndex.build(book.sections)

        assert 1 not in spine
        assert spine.entry(1) is None
        assert spine.entry(2) == SpineEntry(index=2, character_count=4, chars_before=4)
        assert spine.total_characters == 8

    @pytest.mark.asyncio
    async def test_sections_without_documents_weigh_nothing(self) -> None:
        spine = await SpineWeightIndex.build([Section(index=0), Section(index=1)])
        assert spine.total_characters == 0
        assert spine.fraction(0, 0.5) == 0.0

    @pytest.mark.asyncio
    async def test_precomputed_counts_are_used(self) -> None:
        sections = [Section(index=0, character_count=100), Section(index=1, character_count=50)]
        spine = await SpineWeightIndex.build(sections)
        assert spine.total_characters == 150


class TestFractions:
    """Tests for converting section fractions to book fractions."""

    @pytest.fixture
    def spine(self) -> SpineWeightIndex:
        return SpineWeightIndex(
            [
                SpineEntry(index=0, character_count=4, chars_before=0),
                SpineEntry(index=1, character_count=4, chars_before=4),
                SpineEntry(index=3, character_count=4, chars_before=8),
            ]
        )

    def test_start_of_second_section(self, spine: SpineWeightIndex) -> None:
        assert spine.fraction(1, 0.0) == pytest.approx(4 / 12)

    def test_end_of_book(self, spine: SpineWeightIndex) -> None:
        assert spine.fraction(3, 1.0) == 1.0

    def test_local_fraction_is_clamped(self, spine: SpineWeightIndex) -> None:
        assert spine.position(0, 1.5) == 4
        assert spine.position(0, -1.0) == 0

    def test_unknown_section_raises(self, spine: SpineWeightIndex) -> None:
        with pytest.raises(KeyError):
            spine.position(2, 0.5)


class TestCharacterCountCache:
    """Tests for the per-section compute-once character count."""

    @pytest.mark.asyncio
    async def test_counted_once_under_concurrency(self) -> None:
        calls: list[int] = []

        async def load() -> BeautifulSoup:
            calls.append(1)
            await asyncio.sleep(0)
            return parse_document("<p>abcdef</p>")

        section = Section(index=0, load_document=load)
        counts = await asyncio.gather(*(section.count_characters() for _ in range(5)))

        assert counts == [6] * 5
        assert len(calls) == 1
        assert section.character_count == 6
