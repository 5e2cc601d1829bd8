"""HTML section provider: builds Books whose sections parse with BeautifulSoup."""

import asyncio
import logging
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

import chardet
from bs4 import BeautifulSoup

from reading_progress.models.book import Book
from reading_progress.models.section import DocumentFactory, Section

logger = logging.getLogger(__name__)

# File extensions treated as section documents
SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({".html", ".htm", ".xhtml"})

_HTML_ROOT = re.compile(r"<html[\s>]", re.IGNORECASE)


def parse_document(markup: str) -> BeautifulSoup:
    """Parse section markup into a document tree.

    Fragments without an ``<html>`` element are wrapped in a body first,
    so ``"<p>text</p>"`` and a full XHTML file measure the same way.
    """
    if not _HTML_ROOT.search(markup):
        markup = f"<!DOCTYPE html><html><body>{markup}</body></html>"
    return BeautifulSoup(markup, "lxml")


def decode_markup(raw_bytes: bytes, source: str = "") -> str:
    """Decode section bytes with encoding detection.

    Tries UTF-8 first, then uses chardet for fallback detection, then
    windows-1252, and finally UTF-8 with replacement characters.

    Args:
        raw_bytes: The undecoded file content.
        source: Name used in log messages.

    Returns:
        The decoded markup.
    """
    try:
        return raw_bytes.decode("utf-8")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw_bytes)
    encoding = detected.get("encoding") or "utf-8"
    confidence = detected.get("confidence") or 0

    if confidence < 0.7:
        logger.warning(
            "Low confidence encoding detection for %s: %s (%.0f%%)",
            source,
            encoding,
            confidence * 100,
        )

    try:
        return raw_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        try:
            return raw_bytes.decode("windows-1252")
        except UnicodeDecodeError:
            logger.error("Failed to decode section: %s", source)
            return raw_bytes.decode("utf-8", errors="replace")


class BookLoader:
    """Builds Book objects from HTML chapters in memory or on disk.

    Sections re-parse their document on every ``load_document()`` call;
    reads and parses run in a worker thread.
    """

    def from_html(
        self,
        chapters: Sequence[str],
        title: str = "",
        non_linear: Iterable[int] = (),
    ) -> Book:
        """Build a book from in-memory HTML, one string per section.

        Args:
            chapters: Section markup in reading order.
            title: Book title.
            non_linear: Indices of sections excluded from the reading order.

        Returns:
            A Book with one section per chapter.
        """
        skipped = set(non_linear)
        sections = [
            Section(
                index=i,
                linear="no" if i in skipped else "yes",
                href=f"section-{i}",
                load_document=self._string_factory(markup),
            )
            for i, markup in enumerate(chapters)
        ]
        return Book(title=title, sections=sections)

    def load_directory(
        self, directory: str | Path, non_linear: Iterable[str] = ()
    ) -> Book:
        """Build a book from the HTML files of a directory, in name order.

        Args:
            directory: Directory holding one file per section.
            non_linear: File names of sections excluded from the reading
                order (e.g. footnotes).

        Returns:
            A Book whose sections read their files lazily.

        Raises:
            FileNotFoundError: If the directory does not exist.
            ValueError: If it holds no supported files.
        """
        path = Path(directory)
        if not path.is_dir():
            raise FileNotFoundError(f"Directory not found: {path}")

        files = sorted(
            f for f in path.iterdir()
            if f.is_file() and f.suffix.lower() in SUPPORTED_EXTENSIONS
        )
        if not files:
            raise ValueError(
                f"No section files in {path}. "
                f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
            )

        skipped = set(non_linear)
        sections = [
            Section(
                index=i,
                linear="no" if f.name in skipped else "yes",
                href=f.name,
                load_document=self._file_factory(f),
            )
            for i, f in enumerate(files)
        ]
        logger.info("Loaded %d sections from %s", len(sections), path)
        return Book(title=path.name, source_path=str(path), sections=sections)

    @staticmethod
    def _string_factory(markup: str) -> DocumentFactory:
        async def load() -> BeautifulSoup:
            return await asyncio.to_thread(parse_document, markup)

        return load

    @staticmethod
    def _file_factory(file_path: Path) -> DocumentFactory:
        def read_and_parse() -> BeautifulSoup:
            markup = decode_markup(file_path.read_bytes(), str(file_path))
            return parse_document(markup)

        async def load() -> BeautifulSoup:
            return await asyncio.to_thread(read_and_parse)

        return load
