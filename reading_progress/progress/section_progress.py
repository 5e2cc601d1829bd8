"""Section progress facade: location reference -> position within a section."""

import inspect
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Union

from bs4 import BeautifulSoup

from reading_progress.models.anchor import Anchor, LazyAnchor, coerce_anchor
from reading_progress.models.book import Book
from reading_progress.models.progress import LocalProgress, NavigationResult
from reading_progress.progress.offsets import OffsetCalculator

logger = logging.getLogger(__name__)

ResolverOutput = Union[NavigationResult, Mapping[str, Any], None]
NavigationResolver = Callable[[str], Union[ResolverOutput, Awaitable[ResolverOutput]]]


class SectionProgress:
    """Reports where a location reference sits inside its section.

    Every failure (a resolver fault, a missing section, a document that
    cannot be loaded, an anchor that does not resolve) yields None; faults
    are logged and never reach the caller.

    Args:
        book: The book whose sections are measured.
        resolve_navigation: Maps a location reference to a section index
            and anchor. May be a plain function or a coroutine function.
        document_cache_size: Parsed documents to keep between calls
            (0 parses on every call).
    """

    def __init__(
        self,
        book: Book,
        resolve_navigation: NavigationResolver,
        document_cache_size: int = 8,
    ) -> None:
        self._book = book
        self._resolve_navigation = resolve_navigation
        self._cache_size = document_cache_size
        self._documents: OrderedDict[int, BeautifulSoup] = OrderedDict()

    async def get_progress(self, location: str) -> LocalProgress | None:
        """Resolve ``location`` to a fraction of its section.

        Args:
            location: An opaque location reference (e.g. an EPUB CFI).

        Returns:
            LocalProgress, or None if the location cannot be resolved.
        """
        navigation = await self._resolve(location)
        if navigation is None:
            return None
        return await self.progress_for(navigation.index, navigation.anchor, location)

    async def progress_for(
        self, index: int, anchor: Any, location: str = ""
    ) -> LocalProgress | None:
        """Measure an already resolved ``(section index, anchor)`` pair."""
        section = self._book.section(index)
        if section is None:
            logger.debug("No section %s for location %r", index, location)
            return None
        if section.load_document is None:
            logger.debug("Section %d cannot produce a document", index)
            return None

        try:
            document = await self._get_document(index)
            resolved = self._evaluate_anchor(anchor, document)
            if resolved is None:
                logger.debug("Anchor for %r did not resolve in section %d", location, index)
                return None
            offsets = OffsetCalculator(document).measure(resolved)
        except Exception:
            logger.exception("Failed to measure location %r in section %d", location, index)
            return None

        return LocalProgress(
            section_index=index,
            fraction=offsets.fraction,
            end_fraction=max(offsets.end_fraction, offsets.fraction),
            offset=offsets.before,
            end_offset=offsets.end,
            length=offsets.total,
        )

    def clear_cache(self) -> None:
        """Drop cached section documents (e.g. after the book changed)."""
        self._documents.clear()

    async def _resolve(self, location: str) -> NavigationResult | None:
        """Run the navigation resolver, converting every failure to None."""
        try:
            result = self._resolve_navigation(location)
            if inspect.isawaitable(result):
                result = await result
            navigation = self._to_navigation(result)
        except Exception:
            logger.exception("Failed to resolve location %r", location)
            return None

        if navigation is None or not navigation.resolved:
            logger.debug("Location %r is unresolved", location)
            return None
        return navigation

    @staticmethod
    def _to_navigation(result: ResolverOutput) -> NavigationResult | None:
        if result is None or isinstance(result, NavigationResult):
            return result
        if isinstance(result, Mapping):
            return NavigationResult(index=result.get("index"), anchor=result.get("anchor"))
        raise TypeError(f"Unsupported navigation result: {type(result).__name__}")

    @staticmethod
    def _evaluate_anchor(anchor: Any, document: BeautifulSoup) -> Anchor | None:
        resolved = coerce_anchor(anchor)
        if isinstance(resolved, LazyAnchor):
            resolved = coerce_anchor(resolved.resolve(document))
            if isinstance(resolved, LazyAnchor):
                raise TypeError("Lazy anchor resolved to another lazy anchor")
        return resolved

    async def _get_document(self, index: int) -> BeautifulSoup:
        """Fetch a section document, reusing recently parsed ones."""
        if index in self._documents:
            self._documents.move_to_end(index)
            return self._documents[index]

        section = self._book.sections[index]
        document = await section.load_document()
        if self._cache_size > 0:
            self._documents[index] = document
            while len(self._documents) > self._cache_size:
                self._documents.popitem(last=False)
        return document
