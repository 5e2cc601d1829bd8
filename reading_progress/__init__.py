"""Reading-progress engine for reflowable books."""

from reading_progress.config import AppConfig, ProgressConfig, load_config
from reading_progress.ingestion import BookLoader
from reading_progress.models import Book, BookProgressResult, LocalProgress, Section
from reading_progress.progress import BookProgress, SectionProgress, SpineWeightIndex

__all__ = [
    "AppConfig",
    "Book",
    "BookLoader",
    "BookProgress",
    "BookProgressResult",
    "LocalProgress",
    "ProgressConfig",
    "Section",
    "SectionProgress",
    "SpineWeightIndex",
    "load_config",
]
