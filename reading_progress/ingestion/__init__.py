"""Book loading: HTML sections and their documents."""

from reading_progress.ingestion.loader import BookLoader, decode_markup, parse_document

__all__ = ["BookLoader", "decode_markup", "parse_document"]
