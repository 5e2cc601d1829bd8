"""Navigation and progress result models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NavigationResult(BaseModel):
    """What a navigation resolver found for one location reference."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: int | None = None
    anchor: Any = None

    @property
    def resolved(self) -> bool:
        return self.index is not None and self.anchor is not None


class LocalProgress(BaseModel):
    """Position of a location within its own section."""

    model_config = ConfigDict(frozen=True)

    section_index: int
    fraction: float = Field(ge=0.0, le=1.0)
    end_fraction: float = Field(ge=0.0, le=1.0)
    offset: int = 0  # characters before the anchor
    end_offset: int = 0  # characters before the anchor's end
    length: int = 0  # characters in the section


class SectionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: int
    total: int


class LocationInfo(BaseModel):
    """Virtual page numbers (zero-based)."""

    model_config = ConfigDict(frozen=True)

    current: int
    next: int
    total: int


class TimeInfo(BaseModel):
    """Estimated minutes left in the section and in the book."""

    model_config = ConfigDict(frozen=True)

    section: int
    total: int


class BookProgressResult(BaseModel):
    """Book-wide progress for one location reference."""

    model_config = ConfigDict(frozen=True)

    fraction: float = Field(ge=0.0, le=1.0)
    section: SectionInfo
    location: LocationInfo
    time: TimeInfo
