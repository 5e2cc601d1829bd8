"""Book data model."""

from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from reading_progress.models.section import Section


class Book(BaseModel):
    """A loaded book: its ordered sections (the spine).

    Each section's ``index`` must equal its position in ``sections``;
    lookups by position and by index then agree.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str = ""
    source_path: str = ""
    sections: list[Section] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_section_order(self) -> "Book":
        for position, section in enumerate(self.sections):
            if section.index != position:
                raise ValueError(
                    f"Section at position {position} has index {section.index}"
                )
        return self

    def section(self, index: int) -> Section | None:
        """Return the section at ``index``, or None when out of range."""
        if 0 <= index < len(self.sections):
            return self.sections[index]
        return None

    @property
    def linear_sections(self) -> list[Section]:
        return [s for s in self.sections if s.is_linear]
