"""Heading entry model for the document outline."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HeadingEntry:
    """A heading in the document outline."""

    id: str  # Unique anchor slug within one extraction
    level: int  # 1-6
    title: str
    source_line: int  # Zero-based line index in the source text

    @property
    def display_name(self) -> str:
        """Get display name for the outline sidebar."""
        return self.title

    @property
    def anchor(self) -> str:
        """Fragment reference for the matching preview heading."""
        return f"#{self.id}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "level": self.level,
            "title": self.title,
            "source_line": self.source_line,
        }
