"""In-memory representation of walked paragraphs and runs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from docx_extractor.model.color_model import ColorValue, RgbColor


@dataclass(slots=True)
class RunFragment:
    """A ``w:r`` element: its text, direct color and character style.

    ``color`` holds the cascade result computed by the walker; it is AUTO
    only when nothing in the cascade produced an RGB value.
    """

    text: str
    style_id: Optional[str] = None
    direct_color: Optional[ColorValue] = None
    color: Optional[ColorValue] = None
    has_text: bool = False


@dataclass(slots=True)
class ParagraphElement:
    """A ``w:p`` element with its runs in source order."""

    runs: List[RunFragment] = field(default_factory=list)
    style_id: Optional[str] = None
    mark_color: Optional[ColorValue] = None


@dataclass(frozen=True, slots=True)
class TextRecord:
    """A run of text paired with its fully resolved color."""

    text: str
    color: RgbColor

    def as_tuple(self) -> tuple:
        return (self.text, self.color)


@dataclass(slots=True)
class EmittedParagraph:
    """Records of one paragraph, ready for a presentation layer."""

    records: List[TextRecord] = field(default_factory=list)
    style_id: Optional[str] = None

    @property
    def text(self) -> str:
        return "".join(record.text for record in self.records)
