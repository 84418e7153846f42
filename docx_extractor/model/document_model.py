"""Aggregate model handed to presentation code."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from docx_extractor.model.color_model import RgbColor
from docx_extractor.model.elements import EmittedParagraph, TextRecord


@dataclass(slots=True)
class DocumentModel:
    """Ordered paragraphs of ``(text, color)`` records."""

    paragraphs: List[EmittedParagraph] = field(default_factory=list)
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def records(self) -> List[TextRecord]:
        """Every record in document order, across paragraphs."""
        return [record for paragraph in self.paragraphs for record in paragraph.records]

    def as_pairs(self) -> List[Tuple[str, RgbColor]]:
        return [record.as_tuple() for record in self.records]

    @property
    def text(self) -> str:
        return "\n".join(paragraph.text for paragraph in self.paragraphs)
