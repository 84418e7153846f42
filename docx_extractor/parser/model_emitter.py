"""Assemble walked paragraphs into the final document model."""
from __future__ import annotations

from typing import Iterable, Optional

from docx_extractor.config import DEFAULT_SETTINGS, ExtractorSettings
from docx_extractor.model.color_model import ColorValue, RgbColor
from docx_extractor.model.document_model import DocumentModel
from docx_extractor.model.elements import EmittedParagraph, ParagraphElement, TextRecord


class ModelEmitter:
    """Drops runs without text and pins every color to a concrete RGB."""

    def __init__(self, settings: ExtractorSettings = DEFAULT_SETTINGS) -> None:
        self._settings = settings

    def emit(self, paragraphs: Iterable[ParagraphElement]) -> DocumentModel:
        emitted = []
        for paragraph in paragraphs:
            records = [
                TextRecord(text=run.text, color=self._concrete(run.color))
                for run in paragraph.runs
                if run.has_text
            ]
            emitted.append(EmittedParagraph(records=records, style_id=paragraph.style_id))
        return DocumentModel(paragraphs=emitted)

    def _concrete(self, color: Optional[ColorValue]) -> RgbColor:
        if isinstance(color, RgbColor):
            return color
        return self._settings.auto_color
