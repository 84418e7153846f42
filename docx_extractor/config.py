"""Extraction settings shared by the style resolver, walker and emitter."""
from __future__ import annotations

from dataclasses import dataclass

from docx_extractor.model.color_model import BLACK, RgbColor


@dataclass(frozen=True, slots=True)
class ExtractorSettings:
    """Tunable behaviour of the extraction pipeline.

    ``max_style_depth`` bounds basedOn chains so malformed style sheets cannot
    loop. ``auto_color`` is what ``w:val="auto"`` becomes at emission time.
    ``use_paragraph_mark_color`` lets ``w:pPr/w:rPr/w:color`` act as the run
    default of its paragraph. ``apply_default_paragraph_style`` makes
    paragraphs without ``w:pStyle`` use the style flagged ``w:default="1"``.
    """

    max_style_depth: int = 64
    auto_color: RgbColor = BLACK
    use_paragraph_mark_color: bool = True
    apply_default_paragraph_style: bool = True
    resolve_theme_colors: bool = True

    def __post_init__(self) -> None:
        if self.max_style_depth < 1:
            raise ValueError("max_style_depth must be at least 1")


DEFAULT_SETTINGS = ExtractorSettings()
