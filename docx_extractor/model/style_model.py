"""Style model captures Word style definitions and their resolved colors."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from docx_extractor.model.color_model import BLACK, ColorValue


@dataclass(frozen=True, slots=True)
class StyleRecord:
    """One ``w:style`` definition as written in styles.xml."""

    style_id: str
    style_type: str
    name: Optional[str] = None
    based_on: Optional[str] = None
    color: Optional[ColorValue] = None
    is_default: bool = False


class StyleTable:
    """Style records keyed by id plus their pre-resolved colors.

    Built once by the styles parser and read-only afterwards. A resolved
    color of ``None`` means no style in the chain says anything about color.
    """

    def __init__(
        self,
        records: Mapping[str, StyleRecord],
        resolved: Mapping[str, Optional[ColorValue]],
        document_default: ColorValue = BLACK,
    ) -> None:
        self._records = dict(records)
        self._resolved = dict(resolved)
        self.document_default = document_default
        self._default_styles: Dict[str, str] = {}
        for record in self._records.values():
            if record.is_default:
                self._default_styles.setdefault(record.style_type, record.style_id)

    @classmethod
    def empty(cls, document_default: ColorValue = BLACK) -> "StyleTable":
        """Table used when the package has no usable styles part."""
        return cls({}, {}, document_default)

    def get(self, style_id: Optional[str]) -> Optional[StyleRecord]:
        """Return the style record given its identifier."""
        if style_id is None:
            return None
        return self._records.get(style_id)

    def __contains__(self, style_id: object) -> bool:
        return style_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> Mapping[str, StyleRecord]:
        """Return read-only view of style records."""
        return dict(self._records)

    def resolved_color(self, style_id: Optional[str]) -> Optional[ColorValue]:
        """Return the pre-resolved color of a style; None for unknown ids."""
        if style_id is None:
            return None
        return self._resolved.get(style_id)

    def default_style_id(self, style_type: str) -> Optional[str]:
        """Return the id of the style flagged ``w:default="1"`` for a type."""
        return self._default_styles.get(style_type)
