"""Read the DrawingML color scheme of a theme part."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx_extractor.model.color_model import RgbColor
from docx_extractor.utils.logger import get_logger
from docx_extractor.utils.xml_utils import Namespaces, local_name

LOGGER = get_logger(__name__)

# w:themeColor values mapped onto clrScheme slots.
THEME_COLOR_SLOTS = {
    "dark1": "dk1",
    "light1": "lt1",
    "dark2": "dk2",
    "light2": "lt2",
    "text1": "dk1",
    "background1": "lt1",
    "text2": "dk2",
    "background2": "lt2",
    "accent1": "accent1",
    "accent2": "accent2",
    "accent3": "accent3",
    "accent4": "accent4",
    "accent5": "accent5",
    "accent6": "accent6",
    "hyperlink": "hlink",
    "followedHyperlink": "folHlink",
}


@dataclass(slots=True)
class ThemeColors:
    """Scheme slot (``dk1``, ``accent1`` ...) to concrete color."""

    scheme: Dict[str, RgbColor] = field(default_factory=dict)

    def resolve(self, theme_color: Optional[str]) -> Optional[RgbColor]:
        """Return the color behind a ``w:themeColor`` value, if the theme defines it."""
        if not theme_color:
            return None
        slot = THEME_COLOR_SLOTS.get(theme_color)
        if slot is None:
            return None
        return self.scheme.get(slot)


class ThemeParser:
    """Parse ``a:clrScheme`` from a theme part."""

    def __init__(self, theme_xml: ET.ElementTree) -> None:
        self._theme_xml = theme_xml

    def parse(self) -> ThemeColors:
        root = self._theme_xml.getroot()
        scheme = root.find("a:themeElements/a:clrScheme", Namespaces.DRAWING)
        if scheme is None:
            LOGGER.debug("Theme part has no color scheme")
            return ThemeColors()

        slots: Dict[str, RgbColor] = {}
        for slot_el in list(scheme):
            color = self._slot_color(slot_el)
            if color is not None:
                slots[local_name(slot_el.tag)] = color
        return ThemeColors(slots)

    def _slot_color(self, slot_el: ET.Element) -> Optional[RgbColor]:
        srgb = slot_el.find("a:srgbClr", Namespaces.DRAWING)
        if srgb is not None:
            value = srgb.attrib.get("val")
        else:
            sys_clr = slot_el.find("a:sysClr", Namespaces.DRAWING)
            value = sys_clr.attrib.get("lastClr") if sys_clr is not None else None
        if value is None:
            return None
        try:
            return RgbColor.from_hex(value)
        except ValueError:
            LOGGER.debug("Ignoring unparseable theme color %r", value)
            return None
