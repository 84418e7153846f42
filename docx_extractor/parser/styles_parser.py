"""Extract style definitions from styles.xml and resolve their colors."""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Set
from xml.etree import ElementTree as ET

from docx_extractor.config import DEFAULT_SETTINGS, ExtractorSettings
from docx_extractor.model.color_model import AUTO, BLACK, ColorValue, RgbColor, parse_color_value
from docx_extractor.model.style_model import StyleRecord, StyleTable
from docx_extractor.parser.theme_parser import ThemeColors
from docx_extractor.utils.errors import StyleCycleDetectedError
from docx_extractor.utils.logger import get_logger
from docx_extractor.utils.xml_utils import Namespaces, child_attr, get_attr

LOGGER = get_logger(__name__)


def read_color(rpr: Optional[ET.Element], theme: Optional[ThemeColors] = None) -> Optional[ColorValue]:
    """Return the color set by a ``w:rPr`` block, or None if it sets none.

    A ``w:themeColor`` wins over ``w:val`` when the theme defines it, unless a
    tint or shade modifies it; Word keeps the modified result in ``w:val``.
    """
    if rpr is None:
        return None
    color_el = rpr.find("w:color", Namespaces.WORD)
    if color_el is None:
        return None
    raw_value = get_attr(color_el, "w:val")
    value = parse_color_value(raw_value)
    if value is None and raw_value is not None:
        LOGGER.debug("Ignoring unparseable color value %r", raw_value)

    theme_color = get_attr(color_el, "w:themeColor")
    if theme is not None and theme_color:
        modified = get_attr(color_el, "w:themeTint") or get_attr(color_el, "w:themeShade")
        if not modified:
            themed = theme.resolve(theme_color)
            if themed is not None:
                return themed
    return value


class StyleColorResolver:
    """Memoized, depth-bounded walk up ``basedOn`` chains.

    The walk stops at the first style with an explicit RGB color. ``auto``
    never stops it; when no ancestor supplies an RGB the result is AUTO if any
    link said auto, otherwise None.
    """

    def __init__(self, records: Mapping[str, StyleRecord], max_depth: int) -> None:
        self._records = records
        self._max_depth = max_depth
        self._memo: Dict[str, Optional[ColorValue]] = {}
        # styles visited when resolving each memoized id
        self._depth: Dict[str, int] = {}

    def resolve(self, style_id: str) -> Optional[ColorValue]:
        """Resolve one style; raises StyleCycleDetectedError on a bad chain."""
        if style_id in self._memo:
            return self._memo[style_id]
        if style_id not in self._records:
            return None

        chain: List[str] = []
        seen: Set[str] = set()
        inherited: Optional[ColorValue] = None
        depth = 0
        current: Optional[str] = style_id
        while current is not None:
            if current in self._memo:
                if len(chain) + self._depth[current] > self._max_depth:
                    raise StyleCycleDetectedError(style_id, chain + [current])
                inherited = self._memo[current]
                depth = self._depth[current]
                break
            record = self._records.get(current)
            if record is None:
                LOGGER.debug("Style %r is based on unknown style %r", chain[-1], current)
                break
            if current in seen or len(chain) >= self._max_depth:
                raise StyleCycleDetectedError(style_id, chain + [current])
            seen.add(current)
            chain.append(current)
            if isinstance(record.color, RgbColor):
                break
            current = record.based_on

        for chain_id in reversed(chain):
            own = self._records[chain_id].color
            if isinstance(own, RgbColor):
                inherited = own
            elif isinstance(inherited, RgbColor):
                pass
            elif own is AUTO or inherited is AUTO:
                inherited = AUTO
            else:
                inherited = None
            depth += 1
            self._memo[chain_id] = inherited
            self._depth[chain_id] = depth
        return self._memo[style_id]

    def resolve_all(self, fallback: ColorValue) -> Dict[str, Optional[ColorValue]]:
        """Resolve every style, substituting ``fallback`` for broken chains."""
        for style_id in self._records:
            try:
                self.resolve(style_id)
            except StyleCycleDetectedError as exc:
                LOGGER.warning("%s; using the document default color", exc)
                self._memo[style_id] = fallback
                # descendants of a broken style are broken too
                self._depth[style_id] = self._max_depth + 1
        return {style_id: self._memo[style_id] for style_id in self._records}


class StylesParser:
    """Parse Word styles into a StyleTable with resolved colors."""

    def __init__(
        self,
        styles_xml: ET.ElementTree,
        theme: Optional[ThemeColors] = None,
        settings: ExtractorSettings = DEFAULT_SETTINGS,
    ) -> None:
        self._styles_xml = styles_xml
        self._settings = settings
        self._theme = theme if settings.resolve_theme_colors else None

    def parse(self) -> StyleTable:
        """Parse the XML tree and return a resolved table."""
        records = self._collect_styles()
        document_default = self._document_default()
        resolved = StyleColorResolver(records, self._settings.max_style_depth).resolve_all(document_default)
        LOGGER.debug("Resolved colors for %d styles", len(records))
        return StyleTable(records, resolved, document_default)

    def _collect_styles(self) -> Dict[str, StyleRecord]:
        styles: Dict[str, StyleRecord] = {}
        root = self._styles_xml.getroot()
        for style_el in root.findall("w:style", Namespaces.WORD):
            style_id = get_attr(style_el, "w:styleId")
            if not style_id:
                LOGGER.debug("Skipping style without w:styleId")
                continue
            if style_id in styles:
                LOGGER.debug("Duplicate style id %r; the later definition wins", style_id)
            styles[style_id] = StyleRecord(
                style_id=style_id,
                style_type=get_attr(style_el, "w:type") or "paragraph",
                name=child_attr(style_el, "w:name"),
                based_on=child_attr(style_el, "w:basedOn"),
                color=read_color(style_el.find("w:rPr", Namespaces.WORD), self._theme),
                is_default=get_attr(style_el, "w:default") in ("1", "true", "on"),
            )
        return styles

    def _document_default(self) -> ColorValue:
        rpr = self._styles_xml.getroot().find("w:docDefaults/w:rPrDefault/w:rPr", Namespaces.WORD)
        color = read_color(rpr, self._theme)
        return color if color is not None else BLACK


def build_style_table(
    styles_xml: ET.ElementTree,
    theme: Optional[ThemeColors] = None,
    settings: ExtractorSettings = DEFAULT_SETTINGS,
) -> StyleTable:
    """Build the style table for a parsed styles part."""
    return StylesParser(styles_xml, theme, settings).parse()
