"""Walk document.xml into paragraphs and runs with resolved colors."""
from __future__ import annotations

from typing import List, Optional, Tuple
from xml.etree import ElementTree as ET

from docx_extractor.config import DEFAULT_SETTINGS, ExtractorSettings
from docx_extractor.model.color_model import ColorValue, RgbColor, first_rgb
from docx_extractor.model.document_model import DocumentModel
from docx_extractor.model.elements import ParagraphElement, RunFragment
from docx_extractor.model.style_model import StyleTable
from docx_extractor.parser.model_emitter import ModelEmitter
from docx_extractor.parser.styles_parser import read_color
from docx_extractor.parser.theme_parser import ThemeColors
from docx_extractor.utils.logger import get_logger
from docx_extractor.utils.xml_utils import Namespaces, child_attr

LOGGER = get_logger(__name__)

_WORD_NS = "{" + Namespaces.WORD["w"] + "}"

# Containers whose children are further block-level content.
BLOCK_CONTAINERS = frozenset({"body", "tbl", "tr", "tc", "sdt", "sdtContent", "customXml"})
# Containers inside a paragraph whose children are further runs.
RUN_CONTAINERS = frozenset(
    {"hyperlink", "ins", "moveTo", "smartTag", "fldSimple", "sdt", "sdtContent", "customXml", "dir", "bdo"}
)
# Known children that carry no visible text of their own.
SILENT_CHILDREN = frozenset(
    {
        "pPr", "rPr", "tblPr", "tblGrid", "trPr", "tcPr", "sdtPr", "sdtEndPr", "sectPr",
        "bookmarkStart", "bookmarkEnd", "commentRangeStart", "commentRangeEnd",
        "proofErr", "permStart", "permEnd", "del", "moveFrom", "moveFromRangeStart",
        "moveFromRangeEnd", "moveToRangeStart", "moveToRangeEnd", "customXmlPr",
        "smartTagPr", "drawing", "pict", "object", "fldChar", "instrText", "delText",
        "delInstrText", "lastRenderedPageBreak", "softHyphen", "footnoteReference",
        "endnoteReference", "commentReference", "annotationRef", "sym", "ptab",
        "separator", "continuationSeparator", "footnoteRef", "endnoteRef",
    }
)


def word_tag(element: ET.Element) -> Optional[str]:
    """Local name of a WordprocessingML element; None for other namespaces."""
    tag = element.tag
    if not isinstance(tag, str) or not tag.startswith(_WORD_NS):
        return None
    return tag[len(_WORD_NS):]


class DocumentWalker:
    """Transforms Word body XML into paragraphs with resolved run colors.

    Every run is colored by the first explicit RGB among: its direct
    ``w:color``, its character style, its paragraph's run default (the
    paragraph-mark color, then the paragraph style) and finally the document
    default. ``auto`` and unknown style ids never end the cascade.
    """

    def __init__(
        self,
        styles: StyleTable,
        settings: ExtractorSettings = DEFAULT_SETTINGS,
        theme: Optional[ThemeColors] = None,
    ) -> None:
        self._styles = styles
        self._settings = settings
        self._theme = theme if settings.resolve_theme_colors else None

    def walk(self, document_xml: ET.ElementTree) -> DocumentModel:
        """Walk the document and emit the final model."""
        return ModelEmitter(self._settings).emit(self.collect(document_xml))

    def collect(self, document_xml: ET.ElementTree) -> List[ParagraphElement]:
        """Return every paragraph in document order, runs included."""
        root = document_xml.getroot()
        body = root.find("w:body", Namespaces.WORD)
        if body is None:
            LOGGER.warning("document.xml missing body element")
            return []
        paragraphs: List[ParagraphElement] = []
        self._walk_blocks(body, paragraphs)
        return paragraphs

    # ------------------------------------------------------------------
    # Traversal
    def _walk_blocks(self, container: ET.Element, paragraphs: List[ParagraphElement]) -> None:
        for child in container:
            tag = word_tag(child)
            if tag == "p":
                paragraphs.append(self._parse_paragraph(child))
            elif tag in BLOCK_CONTAINERS:
                self._walk_blocks(child, paragraphs)
            elif tag not in SILENT_CHILDREN:
                LOGGER.debug("Skipping block element: %s", child.tag)

    def _parse_paragraph(self, paragraph_el: ET.Element) -> ParagraphElement:
        ppr = paragraph_el.find("w:pPr", Namespaces.WORD)
        mark_rpr = ppr.find("w:rPr", Namespaces.WORD) if ppr is not None else None
        paragraph = ParagraphElement(
            style_id=child_attr(ppr, "w:pStyle"),
            mark_color=read_color(mark_rpr, self._theme),
        )
        run_default = self._paragraph_run_default(paragraph)
        self._walk_runs(paragraph_el, paragraph, run_default)
        return paragraph

    def _walk_runs(
        self, container: ET.Element, paragraph: ParagraphElement, run_default: Optional[RgbColor]
    ) -> None:
        for child in container:
            tag = word_tag(child)
            if tag == "r":
                paragraph.runs.append(self._parse_run(child, run_default))
            elif tag in RUN_CONTAINERS:
                self._walk_runs(child, paragraph, run_default)
            elif tag not in SILENT_CHILDREN:
                LOGGER.debug("Skipping paragraph child element: %s", child.tag)

    def _parse_run(self, run_el: ET.Element, run_default: Optional[RgbColor]) -> RunFragment:
        rpr = run_el.find("w:rPr", Namespaces.WORD)
        style_id = child_attr(rpr, "w:rStyle")
        direct_color = read_color(rpr, self._theme)
        text, has_text = self._run_text(run_el)
        return RunFragment(
            text=text,
            style_id=style_id,
            direct_color=direct_color,
            color=self._run_color(direct_color, style_id, run_default),
            has_text=has_text,
        )

    def _run_text(self, run_el: ET.Element) -> Tuple[str, bool]:
        """Concatenate the visible text of a run.

        Only ``w:t`` makes a run text-bearing; tabs and breaks are kept when
        they sit between text.
        """
        pieces: List[str] = []
        has_text = False
        for child in run_el:
            tag = word_tag(child)
            if tag == "t":
                if child.text:
                    pieces.append(child.text)
                    has_text = True
            elif tag == "tab":
                pieces.append("\t")
            elif tag in ("br", "cr"):
                pieces.append("\n")
            elif tag == "noBreakHyphen":
                pieces.append("-")
            elif tag not in SILENT_CHILDREN:
                LOGGER.debug("Skipping run child element: %s", child.tag)
        return "".join(pieces), has_text

    # ------------------------------------------------------------------
    # Color cascade
    def _paragraph_run_default(self, paragraph: ParagraphElement) -> Optional[RgbColor]:
        mark_color = paragraph.mark_color if self._settings.use_paragraph_mark_color else None
        style_id = paragraph.style_id
        if style_id is not None and style_id not in self._styles:
            LOGGER.debug("Paragraph references unknown style %r", style_id)
            style_id = None
        if style_id is None and self._settings.apply_default_paragraph_style:
            style_id = self._styles.default_style_id("paragraph")
        return first_rgb(mark_color, self._styles.resolved_color(style_id))

    def _run_color(
        self, direct_color: Optional[ColorValue], style_id: Optional[str], run_default: Optional[RgbColor]
    ) -> ColorValue:
        if style_id is not None and style_id not in self._styles:
            LOGGER.debug("Run references unknown style %r", style_id)
            return first_rgb(direct_color) or self._styles.document_default
        color = first_rgb(direct_color, self._styles.resolved_color(style_id), run_default)
        if color is None:
            return self._styles.document_default
        return color


def walk_document(
    document_xml: ET.ElementTree,
    styles: StyleTable,
    settings: ExtractorSettings = DEFAULT_SETTINGS,
    theme: Optional[ThemeColors] = None,
) -> DocumentModel:
    """Walk a parsed main document part against a complete style table."""
    return DocumentWalker(styles, settings, theme).walk(document_xml)
