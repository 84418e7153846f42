"""Builders for small in-memory DOCX packages used across the tests."""
from __future__ import annotations

import io
import zipfile
from typing import Dict, Optional

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
A_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

DOCUMENT_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"


def document_xml(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}</w:body></w:document>'
    )


def styles_xml(inner: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:styles xmlns:w="{W_NS}">{inner}</w:styles>'
    )


def theme_xml(slots: Dict[str, str]) -> str:
    entries = "".join(f'<a:{slot}><a:srgbClr val="{value}"/></a:{slot}>' for slot, value in slots.items())
    return (
        f'<a:theme xmlns:a="{A_NS}" name="Office Theme"><a:themeElements>'
        f'<a:clrScheme name="Office">{entries}</a:clrScheme>'
        "</a:themeElements></a:theme>"
    )


def content_types_xml(main_type: str = DOCUMENT_CONTENT_TYPE, main_part: str = "/word/document.xml") -> str:
    return (
        '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
        '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
        '<Default Extension="xml" ContentType="application/xml"/>'
        f'<Override PartName="{main_part}" ContentType="{main_type}"/>'
        "</Types>"
    )


def relationships_xml(rels: Dict[str, tuple]) -> str:
    entries = "".join(
        f'<Relationship Id="{r_id}" Type="{REL_NS}/{rel_type}" Target="{target}"/>'
        for r_id, (rel_type, target) in rels.items()
    )
    return f'<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">{entries}</Relationships>'


def build_docx(
    body: Optional[str] = None,
    styles: Optional[str] = None,
    theme: Optional[str] = None,
    extra_parts: Optional[Dict[str, bytes]] = None,
    include_content_types: bool = True,
) -> bytes:
    """Return the bytes of a minimal package with the given parts."""
    parts: Dict[str, bytes] = {
        "_rels/.rels": relationships_xml({"rId1": ("officeDocument", "word/document.xml")}).encode("utf-8"),
    }
    if include_content_types:
        parts["[Content_Types].xml"] = content_types_xml().encode("utf-8")
    if body is not None:
        parts["word/document.xml"] = document_xml(body).encode("utf-8")

    doc_rels: Dict[str, tuple] = {}
    if styles is not None:
        parts["word/styles.xml"] = styles.encode("utf-8")
        doc_rels["rId1"] = ("styles", "styles.xml")
    if theme is not None:
        parts["word/theme/theme1.xml"] = theme.encode("utf-8")
        doc_rels["rId2"] = ("theme", "theme/theme1.xml")
    if doc_rels:
        parts["word/_rels/document.xml.rels"] = relationships_xml(doc_rels).encode("utf-8")
    parts.update(extra_parts or {})

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, data in parts.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def run(text: str, color: Optional[str] = None, style: Optional[str] = None) -> str:
    """A ``w:r`` with optional direct color and character style."""
    props = ""
    if style is not None:
        props += f'<w:rStyle w:val="{style}"/>'
    if color is not None:
        props += f'<w:color w:val="{color}"/>'
    rpr = f"<w:rPr>{props}</w:rPr>" if props else ""
    return f'<w:r>{rpr}<w:t xml:space="preserve">{text}</w:t></w:r>'


def paragraph(*runs: str, style: Optional[str] = None, mark_color: Optional[str] = None) -> str:
    ppr_children = ""
    if style is not None:
        ppr_children += f'<w:pStyle w:val="{style}"/>'
    if mark_color is not None:
        ppr_children += f'<w:rPr><w:color w:val="{mark_color}"/></w:rPr>'
    ppr = f"<w:pPr>{ppr_children}</w:pPr>" if ppr_children else ""
    return f"<w:p>{ppr}{''.join(runs)}</w:p>"


def style(style_id: str, style_type: str = "character", based_on: Optional[str] = None,
          color: Optional[str] = None, default: bool = False) -> str:
    default_attr = ' w:default="1"' if default else ""
    inner = f'<w:name w:val="{style_id}"/>'
    if based_on is not None:
        inner += f'<w:basedOn w:val="{based_on}"/>'
    if color is not None:
        inner += f'<w:rPr><w:color w:val="{color}"/></w:rPr>'
    return f'<w:style w:type="{style_type}"{default_attr} w:styleId="{style_id}">{inner}</w:style>'
