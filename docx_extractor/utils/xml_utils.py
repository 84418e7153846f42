"""Helper functions to work with XML namespaces and parsing."""
from __future__ import annotations

import codecs
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from xml.etree import ElementTree as ET

from docx_extractor.utils.errors import MalformedXmlError


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across parsers."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]
    CONTENT_TYPES: Dict[str, str] = None  # type: ignore[assignment]
    DRAWING: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {  # type: ignore[attr-defined]
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
}
Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}
Namespaces.CONTENT_TYPES = {  # type: ignore[attr-defined]
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
}
Namespaces.DRAWING = {  # type: ignore[attr-defined]
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
}

_ALL_PREFIXES: Dict[str, str] = {
    **Namespaces.WORD,
    **Namespaces.RELS,
    **Namespaces.CONTENT_TYPES,
    **Namespaces.DRAWING,
}

# The UTF-32 LE BOM starts with the UTF-16 LE one, so it is checked first.
_BOMS: Tuple[Tuple[bytes, str], ...] = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

_PROLOG_RE = re.compile(rb"^\s*<\?xml[^>]*?encoding\s*=\s*[\"']([A-Za-z][A-Za-z0-9._-]*)[\"']")
_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>")


def qn(name: str) -> str:
    """Expand a ``prefix:local`` name into ElementTree's ``{uri}local`` form."""
    prefix, local = name.split(":", 1)
    return f"{{{_ALL_PREFIXES[prefix]}}}{local}"


def local_name(tag: str) -> str:
    """Return the local part of a namespace-qualified tag."""
    return tag.split("}", 1)[-1]


def get_attr(element: Optional[ET.Element], name: str) -> Optional[str]:
    """Return an attribute, qualifying ``prefix:local`` names first."""
    if element is None:
        return None
    key = qn(name) if ":" in name else name
    return element.attrib.get(key)


def child_attr(element: Optional[ET.Element], child_name: str, attr_name: str = "w:val") -> Optional[str]:
    """Return ``attr_name`` of the first ``child_name`` child, if any."""
    if element is None:
        return None
    return get_attr(element.find(child_name, Namespaces.WORD), attr_name)


def detect_encoding(data: bytes) -> Tuple[str, int]:
    """Return the encoding of an XML byte stream and the length of its BOM.

    Byte-order marks win, then the BOM-less UTF-16 ``<?`` pattern, then the
    ``encoding`` pseudo-attribute of the prolog. UTF-8 is the default.
    """
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return encoding, len(bom)
    if data.startswith(b"<\x00?\x00"):
        return "utf-16-le", 0
    if data.startswith(b"\x00<\x00?"):
        return "utf-16-be", 0
    match = _PROLOG_RE.match(data[:256])
    if match:
        return match.group(1).decode("ascii").lower(), 0
    return "utf-8", 0


def parse_xml(data: bytes, part_name: Optional[str] = None) -> ET.ElementTree:
    """Parse XML from raw bytes, honouring the declared or detected encoding."""
    encoding, bom_length = detect_encoding(data)
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise MalformedXmlError(f"unknown encoding declaration {encoding!r}", part=part_name) from exc
    try:
        text = data[bom_length:].decode(encoding)
    except UnicodeDecodeError as exc:
        raise MalformedXmlError(f"invalid {encoding} byte sequence: {exc.reason}", part=part_name) from exc

    # Re-encode as UTF-8 so expat never sees a conflicting declaration.
    text = _DECLARATION_RE.sub("", text.lstrip("\ufeff"), count=1)
    try:
        root = ET.fromstring(text.encode("utf-8"))
    except ET.ParseError as exc:
        raise MalformedXmlError(str(exc), part=part_name) from exc
    return ET.ElementTree(root)
