"""Read ``[Content_Types].xml`` to learn the media type of each part."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx_extractor.parser.rels_parser import normalize_part_name
from docx_extractor.utils.xml_utils import Namespaces

CONTENT_TYPES_PART = "[Content_Types].xml"

WORDPROCESSING_MAIN_TYPES = frozenset(
    {
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.template.main+xml",
        "application/vnd.ms-word.document.macroEnabled.main+xml",
        "application/vnd.ms-word.template.macroEnabledTemplate.main+xml",
    }
)


@dataclass(slots=True)
class ContentTypes:
    """Default (by extension) and override (by part name) content types."""

    defaults: Dict[str, str] = field(default_factory=dict)
    overrides: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_xml(cls, tree: ET.ElementTree) -> "ContentTypes":
        root = tree.getroot()
        ns = Namespaces.CONTENT_TYPES
        defaults = {
            el.attrib["Extension"].lower(): el.attrib.get("ContentType", "")
            for el in root.findall("ct:Default", ns)
            if "Extension" in el.attrib
        }
        overrides = {
            normalize_part_name(el.attrib["PartName"]): el.attrib.get("ContentType", "")
            for el in root.findall("ct:Override", ns)
            if "PartName" in el.attrib
        }
        return cls(defaults=defaults, overrides=overrides)

    def content_type_of(self, part_name: str) -> Optional[str]:
        """Return the declared content type, preferring overrides over defaults."""
        part_name = normalize_part_name(part_name)
        if part_name in self.overrides:
            return self.overrides[part_name]
        extension = posixpath.splitext(part_name)[1].lstrip(".").lower()
        return self.defaults.get(extension)

    def is_wordprocessing_main(self, part_name: str) -> Optional[bool]:
        """True/False when an override declares the part, None otherwise.

        Extension defaults such as ``xml -> application/xml`` say nothing about
        the vocabulary of a part, so only overrides are conclusive.
        """
        content_type = self.overrides.get(normalize_part_name(part_name))
        if content_type is None:
            return None
        return content_type in WORDPROCESSING_MAIN_TYPES
