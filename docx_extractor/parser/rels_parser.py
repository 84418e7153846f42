"""Utilities for reading Open Packaging Convention relationship parts."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from xml.etree import ElementTree as ET

from docx_extractor.utils.logger import get_logger
from docx_extractor.utils.xml_utils import Namespaces

LOGGER = get_logger(__name__)

OFFICE_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
STRICT_OFFICE_REL_NS = "http://purl.oclc.org/ooxml/officeDocument/relationships"

PACKAGE_RELS_PART = "_rels/.rels"


def _both_conformance_classes(name: str) -> Tuple[str, str]:
    return f"{OFFICE_REL_NS}/{name}", f"{STRICT_OFFICE_REL_NS}/{name}"


RELTYPE_OFFICE_DOCUMENT = _both_conformance_classes("officeDocument")
RELTYPE_STYLES = _both_conformance_classes("styles")
RELTYPE_THEME = _both_conformance_classes("theme")


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    source_part: str
    r_id: str
    target: str
    rel_type: str
    is_external: bool = False
    resolved_target: Optional[str] = None


def normalize_part_name(name: str) -> str:
    """Return the archive-relative form of a part name or absolute part URI."""
    name = name.replace("\\", "/").lstrip("/")
    if not name:
        return ""
    return posixpath.normpath(name)


def rels_part_for(part_name: str) -> str:
    """Return the relationship part that belongs to ``part_name``.

    ``word/document.xml`` maps to ``word/_rels/document.xml.rels``; the
    package itself (empty name) maps to ``_rels/.rels``.
    """
    part_name = normalize_part_name(part_name)
    if not part_name:
        return PACKAGE_RELS_PART
    folder, base = posixpath.split(part_name)
    return posixpath.join(folder, "_rels", f"{base}.rels")


def resolve_target(source_part: str, target: str) -> str:
    """Resolve an internal target against the directory of its source part."""
    if target.startswith("/"):
        return normalize_part_name(target)
    base_dir = posixpath.dirname(normalize_part_name(source_part))
    return normalize_part_name(posixpath.join(base_dir, target))


def parse_relationship_part(source_part: str, tree: ET.ElementTree) -> Dict[str, Relationship]:
    """Collect the relationships of ``source_part`` keyed by relationship id."""
    result: Dict[str, Relationship] = {}
    for rel_el in tree.getroot().iter(f"{{{Namespaces.RELS['rel']}}}Relationship"):
        r_id = rel_el.attrib.get("Id")
        if not r_id:
            LOGGER.debug("Skipping relationship without Id in rels of %r", source_part)
            continue
        target = rel_el.attrib.get("Target", "")
        rel_type = rel_el.attrib.get("Type", "")
        is_external = rel_el.attrib.get("TargetMode") == "External"
        resolved = None
        if target:
            resolved = target if is_external else resolve_target(source_part, target)
        if r_id in result:
            LOGGER.debug("Duplicate relationship id %s in rels of %r; keeping the first", r_id, source_part)
            continue
        result[r_id] = Relationship(
            source_part=source_part,
            r_id=r_id,
            target=target,
            rel_type=rel_type,
            is_external=is_external,
            resolved_target=resolved,
        )
    return result
