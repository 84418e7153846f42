"""DOCX package loader responsible for lazy access to parts and relationships."""
from __future__ import annotations

import io
import zipfile
import zlib
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union
from xml.etree import ElementTree as ET

from docx_extractor.parser.content_types_parser import CONTENT_TYPES_PART, ContentTypes
from docx_extractor.parser.rels_parser import (
    RELTYPE_OFFICE_DOCUMENT,
    RELTYPE_STYLES,
    RELTYPE_THEME,
    Relationship,
    normalize_part_name,
    parse_relationship_part,
    rels_part_for,
)
from docx_extractor.utils.errors import CorruptArchiveError, PartNotFoundError, UnsupportedContentTypeError
from docx_extractor.utils.logger import get_logger
from docx_extractor.utils.xml_utils import parse_xml

LOGGER = get_logger(__name__)

DOCUMENT_XML_PATH = "word/document.xml"
STYLES_XML_PATH = "word/styles.xml"


class DocxPackage:
    """An opened OOXML package with lazily decompressed, cached parts."""

    def __init__(self, archive: zipfile.ZipFile, source: str = "<bytes>") -> None:
        self._archive = archive
        self.source = source
        self._entries: Dict[str, zipfile.ZipInfo] = {}
        for info in archive.infolist():
            if info.is_dir():
                continue
            self._entries[normalize_part_name(info.filename)] = info
        self._raw_cache: Dict[str, bytes] = {}
        self._xml_cache: Dict[str, ET.ElementTree] = {}
        self._rels_cache: Dict[str, Dict[str, Relationship]] = {}
        self._content_types: Optional[ContentTypes] = None

    @classmethod
    def open(cls, data: bytes, source: str = "<bytes>") -> "DocxPackage":
        """Open a package held in memory."""
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError) as exc:
            raise CorruptArchiveError(f"not a readable ZIP archive ({exc})", part=source) from exc
        package = cls(archive, source=source)
        LOGGER.debug("Opened %s with %d parts", source, len(package._entries))
        return package

    @classmethod
    def load(cls, docx_path: Union[str, Path]) -> "DocxPackage":
        """Open a DOCX archive from disk."""
        docx_path = Path(docx_path)
        return cls.open(docx_path.read_bytes(), source=docx_path.name)

    def close(self) -> None:
        self._archive.close()

    def __enter__(self) -> "DocxPackage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Part access
    def part_names(self) -> List[str]:
        """Return the normalized names of every part in archive order."""
        return list(self._entries)

    def has_part(self, name: str) -> bool:
        return normalize_part_name(name) in self._entries

    def read_part(self, name: str) -> bytes:
        """Return the decompressed bytes of a part, caching them."""
        name = normalize_part_name(name)
        if name in self._raw_cache:
            return self._raw_cache[name]
        info = self._entries.get(name)
        if info is None:
            raise PartNotFoundError(name)
        try:
            data = self._archive.read(info)
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError) as exc:
            raise CorruptArchiveError(f"cannot decompress entry ({exc})", part=name) from exc
        except RuntimeError as exc:
            # zipfile signals encrypted entries with RuntimeError.
            raise CorruptArchiveError(f"cannot read entry ({exc})", part=name) from exc
        self._raw_cache[name] = data
        return data

    def get_xml_part(self, name: str) -> ET.ElementTree:
        """Return the parsed tree of a part, caching it."""
        name = normalize_part_name(name)
        if name not in self._xml_cache:
            self._xml_cache[name] = parse_xml(self.read_part(name), part_name=name)
        return self._xml_cache[name]

    # ------------------------------------------------------------------
    # Relationships
    def resolve_relationships(self, part_name: str) -> Dict[str, Relationship]:
        """Return the relationships owned by ``part_name`` keyed by id.

        A missing rels part is not an error: relationships are optional.
        """
        source = normalize_part_name(part_name)
        if source in self._rels_cache:
            return dict(self._rels_cache[source])
        rels_name = rels_part_for(source)
        if not self.has_part(rels_name):
            rels: Dict[str, Relationship] = {}
        else:
            rels = parse_relationship_part(source, self.get_xml_part(rels_name))
        self._rels_cache[source] = rels
        return dict(rels)

    def related_part(self, source_part: str, rel_types: Iterable[str]) -> Optional[str]:
        """Return the first internal target of ``source_part`` with a matching type."""
        wanted = set(rel_types)
        for rel in self.resolve_relationships(source_part).values():
            if rel.rel_type in wanted and not rel.is_external and rel.resolved_target:
                return rel.resolved_target
        return None

    # ------------------------------------------------------------------
    # Well-known parts
    def content_types(self) -> Optional[ContentTypes]:
        if self._content_types is None and self.has_part(CONTENT_TYPES_PART):
            self._content_types = ContentTypes.from_xml(self.get_xml_part(CONTENT_TYPES_PART))
        return self._content_types

    def main_document_part(self) -> str:
        """Locate the main document through the package relationships."""
        target = self.related_part("", RELTYPE_OFFICE_DOCUMENT)
        if target is None:
            LOGGER.debug("No officeDocument relationship; assuming %s", DOCUMENT_XML_PATH)
            return DOCUMENT_XML_PATH
        return target

    def styles_part(self, document_part: Optional[str] = None) -> Optional[str]:
        document_part = document_part or self.main_document_part()
        target = self.related_part(document_part, RELTYPE_STYLES)
        if target is None and self.has_part(STYLES_XML_PATH):
            return STYLES_XML_PATH
        return target

    def theme_part(self, document_part: Optional[str] = None) -> Optional[str]:
        document_part = document_part or self.main_document_part()
        return self.related_part(document_part, RELTYPE_THEME)

    def ensure_wordprocessing(self, part_name: str) -> None:
        """Reject packages whose main part is declared as another vocabulary."""
        content_types = self.content_types()
        if content_types is None:
            LOGGER.warning("%s has no %s; skipping content type check", self.source, CONTENT_TYPES_PART)
            return
        if content_types.is_wordprocessing_main(part_name) is False:
            raise UnsupportedContentTypeError(part_name, content_types.content_type_of(part_name) or "")
