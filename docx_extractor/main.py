"""Entry-point for the docx text and color extraction pipeline."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Union

from docx_extractor.config import DEFAULT_SETTINGS, ExtractorSettings
from docx_extractor.model.document_model import DocumentModel
from docx_extractor.model.style_model import StyleTable
from docx_extractor.parser.docx_loader import DocxPackage
from docx_extractor.parser.document_parser import DocumentWalker
from docx_extractor.parser.styles_parser import build_style_table
from docx_extractor.parser.theme_parser import ThemeColors, ThemeParser
from docx_extractor.utils.debug import DebugDumper
from docx_extractor.utils.errors import DocxExtractionError, MalformedXmlError, PartNotFoundError
from docx_extractor.utils.logger import get_logger, set_verbose

LOGGER = get_logger(__name__)


def load_theme(
    package: DocxPackage, document_part: str, settings: ExtractorSettings = DEFAULT_SETTINGS
) -> Optional[ThemeColors]:
    """Parse the theme color scheme; a missing or broken theme is tolerated."""
    if not settings.resolve_theme_colors:
        return None
    theme_part = package.theme_part(document_part)
    if theme_part is None:
        return None
    try:
        return ThemeParser(package.get_xml_part(theme_part)).parse()
    except (PartNotFoundError, MalformedXmlError) as exc:
        LOGGER.warning("Ignoring theme (%s: %s)", exc.kind, exc)
        return None


def load_style_table(
    package: DocxPackage,
    document_part: str,
    theme: Optional[ThemeColors] = None,
    settings: ExtractorSettings = DEFAULT_SETTINGS,
) -> StyleTable:
    """Build the style table; a missing or broken styles part means no styles."""
    styles_part = package.styles_part(document_part)
    if styles_part is None:
        LOGGER.warning("%s has no styles part; using the default color only", package.source)
        return StyleTable.empty()
    try:
        styles_xml = package.get_xml_part(styles_part)
    except (PartNotFoundError, MalformedXmlError) as exc:
        LOGGER.warning("Continuing without styles (%s: %s)", exc.kind, exc)
        return StyleTable.empty()
    return build_style_table(styles_xml, theme, settings)


def extract_package(package: DocxPackage, settings: ExtractorSettings = DEFAULT_SETTINGS) -> DocumentModel:
    """Run the full pipeline over an opened package."""
    document_part = package.main_document_part()
    package.ensure_wordprocessing(document_part)
    document_xml = package.get_xml_part(document_part)

    theme = load_theme(package, document_part, settings)
    # The walker only starts once the style table is complete.
    styles = load_style_table(package, document_part, theme, settings)
    model = DocumentWalker(styles, settings, theme).walk(document_xml)
    model.metadata.update(source=package.source, document_part=document_part, style_count=len(styles))
    LOGGER.info("Extracted %d records from %s", len(model.records), package.source)
    return model


def extract_document(
    data: bytes, settings: ExtractorSettings = DEFAULT_SETTINGS, source: str = "<bytes>"
) -> DocumentModel:
    """Extract the document model from in-memory package bytes."""
    with DocxPackage.open(data, source=source) as package:
        return extract_package(package, settings)


def build_document_model(
    docx_path: Union[str, Path], settings: ExtractorSettings = DEFAULT_SETTINGS
) -> DocumentModel:
    """Load a DOCX package from disk and build the document model."""
    with DocxPackage.load(docx_path) as package:
        return extract_package(package, settings)


def format_record_lines(model: DocumentModel) -> List[str]:
    """One ``#RRGGBB<TAB>"text"`` line per record."""
    return [
        f"{record.color}\t{json.dumps(record.text, ensure_ascii=False)}"
        for record in model.records
    ]


def main(argv: Optional[List[str]] = None) -> int:
    """Command line front end; returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="docx-extractor", description="Print the text runs of a .docx file with their font colors"
    )
    parser.add_argument("docx_file", help="Path to the input .docx file, e.g. demo.docx")
    parser.add_argument("-v", "--verbose", action="store_true", help="List archive entries and log debug details")
    parser.add_argument("--json", dest="json_dir", help="Directory to write a JSON dump of the model")
    parser.add_argument(
        "--max-style-depth",
        type=int,
        default=DEFAULT_SETTINGS.max_style_depth,
        help="Longest basedOn chain followed before a style is treated as cyclic",
    )
    args = parser.parse_args(argv)
    if args.max_style_depth < 1:
        parser.error("--max-style-depth must be at least 1")
    set_verbose(args.verbose)

    docx_path = Path(args.docx_file)
    if not docx_path.is_file():
        LOGGER.error("DOCX file not found: %s", docx_path)
        return 2

    settings = ExtractorSettings(max_style_depth=args.max_style_depth)
    try:
        with DocxPackage.load(docx_path) as package:
            if args.verbose:
                for name in package.part_names():
                    print(f"filename: {name}")
            model = extract_package(package, settings)
    except DocxExtractionError as exc:
        LOGGER.error("%s: %s", exc.kind, exc)
        return 1

    for line in format_record_lines(model):
        print(line)
    if args.json_dir:
        target = DebugDumper(Path(args.json_dir)).dump(model)
        LOGGER.info("Wrote %s", target)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
