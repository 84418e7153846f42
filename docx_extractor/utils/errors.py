"""Typed exceptions raised while reading packages, parts and styles."""
from __future__ import annotations

from typing import Optional, Sequence


class DocxExtractionError(Exception):
    """Base class for every failure raised by the extraction pipeline."""

    kind = "extraction error"

    def __init__(self, message: str, part: Optional[str] = None) -> None:
        self.part = part
        if part is not None:
            message = f"{part}: {message}"
        super().__init__(message)


class CorruptArchiveError(DocxExtractionError):
    """Raised when the input is not a readable ZIP container."""

    kind = "corrupt archive"


class PartNotFoundError(DocxExtractionError, KeyError):
    """Raised when no archive entry matches the requested part name."""

    kind = "part not found"

    def __init__(self, part: str) -> None:
        super().__init__("part is missing from the package", part=part)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return Exception.__str__(self)


class MalformedXmlError(DocxExtractionError):
    """Raised when a part cannot be decoded or parsed as XML."""

    kind = "malformed xml"

    def __init__(self, reason: str, part: Optional[str] = None) -> None:
        self.reason = reason
        super().__init__(reason, part=part)


class UnsupportedContentTypeError(DocxExtractionError):
    """Raised when the main part is not a WordprocessingML document."""

    kind = "unsupported content type"

    def __init__(self, part: str, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(f"unsupported content type {content_type!r}", part=part)


class StyleCycleDetectedError(DocxExtractionError):
    """Raised when a basedOn chain loops or exceeds the configured depth."""

    kind = "style cycle"

    def __init__(self, style_id: str, chain: Sequence[str]) -> None:
        self.style_id = style_id
        self.chain = tuple(chain)
        super().__init__(f"style {style_id!r} has a cyclic or too deep basedOn chain: {' -> '.join(self.chain)}")
