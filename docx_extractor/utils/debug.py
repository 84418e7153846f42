"""Helpers to persist the extracted model for debugging."""
from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from docx_extractor.model.color_model import RgbColor
from docx_extractor.model.document_model import DocumentModel


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, model: DocumentModel) -> Path:
        """Persist the document model as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / "document_model.json"
        target.write_text(json.dumps(self.serialize(model), indent=2, ensure_ascii=False), encoding="utf-8")
        return target

    def serialize(self, value: Any) -> Any:
        if isinstance(value, RgbColor):
            return str(value)
        if isinstance(value, Enum):
            return value.value
        if is_dataclass(value):
            # Field by field: asdict() would flatten RgbColor into a dict.
            return {f.name: self.serialize(getattr(value, f.name)) for f in fields(value)}
        if isinstance(value, dict):
            return {k: self.serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.serialize(v) for v in value]
        return value
