"""Color values carried through style and run resolution."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")


class AutoColor(Enum):
    """Sentinel for ``w:val="auto"``: let the consumer pick the default."""

    AUTO = "auto"

    def __repr__(self) -> str:
        return "AUTO"


AUTO = AutoColor.AUTO


@dataclass(frozen=True, slots=True)
class RgbColor:
    """Concrete 24-bit color."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"color channel out of range: {channel}")

    @classmethod
    def from_hex(cls, value: str) -> "RgbColor":
        """Build a color from ``RRGGBB`` (an optional leading ``#`` is accepted)."""
        value = value.strip().lstrip("#")
        if not _HEX_RE.match(value):
            raise ValueError(f"not an RRGGBB color: {value!r}")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    @property
    def hex(self) -> str:
        return f"{self.red:02X}{self.green:02X}{self.blue:02X}"

    def __str__(self) -> str:
        return f"#{self.hex}"


BLACK = RgbColor(0, 0, 0)

ColorValue = Union[RgbColor, AutoColor]


def parse_color_value(value: Optional[str]) -> Optional[ColorValue]:
    """Translate a ``w:color/@w:val`` string; returns None when unusable."""
    if value is None:
        return None
    if value.strip().lower() == "auto":
        return AUTO
    try:
        return RgbColor.from_hex(value)
    except ValueError:
        return None


def first_rgb(*candidates: Optional[ColorValue]) -> Optional[RgbColor]:
    """Return the first explicit RGB color; AUTO and unset never win."""
    for candidate in candidates:
        if isinstance(candidate, RgbColor):
            return candidate
    return None
