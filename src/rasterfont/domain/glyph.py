"""Glyph outline representation.

This module defines the vectorized glyph model: the outer contours of a
traced glyph image, each paired with the holes it directly encloses.
"""

from dataclasses import dataclass, field
from typing import Any

from rasterfont.domain.contour import Contour


@dataclass
class OutlinePart:
    """One filled region: an outer contour and its direct holes.

    Attributes:
        outer: Outer boundary
        holes: Holes directly enclosed by the outer boundary
    """

    outer: Contour
    holes: list[Contour] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "outer": self.outer.to_dict(),
            "holes": [h.to_dict() for h in self.holes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OutlinePart":
        return cls(
            outer=Contour.from_dict(data["outer"]),
            holes=[Contour.from_dict(h) for h in data["holes"]],
        )


@dataclass
class GlyphOutline:
    """A vectorized glyph ready to be written as an SVG document.

    Attributes:
        name: Glyph base name (e.g., "upper_A", "7", "hyphen")
        codepoint: Resolved Unicode code point (None if unresolvable)
        parts: Outer contours with their holes, in tracing order
        width: Canvas width in pixels (source image width)
        height: Canvas height in pixels (source image height)
        advance_width: Explicit advance width (set for the space glyph only)
    """

    name: str
    codepoint: int | None
    parts: list[OutlinePart]
    width: int
    height: int
    advance_width: int | None = None

    def is_empty(self) -> bool:
        """Check if glyph has no outlines.

        Returns:
            True if glyph has no parts, False otherwise
        """
        return len(self.parts) == 0

    @property
    def hole_count(self) -> int:
        """Total number of holes across all parts."""
        return sum(len(part.holes) for part in self.parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "name": self.name,
            "codepoint": self.codepoint,
            "parts": [p.to_dict() for p in self.parts],
            "width": self.width,
            "height": self.height,
            "advance_width": self.advance_width,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphOutline":
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            codepoint=data["codepoint"],
            parts=[OutlinePart.from_dict(p) for p in data["parts"]],
            width=data["width"],
            height=data["height"],
            advance_width=data.get("advance_width"),
        )
