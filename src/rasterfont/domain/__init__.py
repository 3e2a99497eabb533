"""Domain models for rasterfont.

This module contains the core domain models representing traced contours,
glyph outlines, and the font build. Models are designed to be:

- Serializable for inter-process communication (glyph tracing runs in workers)
- Independent of OpenCV and FontForge details

Key classes:
- Point: An integer pixel position
- Contour: A closed traced boundary with hierarchy links
- ContourForest: Arena of contours linked by index
- OutlinePart / GlyphOutline: A vectorized glyph
- FontBuildJob / ProgressEvent / BuildResult: The build phase
"""

from rasterfont.domain.build import BuildResult, BuildState, FontBuildJob, ProgressEvent
from rasterfont.domain.contour import (
    NO_INDEX,
    Contour,
    ContourForest,
    Point,
    WindingDirection,
)
from rasterfont.domain.glyph import GlyphOutline, OutlinePart

__all__: list[str] = [
    "NO_INDEX",
    # Enums
    "BuildState",
    "WindingDirection",
    # Core types
    "Point",
    "Contour",
    "ContourForest",
    "OutlinePart",
    "GlyphOutline",
    "FontBuildJob",
    "ProgressEvent",
    "BuildResult",
]
