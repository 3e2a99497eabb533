"""Core processing algorithms for rasterfont.

This module contains the vectorization pipeline and the run orchestrator:

- Mask extraction (alpha plane thresholded into a binary mask)
- Hierarchy tracing (outer boundaries and the holes they enclose)
- Simplification (Douglas-Peucker against a perimeter-relative tolerance)
- Conversion orchestration (vectorize every glyph, then build the font)

Tracing services are stateless and safe for use in worker processes.

Key classes:
- AlphaMaskExtractor: Loads RGBA images into binary masks
- ContourHierarchyTracer: Traces masks into contour forests
- PolygonSimplifier: Reduces contour point counts
- GlyphVectorizer: Runs the pipeline for one glyph
- FontConverter: Main orchestrator
"""

from rasterfont.core.converter import FontConverter, convert_folder
from rasterfont.core.mask import AlphaMaskExtractor, BinaryMask
from rasterfont.core.simplify import PolygonSimplifier, simplification_epsilon
from rasterfont.core.tracer import ContourHierarchyTracer
from rasterfont.core.vectorizer import (
    GlyphVectorizer,
    build_outline,
    space_outline,
    vectorize_glyph,
)

__all__ = [
    # Pipeline classes
    "AlphaMaskExtractor",
    "BinaryMask",
    "ContourHierarchyTracer",
    "GlyphVectorizer",
    "PolygonSimplifier",
    # Orchestration
    "FontConverter",
    "convert_folder",
    # Functions
    "build_outline",
    "simplification_epsilon",
    "space_outline",
    "vectorize_glyph",
]
