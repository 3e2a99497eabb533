"""Glyph image to SVG vectorization.

Combines mask extraction, hierarchy tracing, simplification and SVG
emission for one glyph. vectorize_glyph is the picklable entry point used by
worker processes; it takes and returns plain dictionaries.
"""

import time
import traceback
from pathlib import Path
from typing import Any

import structlog

from rasterfont.config import VectorizeConfig
from rasterfont.core.mask import AlphaMaskExtractor, canvas_size
from rasterfont.core.simplify import PolygonSimplifier
from rasterfont.core.tracer import ContourHierarchyTracer
from rasterfont.domain import ContourForest, GlyphOutline, OutlinePart
from rasterfont.exceptions import FormatError
from rasterfont.io.svg import SvgPathEmitter
from rasterfont.naming import SPACE_GLYPH, resolve_codepoint

logger = structlog.get_logger("rasterfont.vectorizer")


def build_outline(
    name: str,
    forest: ContourForest,
    simplifier: PolygonSimplifier,
    width: int,
    height: int,
) -> GlyphOutline:
    """Simplify a contour forest into a glyph outline.

    Only one level of nesting is used: roots become outer contours and their
    direct children become holes. Contours nested deeper are left out.
    Degenerate contours (under 3 points after simplification) are dropped;
    a hole whose outer is dropped goes with it.

    Args:
        name: Glyph name
        forest: Traced contours
        simplifier: Simplifier configured with the run's factor
        width: Canvas width
        height: Canvas height

    Returns:
        GlyphOutline with one part per surviving outer contour
    """
    parts: list[OutlinePart] = []
    for root in forest.roots():
        outer = simplifier.simplify(forest[root])
        if outer is None:
            continue
        holes = []
        for child in forest.children(root):
            hole = simplifier.simplify(forest[child])
            if hole is not None:
                holes.append(hole)
        parts.append(OutlinePart(outer=outer, holes=holes))

    nested = forest.nested_count()
    if nested:
        logger.info("Ignoring contours nested inside holes", glyph=name, nested=nested)

    return GlyphOutline(
        name=name,
        codepoint=resolve_codepoint(name),
        parts=parts,
        width=width,
        height=height,
    )


def space_outline(width: int, height: int) -> GlyphOutline:
    """The space glyph: no contours, advance width half the canvas width."""
    return GlyphOutline(
        name=SPACE_GLYPH,
        codepoint=resolve_codepoint(SPACE_GLYPH),
        parts=[],
        width=width,
        height=height,
        advance_width=width // 2,
    )


class GlyphVectorizer:
    """Turns one glyph image into an SVG document.

    Stateless apart from configuration; safe to use in worker processes.

    Example:
        vectorizer = GlyphVectorizer(VectorizeConfig(simplification=0.002))
        outline = vectorizer.convert("upper_A", Path("upper_A.png"), Path("upper_A.svg"))
    """

    def __init__(self, config: VectorizeConfig | None = None) -> None:
        self.config = config or VectorizeConfig()
        self.extractor = AlphaMaskExtractor(threshold=self.config.alpha_threshold)
        self.tracer = ContourHierarchyTracer()
        self.simplifier = PolygonSimplifier(self.config.simplification)
        self.emitter = SvgPathEmitter()

    def trace(self, image_path: Path) -> tuple[ContourForest, int, int]:
        """Extract and trace an image.

        Returns:
            (forest, width, height)

        Raises:
            FormatError: If the image is unreadable or has no alpha channel
        """
        mask = self.extractor.extract(image_path)
        forest = self.tracer.trace(mask)
        return forest, mask.width, mask.height

    def vectorize(self, name: str, image_path: Path | None, fallback_size: int = 1000) -> GlyphOutline:
        """Vectorize a glyph image into an outline.

        The space glyph is never traced. Its canvas comes from the image when
        one is readable, else a square of fallback_size.

        Raises:
            FormatError: If a non-space image is unreadable or has no alpha channel
        """
        if name == SPACE_GLYPH:
            width = height = fallback_size
            if image_path is not None:
                try:
                    width, height = canvas_size(image_path)
                except FormatError as e:
                    logger.warning("Space image unreadable, using default canvas", reason=e.reason)
            return space_outline(width, height)

        if image_path is None:
            raise FormatError(name, "no image for glyph")

        forest, width, height = self.trace(image_path)
        return build_outline(name, forest, self.simplifier, width, height)

    def convert(
        self,
        name: str,
        image_path: Path | None,
        svg_path: Path,
        fallback_size: int = 1000,
    ) -> GlyphOutline:
        """Vectorize a glyph and write its SVG document.

        Glyphs that trace to nothing are returned without writing a file.
        """
        outline = self.vectorize(name, image_path, fallback_size=fallback_size)
        if outline.is_empty() and name != SPACE_GLYPH:
            return outline
        self.emitter.write(outline, svg_path)
        return outline


def vectorize_glyph(
    name: str,
    image_path: str | None,
    svg_path: str,
    config_dict: dict[str, Any],
    fallback_size: int = 1000,
) -> dict[str, Any]:
    """Vectorize a single glyph.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        name: Glyph name
        image_path: Source PNG (None for a space glyph without an image)
        svg_path: Destination SVG
        config_dict: Serialized VectorizeConfig
        fallback_size: Canvas size for a space glyph without an image

    Returns:
        Dictionary containing either:
        - Success: {"glyph", "svg_path" (None if nothing traced), "parts", "holes", "duration_ms"}
        - Error: {"error", "error_type", "glyph", "traceback", "duration_ms"}
    """
    start_time = time.time()

    try:
        vectorizer = GlyphVectorizer(VectorizeConfig(**config_dict))
        outline = vectorizer.convert(
            name,
            Path(image_path) if image_path is not None else None,
            Path(svg_path),
            fallback_size=fallback_size,
        )
        written = not outline.is_empty() or name == SPACE_GLYPH

        return {
            "glyph": name,
            "svg_path": svg_path if written else None,
            "parts": len(outline.parts),
            "holes": outline.hole_count,
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "glyph": name,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }
