"""File I/O layer for rasterfont.

Key responsibilities:
- Discover glyph images in an input directory
- Write vectorized glyphs as SVG documents

Key classes:
- GlyphSource / GlyphInventory: Recognized glyph images
- SvgPathEmitter: Writes SVG documents
"""

from rasterfont.io.scanner import (
    GlyphInventory,
    GlyphSource,
    find_glyph_images,
    take_inventory,
)
from rasterfont.io.svg import SvgPathEmitter, path_data

__all__ = [
    "GlyphInventory",
    "GlyphSource",
    "SvgPathEmitter",
    "find_glyph_images",
    "path_data",
    "take_inventory",
]
