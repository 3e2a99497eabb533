"""rasterfont - Build fonts from transparent PNG glyph images.

rasterfont traces the alpha channel of one PNG per glyph into SVG outlines
(outer boundaries and their holes), then drives FontForge to assemble the
outlines into a TrueType font while streaming progress.

Example:
    $ rasterfont build ./glyphs --name "My Hand"

This will write ./glyphs/converted/*.svg and ./glyphs/My_Hand.ttf.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
