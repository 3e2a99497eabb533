"""SVG document emission for vectorized glyphs.

Each glyph becomes one SVG document. Every outer contour is one ``<path>``
whose data holds the outer boundary followed by one closed subpath per
direct hole. Outer boundaries are wound clockwise and holes
counter-clockwise, and every path declares ``fill-rule="nonzero"``, so holes
render as holes regardless of the consumer's default fill rule.
"""

import xml.etree.ElementTree as ET
from pathlib import Path

from fontTools.pens.svgPathPen import SVGPathPen

from rasterfont.domain import Contour, GlyphOutline, OutlinePart, WindingDirection

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
FILL_RULE = "nonzero"

ET.register_namespace("", SVG_NAMESPACE)


def _draw_contour(pen: SVGPathPen, contour: Contour, direction: WindingDirection) -> None:
    points = contour.oriented(direction).points
    pen.moveTo(points[0].to_tuple())
    for point in points[1:]:
        pen.lineTo(point.to_tuple())
    pen.closePath()


def path_data(part: OutlinePart) -> str:
    """SVG path data for one outer contour and its holes.

    Args:
        part: Outer contour with its direct holes

    Returns:
        Path data string, e.g. "M1 1H9V9H1ZM3 3V7H7V3Z"
    """
    pen = SVGPathPen(None, ntos=str)
    _draw_contour(pen, part.outer, WindingDirection.CLOCKWISE)
    for hole in part.holes:
        _draw_contour(pen, hole, WindingDirection.COUNTER_CLOCKWISE)
    return pen.getCommands()


class SvgPathEmitter:
    """Writes glyph outlines as standalone SVG documents.

    Example:
        emitter = SvgPathEmitter()
        emitter.write(outline, Path("converted/upper_A.svg"))
    """

    def __init__(self, fill: str = "black") -> None:
        self.fill = fill

    def build(self, outline: GlyphOutline) -> ET.Element:
        """Build the SVG element tree for an outline."""
        width = outline.advance_width if outline.advance_width is not None else outline.width
        root = ET.Element(
            f"{{{SVG_NAMESPACE}}}svg",
            {
                "width": str(width),
                "height": str(outline.height),
                "viewBox": f"0 0 {width} {outline.height}",
            },
        )
        group = ET.SubElement(root, f"{{{SVG_NAMESPACE}}}g")
        for part in outline.parts:
            ET.SubElement(
                group,
                f"{{{SVG_NAMESPACE}}}path",
                {"d": path_data(part), "fill": self.fill, "fill-rule": FILL_RULE},
            )
        return root

    def render(self, outline: GlyphOutline) -> str:
        """Render an outline to SVG text."""
        root = self.build(outline)
        ET.indent(root)
        return ET.tostring(root, encoding="unicode") + "\n"

    def write(self, outline: GlyphOutline, svg_path: Path) -> Path:
        """Render an outline and write it to disk.

        Args:
            outline: Glyph outline to write
            svg_path: Destination file; parent directories are created

        Returns:
            The written path
        """
        svg_path.parent.mkdir(parents=True, exist_ok=True)
        svg_path.write_text(self.render(outline), encoding="utf-8")
        return svg_path
