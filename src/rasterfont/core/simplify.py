"""Polygon simplification for traced contours.

Each contour is reduced with the Douglas-Peucker algorithm against a
tolerance proportional to its own perimeter, so small holes are simplified
as gently (relative to their size) as large outer boundaries.
"""

import cv2

from rasterfont.domain import Contour

MIN_POLYGON_POINTS = 3


def simplification_epsilon(contour: Contour, factor: float) -> float:
    """Tolerance for a contour: factor times its closed perimeter."""
    return factor * contour.perimeter()


class PolygonSimplifier:
    """Reduces contour point counts within a perimeter-relative tolerance.

    Attributes:
        factor: Fraction of the perimeter used as Douglas-Peucker epsilon
    """

    def __init__(self, factor: float) -> None:
        if not 0.0 <= factor <= 1.0:
            raise ValueError(f"simplification factor must be within [0, 1], got {factor}")
        self.factor = factor

    def simplify(self, contour: Contour) -> Contour | None:
        """Simplify one closed contour.

        Hierarchy links are carried over unchanged.

        Args:
            contour: Contour to reduce

        Returns:
            Simplified contour, or None if fewer than 3 points remain
        """
        if len(contour) < MIN_POLYGON_POINTS:
            return None

        epsilon = simplification_epsilon(contour, self.factor)
        approx = cv2.approxPolyDP(contour.to_array(), epsilon, True)

        simplified = Contour.from_array(
            approx,
            parent=contour.parent,
            first_child=contour.first_child,
            next_sibling=contour.next_sibling,
        )
        if len(simplified) < MIN_POLYGON_POINTS:
            return None
        return simplified
