"""Core geometric types for traced contours.

This module defines the fundamental geometric types used throughout rasterfont:
- Point: An integer pixel position
- Contour: A closed boundary with its place in the contour forest
- ContourForest: Flat arena of contours linked by integer indices
- WindingDirection: Enum for contour winding direction

All coordinates are image coordinates: x grows to the right, y grows downward.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

import numpy as np

NO_INDEX = -1


class WindingDirection(Enum):
    """Contour winding direction as seen on screen (y pointing down).

    Outer contours are emitted clockwise and holes counter-clockwise so that
    a nonzero fill rule renders holes correctly.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A pixel position on the glyph canvas.

    Attributes:
        x: Column, from the left edge
        y: Row, from the top edge
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass
class Contour:
    """A closed boundary traced from a binary mask.

    The hierarchy indices point into the owning ContourForest. A contour
    without a parent is an outer boundary; a contour with a parent is a hole
    in that parent.

    Attributes:
        points: Ordered boundary points; the last point connects to the first
        parent: Index of the enclosing contour, or -1
        first_child: Index of the first enclosed contour, or -1
        next_sibling: Index of the next contour with the same parent, or -1
    """

    points: list[Point]
    parent: int = NO_INDEX
    first_child: int = NO_INDEX
    next_sibling: int = NO_INDEX
    _cached_area: float | None = field(default=None, repr=False, init=False, compare=False)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_outer(self) -> bool:
        """True when this contour has no enclosing contour."""
        return self.parent == NO_INDEX

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        In image coordinates a positive area means clockwise on screen.
        Result is cached.

        Returns:
            Signed area in square pixels
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    @property
    def direction(self) -> WindingDirection:
        """Winding direction derived from the signed area."""
        if self.signed_area() >= 0:
            return WindingDirection.CLOCKWISE
        return WindingDirection.COUNTER_CLOCKWISE

    def perimeter(self) -> float:
        """Length of the closed loop: sum of Euclidean edge lengths."""
        if len(self.points) < 2:
            return 0.0
        xy = self.to_array().reshape(-1, 2).astype(np.float64)
        edges = np.roll(xy, -1, axis=0) - xy
        return float(np.hypot(edges[:, 0], edges[:, 1]).sum())

    def oriented(self, direction: WindingDirection) -> "Contour":
        """Return a copy wound in the requested direction.

        The first point is kept so emitted paths start where tracing started.
        """
        if self.direction == direction or len(self.points) < 3:
            points = list(self.points)
        else:
            points = [self.points[0], *reversed(self.points[1:])]
        return Contour(
            points=points,
            parent=self.parent,
            first_child=self.first_child,
            next_sibling=self.next_sibling,
        )

    def to_array(self) -> np.ndarray:
        """Points as an OpenCV-style (N, 1, 2) int32 array."""
        return np.array([p.to_tuple() for p in self.points], dtype=np.int32).reshape(-1, 1, 2)

    @classmethod
    def from_array(cls, array: np.ndarray, **links: int) -> "Contour":
        """Build a contour from an OpenCV point array of shape (N, 1, 2) or (N, 2)."""
        flat = np.asarray(array).reshape(-1, 2)
        points = [Point(int(x), int(y)) for x, y in flat]
        return cls(points=points, **links)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "points": [p.to_tuple() for p in self.points],
            "parent": self.parent,
            "first_child": self.first_child,
            "next_sibling": self.next_sibling,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary."""
        return cls(
            points=[Point(int(x), int(y)) for x, y in data["points"]],
            parent=data.get("parent", NO_INDEX),
            first_child=data.get("first_child", NO_INDEX),
            next_sibling=data.get("next_sibling", NO_INDEX),
        )


@dataclass
class ContourForest:
    """Arena of contours linked by parent/child/sibling indices.

    Roots are outer boundaries. Their direct children are holes. Deeper
    descendants (islands inside holes) are recorded but not treated as
    either.

    Attributes:
        contours: Flat contour collection in tracing order
    """

    contours: list[Contour] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.contours)

    def __getitem__(self, index: int) -> Contour:
        return self.contours[index]

    def is_empty(self) -> bool:
        """True when no contours were traced."""
        return not self.contours

    def is_outer(self, index: int) -> bool:
        """True when the contour at index has no parent."""
        return self.contours[index].is_outer

    def roots(self) -> list[int]:
        """Indices of outer contours, in tracing order."""
        return [i for i, c in enumerate(self.contours) if c.parent == NO_INDEX]

    def children(self, index: int) -> Iterator[int]:
        """Iterate direct children of a contour by walking the sibling chain."""
        child = self.contours[index].first_child
        while child != NO_INDEX:
            yield child
            child = self.contours[child].next_sibling

    def depth(self, index: int) -> int:
        """Nesting depth: 0 for outer contours, 1 for holes, and so on."""
        depth = 0
        parent = self.contours[index].parent
        while parent != NO_INDEX:
            depth += 1
            parent = self.contours[parent].parent
        return depth

    def nested_count(self) -> int:
        """Number of contours nested deeper than one level (ignored when emitting)."""
        return sum(1 for i in range(len(self.contours)) if self.depth(i) > 1)
