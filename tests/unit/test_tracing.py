"""Tests for mask extraction, contour tracing and simplification."""

from pathlib import Path

import numpy as np
import pytest

from conftest import ink, ring_image, rgba_canvas, square_image, write_png
from rasterfont.core import (
    AlphaMaskExtractor,
    BinaryMask,
    ContourHierarchyTracer,
    PolygonSimplifier,
)
from rasterfont.domain import NO_INDEX, Contour, Point
from rasterfont.exceptions import FormatError


def trace(image: np.ndarray):
    mask = AlphaMaskExtractor().from_array(image)
    return ContourHierarchyTracer().trace(mask)


class TestAlphaMaskExtractor:
    """Tests for AlphaMaskExtractor."""

    def test_threshold(self) -> None:
        """Test alpha at or above the threshold is foreground."""
        image = rgba_canvas(4)
        image[0, 0, 3] = 127
        image[0, 1, 3] = 128
        image[0, 2, 3] = 255

        mask = AlphaMaskExtractor(threshold=128).from_array(image)

        assert mask.data[0].tolist() == [False, True, True, False]
        assert mask.width == 4
        assert mask.height == 4

    def test_color_is_ignored(self) -> None:
        """Test only the alpha plane decides foreground."""
        image = rgba_canvas(2)
        image[:, :, :3] = 255

        assert not AlphaMaskExtractor().from_array(image).has_foreground()

    def test_sixteen_bit_alpha(self) -> None:
        """Test 16-bit images are thresholded on the high byte."""
        image = np.zeros((2, 2, 4), dtype=np.uint16)
        image[0, 0, 3] = 65535
        image[1, 1, 3] = 0x7FFF

        mask = AlphaMaskExtractor().from_array(image)

        assert mask.data.tolist() == [[True, False], [False, False]]

    def test_rejects_missing_alpha(self) -> None:
        """Test a 3-channel image is a format error."""
        image = np.zeros((4, 4, 3), dtype=np.uint8)

        with pytest.raises(FormatError, match="found 3"):
            AlphaMaskExtractor().from_array(image, source="rgb.png")

    def test_rejects_grayscale(self) -> None:
        with pytest.raises(FormatError, match="found 1"):
            AlphaMaskExtractor().from_array(np.zeros((4, 4), dtype=np.uint8))

    def test_extract_from_file(self, tmp_path: Path) -> None:
        """Test decoding a PNG from disk."""
        path = write_png(tmp_path / "upper_A.png", square_image(20))

        mask = AlphaMaskExtractor().extract(path)

        assert (mask.width, mask.height) == (20, 20)
        assert mask.data[10, 10]
        assert not mask.data[0, 0]

    def test_extract_undecodable(self, tmp_path: Path) -> None:
        """Test a corrupt file is a format error."""
        path = tmp_path / "broken.png"
        path.write_bytes(b"not a png")

        with pytest.raises(FormatError) as exc_info:
            AlphaMaskExtractor().extract(path)

        assert exc_info.value.path == str(path)

    def test_extract_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FormatError):
            AlphaMaskExtractor().extract(tmp_path / "missing.png")


class TestContourHierarchyTracer:
    """Tests for ContourHierarchyTracer."""

    def test_empty_mask(self) -> None:
        """Test a blank mask traces to an empty forest."""
        forest = ContourHierarchyTracer().trace(BinaryMask(np.zeros((10, 10), dtype=bool)))

        assert forest.is_empty()
        assert forest.roots() == []

    def test_filled_square(self) -> None:
        """Test a filled square is one outer contour with no holes."""
        forest = trace(square_image())

        assert len(forest) == 1
        assert forest.roots() == [0]
        assert list(forest.children(0)) == []

    def test_ring(self) -> None:
        """Test a ring is one outer contour with one direct hole."""
        forest = trace(ring_image())

        roots = forest.roots()
        assert len(roots) == 1
        holes = list(forest.children(roots[0]))
        assert len(holes) == 1
        assert forest[holes[0]].parent == roots[0]
        assert forest.depth(holes[0]) == 1
        assert forest.nested_count() == 0

    def test_two_shapes(self) -> None:
        """Test separate ink regions become separate outer contours."""
        image = rgba_canvas(40)
        ink(image, 2, 2, 10, 10)
        ink(image, 20, 20, 30, 30)

        forest = trace(image)

        assert len(forest.roots()) == 2

    def test_island_inside_hole(self) -> None:
        """Test ink inside a hole is nested two levels deep."""
        image = ring_image(60)
        ink(image, 26, 26, 33, 33)

        forest = trace(image)

        assert len(forest.roots()) == 1
        assert forest.nested_count() == 1

    def test_ink_touching_edge(self) -> None:
        """Test ink touching the canvas edge still traces inside the canvas."""
        image = rgba_canvas(10)
        ink(image, 0, 0, 9, 9)

        forest = trace(image)

        assert len(forest.roots()) == 1
        xs = [p.x for p in forest[0].points]
        ys = [p.y for p in forest[0].points]
        assert min(xs) == 0 and max(xs) == 9
        assert min(ys) == 0 and max(ys) == 9

    def test_deterministic(self) -> None:
        """Test identical masks give identical forests."""
        first = trace(ring_image())
        second = trace(ring_image())

        assert [c.to_dict() for c in first.contours] == [c.to_dict() for c in second.contours]


class TestPolygonSimplifier:
    """Tests for PolygonSimplifier."""

    @pytest.mark.parametrize("factor", [-0.1, 1.5])
    def test_rejects_out_of_range(self, factor: float) -> None:
        with pytest.raises(ValueError):
            PolygonSimplifier(factor)

    @pytest.mark.parametrize("factor", [0.0, 0.001, 0.01, 0.05])
    def test_never_adds_points(self, factor: float) -> None:
        """Test simplification never increases the point count."""
        forest = trace(ring_image())
        simplifier = PolygonSimplifier(factor)

        for contour in forest.contours:
            simplified = simplifier.simplify(contour)
            assert simplified is not None
            assert len(simplified) <= len(contour)

    def test_reduces_dense_contour(self) -> None:
        """Test collinear points along straight edges are removed."""
        points = [Point(x, 0) for x in range(0, 50)]
        points += [Point(49, y) for y in range(1, 50)]
        contour = Contour(points=points)

        simplified = PolygonSimplifier(0.001).simplify(contour)

        assert simplified is not None
        assert len(simplified) == 3

    def test_keeps_hierarchy_links(self) -> None:
        contour = Contour(
            points=[Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)],
            parent=2,
            next_sibling=5,
        )

        simplified = PolygonSimplifier(0.001).simplify(contour)

        assert simplified.parent == 2
        assert simplified.next_sibling == 5
        assert simplified.first_child == NO_INDEX

    def test_degenerate_contour_dropped(self) -> None:
        """Test contours with fewer than 3 points are dropped."""
        simplifier = PolygonSimplifier(0.001)

        assert simplifier.simplify(Contour(points=[Point(1, 1)])) is None
        assert simplifier.simplify(Contour(points=[Point(1, 1), Point(5, 1)])) is None

    def test_collapse_to_line_dropped(self) -> None:
        """Test a sliver that collapses below 3 points is dropped."""
        contour = Contour(points=[Point(0, 0), Point(20, 0), Point(40, 1)])

        assert PolygonSimplifier(0.5).simplify(contour) is None
