"""Contour hierarchy tracing for binary glyph masks.

Traces every boundary in a mask, both the outside of ink regions and the
holes inside them, and records how they nest. OpenCV's tree retrieval mode
already reports the hierarchy as index links into a flat list, which maps
one-to-one onto ContourForest.
"""

import cv2
import numpy as np
import structlog

from rasterfont.core.mask import BinaryMask
from rasterfont.domain import Contour, ContourForest

logger = structlog.get_logger("rasterfont.tracer")

# Column order of an OpenCV hierarchy row.
_NEXT, _PREVIOUS, _FIRST_CHILD, _PARENT = range(4)


class ContourHierarchyTracer:
    """Traces a binary mask into a contour forest.

    The mask is padded with one background pixel on every side so ink that
    touches the canvas edge still gets a closed outer boundary; coordinates
    are shifted back so they match the unpadded canvas.

    Tracing is deterministic: identical masks give identical forests.
    """

    def __init__(self, approximation: int = cv2.CHAIN_APPROX_TC89_KCOS) -> None:
        self.approximation = approximation

    def trace(self, mask: BinaryMask) -> ContourForest:
        """Trace all boundaries in the mask.

        Args:
            mask: Binary glyph mask

        Returns:
            ContourForest; empty when the mask has no foreground
        """
        if not mask.has_foreground():
            logger.debug("Mask has no foreground", width=mask.width, height=mask.height)
            return ContourForest()

        padded = cv2.copyMakeBorder(
            mask.to_uint8(), 1, 1, 1, 1, cv2.BORDER_CONSTANT, value=0
        )
        raw_contours, hierarchy = cv2.findContours(
            padded, cv2.RETR_TREE, self.approximation, offset=(-1, -1)
        )

        if hierarchy is None or len(raw_contours) == 0:
            return ContourForest()

        links = np.asarray(hierarchy).reshape(-1, 4)
        contours = [
            Contour.from_array(
                raw,
                parent=int(links[i, _PARENT]),
                first_child=int(links[i, _FIRST_CHILD]),
                next_sibling=int(links[i, _NEXT]),
            )
            for i, raw in enumerate(raw_contours)
        ]

        forest = ContourForest(contours=contours)
        logger.debug(
            "Traced contours",
            total=len(forest),
            outer=len(forest.roots()),
            nested=forest.nested_count(),
        )
        return forest
