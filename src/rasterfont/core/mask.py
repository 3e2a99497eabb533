"""Alpha mask extraction from glyph images.

Glyph images must carry an alpha channel. The alpha plane is thresholded
into a binary mask: everything at or above the threshold is ink.
"""

from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np

from rasterfont.exceptions import FormatError

ALPHA_CHANNEL = 3
REQUIRED_CHANNELS = 4


@dataclass
class BinaryMask:
    """Foreground/background grid for one glyph.

    Attributes:
        data: Boolean array of shape (height, width); True is foreground
    """

    data: np.ndarray

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    def has_foreground(self) -> bool:
        return bool(self.data.any())

    def to_uint8(self) -> np.ndarray:
        """Mask as 0/255 bytes, the form OpenCV contour tracing expects."""
        return self.data.astype(np.uint8) * 255


def read_image(path: Path) -> np.ndarray:
    """Decode an image file with all channels intact.

    Reads through numpy so paths with non-ASCII characters work everywhere.

    Raises:
        FormatError: If the file is missing or does not decode
    """
    try:
        raw = np.fromfile(str(path), dtype=np.uint8)
    except OSError as e:
        raise FormatError(str(path), f"cannot read file ({e})") from e

    image = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED) if raw.size else None
    if image is None:
        raise FormatError(str(path), "file is not a decodable image")
    return image


class AlphaMaskExtractor:
    """Turns RGBA glyph images into binary masks.

    The extractor is stateless apart from its threshold and is safe to use
    in worker processes.
    """

    def __init__(self, threshold: int = 128) -> None:
        self.threshold = threshold

    def extract(self, path: Path) -> BinaryMask:
        """Load an image and threshold its alpha plane.

        Args:
            path: PNG file with an alpha channel

        Returns:
            Binary mask with the image's dimensions

        Raises:
            FormatError: If the image does not decode or has no alpha channel
        """
        image = read_image(path)
        return self.from_array(image, source=str(path))

    def from_array(self, image: np.ndarray, source: str = "<array>") -> BinaryMask:
        """Threshold the alpha plane of an already decoded image.

        Raises:
            FormatError: If the image does not have 4 channels
        """
        if image.ndim != 3 or image.shape[2] != REQUIRED_CHANNELS:
            channels = 1 if image.ndim == 2 else image.shape[2]
            raise FormatError(
                source, f"expected {REQUIRED_CHANNELS} channels (RGBA), found {channels}"
            )

        alpha = image[:, :, ALPHA_CHANNEL]
        if alpha.dtype == np.uint16:
            alpha = (alpha >> 8).astype(np.uint8)

        return BinaryMask(data=alpha >= self.threshold)


def canvas_size(path: Path) -> tuple[int, int]:
    """Width and height of an image without validating its channels."""
    image = read_image(path)
    height, width = image.shape[:2]
    return int(width), int(height)
