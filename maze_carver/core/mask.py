import logging
from typing import Iterable, List, Sequence

import cv2
import numpy as np

logger = logging.getLogger(__name__)

class TransparentMask:
    """Lets every coordinate through. Width/height are informational only."""

    def __init__(self, width: int = 0, height: int = 0):
        self.width = width
        self.height = height

    def contains(self, x: int, y: int) -> bool:
        return True

    def __getitem__(self, xy) -> bool:
        return self.contains(*xy)

class BitmapMask:
    """
    Boolean field indexed as rows[y][x].
    Width is the longest row; anything past the end of a shorter row, or
    outside the field entirely, is blocked.
    """

    PASSABLE_CHAR = "."

    def __init__(self, rows: Iterable[Sequence[bool]]):
        self.rows: List[List[bool]] = [[bool(v) for v in row] for row in rows]
        self.height = len(self.rows)
        self.width = max((len(row) for row in self.rows), default=0)

    @classmethod
    def from_text(cls, text: str) -> "BitmapMask":
        # Blank rows at either end are dropped; leading spaces stay as blocked columns
        lines = [line.rstrip() for line in text.split("\n")]
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        return cls([[c == cls.PASSABLE_CHAR for c in line] for line in lines])

    @classmethod
    def from_pixels(cls, pixels) -> "BitmapMask":
        """
        pixels: row-major 2D sequence (or numpy array) of integer pixel values.
        A pixel is passable when its low byte is zero (RGBA -> fully transparent).
        """
        return cls([[(int(v) & 0xFF) == 0 for v in row] for row in pixels])

    @classmethod
    def from_image_file(cls, path: str) -> "BitmapMask":
        image = cv2.imread(path, cv2.IMREAD_UNCHANGED)
        if image is None:
            raise ValueError(f"Could not read mask image: {path}")

        logger.debug(f"Loaded mask image {path} with shape {image.shape}")
        return cls.from_pixels(pack_rgba(image))

    def contains(self, x: int, y: int) -> bool:
        # Negative indices would wrap on a list, so check explicitly
        if x < 0 or y < 0 or y >= self.height:
            return False
        row = self.rows[y]
        return x < len(row) and row[x]

    def __getitem__(self, xy) -> bool:
        return self.contains(*xy)

    def passable_count(self) -> int:
        return sum(sum(row) for row in self.rows)

def pack_rgba(image: np.ndarray) -> np.ndarray:
    """
    Converts a cv2 image (gray, BGR or BGRA) to one uint32 per pixel laid out
    as 0xRRGGBBAA. Images without alpha are treated as opaque.
    """
    if image.dtype != np.uint8:
        # 16-bit PNGs: keep the high byte of each channel
        image = (image >> 8).astype(np.uint8)

    if image.ndim == 2:
        image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGRA)
    elif image.shape[2] == 3:
        image = cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)

    b = image[:, :, 0].astype(np.uint32)
    g = image[:, :, 1].astype(np.uint32)
    r = image[:, :, 2].astype(np.uint32)
    a = image[:, :, 3].astype(np.uint32)
    return (r << 24) | (g << 16) | (b << 8) | a
