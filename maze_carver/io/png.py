import logging
from typing import Any, Dict

import cv2
import numpy as np
from maze_carver.core.grid import Grid

logger = logging.getLogger(__name__)

def rgba_to_bgra(color: int):
    """0xRRGGBBAA -> (B, G, R, A), the channel order cv2 expects."""
    return ((color >> 8) & 0xFF, (color >> 16) & 0xFF, (color >> 24) & 0xFF, color & 0xFF)

class PNGFormatter:
    DEFAULTS = {
        "cell_size": 10,         # Pixels per cell, passages included
        "cell_padding": 2,       # Wall thickness on each side of a cell
        "outer_padding": 2,      # Border around the whole maze
        "background": 0x202020FF,
        "cell_color": 0xFFFFFFFF,
    }

    def __init__(self, grid: Grid, options: Dict[str, Any] = None):
        self.grid = grid
        options = dict(options or {})

        unknown = set(options) - set(self.DEFAULTS)
        if unknown:
            raise ValueError(f"Unknown PNG options: {', '.join(sorted(unknown))}")

        self.options = {**self.DEFAULTS, **options}
        self.cell_size = int(self.options["cell_size"])
        self.cell_padding = int(self.options["cell_padding"])
        self.outer_padding = int(self.options["outer_padding"])

        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.cell_padding < 0 or self.outer_padding < 0:
            raise ValueError("Padding must not be negative")
        if 2 * self.cell_padding >= self.cell_size:
            raise ValueError(
                f"cell_padding {self.cell_padding} leaves no room inside a {self.cell_size}px cell")

    @property
    def image_size(self):
        width = self.grid.width * self.cell_size + 2 * self.outer_padding
        height = self.grid.height * self.cell_size + 2 * self.outer_padding
        return width, height

    def to_array(self) -> np.ndarray:
        width, height = self.image_size
        image = np.empty((height, width, 4), dtype=np.uint8)
        image[:, :] = rgba_to_bgra(self.options["background"])
        color = rgba_to_bgra(self.options["cell_color"])

        size, pad = self.cell_size, self.cell_padding
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                cell = self.grid.cells[y * self.grid.width + x]
                if cell == 0:
                    continue

                px = self.outer_padding + x * size
                py = self.outer_padding + y * size

                # Interior, then stretch to the edge for each open side
                x0, y0, x1, y1 = px + pad, py + pad, px + size - pad, py + size - pad
                image[y0:y1, x0:x1] = color
                if cell & Grid.NORTH:
                    image[py:y0, x0:x1] = color
                if cell & Grid.SOUTH:
                    image[y1:py + size, x0:x1] = color
                if cell & Grid.WEST:
                    image[y0:y1, px:x0] = color
                if cell & Grid.EAST:
                    image[y0:y1, x1:px + size] = color
        return image

    def to_blob(self) -> bytes:
        ok, buf = cv2.imencode(".png", self.to_array())
        if not ok:
            raise RuntimeError("PNG encoding failed")

        logger.debug(f"Encoded {self.grid.width}x{self.grid.height} maze to {len(buf)} bytes")
        return buf.tobytes()

FORMATTERS = {
    "png": PNGFormatter,
}

def export(grid: Grid, fmt: str = "png", options: Dict[str, Any] = None) -> bytes:
    formatter = FORMATTERS.get(fmt)
    if formatter is None:
        raise ValueError(f"Unknown export format: {fmt!r}")
    return formatter(grid, options).to_blob()
