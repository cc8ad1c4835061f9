import unittest
import sys
import os

import cv2
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.grid import Grid
from maze_carver.algo.dfs import generate
from maze_carver.io.png import PNGFormatter, export, rgba_to_bgra

WHITE = [255, 255, 255, 255]
BACKGROUND = list(rgba_to_bgra(PNGFormatter.DEFAULTS["background"]))

def decode(blob):
    return cv2.imdecode(np.frombuffer(blob, dtype=np.uint8), cv2.IMREAD_UNCHANGED)

class TestPNGExport(unittest.TestCase):
    def test_color_order(self):
        self.assertEqual(rgba_to_bgra(0x11223344), (0x33, 0x22, 0x11, 0x44))

    def test_png_signature_and_size(self):
        grid = generate(6, 4, seed=3)
        blob = export(grid, "png")
        self.assertTrue(blob.startswith(b"\x89PNG\r\n\x1a\n"))

        image = decode(blob)
        self.assertEqual(image.shape, (4 * 10 + 4, 6 * 10 + 4, 4))

    def test_passage_is_drawn(self):
        grid = Grid(2, 1)
        grid.carve(0, 0, Grid.EAST)
        image = decode(export(grid, "png", {"cell_size": 10, "cell_padding": 2, "outer_padding": 2}))

        self.assertEqual(image.shape, (14, 24, 4))
        # Row through the middle of both cells is open from x=4 to x=19
        self.assertEqual(image[7, 4].tolist(), WHITE)
        self.assertEqual(image[7, 12].tolist(), WHITE)
        self.assertEqual(image[7, 19].tolist(), WHITE)
        # Walls and border
        self.assertEqual(image[7, 2].tolist(), BACKGROUND)
        self.assertEqual(image[7, 21].tolist(), BACKGROUND)
        self.assertEqual(image[2, 12].tolist(), BACKGROUND)
        self.assertEqual(image[0, 0].tolist(), BACKGROUND)

    def test_empty_cells_not_drawn(self):
        grid = Grid(3, 3)
        array = PNGFormatter(grid, {"background": 0x000000FF}).to_array()
        self.assertTrue(np.all(array[:, :, :3] == 0))
        self.assertTrue(np.all(array[:, :, 3] == 255))

    def test_custom_colors(self):
        grid = Grid(1, 2)
        grid.carve(0, 0, Grid.SOUTH)
        array = PNGFormatter(grid, {"cell_color": 0xFF000080, "outer_padding": 0}).to_array()
        # Passage crosses the boundary between the two cells
        self.assertEqual(array[10, 5].tolist(), [0, 0, 255, 128])

    def test_unknown_format(self):
        with self.assertRaises(ValueError) as ctx:
            export(Grid(2, 2), "gif")
        self.assertIn("gif", str(ctx.exception))

    def test_bad_options(self):
        grid = Grid(2, 2)
        with self.assertRaises(ValueError):
            export(grid, "png", {"cell_szie": 4})
        with self.assertRaises(ValueError):
            PNGFormatter(grid, {"cell_size": 0})
        with self.assertRaises(ValueError):
            PNGFormatter(grid, {"cell_size": 4, "cell_padding": 2})
        with self.assertRaises(ValueError):
            PNGFormatter(grid, {"outer_padding": -1})

if __name__ == '__main__':
    unittest.main()
