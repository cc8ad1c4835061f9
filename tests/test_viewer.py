import unittest
import sys
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.grid import Grid
from maze_carver.algo.dfs import RecursiveBacktracker
from maze_carver.viz.viewer import Viewer

class TestViewer(unittest.TestCase):
    def make_viewer(self, grid, generator=None, steps_per_frame=50):
        viewer = Viewer(grid, generator=generator, width=100, height=50, steps_per_frame=steps_per_frame)
        viewer.surface = pygame.Surface((100, 50))
        viewer.cell_size = 20.0
        return viewer

    def test_draw_passage(self):
        grid = Grid(2, 1)
        grid.carve(0, 0, Grid.EAST)
        viewer = self.make_viewer(grid)
        viewer.draw_grid()

        self.assertEqual(tuple(viewer.surface.get_at((10, 10)))[:3], Viewer.COLOR_CELL)
        # Bridge between the two cells
        self.assertEqual(tuple(viewer.surface.get_at((20, 10)))[:3], Viewer.COLOR_CELL)
        self.assertEqual(tuple(viewer.surface.get_at((20, 1)))[:3], Viewer.COLOR_BG)
        self.assertEqual(tuple(viewer.surface.get_at((60, 10)))[:3], Viewer.COLOR_BG)

    def test_advance_in_batches(self):
        grid = Grid(4, 4)
        gen = RecursiveBacktracker(grid, seed=8)
        viewer = self.make_viewer(grid, gen, steps_per_frame=5)

        viewer.advance()
        self.assertEqual(gen.step_count, 5)
        self.assertFalse(viewer.gen_finished)
        viewer.draw_grid()

        for _ in range(5):
            viewer.advance()
        self.assertTrue(viewer.gen_finished)
        self.assertTrue(gen.generated)
        self.assertEqual(gen.step_count, 15)

    def test_fit_to_screen(self):
        viewer = self.make_viewer(Grid(10, 5))
        viewer.fit_to_screen()
        self.assertGreaterEqual(viewer.offset_x, 0)
        self.assertGreaterEqual(viewer.offset_y, 0)
        self.assertLessEqual(viewer.cell_size * 10, 100)

if __name__ == '__main__':
    unittest.main()
