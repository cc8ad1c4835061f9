import logging
from maze_carver.core.grid import Grid

logger = logging.getLogger(__name__)

def popcount_passages(val: int) -> int:
    c = 0
    if val & Grid.NORTH: c += 1
    if val & Grid.SOUTH: c += 1
    if val & Grid.EAST: c += 1
    if val & Grid.WEST: c += 1
    return c

class MazePostProcessor:
    @staticmethod
    def sparsify(grid: Grid) -> int:
        """
        Deletes every dead end (a cell with exactly one passage) in a single pass.

        Dead ends are collected first and removed afterwards, so a corridor of
        dead ends only loses its last cell per call. Call again (or use
        sparsify_until_stable) to prune further.
        Returns the number of cells removed.
        """
        dead_ends = []
        for y in range(grid.height):
            for x in range(grid.width):
                val = grid.cells[y * grid.width + x]
                if val in Grid.DIRECTIONS:
                    # Resolve the neighbor now so an off-grid passage raises before any change
                    nx, ny = grid.neighbor(x, y, val)
                    dead_ends.append((y * grid.width + x, grid.get_index(nx, ny), val))

        # Two dead ends facing each other both go; clearing a bit twice is harmless
        for idx, neighbor_idx, direction in dead_ends:
            grid.cells[idx] = 0
            grid.cells[neighbor_idx] &= ~Grid.OPPOSITE[direction]

        logger.debug(f"Sparsify removed {len(dead_ends)} dead ends")
        return len(dead_ends)

    @staticmethod
    def sparsify_until_stable(grid: Grid, max_passes: int = None) -> int:
        """Repeats sparsify until a pass removes nothing. Returns the productive pass count."""
        passes = 0
        while max_passes is None or passes < max_passes:
            if MazePostProcessor.sparsify(grid) == 0:
                break
            passes += 1
        return passes

    @staticmethod
    def calculate_stats(grid: Grid):
        dead_ends = 0
        corridors = 0 # 2 passages
        junctions = 0 # 3 or 4 passages
        empty = 0

        for val in grid.cells:
            passages = popcount_passages(val)
            if passages == 0: empty += 1
            elif passages == 1: dead_ends += 1
            elif passages == 2: corridors += 1
            else: junctions += 1

        total = grid.width * grid.height
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "empty": empty,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
