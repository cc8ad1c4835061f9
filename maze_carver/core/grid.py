from array import array
from typing import Iterator, Tuple

class Grid:
    # Passage bits (a set bit means "open toward that side")
    NORTH = 0x01
    SOUTH = 0x02
    EAST  = 0x04
    WEST  = 0x08

    DIRECTIONS = (NORTH, SOUTH, EAST, WEST)
    ALL_PASSAGES = NORTH | SOUTH | EAST | WEST

    # Direction Helpers
    DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}
    NAMES = {NORTH: "north", SOUTH: "south", EAST: "east", WEST: "west"}

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # 0 = no passages yet; 'B' keeps it at one byte per cell
        self.cells = array('B', bytes(width * height))

    def __repr__(self):
        return f"<Grid {self.width}x{self.height}>"

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def get(self, x: int, y: int) -> int:
        return self.cells[self.get_index(x, y)]

    def set(self, x: int, y: int, value: int):
        self.cells[self.get_index(x, y)] = value

    def neighbor(self, x: int, y: int, dir_bit: int) -> Tuple[int, int]:
        return x + self.DX[dir_bit], y + self.DY[dir_bit]

    def carve(self, x1: int, y1: int, dir_bit: int) -> Tuple[int, int]:
        """
        Opens a passage from (x1, y1) toward 'dir_bit' and the OPPOSITE
        passage on the neighbor. Returns the neighbor coordinate.
        """
        x2, y2 = self.neighbor(x1, y1, dir_bit)
        idx1 = self.get_index(x1, y1)
        idx2 = self.get_index(x2, y2)

        self.cells[idx1] |= dir_bit
        self.cells[idx2] |= self.OPPOSITE[dir_bit]
        return x2, y2

    def has_passage(self, x: int, y: int, dir_bit: int) -> bool:
        return (self.cells[self.get_index(x, y)] & dir_bit) != 0

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction_to_neighbor) for all valid grid neighbors.
        Does NOT check passages.
        """
        for dir_bit in self.DIRECTIONS:
            nx, ny = x + self.DX[dir_bit], y + self.DY[dir_bit]
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield (nx, ny, dir_bit)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """
        Yields (nx, ny) for neighbors joined to (x, y) by a passage.
        """
        val = self.cells[self.get_index(x, y)]
        for nx, ny, dir_bit in self.get_neighbors(x, y):
            if val & dir_bit:
                yield (nx, ny)

    def rows(self) -> Iterator[array]:
        for y in range(self.height):
            start = y * self.width
            yield self.cells[start:start + self.width]

    def passage_count(self) -> int:
        # Every passage sets one bit on each side
        bits = sum(bin(val & self.ALL_PASSAGES).count("1") for val in self.cells)
        return bits // 2
