import logging
import random
from typing import Callable, List, Optional, Tuple
from maze_carver.core.grid import Grid
from maze_carver.core.mask import TransparentMask
from maze_carver.algo.base import Generator

logger = logging.getLogger(__name__)

class RecursiveBacktracker(Generator):
    """
    Randomized depth-first carver with an explicit backtracking stack.

    Each stack frame is (x, y, tries): a position plus the directions not yet
    attempted there. Tries are popped from the end of the list.

    randomness (0-100) is the chance that a freshly entered cell gets a purely
    shuffled queue. Otherwise the direction just travelled is appended once
    more, so it is tried first and corridors run straighter.
    """

    def __init__(self, grid: Grid, mask=None, randomness: int = 100, seed: int = None,
                 rng: Optional[random.Random] = None, max_start_attempts: int = None):
        super().__init__(grid, seed=seed, rng=rng)
        if not 0 <= randomness <= 100:
            raise ValueError(f"randomness must be within 0-100, got {randomness}")

        self.mask = mask if mask is not None else TransparentMask(grid.width, grid.height)
        self.randomness = randomness

        if max_start_attempts is None:
            max_start_attempts = 100 * grid.width * grid.height
        self.x, self.y = self._pick_start(max_start_attempts)
        self.start = (self.x, self.y)
        logger.debug(f"Start cell {self.start} on {grid.width}x{grid.height} grid")

        self._tries = self._new_tries()
        self._stack: List[Tuple[int, int, List[int]]] = []

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def stack_depth(self) -> int:
        return len(self._stack)

    def _pick_start(self, max_attempts: int) -> Tuple[int, int]:
        # Rejection sampling: uniform over the rectangle until the mask agrees
        for _ in range(max_attempts):
            x = self.rng.randrange(self.grid.width)
            y = self.rng.randrange(self.grid.height)
            if self.mask.contains(x, y):
                return x, y
        raise ValueError(
            f"Mask has no passable cell inside {self.grid.width}x{self.grid.height} "
            f"(gave up after {max_attempts} draws)")

    def _new_tries(self) -> List[int]:
        tries = list(Grid.DIRECTIONS)
        self.rng.shuffle(tries)
        return tries

    def _can_enter(self, nx: int, ny: int) -> bool:
        return (self.grid.in_bounds(nx, ny)
                and self.grid.cells[ny * self.grid.width + nx] == 0
                and self.mask.contains(nx, ny))

    def _next_direction(self) -> Optional[int]:
        while True:
            direction = self._tries.pop()
            nx, ny = self.grid.neighbor(self.x, self.y, direction)
            if self._can_enter(nx, ny):
                return direction

            while not self._tries:
                if not self._stack:
                    self._generated = True
                    logger.debug(f"Generation complete after {self.step_count} carves")
                    return None
                self.x, self.y, self._tries = self._stack.pop()

    def step(self) -> Optional[Tuple[int, int]]:
        if self._generated:
            return None

        direction = self._next_direction()
        if direction is None:
            return None

        nx, ny = self.grid.carve(self.x, self.y, direction)

        self._stack.append((self.x, self.y, self._tries))
        self._tries = self._new_tries()
        if self.rng.randrange(100) >= self.randomness:
            self._tries.append(direction)
        self.x, self.y = nx, ny

        self.step_count += 1
        return nx, ny

def generate(width: int, height: int, mask=None, randomness: int = 100, seed: int = None,
             callback: Callable[[int, int], None] = None) -> Grid:
    """Builds a grid and carves a complete maze into it."""
    grid = Grid(width, height)
    RecursiveBacktracker(grid, mask=mask, randomness=randomness, seed=seed).run_all(callback)
    return grid
