import random
from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional, Tuple
from maze_carver.core.grid import Grid

class Generator(ABC):
    def __init__(self, grid: Grid, seed: int = None, rng: Optional[random.Random] = None):
        self.grid = grid
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0
        self._generated = False

    @property
    def generated(self) -> bool:
        return self._generated

    @abstractmethod
    def step(self) -> Optional[Tuple[int, int]]:
        """
        Carves one passage in-place on self.grid.
        Returns the newly reached cell, or None once nothing is left to carve.
        """
        pass

    def run(self) -> Iterator[Tuple[int, int]]:
        """Yields each carved cell in carve order."""
        while True:
            cell = self.step()
            if cell is None:
                return
            yield cell

    def run_all(self, callback: Callable[[int, int], None] = None) -> int:
        """Helper to run the generator to completion."""
        carved = 0
        for x, y in self.run():
            carved += 1
            if callback:
                callback(x, y)
        return carved
