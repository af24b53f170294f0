from abc import ABC, abstractmethod
from typing import Iterator, Optional
from maze_stepper.core.grid import Grid

class Generator(ABC):
    """
    Drives a Grid through its generation steps.

    Subclasses implement run() as an iterator that yields after each unit of
    work; advance() pulls a bounded number of those per animation frame.
    """
    def __init__(self, grid: Grid):
        self.grid = grid
        self.step_count = 0
        self.finished = False
        self._iter: Optional[Iterator[str]] = None

    @abstractmethod
    def run(self) -> Iterator[str]:
        pass

    def advance(self, steps: int = 1) -> bool:
        """Pulls up to 'steps' updates. Returns False once the run is exhausted."""
        if self.finished:
            return False
        if self._iter is None:
            self._iter = self.run()
        for _ in range(steps):
            try:
                next(self._iter)
            except StopIteration:
                self.finished = True
                return False
        return True

    def run_all(self):
        while self.advance(1000):
            pass
