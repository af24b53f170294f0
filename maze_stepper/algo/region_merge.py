import logging
from typing import Iterator
from maze_stepper.algo.base import Generator

logger = logging.getLogger(__name__)

class RegionMergeGenerator(Generator):
    """
    Randomized Kruskal-style generation driven one grid.step() at a time.
    Yields after every joined pair so a frame loop can pull exactly one step per tick.
    """
    def run(self) -> Iterator[str]:
        total = self.grid.cols * self.grid.rows - 1

        while self.grid.step():
            self.step_count += 1
            yield f"Edges: {self.step_count}/{total}"

        logger.info("Maze complete after %d steps (%d edges open)",
                    self.step_count, self.grid.open_edge_count())
        yield "Done"
