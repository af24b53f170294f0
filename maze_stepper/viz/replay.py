from typing import Iterator
from maze_stepper.core.cell import Cell
from maze_stepper.core.grid import Grid
from maze_stepper.core.events import EventReader, EVT_CARVE
from maze_stepper.algo.base import Generator

class EventAdapter(Generator):
    """
    Replays an EventReader stream as a Generator for the Renderer.
    Each carve event is re-applied through Grid.connect, so regions and redraws
    behave exactly as they did during the recorded run.
    """
    DX = {Cell.NORTH: 0, Cell.SOUTH: 0, Cell.EAST: 1, Cell.WEST: -1}
    DY = {Cell.NORTH: -1, Cell.SOUTH: 1, Cell.EAST: 0, Cell.WEST: 0}

    def __init__(self, grid: Grid, reader: EventReader):
        super().__init__(grid)
        self.reader = reader

    def run(self) -> Iterator[str]:
        for type_code, data in self.reader.stream_events():
            if type_code == EVT_CARVE:
                x, y, d = data
                if d not in self.DX:
                    raise ValueError(f"Invalid carve direction {d}")
                a = self.grid.get_index(x, y)
                b = self.grid.get_index(x + self.DX[d], y + self.DY[d])
                self.grid.connect(a, b)
                self.step_count += 1
                yield f"Replay: {self.step_count}"

        yield "Done"
