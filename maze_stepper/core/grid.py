import logging
import random
from typing import Callable, List, Optional

from maze_stepper.core.cell import Cell

logger = logging.getLogger(__name__)


class InvalidDimensionError(ValueError):
    """Raised when a grid is requested with a non-positive width or height."""


class Grid:
    """
    Rectangular maze under construction.

    Every cell starts walled in on all four sides and in its own region.
    Each call to step() knocks down exactly one wall between two cells of
    different regions and merges those regions, so once no such wall is left
    the open passages form a spanning tree over the whole grid.
    """

    NORTH = Cell.NORTH
    EAST = Cell.EAST
    SOUTH = Cell.SOUTH
    WEST = Cell.WEST
    ALL_WALLS = Cell.ALL_WALLS
    OPPOSITE = Cell.OPPOSITE

    __slots__ = ('_cols', '_rows', 'cells', 'rng', 'seed_index', 'painter',
                 'event_writer', 'edges_opened', '_redraw_listeners')

    def __init__(self, cols: int, rows: int, rng: Optional[random.Random] = None,
                 seed: Optional[int] = None, seed_index: Optional[int] = None,
                 painter=None, event_writer=None):
        for name, value in (("cols", cols), ("rows", rows)):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise InvalidDimensionError(f"{name} must be a positive integer, got {value!r}")

        self._cols = cols
        self._rows = rows
        self.rng = rng if rng is not None else random.Random(seed)
        self.painter = painter
        self.event_writer = event_writer
        self.edges_opened = 0
        self._redraw_listeners: List[Callable[[Cell], None]] = []

        # Row-major, region tag == linear index
        self.cells = tuple(
            Cell(x, y, y * cols + x) for y in range(rows) for x in range(cols)
        )

        if seed_index is None:
            seed_index = self.rng.randrange(len(self.cells))
        elif not 0 <= seed_index < len(self.cells):
            raise ValueError(f"Seed index {seed_index} out of range for {cols}x{rows} grid")
        self.seed_index = seed_index
        self.cells[seed_index].seed = True

        logger.debug("Created %dx%d grid, seed cell %d", cols, rows, seed_index)

        if self.event_writer:
            self.event_writer.write_header(cols, rows, seed_index)

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def rows(self) -> int:
        return self._rows

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self._cols and 0 <= y < self._rows:
            return y * self._cols + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def cell_at(self, x: int, y: int) -> Cell:
        return self.cells[self.get_index(x, y)]

    # --- Generation ---

    def candidate_edges(self, index: int) -> List[int]:
        """
        Neighbor indices that the cell at 'index' may still be joined to:
        inside the grid, behind a wall that is still standing, and in another region.
        Examined up, right, down, left.
        """
        cols = self._cols
        cell = self.cells[index]
        candidates = []

        if cell.y > 0 and cell.walls & Cell.NORTH:
            if self.cells[index - cols].region != cell.region:
                candidates.append(index - cols)
        if cell.x < cols - 1 and cell.walls & Cell.EAST:
            if self.cells[index + 1].region != cell.region:
                candidates.append(index + 1)
        if cell.y < self._rows - 1 and cell.walls & Cell.SOUTH:
            if self.cells[index + cols].region != cell.region:
                candidates.append(index + cols)
        if cell.x > 0 and cell.walls & Cell.WEST:
            if self.cells[index - 1].region != cell.region:
                candidates.append(index - 1)

        return candidates

    def pick_frontier_cell(self) -> Optional[int]:
        frontier = [i for i in range(len(self.cells)) if self.candidate_edges(i)]
        if not frontier:
            return None
        return self.rng.choice(frontier)

    def pick_neighbor_to_merge(self, index: int) -> Optional[int]:
        candidates = self.candidate_edges(index)
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]
        return self.rng.choice(candidates)

    def open_edge(self, a: int, b: int):
        """
        Removes the wall between adjacent cells 'a' and 'b' on both sides.
        The direction of 'b' relative to 'a' is resolved as up, left, down, right.
        """
        cols = self._cols
        same_row = a // cols == b // cols

        if a - b == cols:
            dir_bit = Cell.NORTH
        elif a - b == 1 and same_row:
            dir_bit = Cell.WEST
        elif b - a == cols:
            dir_bit = Cell.SOUTH
        elif b - a == 1 and same_row:
            dir_bit = Cell.EAST
        else:
            raise ValueError(f"Cells {a} and {b} are not adjacent")

        cell_a = self.cells[a]
        cell_b = self.cells[b]
        if not cell_a.has_wall(dir_bit):
            return

        if self.event_writer:
            self.event_writer.log_carve(cell_a.x, cell_a.y, dir_bit)

        cell_a.clear_wall(dir_bit)
        cell_b.clear_wall(Cell.OPPOSITE[dir_bit])
        self.edges_opened += 1

    def merge_regions(self, a: int, b: int):
        """Relabels every cell of b's region with a's region tag."""
        survivor = self.cells[a].region
        retired = self.cells[b].region
        if survivor == retired:
            return

        for cell in self.cells:
            if cell.region == retired:
                cell.region = survivor

    def connect(self, a: int, b: int):
        self.open_edge(a, b)
        self.merge_regions(a, b)
        self.request_redraw(a)
        self.request_redraw(b)
        logger.debug("Joined cell %d to cell %d", a, b)

    def step(self) -> bool:
        """
        Performs one generation tick. Returns False (and changes nothing)
        once the maze is complete.
        """
        frontier = self.pick_frontier_cell()
        if frontier is None:
            return False

        neighbor = self.pick_neighbor_to_merge(frontier)
        if neighbor is None:
            return False

        self.connect(frontier, neighbor)
        return True

    def is_complete(self) -> bool:
        return not any(self.candidate_edges(i) for i in range(len(self.cells)))

    def open_edge_count(self) -> int:
        return self.edges_opened

    # --- Redraw ---

    def add_redraw_listener(self, callback: Callable[[Cell], None]):
        self._redraw_listeners.append(callback)

    def remove_redraw_listener(self, callback: Callable[[Cell], None]):
        self._redraw_listeners.remove(callback)

    def request_redraw(self, index: int):
        cell = self.cells[index]
        for callback in self._redraw_listeners:
            callback(cell)

    def draw_all(self, surface):
        if self.painter is None:
            logger.debug("draw_all called without a painter, nothing to draw")
            return
        for cell in self.cells:
            self.painter(surface, cell.x, cell.y, cell.walls)
